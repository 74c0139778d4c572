"""
Prompt helpers for paper-centric LLM features.

WHAT: Paper context assembly, system prompt and template variable substitution
WHY: Insight, chat and translation scenes all feed the same paper data to the router
HOW: Plain dataclasses in, strings or Message lists out
"""

from dataclasses import dataclass, field

from .llm.types import Message


@dataclass(frozen=True)
class PaperContext:
    """Paper content available for building LLM context."""
    title: str
    abstract_text: str
    markdown_content: str | None = None
    full_text: str | None = None


@dataclass(frozen=True)
class PaperFields:
    """Paper metadata used to fill prompt template variables."""
    title: str
    abstract_text: str
    authors: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    markdown_content: str | None = None


TITLE_UNAVAILABLE = "(title unavailable)"
ABSTRACT_UNAVAILABLE = "(abstract unavailable)"
AUTHORS_UNAVAILABLE = "(author information unavailable)"
CATEGORIES_UNAVAILABLE = "(category information unavailable)"
FULL_TEXT_UNAVAILABLE = "(full text unavailable)"


def build_context(paper: PaperContext) -> str:
    """
    Return the best available paper body, prefixed with the title.

    Priority: markdown content > full text > abstract. Empty strings count
    as missing.
    """
    if paper.markdown_content:
        body = paper.markdown_content
    elif paper.full_text:
        body = paper.full_text
    else:
        body = paper.abstract_text

    return f"Title: {paper.title}\n\n{body}"


def insight_system_prompt() -> str:
    """System prompt for academic paper analysis."""
    return (
        "You are a professional academic paper assistant, skilled at analysing and "
        "explaining research papers in artificial intelligence and machine learning.\n"
        "Answer concisely and clearly for researchers and students.\n"
        "When analysing a paper, focus on the research problem, the core method, "
        "the experimental results and the contribution to the field.\n"
        "Keep technical terms in their original English form and explain them where helpful."
    )


def render_insight_messages(paper: PaperContext, instruction: str) -> list[Message]:
    """
    Render the system + user messages for a paper-grounded request.

    Args:
        paper: Paper content
        instruction: The task for the model (summarize, extract innovations, ...)

    Returns:
        Messages ready for LLMRouter.complete / complete_stream
    """
    return [
        Message(role="system", content=insight_system_prompt()),
        Message(role="user", content=f"{build_context(paper)}\n\n{instruction}"),
    ]


def resolve_template(template: str, paper: PaperFields, selected_text: str | None = None) -> str:
    """
    Replace template variables with paper data.

    Supported variables: {{title}}, {{abstract}}, {{authors}}, {{categories}},
    {{full_text}}, {{selected_text}}. Unknown placeholders are left as-is.
    """
    values = {
        "{{title}}": paper.title.strip() or TITLE_UNAVAILABLE,
        "{{abstract}}": paper.abstract_text.strip() or ABSTRACT_UNAVAILABLE,
        "{{authors}}": _join_non_blank(paper.authors) or AUTHORS_UNAVAILABLE,
        "{{categories}}": _join_non_blank(paper.categories) or CATEGORIES_UNAVAILABLE,
        "{{full_text}}": paper.markdown_content if paper.markdown_content and paper.markdown_content.strip() else FULL_TEXT_UNAVAILABLE,
        "{{selected_text}}": selected_text or "",
    }

    result = template
    for placeholder, value in values.items():
        result = result.replace(placeholder, value)
    return result


def _join_non_blank(items: list[str]) -> str:
    return ", ".join(item for item in items if item.strip())
