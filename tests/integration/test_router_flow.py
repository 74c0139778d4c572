"""
Integration tests for the paper-to-reply flow.

WHAT: Prompt helpers -> router -> vendor adapter -> stream helpers, end to end
WHY: Verify the pieces compose the way a reading-view caller uses them
HOW: Presets resolve real adapter URLs; respx stands in for every vendor
"""

import json

import httpx
import pytest
import respx

from arxivlearner.llm.registry import get_preset, profile_from_preset
from arxivlearner.llm.router import LLMRouter
from arxivlearner.llm.streaming_handler import bounded_stream, coalesce_chunks, collect_stream
from arxivlearner.prompts import PaperContext, render_insight_messages
from tests.conftest import (
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_SSE,
    GEMINI_HOST,
    GEMINI_SSE,
    MOCK_ANTHROPIC_RESPONSE,
    MOCK_GEMINI_RESPONSE,
    MOCK_OPENAI_RESPONSE,
    OPENAI_CHAT_URL,
    OPENAI_SSE,
)

PAPER = PaperContext(
    title="Attention Is All You Need",
    abstract_text="We propose a new simple network architecture, the Transformer.",
)

VENDOR_CASES = [
    ("openai", "gpt-4o-mini", OPENAI_SSE),
    ("anthropic", "claude-haiku-4-5-20251001", ANTHROPIC_SSE),
    ("google", "gemini-2.0-flash", GEMINI_SSE),
]


def mock_vendor_stream(preset_id: str, model: str, sse: str) -> respx.Route:
    if preset_id == "openai":
        return respx.post(OPENAI_CHAT_URL).mock(return_value=httpx.Response(200, text=sse))
    if preset_id == "anthropic":
        return respx.post(ANTHROPIC_MESSAGES_URL).mock(return_value=httpx.Response(200, text=sse))
    return respx.post(host=GEMINI_HOST, path=f"/v1beta/models/{model}:streamGenerateContent").mock(
        return_value=httpx.Response(200, text=sse)
    )


@pytest.mark.integration
class TestPaperInsightFlow:
    """Stream a paper insight through every vendor."""

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize("preset_id,model,sse", VENDOR_CASES, ids=[c[0] for c in VENDOR_CASES])
    async def test_same_text_from_every_vendor(self, preset_id, model, sse):
        route = mock_vendor_stream(preset_id, model, sse)
        profile = profile_from_preset(get_preset(preset_id), api_key="integration-key")
        messages = render_insight_messages(PAPER, "Summarize the contribution.")

        async with httpx.AsyncClient() as client:
            router = LLMRouter(client=client)
            text = await collect_stream(
                coalesce_chunks(router.complete_stream(messages, profile, model), batch_size=2)
            )

        assert text == "Hello world"
        sent = route.calls.last.request.content.decode()
        assert "Attention Is All You Need" in sent
        assert "Summarize the contribution." in sent

    @pytest.mark.asyncio
    @respx.mock
    async def test_bounded_router_stream(self):
        mock_vendor_stream("openai", "gpt-4o-mini", OPENAI_SSE)
        profile = profile_from_preset(get_preset("openai"), api_key="integration-key")
        messages = render_insight_messages(PAPER, "One word.")

        chunks = [
            c async for c in bounded_stream(LLMRouter().complete_stream(messages, profile, "gpt-4o-mini"), max_chars=3)
        ]

        assert chunks == ["Hel"]


@pytest.mark.integration
class TestConnectivityAcrossVendors:
    """Probe every vendor through presets."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_all_vendors_reachable(self):
        openai_route = respx.post(OPENAI_CHAT_URL).mock(return_value=httpx.Response(200, json=MOCK_OPENAI_RESPONSE))
        respx.post(ANTHROPIC_MESSAGES_URL).mock(return_value=httpx.Response(200, json=MOCK_ANTHROPIC_RESPONSE))
        respx.post(host=GEMINI_HOST, path="/v1beta/models/gemini-2.0-flash:generateContent").mock(
            return_value=httpx.Response(200, json=MOCK_GEMINI_RESPONSE)
        )
        router = LLMRouter()

        results = {}
        for preset_id, model, _ in VENDOR_CASES:
            profile = profile_from_preset(get_preset(preset_id), api_key="integration-key")
            results[preset_id] = await router.test_connectivity(profile, model)

        assert all(result.success for result in results.values())
        assert all(result.error is None for result in results.values())
        assert json.loads(openai_route.calls.last.request.content)["messages"] == [{"role": "user", "content": "Hi"}]

    @pytest.mark.asyncio
    @respx.mock
    async def test_mixed_outcomes_never_raise(self):
        respx.post(OPENAI_CHAT_URL).mock(return_value=httpx.Response(401))
        respx.post(ANTHROPIC_MESSAGES_URL).mock(side_effect=httpx.ConnectError("refused"))
        router = LLMRouter()

        unauthorized = await router.test_connectivity(profile_from_preset(get_preset("openai"), "bad"), "gpt-4o")
        offline = await router.test_connectivity(
            profile_from_preset(get_preset("anthropic"), "k"), "claude-haiku-4-5-20251001"
        )
        no_key = await router.test_connectivity(profile_from_preset(get_preset("google"), ""), "gemini-2.0-flash")

        assert [r.success for r in (unauthorized, offline, no_key)] == [False, False, False]
        assert "401" in unauthorized.error
        assert "-1" in offline.error
        assert "google" in no_key.error.lower() or "gemini" in no_key.error.lower()
