"""
LLM routing types, dataclasses, and exceptions.

WHAT: Value types shared by every vendor adapter and the router
WHY: One message shape, one config shape and one closed error taxonomy for all vendors
HOW: Frozen dataclasses for data, a str-valued Enum for provider types, an LLMError hierarchy
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Message:
    """A single chat turn."""
    role: str  # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ProviderConfig:
    """
    Fully resolved configuration for one request or session.

    base_url may carry a trailing slash; adapters normalize it before
    appending their endpoint path.
    """
    name: str
    base_url: str
    api_key: str
    model_id: str
    custom_headers: dict[str, str] = field(default_factory=dict)
    provider_id: str | None = None


class ProviderType(str, Enum):
    """Declared vendor of a configured provider."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    DEEPSEEK = "deepseek"
    OPEN_ROUTER = "openRouter"
    CUSTOM_OPENAI = "customOpenAI"
    ZHIPU = "zhipu"
    DASHSCOPE = "dashscope"
    MINIMAX = "minimax"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ProviderType.OPENAI: "OpenAI",
    ProviderType.ANTHROPIC: "Anthropic (Claude)",
    ProviderType.GOOGLE: "Google (Gemini)",
    ProviderType.DEEPSEEK: "DeepSeek",
    ProviderType.OPEN_ROUTER: "OpenRouter",
    ProviderType.CUSTOM_OPENAI: "Custom (OpenAI compatible)",
    ProviderType.ZHIPU: "Zhipu (GLM)",
    ProviderType.DASHSCOPE: "DashScope (Qwen)",
    ProviderType.MINIMAX: "Minimax",
}


@dataclass(frozen=True)
class ProviderProfile:
    """
    A configured provider as supplied by the settings layer.

    The model is chosen per call, so a profile resolves into a
    ProviderConfig only once a model id is known.
    """
    provider_type: ProviderType
    name: str
    base_url: str
    api_key: str = ""
    custom_headers: dict[str, str] = field(default_factory=dict)
    provider_id: str | None = None

    def resolve(self, model_id: str, custom_headers: dict[str, str] | None = None) -> ProviderConfig:
        """Build the per-call config for model_id, optionally overriding headers."""
        return ProviderConfig(
            name=self.name,
            base_url=self.base_url,
            api_key=self.api_key,
            model_id=model_id,
            custom_headers=dict(self.custom_headers if custom_headers is None else custom_headers),
            provider_id=self.provider_id,
        )


@dataclass(frozen=True)
class ConnectivityResult:
    """Outcome of a provider connectivity probe."""
    success: bool
    latency_ms: int
    error: str | None = None


# Error taxonomy
class LLMError(Exception):
    """Base class for every error raised by the LLM layer."""

    kind: str = "llm_error"
    user_message: str = "The AI service request failed."


class InvalidURLError(LLMError):
    """The composed request URL could not be parsed."""

    kind = "invalid_url"
    user_message = "Invalid URL, check the provider settings."

    def __init__(self, url: str):
        super().__init__(f"The LLM provider URL is invalid: {url!r}")
        self.url = url


class BadResponseError(LLMError):
    """
    The server answered outside the 2xx range.

    status_code is -1 when no HTTP response was received at all
    (connection failure, timeout, broken stream).
    """

    kind = "bad_response"

    def __init__(self, status_code: int, detail: str | None = None):
        message = f"LLM service returned an unexpected status code: {status_code}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.status_code = status_code

    @property
    def user_message(self) -> str:
        if self.status_code == 401:
            return "HTTP 401: invalid API key."
        if self.status_code == -1:
            return "Could not reach the AI service, check the network connection."
        return f"HTTP {self.status_code}: the AI service rejected the request."


class InvalidResponseError(LLMError):
    """The body could not be decoded into the expected shape."""

    kind = "invalid_response"
    user_message = "The AI service response format was abnormal."

    def __init__(self, detail: str = "The LLM service response could not be decoded."):
        super().__init__(detail)


class MissingAPIKeyError(LLMError):
    """No credential was configured for the provider."""

    kind = "missing_api_key"
    user_message = "API key not configured."

    def __init__(self, provider_name: str):
        super().__init__(f"No API key configured for provider '{provider_name}'")
        self.provider_name = provider_name
