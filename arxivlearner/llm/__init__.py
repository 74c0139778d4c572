"""LLM routing and streaming layer."""

from .types import (
    Message,
    ProviderConfig,
    ProviderProfile,
    ProviderType,
    ConnectivityResult,
    LLMError,
    InvalidURLError,
    BadResponseError,
    InvalidResponseError,
    MissingAPIKeyError,
)
from .provider import LLMService
from .openai_compatible import OpenAICompatibleService
from .anthropic import AnthropicService
from .gemini import GeminiService
from .provider_factory import create_service
from .router import LLMRouter
from .streaming_handler import collect_stream, coalesce_chunks, bounded_stream

__all__ = [
    "Message",
    "ProviderConfig",
    "ProviderProfile",
    "ProviderType",
    "ConnectivityResult",
    "LLMError",
    "InvalidURLError",
    "BadResponseError",
    "InvalidResponseError",
    "MissingAPIKeyError",
    "LLMService",
    "OpenAICompatibleService",
    "AnthropicService",
    "GeminiService",
    "create_service",
    "LLMRouter",
    "collect_stream",
    "coalesce_chunks",
    "bounded_stream",
]
