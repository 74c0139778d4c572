"""
LLM adapter factory.

WHAT: Map a declared ProviderType onto the adapter that speaks its wire format
WHY: Keep the routing table in one explicit place instead of runtime type checks
HOW: Lookup table from ProviderType to adapter class, instantiated per call
"""

import httpx

from .anthropic import AnthropicService
from .base import ChatService
from .gemini import GeminiService
from .openai_compatible import OpenAICompatibleService
from .types import ProviderConfig, ProviderType
from ..utils.logger import get_logger

logger = get_logger(__name__)

ADAPTERS: dict[ProviderType, type[ChatService]] = {
    ProviderType.OPENAI: OpenAICompatibleService,
    ProviderType.DEEPSEEK: OpenAICompatibleService,
    ProviderType.OPEN_ROUTER: OpenAICompatibleService,
    ProviderType.CUSTOM_OPENAI: OpenAICompatibleService,
    ProviderType.ZHIPU: OpenAICompatibleService,
    ProviderType.DASHSCOPE: OpenAICompatibleService,
    ProviderType.MINIMAX: OpenAICompatibleService,
    ProviderType.ANTHROPIC: AnthropicService,
    ProviderType.GOOGLE: GeminiService,
}


def create_service(
    provider_type: ProviderType,
    config: ProviderConfig,
    client: httpx.AsyncClient | None = None
) -> ChatService:
    """
    Instantiate the adapter for a provider type.

    Args:
        provider_type: Declared vendor of the provider
        config: Resolved per-call configuration
        client: Optional shared httpx client

    Returns:
        Adapter instance bound to config

    Raises:
        ValueError: If provider_type is unknown
    """
    try:
        adapter_cls = ADAPTERS[ProviderType(provider_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown LLM provider type: {provider_type}") from None

    logger.debug(f"Selected {adapter_cls.__name__} for {config.name} ({provider_type})")
    return adapter_cls(config, client=client)
