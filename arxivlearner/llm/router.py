"""
Vendor-agnostic LLM router.

WHAT: Resolve a configured provider + model into an adapter and run completions
WHY: Call sites never deal with vendor wire formats or vendor-specific errors
HOW: Plain object (no singleton); adapters are built per call via the factory
"""

import time
from contextlib import aclosing
from typing import AsyncIterator

import httpx

from .base import ChatService
from .provider_factory import create_service
from .types import (
    ConnectivityResult,
    LLMError,
    Message,
    MissingAPIKeyError,
    ProviderProfile,
    ProviderType,
)
from ..core.config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

REFERER_HEADER = "HTTP-Referer"
TITLE_HEADER = "X-Title"

# Minimal one-token probe used for connectivity checks
PROBE_MESSAGES = [Message(role="user", content="Hi")]


def with_openrouter_defaults(headers: dict[str, str]) -> dict[str, str]:
    """Add OpenRouter attribution headers unless the caller already set them."""
    merged = dict(headers)
    present = {name.lower() for name in merged}
    if REFERER_HEADER.lower() not in present:
        merged[REFERER_HEADER] = settings.OPENROUTER_REFERER
    if TITLE_HEADER.lower() not in present:
        merged[TITLE_HEADER] = settings.OPENROUTER_TITLE
    return merged


class LLMRouter:
    """
    Routes completion requests to the adapter matching a provider's type.

    Holds no request state, so one instance can serve concurrent calls or
    a new one can be built per call.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        """
        Initialize router.

        Args:
            client: Optional httpx client shared by every adapter this router builds
        """
        self._client = client

    def resolve_service(self, provider: ProviderProfile, model: str) -> ChatService:
        """
        Build the adapter for provider and model.

        Raises:
            MissingAPIKeyError: Provider has no API key (custom OpenAI endpoints excepted)
            ValueError: Unknown provider type
        """
        provider_type = ProviderType(provider.provider_type)
        if not provider.api_key.strip() and provider_type != ProviderType.CUSTOM_OPENAI:
            logger.warning(f"No API key configured for provider {provider.name}")
            raise MissingAPIKeyError(provider.name)

        headers = dict(provider.custom_headers)
        if provider_type == ProviderType.OPEN_ROUTER:
            headers = with_openrouter_defaults(headers)

        config = provider.resolve(model, custom_headers=headers)
        return create_service(provider_type, config, client=self._client)

    async def complete(
        self,
        messages: list[Message],
        provider: ProviderProfile,
        model: str,
        *,
        stream: bool = False
    ) -> str:
        """
        Send a completion request and return the full reply.

        Args:
            messages: Conversation history
            provider: Configured provider
            model: Model id to use
            stream: Stream internally but still return one string

        Returns:
            Assistant reply text

        Raises:
            LLMError: Any of the four error kinds
        """
        service = self.resolve_service(provider, model)
        return await service.complete(messages, stream=stream)

    async def complete_stream(
        self,
        messages: list[Message],
        provider: ProviderProfile,
        model: str
    ) -> AsyncIterator[str]:
        """
        Stream reply text deltas.

        Resolution errors (e.g. MissingAPIKeyError) surface on first iteration.
        """
        service = self.resolve_service(provider, model)
        async with aclosing(service.complete_stream(messages)) as chunks:
            async for chunk in chunks:
                yield chunk

    async def test_connectivity(self, provider: ProviderProfile, model: str) -> ConnectivityResult:
        """
        Probe a provider with a one-message "Hi" request and time it.

        Never raises: every failure is reported in the result.

        Returns:
            ConnectivityResult with success flag, latency in ms and error text
        """
        start = time.perf_counter()
        try:
            await self.complete(PROBE_MESSAGES, provider, model, stream=False)
        except LLMError as e:
            latency_ms = _elapsed_ms(start)
            logger.warning(f"Connectivity test failed for {provider.name} ({e.kind}, {latency_ms}ms)")
            return ConnectivityResult(success=False, latency_ms=latency_ms, error=str(e) or e.user_message)
        except Exception as e:
            latency_ms = _elapsed_ms(start)
            logger.error(f"Connectivity test for {provider.name} raised unexpectedly: {e!r}")
            return ConnectivityResult(success=False, latency_ms=latency_ms, error=str(e) or type(e).__name__)

        latency_ms = _elapsed_ms(start)
        logger.info(f"Connectivity test succeeded for {provider.name} ({latency_ms}ms)")
        return ConnectivityResult(success=True, latency_ms=latency_ms)


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))
