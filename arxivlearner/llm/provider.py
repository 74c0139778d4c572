"""
LLM service protocol definition.

WHAT: Vendor-agnostic interface every adapter implements
WHY: Decouple calling code (view models, router) from vendor wire formats
HOW: Use Protocol to define request building, buffered completion and streaming
"""

from typing import AsyncIterator, Protocol

import httpx

from .types import Message, ProviderConfig


class LLMService(Protocol):
    """Protocol defining the interface all vendor adapters must implement."""

    config: ProviderConfig

    def build_request(self, messages: list[Message], *, stream: bool) -> httpx.Request:
        """Build the authenticated HTTP request for this vendor's chat endpoint."""
        ...

    async def complete(self, messages: list[Message], *, stream: bool = False) -> str:
        """Return the whole assistant reply as one string."""
        ...

    def complete_stream(self, messages: list[Message]) -> AsyncIterator[str]:
        """Yield assistant text deltas in arrival order (single pass)."""
        ...
