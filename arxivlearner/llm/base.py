"""
Shared HTTP plumbing for vendor adapters.

WHAT: Endpoint composition, status validation, buffered and streamed dispatch
WHY: Every vendor needs the same transport handling and error translation
HOW: ChatService base class; subclasses supply request building and payload decoding
"""

import json
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx

from .streaming_handler import collect_stream
from .types import (
    BadResponseError,
    InvalidResponseError,
    InvalidURLError,
    Message,
    ProviderConfig,
)
from ..core.config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

DATA_PREFIX = "data: "
EVENT_PREFIX = "event: "


def build_endpoint(base_url: str, path: str) -> httpx.URL:
    """
    Join a provider base URL and an endpoint path.

    Trailing slashes on base_url are stripped so "https://host/v1" and
    "https://host/v1/" produce the same endpoint.

    Raises:
        InvalidURLError: The composed string is not an absolute http(s) URL
    """
    endpoint = base_url.rstrip("/") + path
    if any(ch.isspace() for ch in endpoint):
        raise InvalidURLError(endpoint)
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as e:
        raise InvalidURLError(endpoint) from e
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError(endpoint)
    return url


def merge_headers(base: dict[str, str], custom: dict[str, str]) -> dict[str, str]:
    """Add custom headers without overriding any header already in base."""
    merged = dict(base)
    reserved = {name.lower() for name in base}
    for name, value in custom.items():
        if name.lower() not in reserved:
            merged[name] = value
    return merged


def ensure_success(response: httpx.Response) -> None:
    """Raise BadResponseError unless the status is 2xx."""
    if not 200 <= response.status_code < 300:
        raise BadResponseError(response.status_code)


class ChatService(ABC):
    """
    Base class for vendor adapters.

    Buffered and streaming calls are implemented independently;
    complete(stream=True) drains complete_stream(). Subclasses implement
    build_request, parse_response and decode_stream.
    """

    vendor = "generic"

    def __init__(self, config: ProviderConfig, client: httpx.AsyncClient | None = None):
        """
        Initialize adapter.

        Args:
            config: Resolved provider configuration (read-only)
            client: Optional shared httpx client; when omitted each call owns one
        """
        self.config = config
        self._client = client

    # Subclass hooks

    @abstractmethod
    def build_request(self, messages: list[Message], *, stream: bool) -> httpx.Request:
        """Build the authenticated request for the vendor's chat endpoint."""

    @abstractmethod
    def parse_response(self, payload: Any) -> str | None:
        """Return the reply text from a buffered JSON body, or None if absent."""

    @abstractmethod
    def decode_stream(self, lines: AsyncIterator[str]) -> AsyncIterator[str]:
        """Turn raw SSE lines into text deltas."""

    # Public API

    async def complete(self, messages: list[Message], *, stream: bool = False) -> str:
        """
        Send a completion request and return the whole reply.

        Args:
            messages: Conversation history (may be empty)
            stream: Use the streaming endpoint internally and join the chunks

        Returns:
            Assistant reply text

        Raises:
            InvalidURLError: Base URL could not be composed into a request URL
            BadResponseError: Non-2xx status or transport failure (status -1)
            InvalidResponseError: Body did not contain the expected text
        """
        if stream:
            return await collect_stream(self.complete_stream(messages))

        request = self.build_request(messages, stream=False)
        logger.debug(f"{self.vendor}: POST {self._loggable_url(request)} (model: {self.config.model_id})")

        async with self._client_session() as client:
            try:
                response = await client.send(request)
            except httpx.TransportError as e:
                logger.error(f"{self.vendor}: request to {self.config.name} failed: {type(e).__name__}")
                raise BadResponseError(-1, detail=type(e).__name__) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"{self.vendor}: {self.config.name} returned HTTP {response.status_code}")
        ensure_success(response)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"{self.vendor}: response body is not JSON")
            raise InvalidResponseError(f"{self.vendor} response is not valid JSON") from e

        text = self.parse_response(payload)
        if not isinstance(text, str) or not text:
            logger.error(f"{self.vendor}: response missing text field")
            raise InvalidResponseError(f"{self.vendor} response did not contain any text")
        return text

    async def complete_stream(self, messages: list[Message]) -> AsyncIterator[str]:
        """
        Stream the reply as text deltas.

        The sequence is single-pass. Breaking out of the loop or cancelling
        the consuming task closes the underlying HTTP response.

        Yields:
            Text fragments in the order the transport delivered them

        Raises:
            InvalidURLError, BadResponseError, InvalidResponseError
        """
        request = self.build_request(messages, stream=True)
        logger.debug(f"{self.vendor}: streaming POST {self._loggable_url(request)} (model: {self.config.model_id})")

        chunk_count = 0
        async with self._client_session() as client:
            try:
                response = await client.send(request, stream=True)
            except httpx.TransportError as e:
                logger.error(f"{self.vendor}: stream to {self.config.name} failed to open: {type(e).__name__}")
                raise BadResponseError(-1, detail=type(e).__name__) from e

            try:
                if not 200 <= response.status_code < 300:
                    logger.warning(f"{self.vendor}: {self.config.name} stream returned HTTP {response.status_code}")
                ensure_success(response)

                try:
                    async for text in self.decode_stream(response.aiter_lines()):
                        chunk_count += 1
                        yield text
                except httpx.TransportError as e:
                    logger.error(f"{self.vendor}: stream interrupted after {chunk_count} chunks: {type(e).__name__}")
                    raise BadResponseError(-1, detail=type(e).__name__) from e
            finally:
                await response.aclose()

        logger.info(f"{self.vendor} stream completed ({chunk_count} chunks)")

    # Helpers

    @asynccontextmanager
    async def _client_session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a short-lived one closed on exit."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(settings.LLM_CONNECT_TIMEOUT, read=settings.LLM_READ_TIMEOUT)
        ) as client:
            yield client

    def _load_data_line(self, line: str) -> Any | None:
        """Decode the JSON after a "data: " prefix; None (logged) if malformed."""
        data = line[len(DATA_PREFIX):]
        try:
            return json.loads(data)
        except ValueError:
            logger.debug(f"{self.vendor}: skipping malformed SSE payload: {data[:100]!r}")
            return None

    def _skip_unexpected(self, payload: Any) -> None:
        logger.debug(f"{self.vendor}: skipping SSE payload with unexpected shape: {str(payload)[:100]!r}")

    @staticmethod
    def _loggable_url(request: httpx.Request) -> str:
        # Query strings may carry credentials (Gemini key=...)
        return str(request.url).split("?", 1)[0]
