"""
Anthropic Messages API adapter.

WHAT: Client for POST {base}/messages with Anthropic auth and SSE framing
WHY: Anthropic differs from the OpenAI shape in auth headers, body and stream events
HOW: x-api-key + pinned anthropic-version; paired "event:"/"data:" lines, stop at message_stop
"""

from typing import Any, AsyncIterator

import httpx

from .base import DATA_PREFIX, EVENT_PREFIX, ChatService, build_endpoint, merge_headers
from .types import InvalidResponseError, Message
from ..utils.logger import get_logger

logger = get_logger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 4096


class AnthropicService(ChatService):
    """Adapter for the Anthropic Messages API."""

    vendor = "anthropic"

    def build_request(self, messages: list[Message], *, stream: bool) -> httpx.Request:
        """
        Build the Messages request.

        The key goes in x-api-key as-is (no Bearer prefix).

        Raises:
            InvalidURLError: base_url cannot form a valid endpoint
        """
        url = build_endpoint(self.config.base_url, "/messages")
        headers = merge_headers(
            {
                "Content-Type": "application/json",
                "x-api-key": self.config.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            self.config.custom_headers,
        )
        body = {
            "model": self.config.model_id,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "messages": [m.to_dict() for m in messages],
            "stream": stream,
        }
        return httpx.Request("POST", url, headers=headers, json=body)

    def parse_response(self, payload: Any) -> str | None:
        """Return the text of the first content block of type "text"."""
        if not isinstance(payload, dict) or not isinstance(payload.get("content"), list):
            return None
        for block in payload["content"]:
            if isinstance(block, dict) and block.get("type") == "text":
                return block.get("text")
        return None

    async def decode_stream(self, lines: AsyncIterator[str]) -> AsyncIterator[str]:
        """
        Decode Anthropic SSE frames.

        Only data lines following "event: content_block_delta" can produce
        text. Consumption stops as soon as "event: message_stop" is seen.

        Raises:
            InvalidResponseError: The server sent an "error" event
        """
        pending_event: str | None = None

        async for line in lines:
            if line.startswith(EVENT_PREFIX):
                pending_event = line[len(EVENT_PREFIX):].strip()
                if pending_event == "message_stop":
                    break
                continue

            if not line.startswith(DATA_PREFIX):
                continue

            if pending_event == "error":
                payload = self._load_data_line(line)
                detail = "Anthropic stream reported an error"
                if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
                    detail = f"{detail}: {payload['error'].get('message', 'unknown error')}"
                logger.error(detail)
                raise InvalidResponseError(detail)

            if pending_event != "content_block_delta":
                continue

            payload = self._load_data_line(line)
            if payload is None:
                continue

            # {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "..."}}
            if not isinstance(payload, dict) or not isinstance(payload.get("delta"), dict):
                self._skip_unexpected(payload)
                continue
            delta = payload["delta"]
            # tool input and thinking deltas carry no reply text
            if payload.get("type") != "content_block_delta" or delta.get("type") != "text_delta":
                continue

            text = delta.get("text")
            if isinstance(text, str) and text:
                yield text
