"""
Google Gemini adapter.

WHAT: Client for generateContent / streamGenerateContent
WHY: Gemini authenticates by query string and takes "contents" instead of chat messages
HOW: POST {base}/v1beta/models/{model}:{action}?key=...[&alt=sse], one flattened turn
"""

from typing import Any, AsyncIterator

import httpx

from .base import DATA_PREFIX, ChatService, build_endpoint, merge_headers
from .types import Message
from ..utils.logger import get_logger

logger = get_logger(__name__)


def first_part_text(payload: Any) -> str | None:
    """Extract candidates[0].content.parts[0].text, or None if any level is missing."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    return parts[0].get("text")


class GeminiService(ChatService):
    """
    Adapter for the Gemini REST API.

    The whole conversation is sent as a single content entry whose parts
    are "<role>: <content>" strings, so Gemini sees no real multi-turn
    structure.
    """

    vendor = "gemini"

    def build_request(self, messages: list[Message], *, stream: bool) -> httpx.Request:
        """
        Build a generateContent or streamGenerateContent request.

        The API key travels as the ``key`` query parameter; streaming adds
        ``alt=sse``.

        Raises:
            InvalidURLError: base_url or model id cannot form a valid endpoint
        """
        action = "streamGenerateContent" if stream else "generateContent"
        url = build_endpoint(self.config.base_url, f"/v1beta/models/{self.config.model_id}:{action}")

        params = {"key": self.config.api_key}
        if stream:
            params["alt"] = "sse"

        headers = merge_headers({"Content-Type": "application/json"}, self.config.custom_headers)
        body = {
            "contents": [
                {"parts": [{"text": f"{m.role}: {m.content}"} for m in messages]}
            ]
        }
        return httpx.Request("POST", url, params=params, headers=headers, json=body)

    def parse_response(self, payload: Any) -> str | None:
        return first_part_text(payload)

    async def decode_stream(self, lines: AsyncIterator[str]) -> AsyncIterator[str]:
        # No sentinel: the stream ends when the server closes the connection.
        async for line in lines:
            if not line.startswith(DATA_PREFIX):
                continue

            chunk = self._load_data_line(line)
            if chunk is None:
                continue
            if not isinstance(chunk, dict):
                self._skip_unexpected(chunk)
                continue

            # Trailing chunks may only carry finishReason / usageMetadata
            text = first_part_text(chunk)
            if isinstance(text, str) and text:
                yield text

        logger.debug(f"{self.config.name}: stream closed by server")
