"""
OpenAI-compatible adapter.

WHAT: Chat Completions client for OpenAI and every vendor speaking its wire shape
WHY: DeepSeek, Zhipu, DashScope, Minimax, OpenRouter and custom endpoints all reuse it
HOW: Bearer auth, POST {base}/chat/completions, SSE "data:" lines ending with [DONE]
"""

from typing import Any, AsyncIterator

import httpx

from .base import DATA_PREFIX, ChatService, build_endpoint, merge_headers
from .types import Message
from ..utils.logger import get_logger

logger = get_logger(__name__)

DONE_SENTINEL = "[DONE]"


class OpenAICompatibleService(ChatService):
    """Adapter for any `/chat/completions` endpoint."""

    vendor = "openai-compatible"

    def build_request(self, messages: list[Message], *, stream: bool) -> httpx.Request:
        """
        Build the Chat Completions request.

        Custom headers are merged in but never replace Authorization or
        Content-Type.

        Raises:
            InvalidURLError: base_url cannot form a valid endpoint
        """
        url = build_endpoint(self.config.base_url, "/chat/completions")
        headers = merge_headers(
            {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.config.api_key}",
            },
            self.config.custom_headers,
        )
        body = {
            "model": self.config.model_id,
            "messages": [m.to_dict() for m in messages],
            "stream": stream,
        }
        return httpx.Request("POST", url, headers=headers, json=body)

    def parse_response(self, payload: Any) -> str | None:
        # {"choices": [{"message": {"content": "..."}}]}
        if not isinstance(payload, dict):
            return None
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return None
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return None
        return message.get("content")

    async def decode_stream(self, lines: AsyncIterator[str]) -> AsyncIterator[str]:
        async for line in lines:
            if not line.startswith(DATA_PREFIX):
                continue
            if line[len(DATA_PREFIX):].strip() == DONE_SENTINEL:
                logger.debug(f"{self.config.name}: received {DONE_SENTINEL}")
                break

            chunk = self._load_data_line(line)
            if chunk is None:
                continue

            # {"choices": [{"delta": {"content": "..."}, "finish_reason": null}]}
            try:
                content = chunk["choices"][0]["delta"].get("content")
            except (KeyError, IndexError, TypeError, AttributeError):
                self._skip_unexpected(chunk)
                continue
            if isinstance(content, str) and content:
                yield content
