"""
Streaming utilities for LLM responses.

WHAT: Helper functions to drain, batch and bound text-delta streams
WHY: Give UI update loops and buffered callers consistent streaming behavior
HOW: Async generators over the adapters' AsyncIterator[str] sequences
"""

import time
from typing import AsyncIterator

from ..utils.logger import get_logger

logger = get_logger(__name__)


async def collect_stream(chunks: AsyncIterator[str]) -> str:
    """
    Drain a chunk stream and join it into one string.

    Args:
        chunks: Source text deltas

    Returns:
        Concatenation of every chunk in arrival order
    """
    parts = []
    async for chunk in chunks:
        parts.append(chunk)
    return "".join(parts)


async def coalesce_chunks(
    chunks: AsyncIterator[str],
    *,
    batch_size: int = 5,
    flush_ms: int = 50
) -> AsyncIterator[str]:
    """
    Coalesce small deltas with count- and time-based buffering.

    WHAT: Buffer chunks and flush periodically
    WHY: Reduce UI re-render overhead while staying responsive
    HOW: Flush when batch_size chunks are buffered or flush_ms has elapsed

    Args:
        chunks: Source text deltas
        batch_size: Flush after this many buffered chunks
        flush_ms: Flush when this many milliseconds passed since the last flush

    Yields:
        Coalesced string chunks (same total text, same order)
    """
    buffer: list[str] = []
    flush_interval = flush_ms / 1000.0  # Convert to seconds
    last_flush = time.monotonic()

    async for chunk in chunks:
        if not chunk:
            continue
        buffer.append(chunk)

        now = time.monotonic()
        if len(buffer) >= batch_size or now - last_flush >= flush_interval:
            yield "".join(buffer)
            buffer.clear()
            last_flush = now

    # Final flush
    if buffer:
        yield "".join(buffer)


async def bounded_stream(
    chunks: AsyncIterator[str],
    max_chars: int
) -> AsyncIterator[str]:
    """
    Limit streaming output to maximum character count.

    WHAT: Guard against runaway generation
    WHY: Cap what a UI pane or a follow-up prompt has to hold
    HOW: Track character count, truncate the last chunk and close the source

    Args:
        chunks: Source text deltas
        max_chars: Maximum characters to yield

    Yields:
        Text up to max_chars in total
    """
    total_chars = 0

    try:
        async for chunk in chunks:
            remaining = max_chars - total_chars
            if remaining <= 0:
                logger.warning(f"Stream bounded at {max_chars} characters")
                break

            # Truncate chunk if it exceeds remaining space
            if len(chunk) > remaining:
                chunk = chunk[:remaining]
                logger.info(f"Truncated final chunk to fit {max_chars} limit")

            total_chars += len(chunk)
            yield chunk

            if total_chars >= max_chars:
                break
    finally:
        # Release the upstream HTTP response when stopping early
        aclose = getattr(chunks, "aclose", None)
        if aclose is not None:
            await aclose()
