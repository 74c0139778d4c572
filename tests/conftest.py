"""
Pytest configuration and shared fixtures for the LLM layer tests.

WHAT: Centralized test configuration, markers and provider fixtures
WHY: Every adapter test needs the same configs and SSE payloads
HOW: Register markers, expose configs/messages as fixtures, keep SSE bodies as constants
"""

import pytest

from arxivlearner.llm.types import Message, ProviderConfig, ProviderProfile, ProviderType


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests, HTTP mocked with respx)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (router + adapters + transport mocks)"
    )


OPENAI_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

OPENAI_CHAT_URL = f"{OPENAI_BASE_URL}/chat/completions"
ANTHROPIC_MESSAGES_URL = f"{ANTHROPIC_BASE_URL}/messages"
GEMINI_HOST = "generativelanguage.googleapis.com"


@pytest.fixture
def messages() -> list[Message]:
    return [
        Message(role="system", content="You are a paper assistant."),
        Message(role="user", content="Summarize the abstract."),
    ]


@pytest.fixture
def openai_config() -> ProviderConfig:
    return ProviderConfig(
        name="OpenAI",
        base_url=OPENAI_BASE_URL,
        api_key="sk-test-openai",
        model_id="gpt-4o-mini",
    )


@pytest.fixture
def anthropic_config() -> ProviderConfig:
    return ProviderConfig(
        name="Claude (Anthropic)",
        base_url=ANTHROPIC_BASE_URL,
        api_key="sk-ant-api03-testkey",
        model_id="claude-haiku-4-5-20251001",
    )


@pytest.fixture
def gemini_config() -> ProviderConfig:
    return ProviderConfig(
        name="Google Gemini",
        base_url=GEMINI_BASE_URL,
        api_key="gemini-test-key",
        model_id="gemini-2.0-flash",
    )


@pytest.fixture
def openrouter_profile() -> ProviderProfile:
    return ProviderProfile(
        provider_type=ProviderType.OPEN_ROUTER,
        name="OpenRouter",
        base_url=OPENROUTER_BASE_URL,
        api_key="sk-or-test",
    )


# Mock response bodies
MOCK_OPENAI_RESPONSE = {
    "choices": [{"message": {"role": "assistant", "content": "Test response"}}],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    "model": "gpt-4o-mini"
}

MOCK_ANTHROPIC_RESPONSE = {
    "id": "msg_01",
    "type": "message",
    "content": [{"type": "text", "text": "Test response"}],
    "stop_reason": "end_turn"
}

MOCK_GEMINI_RESPONSE = {
    "candidates": [{"content": {"role": "model", "parts": [{"text": "Test response"}]}}]
}

OPENAI_SSE = (
    'data: {"choices":[{"delta":{"role":"assistant"}}]}\n\n'
    'data: {"choices":[{"delta":{"content":"Hello"}}]}\n\n'
    'data: {"choices":[{"delta":{"content":" world"}}]}\n\n'
    'data: {"choices":[{"delta":{},"finish_reason":"stop"}]}\n\n'
    'data: [DONE]\n\n'
)

ANTHROPIC_SSE = (
    'event: message_start\n'
    'data: {"type":"message_start","message":{"id":"msg_01","content":[]}}\n\n'
    'event: content_block_start\n'
    'data: {"type":"content_block_start","index":0,"content_block":{"type":"text","text":""}}\n\n'
    'event: ping\n'
    'data: {"type":"ping"}\n\n'
    'event: content_block_delta\n'
    'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":"Hello"}}\n\n'
    'event: content_block_delta\n'
    'data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":" world"}}\n\n'
    'event: content_block_stop\n'
    'data: {"type":"content_block_stop","index":0}\n\n'
    'event: message_delta\n'
    'data: {"type":"message_delta","delta":{"stop_reason":"end_turn"}}\n\n'
    'event: message_stop\n'
    'data: {"type":"message_stop"}\n\n'
)

GEMINI_SSE = (
    'data: {"candidates":[{"content":{"role":"model","parts":[{"text":"Hello"}]}}]}\n\n'
    'data: {"candidates":[{"content":{"role":"model","parts":[{"text":" world"}]}}]}\n\n'
    'data: {"candidates":[{"content":{"role":"model","parts":[]},"finishReason":"STOP"}],'
    '"usageMetadata":{"totalTokenCount":12}}\n\n'
)
