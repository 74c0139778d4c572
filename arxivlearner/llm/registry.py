"""
Preset provider catalogue.

WHAT: Built-in vendor presets (base URL, type, suggested models)
WHY: The settings layer offers these when the user adds a provider
HOW: Static dataclass list plus lookup and profile helpers
"""

from dataclasses import dataclass, field

from .types import ProviderProfile, ProviderType
from ..core.config import settings


@dataclass(frozen=True)
class PresetModel:
    id: str
    name: str


@dataclass(frozen=True)
class PresetProvider:
    id: str
    name: str
    provider_type: ProviderType
    base_url: str
    models: list[PresetModel] = field(default_factory=list)
    supports_model_discovery: bool = False


OPENROUTER_MODELS = [
    PresetModel(id="anthropic/claude-opus-4-6", name="Claude Opus 4.6"),
    PresetModel(id="anthropic/claude-sonnet-4-6", name="Claude Sonnet 4.6"),
    PresetModel(id="openai/gpt-4.1", name="GPT-4.1"),
    PresetModel(id="google/gemini-2.5-pro", name="Gemini 2.5 Pro"),
    PresetModel(id="deepseek/deepseek-chat-v3-0324", name="DeepSeek V3"),
]

ALL_PROVIDERS: list[PresetProvider] = [
    PresetProvider(
        id="openai",
        name="OpenAI",
        provider_type=ProviderType.OPENAI,
        base_url="https://api.openai.com/v1",
        models=[
            PresetModel(id="gpt-4.1", name="GPT-4.1"),
            PresetModel(id="gpt-4.1-mini", name="GPT-4.1 Mini"),
            PresetModel(id="gpt-4.1-nano", name="GPT-4.1 Nano"),
            PresetModel(id="gpt-4o", name="GPT-4o"),
            PresetModel(id="gpt-4o-mini", name="GPT-4o Mini"),
            PresetModel(id="o4-mini", name="o4-mini"),
            PresetModel(id="o3", name="o3"),
            PresetModel(id="o3-mini", name="o3-mini"),
        ],
    ),
    PresetProvider(
        id="anthropic",
        name="Claude (Anthropic)",
        provider_type=ProviderType.ANTHROPIC,
        base_url="https://api.anthropic.com/v1",
        models=[
            PresetModel(id="claude-opus-4-6-20260201", name="Claude Opus 4.6"),
            PresetModel(id="claude-sonnet-4-6-20260201", name="Claude Sonnet 4.6"),
            PresetModel(id="claude-sonnet-4-5-20250514", name="Claude Sonnet 4.5"),
            PresetModel(id="claude-opus-4-5-20250514", name="Claude Opus 4.5"),
            PresetModel(id="claude-haiku-4-5-20251001", name="Claude Haiku 4.5"),
        ],
    ),
    PresetProvider(
        id="google",
        name="Google Gemini",
        provider_type=ProviderType.GOOGLE,
        # host root: GeminiService appends /v1beta/models/...
        base_url=settings.GEMINI_BASE_URL,
        models=[
            PresetModel(id="gemini-2.5-pro", name="Gemini 2.5 Pro"),
            PresetModel(id="gemini-2.5-flash", name="Gemini 2.5 Flash"),
            PresetModel(id="gemini-2.0-flash", name="Gemini 2.0 Flash"),
            PresetModel(id="gemini-2.0-flash-lite", name="Gemini 2.0 Flash Lite"),
        ],
    ),
    PresetProvider(
        id="deepseek",
        name="DeepSeek",
        provider_type=ProviderType.DEEPSEEK,
        base_url="https://api.deepseek.com/v1",
        models=[
            PresetModel(id="deepseek-chat", name="DeepSeek V3"),
            PresetModel(id="deepseek-reasoner", name="DeepSeek R1"),
        ],
    ),
    PresetProvider(
        id="zhipu",
        name="Zhipu (GLM)",
        provider_type=ProviderType.ZHIPU,
        base_url="https://open.bigmodel.cn/api/paas/v4",
        models=[
            PresetModel(id="glm-4-plus", name="GLM-4 Plus"),
            PresetModel(id="glm-4-flash", name="GLM-4 Flash"),
            PresetModel(id="glm-4-long", name="GLM-4 Long"),
            PresetModel(id="glm-4-air", name="GLM-4 Air"),
        ],
    ),
    PresetProvider(
        id="dashscope",
        name="DashScope (Qwen)",
        provider_type=ProviderType.DASHSCOPE,
        base_url="https://dashscope.aliyuncs.com/compatible-mode/v1",
        models=[
            PresetModel(id="qwen-max", name="Qwen Max"),
            PresetModel(id="qwen-plus", name="Qwen Plus"),
            PresetModel(id="qwen-turbo", name="Qwen Turbo"),
            PresetModel(id="qwen-long", name="Qwen Long"),
            PresetModel(id="qwen3-235b-a22b", name="Qwen3 235B"),
        ],
    ),
    PresetProvider(
        id="minimax",
        name="Minimax",
        provider_type=ProviderType.MINIMAX,
        base_url="https://api.minimax.chat/v1",
        models=[
            PresetModel(id="MiniMax-M1", name="MiniMax M1"),
            PresetModel(id="MiniMax-Text-01", name="MiniMax Text 01"),
            PresetModel(id="abab6.5s-chat", name="ABAB 6.5s Chat"),
        ],
    ),
    PresetProvider(
        id="openrouter",
        name="OpenRouter",
        provider_type=ProviderType.OPEN_ROUTER,
        base_url="https://openrouter.ai/api/v1",
        models=list(OPENROUTER_MODELS),
        supports_model_discovery=True,
    ),
]


def get_preset(preset_id: str) -> PresetProvider | None:
    """Return the preset with the given id, or None."""
    return next((p for p in ALL_PROVIDERS if p.id == preset_id), None)


def profile_from_preset(
    preset: PresetProvider,
    api_key: str,
    custom_headers: dict[str, str] | None = None
) -> ProviderProfile:
    """Create a provider profile pre-filled from a preset."""
    return ProviderProfile(
        provider_type=preset.provider_type,
        name=preset.name,
        base_url=preset.base_url,
        api_key=api_key,
        custom_headers=dict(custom_headers or {}),
        provider_id=preset.id,
    )
