"""
OpenRouter model discovery.

WHAT: Fetch the OpenRouter model catalogue as PresetModel values
WHY: OpenRouter exposes hundreds of models; presets only list a handful
HOW: GET the public models endpoint, fall back to a curated list on failure
"""

import httpx

from .base import build_endpoint, ensure_success
from .registry import OPENROUTER_MODELS, PresetModel
from .types import BadResponseError, InvalidResponseError, LLMError
from ..core.config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_MODELS: list[PresetModel] = list(OPENROUTER_MODELS)


class OpenRouterModelService:
    """Client for OpenRouter's GET /models endpoint."""

    def __init__(self, client: httpx.AsyncClient | None = None, models_url: str | None = None):
        self._client = client
        self.models_url = models_url or settings.OPENROUTER_MODELS_URL

    async def fetch_models(self) -> list[PresetModel]:
        """
        Fetch the full model catalogue.

        Returns:
            One PresetModel per catalogue entry, in server order

        Raises:
            InvalidURLError: models_url is malformed
            BadResponseError: Non-2xx status, or -1 on transport failure
            InvalidResponseError: Body is not {"data": [{"id", "name"}, ...]}
        """
        url = build_endpoint(self.models_url, "")
        headers = {"Accept": "application/json"}

        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.LLM_CONNECT_TIMEOUT, read=settings.LLM_READ_TIMEOUT)
                ) as client:
                    response = await client.get(url, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"OpenRouter model list request failed: {type(e).__name__}")
            raise BadResponseError(-1, detail=type(e).__name__) from e

        ensure_success(response)

        try:
            data = response.json()["data"]
            models = [PresetModel(id=str(item["id"]), name=str(item["name"])) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Invalid OpenRouter model list: {e}")
            raise InvalidResponseError(f"Invalid OpenRouter model list: {e}") from e

        logger.info(f"Fetched {len(models)} OpenRouter models")
        return models

    async def list_models(self) -> list[PresetModel]:
        """Fetch the catalogue, or return FALLBACK_MODELS if the fetch fails."""
        try:
            return await self.fetch_models()
        except LLMError as e:
            logger.warning(f"Using fallback OpenRouter models ({e.kind}: {e})")
            return list(FALLBACK_MODELS)
