"""OpenAI DALL-E 3 image generation provider."""

import logging

import httpx

from config import settings
from providers.errors import UpstreamError
from providers.http import check_response, json_body, transport_error
from providers.image.base import ImageRequest, ParallelImageProvider

logger = logging.getLogger(__name__)

# DALL-E 3 only offers three sizes
SIZE_MAP = {
    "1:1": "1024x1024",
    "16:9": "1792x1024",
    "9:16": "1024x1792",
}
DEFAULT_SIZE = "1024x1024"


class OpenAIImageProvider(ParallelImageProvider):
    """DALL-E 3 via the OpenAI images API.

    DALL-E 3 accepts ``n=1`` only, so ``count`` images means ``count`` calls.
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.openai_image_model
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "openai"

    def _get_headers(self, credential: str) -> dict:
        return {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }

    def _build_prompt(self, request: ImageRequest) -> str:
        if request.negative_prompt:
            return f"{request.prompt}. Avoid: {request.negative_prompt}"
        return request.prompt

    async def generate_one(self, request: ImageRequest, credential: str) -> str:
        body = {
            "model": self.model,
            "prompt": self._build_prompt(request),
            "n": 1,
            "size": SIZE_MAP.get(request.aspect_ratio, DEFAULT_SIZE),
            "response_format": "b64_json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/images/generations",
                    headers=self._get_headers(credential),
                    json=body,
                )
        except httpx.HTTPError as e:
            raise transport_error(e, "OpenAI") from e

        check_response(response, "OpenAI")
        data = json_body(response, "OpenAI")

        images = data.get("data") or []
        if not images or not images[0].get("b64_json"):
            raise UpstreamError("OpenAI returned no image data")
        return f"data:image/png;base64,{images[0]['b64_json']}"

    async def validate_key(self, credential: str) -> bool:
        """List models with the key."""
        try:
            async with httpx.AsyncClient(timeout=settings.validate_timeout) as client:
                response = await client.get(
                    f"{self.base_url}/models",
                    headers={"Authorization": f"Bearer {credential}"},
                )
                return response.is_success
        except httpx.HTTPError as e:
            logger.warning("OpenAI key check failed: %s", e)
            return False
