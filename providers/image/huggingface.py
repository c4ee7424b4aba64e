"""Hugging Face Inference API image generation provider (Stable Diffusion 3)."""

import logging

import httpx

from config import settings
from providers.errors import UpstreamError
from providers.http import check_response, transport_error
from providers.huggingface import check_hf_key, hf_headers, hf_model_url
from providers.image.base import ImageRequest, ParallelImageProvider
from providers.transcoder import to_data_url

logger = logging.getLogger(__name__)

DIMENSIONS = {
    "1:1": (1024, 1024),
    "16:9": (1344, 768),
    "9:16": (768, 1344),
    "4:3": (1152, 896),
    "3:4": (896, 1152),
}
DEFAULT_DIMENSIONS = (1024, 1024)


class HuggingFaceImageProvider(ParallelImageProvider):
    """SD3 Medium on the Hugging Face Inference API.

    The endpoint answers with raw image bytes, one image per call.
    """

    def __init__(self, model: str | None = None, timeout: float | None = None):
        self.model = model or settings.huggingface_image_model
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "huggingface_image"

    def _parse_size(self, aspect_ratio: str) -> tuple[int, int]:
        return DIMENSIONS.get(aspect_ratio, DEFAULT_DIMENSIONS)

    async def generate_one(self, request: ImageRequest, credential: str) -> str:
        width, height = self._parse_size(request.aspect_ratio)
        parameters: dict = {"width": width, "height": height}
        if request.negative_prompt:
            parameters["negative_prompt"] = request.negative_prompt

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    hf_model_url(self.model),
                    headers={**hf_headers(credential), "Accept": "image/png"},
                    json={"inputs": request.prompt, "parameters": parameters},
                )
        except httpx.HTTPError as e:
            raise transport_error(e, "Hugging Face") from e

        check_response(response, "Hugging Face")

        mime_type = response.headers.get("content-type", "image/png").split(";")[0].strip()
        if not mime_type.startswith("image/") or not response.content:
            raise UpstreamError(f"Hugging Face returned {mime_type or 'an empty body'} instead of an image")
        return to_data_url(mime_type, response.content)

    async def validate_key(self, credential: str) -> bool:
        return await check_hf_key(credential)
