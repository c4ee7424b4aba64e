"""Google Imagen image generation provider (default, free)."""

import logging

import httpx

from config import settings
from providers.errors import UpstreamError
from providers.google import google_headers, resolve_google_key
from providers.http import check_response, json_body, transport_error
from providers.image.base import ASPECT_RATIOS, ImageProvider, ImageRequest

logger = logging.getLogger(__name__)


class GeminiImageProvider(ImageProvider):
    """Imagen through the Gemini API.

    Imagen returns ``sampleCount`` images in a single round-trip, so no
    fan-out is needed. Falls back to the process-wide Google key when the
    caller has none.

    Usage:
        provider = GeminiImageProvider()
        images = await provider.generate(ImageRequest("A lighthouse at dusk", count=2), "")
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.model = model or settings.gemini_image_model
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "gemini"

    def _aspect_ratio(self, aspect_ratio: str) -> str:
        return aspect_ratio if aspect_ratio in ASPECT_RATIOS else "1:1"

    async def generate(self, request: ImageRequest, credential: str) -> list[str]:
        """Generate ``request.count`` images with one predict call."""
        api_key = resolve_google_key(credential)

        parameters: dict = {
            "sampleCount": request.count,
            "aspectRatio": self._aspect_ratio(request.aspect_ratio),
            "outputMimeType": "image/png",
        }
        if request.negative_prompt:
            parameters["negativePrompt"] = request.negative_prompt

        body = {
            "instances": [{"prompt": request.prompt}],
            "parameters": parameters,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:predict",
                    headers=google_headers(api_key),
                    json=body,
                )
        except httpx.HTTPError as e:
            raise transport_error(e, "Gemini") from e

        check_response(response, "Gemini")
        data = json_body(response, "Gemini")

        predictions = [p for p in data.get("predictions", []) if p.get("bytesBase64Encoded")]
        if len(predictions) < request.count:
            logger.error("Gemini returned %d of %d images", len(predictions), request.count)
            raise UpstreamError(
                f"Gemini returned {len(predictions)} of {request.count} images; "
                "the prompt may have been filtered."
            )

        return [
            f"data:{p.get('mimeType', 'image/png')};base64,{p['bytesBase64Encoded']}"
            for p in predictions[: request.count]
        ]
