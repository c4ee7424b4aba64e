"""Hugging Face Stable Video Diffusion provider (image-to-video only)."""

import asyncio
import logging

import httpx

from config import settings
from providers.errors import MissingInput, RetryExhausted, UpstreamError
from providers.http import check_response, transport_error
from providers.huggingface import check_hf_key, hf_headers, hf_model_url
from providers.transcoder import to_binary
from providers.video.base import StatusCallback, VideoProvider, VideoRequest, save_video

logger = logging.getLogger(__name__)

MODEL_LOADING_STATUS = 503


class HuggingFaceVideoProvider(VideoProvider):
    """SVD img2vid on the Hugging Face Inference API.

    A cold model answers 503 with an ``estimated_time``; the upload is
    retried after that wait, up to ``max_attempts`` attempts in total.
    Any other error status fails immediately.
    """

    def __init__(
        self,
        model: str | None = None,
        max_attempts: int | None = None,
        default_wait: float | None = None,
        output_dir: str | None = None,
        timeout: float | None = None,
    ):
        self.model = model or settings.huggingface_video_model
        self.max_attempts = max_attempts or settings.hf_video_max_attempts
        self.default_wait = settings.hf_video_default_wait if default_wait is None else default_wait
        self.output_dir = output_dir
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "huggingface_video"

    def validate_inputs(self, request: VideoRequest) -> None:
        if not request.input_image:
            raise MissingInput("An input image is required for Hugging Face SVD.")

    def _estimated_wait(self, response: httpx.Response) -> float | None:
        """Return the advertised wait for a model-loading response, else None."""
        if response.status_code != MODEL_LOADING_STATUS:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        try:
            return float(data.get("estimated_time") or self.default_wait)
        except (TypeError, ValueError):
            return float(self.default_wait)

    async def generate(self, request: VideoRequest, credential: str, on_status: StatusCallback) -> str:
        on_status("Uploading image...")
        mime_type, payload = to_binary(request.input_image)
        headers = hf_headers(credential, content_type=mime_type)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                for attempt in range(1, self.max_attempts + 1):
                    response = await client.post(hf_model_url(self.model), headers=headers, content=payload)

                    wait = self._estimated_wait(response)
                    if wait is None:
                        check_response(response, "Hugging Face")
                        break

                    logger.info(
                        "SVD model loading (attempt %d/%d), waiting %.0fs",
                        attempt,
                        self.max_attempts,
                        wait,
                    )
                    if attempt == self.max_attempts:
                        raise RetryExhausted("Hugging Face model failed to load after multiple retries.")
                    on_status(f"Model is loading... retrying in {round(wait)}s.")
                    await asyncio.sleep(wait)
        except httpx.HTTPError as e:
            raise transport_error(e, "Hugging Face") from e

        on_status("Processing video...")
        video_type = response.headers.get("content-type", "video/mp4")
        if not response.content:
            raise UpstreamError("Hugging Face returned an empty video")
        return save_video(response.content, video_type, self.output_dir)

    async def validate_key(self, credential: str) -> bool:
        return await check_hf_key(credential)
