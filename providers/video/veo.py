"""Google Veo video generation provider (long-running operations)."""

import asyncio
import logging

import httpx

from config import settings
from providers.errors import MissingOutput, PollTimeout, UpstreamError
from providers.google import check_google_key, google_headers
from providers.http import check_response, json_body, transport_error
from providers.transcoder import to_binary
from providers.video.base import StatusCallback, VideoMode, VideoProvider, VideoRequest, save_video

logger = logging.getLogger(__name__)


class VeoVideoProvider(VideoProvider):
    """Veo through the Gemini API.

    Submitting returns an operation handle that is polled every
    ``poll_interval`` seconds until ``done``. The finished video is
    downloaded with the same key and stored locally.

    ``max_poll_duration`` caps the total wait; 0 polls until the upstream
    reports completion.

    Usage:
        provider = VeoVideoProvider()
        url = await provider.generate(VideoRequest(VideoMode.TEXT_TO_VIDEO, "A fox in snow"), key, print)
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        poll_interval: float | None = None,
        max_poll_duration: float | None = None,
        output_dir: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.model = model or settings.veo_model
        self.poll_interval = settings.veo_poll_interval if poll_interval is None else poll_interval
        self.max_poll_duration = (
            settings.veo_max_poll_duration if max_poll_duration is None else max_poll_duration
        )
        self.output_dir = output_dir
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "gemini_veo"

    def _build_body(self, request: VideoRequest) -> dict:
        instance: dict = {"prompt": request.prompt}
        if request.mode is VideoMode.IMAGE_TO_VIDEO and request.input_image:
            mime_type, _ = to_binary(request.input_image)
            instance["image"] = {
                "bytesBase64Encoded": request.input_image.split(",", 1)[1],
                "mimeType": mime_type,
            }
        return {"instances": [instance], "parameters": {"sampleCount": 1}}

    async def generate(self, request: VideoRequest, credential: str, on_status: StatusCallback) -> str:
        headers = google_headers(credential)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                on_status("Sending request to VEO...")
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:predictLongRunning",
                    headers=headers,
                    json=self._build_body(request),
                )
                check_response(response, "VEO")
                operation = json_body(response, "VEO")

                name = operation.get("name")
                if not name:
                    raise UpstreamError("VEO did not return an operation handle")
                on_status("Video processing started. This can take several minutes...")

                elapsed = 0.0
                while not operation.get("done"):
                    if self.max_poll_duration and elapsed >= self.max_poll_duration:
                        raise PollTimeout(
                            f"VEO operation {name} did not finish within {self.max_poll_duration:g}s"
                        )
                    await asyncio.sleep(self.poll_interval)
                    elapsed += self.poll_interval

                    on_status("Checking video status...")
                    poll_response = await client.get(f"{self.base_url}/{name}", headers=headers)
                    check_response(poll_response, "VEO")
                    operation = json_body(poll_response, "VEO")
                    logger.debug("VEO operation %s done=%s (%gs)", name, bool(operation.get("done")), elapsed)

                if operation.get("error"):
                    message = operation["error"].get("message", "Unknown error")
                    logger.error("VEO operation %s failed: %s", name, message)
                    raise UpstreamError(f"VEO generation failed: {message}")

                video_uri = self._extract_video_uri(operation)
                if not video_uri:
                    raise MissingOutput("Video generation failed to return a download link.")

                on_status("Video ready! Downloading...")
                download = await client.get(video_uri, headers={"x-goog-api-key": credential})
                check_response(download, "VEO")
        except httpx.HTTPError as e:
            raise transport_error(e, "VEO") from e

        mime_type = download.headers.get("content-type", "video/mp4")
        return save_video(download.content, mime_type, self.output_dir)

    @staticmethod
    def _extract_video_uri(operation: dict) -> str | None:
        """Find the first generated video's URI in a finished operation."""
        result = operation.get("response") or {}

        samples = (result.get("generateVideoResponse") or {}).get("generatedSamples")
        if not samples:
            samples = result.get("generatedVideos")
        if samples and isinstance(samples[0], dict):
            return (samples[0].get("video") or {}).get("uri")
        return None

    async def validate_key(self, credential: str) -> bool:
        return await check_google_key(credential, self.base_url)
