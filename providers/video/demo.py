"""Demo video provider: a canned clip for UI testing, no network."""

import asyncio
import logging

from config import settings
from providers.video.base import StatusCallback, VideoProvider, VideoRequest

logger = logging.getLogger(__name__)


class DemoVideoProvider(VideoProvider):
    def __init__(self, delay: float | None = None, video_url: str | None = None):
        self.delay = settings.demo_video_delay if delay is None else delay
        self.video_url = video_url or settings.demo_video_url

    @property
    def provider_id(self) -> str:
        return "demo_video"

    async def generate(self, request: VideoRequest, credential: str, on_status: StatusCallback) -> str:
        on_status("Preparing demo video...")
        await asyncio.sleep(self.delay)
        on_status("Demo video ready!")
        logger.info("Returning demo video %s", self.video_url)
        return self.video_url
