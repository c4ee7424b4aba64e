"""Abstract base class for video generation providers."""

import os
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from config import settings
from providers.errors import MissingInput

StatusCallback = Callable[[str], None]

_EXTENSIONS = {
    "video/mp4": ".mp4",
    "video/webm": ".webm",
    "video/quicktime": ".mov",
}


class VideoMode(str, Enum):
    TEXT_TO_VIDEO = "text-to-video"
    IMAGE_TO_VIDEO = "image-to-video"


@dataclass
class VideoRequest:
    """Parameters of one video generation call."""

    mode: VideoMode
    prompt: str = ""
    input_image: str | None = None  # data-URL


class VideoProvider(ABC):
    """Abstract base class for video generation providers.

    Implementations: DemoVideoProvider, VeoVideoProvider, HuggingFaceVideoProvider
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Return the registry id for logging/dispatch."""
        ...

    def validate_inputs(self, request: VideoRequest) -> None:
        if request.mode is VideoMode.TEXT_TO_VIDEO and not (request.prompt and request.prompt.strip()):
            raise MissingInput("A prompt is required for text-to-video generation.")
        if request.mode is VideoMode.IMAGE_TO_VIDEO and not request.input_image:
            raise MissingInput("An input image is required for image-to-video generation.")

    @abstractmethod
    async def generate(self, request: VideoRequest, credential: str, on_status: StatusCallback) -> str:
        """Generate a video and return a playable URL.

        Args:
            request: Mode, prompt and optional input image.
            credential: API key for the upstream service.
            on_status: Sink for human-readable progress messages.

        Returns:
            A URL the caller can play directly.
        """
        ...

    async def validate_key(self, credential: str) -> bool:
        """Probe the upstream with a cheap authenticated read."""
        return False


def save_video(payload: bytes, mime_type: str = "video/mp4", output_dir: str | None = None) -> str:
    """Write video bytes to the output directory and return a ``file://`` URI."""
    output_dir = output_dir or settings.video_output_dir or os.path.join(os.getcwd(), "generated_videos")
    Path(output_dir).mkdir(parents=True, exist_ok=True)

    extension = _EXTENSIONS.get(mime_type.split(";")[0].strip(), ".mp4")
    local_path = Path(output_dir) / f"{uuid.uuid4().hex}{extension}"
    local_path.write_bytes(payload)
    return local_path.resolve().as_uri()
