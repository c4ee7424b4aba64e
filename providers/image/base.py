"""Abstract base classes for image generation providers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from providers.errors import InvalidInput, MissingInput

logger = logging.getLogger(__name__)

ASPECT_RATIOS = ("1:1", "16:9", "9:16", "4:3", "3:4")


@dataclass
class ImageRequest:
    """Parameters of one image generation call."""

    prompt: str
    count: int = 1
    negative_prompt: str = ""
    aspect_ratio: str = "1:1"


class ImageProvider(ABC):
    """Abstract base class for image generation providers.

    Every provider returns exactly ``request.count`` data-URLs.

    Implementations: GeminiImageProvider, OpenAIImageProvider, HuggingFaceImageProvider
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Return the registry id for logging/dispatch."""
        ...

    def validate_inputs(self, request: ImageRequest) -> None:
        if not request.prompt or not request.prompt.strip():
            raise MissingInput("A prompt is required to generate images.")
        if request.count < 1:
            raise InvalidInput("At least one image must be requested.")

    @abstractmethod
    async def generate(self, request: ImageRequest, credential: str) -> list[str]:
        """Generate images and return them as data-URLs.

        Args:
            request: Prompt, count, negative prompt and aspect ratio.
            credential: API key for the upstream service.

        Returns:
            ``request.count`` data-URLs in output order.
        """
        ...

    async def validate_key(self, credential: str) -> bool:
        """Probe the upstream with a cheap authenticated read.

        Providers that need no user credential keep this default.
        """
        return False


class ParallelImageProvider(ImageProvider):
    """Base for upstreams that return one image per call.

    ``generate`` issues ``count`` independent calls concurrently and joins
    them; results follow dispatch order, and any failed call fails the batch.
    """

    async def generate(self, request: ImageRequest, credential: str) -> list[str]:
        logger.info("%s: dispatching %d parallel image calls", self.provider_id, request.count)
        return list(
            await asyncio.gather(
                *(self.generate_one(request, credential) for _ in range(request.count))
            )
        )

    @abstractmethod
    async def generate_one(self, request: ImageRequest, credential: str) -> str:
        """Generate a single image and return it as a data-URL."""
        ...
