"""Image generation across providers."""

import logging

from providers.factory import get_image_provider
from providers.image.base import ImageRequest
from providers.registry import ensure_credential

logger = logging.getLogger(__name__)


async def generate_images(
    provider_id: str,
    credential: str,
    prompt: str,
    count: int = 1,
    negative_prompt: str = "",
    aspect_ratio: str = "1:1",
) -> list[str]:
    """Generate ``count`` images with one provider.

    Returns:
        Data-URLs in dispatch order, one per requested image.

    Raises:
        UnknownProvider, MissingCredential, MissingInput, InvalidInput,
        UpstreamError: See ``providers.errors``.
    """
    provider = get_image_provider(provider_id)
    ensure_credential(provider_id, credential)

    request = ImageRequest(
        prompt=prompt,
        count=count,
        negative_prompt=negative_prompt,
        aspect_ratio=aspect_ratio,
    )
    provider.validate_inputs(request)

    logger.info("Generating %d image(s) with %s (%s)", count, provider_id, aspect_ratio)
    images = await provider.generate(request, credential)
    logger.info("Generated %d image(s) with %s", len(images), provider_id)
    return images
