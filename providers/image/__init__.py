"""Image providers: Imagen, DALL-E 3, Stable Diffusion 3 on Hugging Face."""

from providers.image.base import ImageProvider, ImageRequest, ParallelImageProvider

__all__ = ["ImageProvider", "ImageRequest", "ParallelImageProvider"]
