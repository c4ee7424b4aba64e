"""Video providers: demo clip, Veo, Stable Video Diffusion on Hugging Face."""

from providers.video.base import StatusCallback, VideoMode, VideoProvider, VideoRequest

__all__ = ["StatusCallback", "VideoMode", "VideoProvider", "VideoRequest"]
