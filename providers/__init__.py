"""Provider abstraction layer for image, video, and chat generation.

Each upstream backend is a strategy object keyed by its registry id; the
generators package dispatches to them through ``providers.factory``.
"""

from providers.chat.base import ChatMessage, ChatProvider
from providers.errors import (
    GenerationError,
    InvalidInput,
    MalformedDataUrl,
    MissingCredential,
    MissingInput,
    MissingOutput,
    PollTimeout,
    RetryExhausted,
    UnknownProvider,
    UpstreamError,
)
from providers.factory import get_chat_provider, get_image_provider, get_provider, get_video_provider
from providers.image.base import ImageProvider, ImageRequest
from providers.registry import KeyStatus, Modality, ProviderInfo, providers_for, requires_credential
from providers.video.base import VideoMode, VideoProvider, VideoRequest

__all__ = [
    "ChatMessage",
    "ChatProvider",
    "GenerationError",
    "InvalidInput",
    "MalformedDataUrl",
    "MissingCredential",
    "MissingInput",
    "MissingOutput",
    "PollTimeout",
    "RetryExhausted",
    "UnknownProvider",
    "UpstreamError",
    "ImageProvider",
    "ImageRequest",
    "VideoMode",
    "VideoProvider",
    "VideoRequest",
    "KeyStatus",
    "Modality",
    "ProviderInfo",
    "providers_for",
    "requires_credential",
    "get_chat_provider",
    "get_image_provider",
    "get_provider",
    "get_video_provider",
]
