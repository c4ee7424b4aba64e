"""Provider factory: maps registry ids to image, video, and chat strategies."""

import logging

from providers.chat.base import ChatProvider
from providers.chat.gemini import GeminiChatProvider
from providers.chat.huggingface import HuggingFaceChatProvider
from providers.chat.replicate import ReplicateChatProvider
from providers.image.base import ImageProvider
from providers.image.gemini import GeminiImageProvider
from providers.image.huggingface import HuggingFaceImageProvider
from providers.image.openai import OpenAIImageProvider
from providers.registry import Modality, check_modality, modality_of
from providers.video.base import VideoProvider
from providers.video.demo import DemoVideoProvider
from providers.video.huggingface import HuggingFaceVideoProvider
from providers.video.veo import VeoVideoProvider

logger = logging.getLogger(__name__)

IMAGE_PROVIDERS: dict[str, type[ImageProvider]] = {
    "gemini": GeminiImageProvider,
    "openai": OpenAIImageProvider,
    "huggingface_image": HuggingFaceImageProvider,
}

VIDEO_PROVIDERS: dict[str, type[VideoProvider]] = {
    "demo_video": DemoVideoProvider,
    "gemini_veo": VeoVideoProvider,
    "huggingface_video": HuggingFaceVideoProvider,
}

CHAT_PROVIDERS: dict[str, type[ChatProvider]] = {
    "gemini_chat": GeminiChatProvider,
    "replicate_chat": ReplicateChatProvider,
    "huggingface_chat": HuggingFaceChatProvider,
}

_BY_MODALITY = {
    Modality.IMAGE: IMAGE_PROVIDERS,
    Modality.VIDEO: VIDEO_PROVIDERS,
    Modality.CHAT: CHAT_PROVIDERS,
}


def get_image_provider(provider_id: str) -> ImageProvider:
    """Get the image provider for an id.

    Supports:
    - gemini: Imagen 3 (default, free)
    - openai: DALL-E 3
    - huggingface_image: Stable Diffusion 3 Medium

    Raises:
        UnknownProvider: If the id is not an image provider.
    """
    check_modality(provider_id, Modality.IMAGE)
    return IMAGE_PROVIDERS[provider_id]()


def get_video_provider(provider_id: str) -> VideoProvider:
    """Get the video provider for an id.

    Supports:
    - demo_video: canned clip, no network (default, free)
    - gemini_veo: Veo long-running operations
    - huggingface_video: Stable Video Diffusion, image-to-video only

    Raises:
        UnknownProvider: If the id is not a video provider.
    """
    check_modality(provider_id, Modality.VIDEO)
    return VIDEO_PROVIDERS[provider_id]()


def get_chat_provider(provider_id: str) -> ChatProvider:
    """Get the chat provider for an id.

    Supports:
    - gemini_chat: Gemini, token streaming (default, free)
    - replicate_chat: Replicate community LLM, single reply
    - huggingface_chat: Llama 3 on the Inference API, single reply

    Raises:
        UnknownProvider: If the id is not a chat provider.
    """
    check_modality(provider_id, Modality.CHAT)
    return CHAT_PROVIDERS[provider_id]()


def get_provider(provider_id: str) -> ImageProvider | VideoProvider | ChatProvider:
    """Get the provider for an id of any modality."""
    provider = _BY_MODALITY[modality_of(provider_id)][provider_id]()
    logger.debug("Resolved provider %s", provider_id)
    return provider
