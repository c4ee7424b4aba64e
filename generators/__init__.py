"""Generation entry points consumed by the UI layer."""

from generators.chat import stream_chat_response
from generators.image import generate_images
from generators.keys import ProviderConfig, ProviderSelection, validate_api_key
from generators.video import generate_video

__all__ = [
    "generate_images",
    "generate_video",
    "stream_chat_response",
    "validate_api_key",
    "ProviderConfig",
    "ProviderSelection",
]
