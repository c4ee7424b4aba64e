"""Video generation across providers with progress reporting."""

import logging

from providers.errors import InvalidInput
from providers.factory import get_video_provider
from providers.registry import ensure_credential
from providers.video.base import StatusCallback, VideoMode, VideoRequest

logger = logging.getLogger(__name__)


class StatusSink:
    """Forwards progress messages to a caller callback.

    A failing callback is logged and ignored; progress is a side channel
    and never decides the outcome of a generation.
    """

    def __init__(self, callback: StatusCallback | None = None):
        self.callback = callback

    def __call__(self, message: str) -> None:
        logger.info("Video status: %s", message)
        if self.callback is None:
            return
        try:
            self.callback(message)
        except Exception as e:
            logger.warning("Status callback failed, continuing: %s", e)


async def generate_video(
    provider_id: str,
    credential: str,
    prompt: str = "",
    input_image: str | None = None,
    on_status: StatusCallback | None = None,
    mode: VideoMode | str | None = None,
) -> str:
    """Generate one video and return a playable URL.

    ``mode`` defaults to image-to-video when ``input_image`` is given and
    text-to-video otherwise. ``on_status`` receives progress messages.

    Raises:
        UnknownProvider, MissingCredential, MissingInput, UpstreamError,
        MissingOutput, RetryExhausted, PollTimeout, MalformedDataUrl.
    """
    provider = get_video_provider(provider_id)
    ensure_credential(provider_id, credential)

    if mode is None:
        mode = VideoMode.IMAGE_TO_VIDEO if input_image else VideoMode.TEXT_TO_VIDEO
    try:
        mode = VideoMode(mode)
    except ValueError:
        raise InvalidInput(f"Unsupported video mode: {mode}") from None
    request = VideoRequest(mode=mode, prompt=prompt, input_image=input_image)
    provider.validate_inputs(request)

    logger.info("Generating %s video with %s", request.mode.value, provider_id)
    url = await provider.generate(request, credential, StatusSink(on_status))
    logger.info("Video ready from %s", provider_id)
    return url
