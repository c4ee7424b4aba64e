"""Chat replies as a lazy sequence of text fragments."""

import logging
from contextlib import aclosing
from typing import AsyncIterator

from providers.chat.base import ChatMessage, ChatProvider
from providers.factory import get_chat_provider
from providers.registry import ensure_credential

logger = logging.getLogger(__name__)


def stream_chat_response(
    provider_id: str,
    credential: str,
    history: list[ChatMessage],
) -> AsyncIterator[str]:
    """Return an async iterator over the reply to ``history``.

    Preconditions are checked here, before anything is sent. Stopping
    iteration early (``aclose()``) closes the upstream stream.

    Raises:
        UnknownProvider, MissingCredential, MissingInput, InvalidInput
        immediately; UpstreamError while iterating.
    """
    provider = get_chat_provider(provider_id)
    ensure_credential(provider_id, credential)
    provider.validate_inputs(history)
    return _relay(provider, history, credential)


async def _relay(provider: ChatProvider, history: list[ChatMessage], credential: str) -> AsyncIterator[str]:
    fragments = 0
    async with aclosing(provider.stream(history, credential)) as stream:
        async for fragment in stream:
            fragments += 1
            yield fragment
    logger.info("Chat reply from %s finished after %d fragment(s)", provider.provider_id, fragments)
