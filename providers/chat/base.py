"""Abstract base classes for chat providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator

from providers.errors import InvalidInput, MissingInput

ROLES = ("user", "model")


@dataclass
class ChatMessage:
    """One turn of a conversation."""

    role: str  # "user" | "model"
    text: str


class ChatProvider(ABC):
    """Abstract base class for chat providers.

    ``stream`` always yields a sequence of text fragments, whether or not
    the upstream streams.

    Implementations: GeminiChatProvider, HuggingFaceChatProvider, ReplicateChatProvider
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Return the registry id for logging/dispatch."""
        ...

    def validate_inputs(self, history: list[ChatMessage]) -> None:
        if not history:
            raise MissingInput("At least one message is required.")
        for message in history:
            if message.role not in ROLES:
                raise InvalidInput(f"Unsupported chat role: {message.role}")

    @abstractmethod
    def stream(self, history: list[ChatMessage], credential: str) -> AsyncIterator[str]:
        """Yield reply fragments for the conversation so far.

        Args:
            history: Ordered messages, oldest first.
            credential: API key for the upstream service.
        """
        ...

    async def validate_key(self, credential: str) -> bool:
        """Probe the upstream with a cheap authenticated read."""
        return False


class SingleShotChatProvider(ChatProvider):
    """Base for upstreams that answer in one blocking call.

    The whole reply is yielded as a single fragment.
    """

    async def stream(self, history: list[ChatMessage], credential: str) -> AsyncIterator[str]:
        yield await self.complete(flatten_history(history), credential)

    @abstractmethod
    async def complete(self, prompt: str, credential: str) -> str:
        """Return the full reply for a flattened prompt."""
        ...


def flatten_history(history: list[ChatMessage]) -> str:
    return "\n".join(message.text for message in history)
