"""Chat providers: Gemini (streaming), Replicate and Hugging Face (single reply)."""

from providers.chat.base import ChatMessage, ChatProvider, SingleShotChatProvider

__all__ = ["ChatMessage", "ChatProvider", "SingleShotChatProvider"]
