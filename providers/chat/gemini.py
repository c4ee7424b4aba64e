"""Google Gemini chat provider (token streaming, free)."""

import json
import logging
from typing import AsyncIterator

import httpx

from config import settings
from providers.chat.base import ChatMessage, ChatProvider
from providers.errors import UpstreamError
from providers.google import google_headers, resolve_google_key
from providers.http import check_response, json_body, transport_error

logger = logging.getLogger(__name__)


def _chunk_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)


class GeminiChatProvider(ChatProvider):
    """Gemini ``streamGenerateContent`` over server-sent events.

    Each upstream chunk becomes one fragment. Closing the iterator closes
    the HTTP stream. Falls back to the process-wide Google key when the
    caller has none.

    Usage:
        provider = GeminiChatProvider()
        async for fragment in provider.stream([ChatMessage("user", "Hi")], ""):
            print(fragment, end="")
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.model = model or settings.gemini_chat_model
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "gemini_chat"

    @staticmethod
    def _contents(history: list[ChatMessage]) -> list[dict]:
        return [{"role": m.role, "parts": [{"text": m.text}]} for m in history]

    async def stream(self, history: list[ChatMessage], credential: str) -> AsyncIterator[str]:
        api_key = resolve_google_key(credential)
        url = f"{self.base_url}/models/{self.model}:streamGenerateContent?alt=sse"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                async with client.stream(
                    "POST",
                    url,
                    headers=google_headers(api_key),
                    json={"contents": self._contents(history)},
                ) as response:
                    if not response.is_success:
                        await response.aread()
                        check_response(response, "Gemini")

                    async for line in response.aiter_lines():
                        if not line.startswith("data:"):
                            continue
                        try:
                            data = json.loads(line[len("data:"):])
                        except json.JSONDecodeError:
                            logger.debug("Skipping undecodable Gemini chunk: %r", line)
                            continue
                        if data.get("error"):
                            message = data["error"].get("message", "Unknown error")
                            raise UpstreamError(f"Gemini error: {message}")
                        text = _chunk_text(data)
                        if text:
                            yield text
        except httpx.HTTPError as e:
            raise transport_error(e, "Gemini") from e

    async def generate_text(
        self,
        contents: str | list[ChatMessage],
        credential: str | None = None,
        generation_config: dict | None = None,
    ) -> str:
        """Single blocking ``generateContent`` call returning the reply text."""
        api_key = resolve_google_key(credential)
        if isinstance(contents, str):
            contents = [ChatMessage("user", contents)]

        body: dict = {"contents": self._contents(contents)}
        if generation_config:
            body["generationConfig"] = generation_config

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers=google_headers(api_key),
                    json=body,
                )
        except httpx.HTTPError as e:
            raise transport_error(e, "Gemini") from e

        check_response(response, "Gemini")
        return _chunk_text(json_body(response, "Gemini"))
