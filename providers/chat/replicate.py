"""Replicate chat provider (community LLMs, single-shot)."""

import logging

import httpx

from config import settings
from providers.chat.base import SingleShotChatProvider
from providers.errors import UpstreamError
from providers.http import check_response, json_body, transport_error

logger = logging.getLogger(__name__)


class ReplicateChatProvider(SingleShotChatProvider):
    """Replicate model predictions with ``Prefer: wait``.

    The prediction is created synchronously; its token list is joined into
    one reply.
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        max_new_tokens: int | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.replicate_base_url).rstrip("/")
        self.model = model or settings.replicate_chat_model
        self.max_new_tokens = max_new_tokens or settings.chat_max_new_tokens
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "replicate_chat"

    def _get_headers(self, credential: str) -> dict:
        return {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
            "Prefer": "wait",
        }

    async def complete(self, prompt: str, credential: str) -> str:
        body = {"input": {"prompt": prompt, "max_new_tokens": self.max_new_tokens}}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}/predictions",
                    headers=self._get_headers(credential),
                    json=body,
                )
        except httpx.HTTPError as e:
            raise transport_error(e, "Replicate") from e

        check_response(response, "Replicate")
        prediction = json_body(response, "Replicate")

        status = prediction.get("status")
        if status != "succeeded":
            error = prediction.get("error") or f"prediction is {status or 'in an unknown state'}"
            logger.error("Replicate prediction %s: %s", prediction.get("id"), error)
            raise UpstreamError(f"Replicate error: {error}")

        output = prediction.get("output")
        if isinstance(output, list):
            return "".join(str(token) for token in output)
        return output or ""

    async def validate_key(self, credential: str) -> bool:
        """Read the account owning the token."""
        try:
            async with httpx.AsyncClient(timeout=settings.validate_timeout) as client:
                response = await client.get(
                    f"{self.base_url}/account",
                    headers={"Authorization": f"Bearer {credential}"},
                )
                return response.is_success
        except httpx.HTTPError as e:
            logger.warning("Replicate key check failed: %s", e)
            return False
