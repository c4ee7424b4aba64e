"""Hugging Face Inference API chat provider (Llama 3, single-shot)."""

import logging

import httpx

from config import settings
from providers.chat.base import SingleShotChatProvider
from providers.errors import UpstreamError
from providers.http import check_response, json_body, transport_error
from providers.huggingface import check_hf_key, hf_headers, hf_model_url

logger = logging.getLogger(__name__)


class HuggingFaceChatProvider(SingleShotChatProvider):
    """Text generation on the Inference API.

    This endpoint does not stream, so the reply arrives as one fragment.
    """

    def __init__(
        self,
        model: str | None = None,
        max_new_tokens: int | None = None,
        timeout: float | None = None,
    ):
        self.model = model or settings.huggingface_chat_model
        self.max_new_tokens = max_new_tokens or settings.chat_max_new_tokens
        self.timeout = timeout or settings.http_timeout

    @property
    def provider_id(self) -> str:
        return "huggingface_chat"

    async def complete(self, prompt: str, credential: str) -> str:
        body = {
            "inputs": prompt,
            "parameters": {"return_full_text": False, "max_new_tokens": self.max_new_tokens},
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(hf_model_url(self.model), headers=hf_headers(credential), json=body)
        except httpx.HTTPError as e:
            raise transport_error(e, "Hugging Face") from e

        check_response(response, "Hugging Face")
        data = json_body(response, "Hugging Face")

        if isinstance(data, list) and data and isinstance(data[0], dict) and "generated_text" in data[0]:
            return data[0]["generated_text"]
        raise UpstreamError("Unexpected response from Hugging Face text generation")

    async def validate_key(self, credential: str) -> bool:
        return await check_hf_key(credential)
