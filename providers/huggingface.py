"""Shared bits for the Hugging Face Inference API providers."""

import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)


def hf_headers(credential: str, content_type: str | None = "application/json") -> dict:
    headers = {"Authorization": f"Bearer {credential}"}
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def hf_model_url(model: str, base_url: str | None = None) -> str:
    return f"{(base_url or settings.huggingface_inference_url).rstrip('/')}/{model}"


async def check_hf_key(credential: str) -> bool:
    """Ask the hub who owns the token; True iff the call succeeds."""
    try:
        async with httpx.AsyncClient(timeout=settings.validate_timeout) as client:
            response = await client.get(
                settings.huggingface_whoami_url,
                headers=hf_headers(credential, content_type=None),
            )
            return response.is_success
    except httpx.HTTPError as e:
        logger.warning("Hugging Face key check failed: %s", e)
        return False
