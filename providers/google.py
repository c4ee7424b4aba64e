"""Shared bits for the Google Generative Language API providers."""

import logging

import httpx

from config import settings
from providers.errors import MissingCredential

logger = logging.getLogger(__name__)


def resolve_google_key(credential: str | None) -> str:
    """Use the caller's key when given, otherwise the process-wide one."""
    key = credential or settings.google_api_key
    if not key:
        raise MissingCredential("A Google API key is required for Gemini.")
    return key


def google_headers(api_key: str) -> dict:
    return {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }


async def check_google_key(api_key: str, base_url: str | None = None) -> bool:
    """List models with the key; True iff the call succeeds."""
    base_url = (base_url or settings.gemini_base_url).rstrip("/")
    try:
        async with httpx.AsyncClient(timeout=settings.validate_timeout) as client:
            response = await client.get(f"{base_url}/models", headers=google_headers(api_key))
            return response.is_success
    except httpx.HTTPError as e:
        logger.warning("Google key check failed: %s", e)
        return False
