"""Helpers shared by the httpx-based providers."""

import logging

import httpx

from providers.errors import UpstreamError

logger = logging.getLogger(__name__)


def extract_error_message(response: httpx.Response) -> str:
    """Pull the most useful human-readable message out of an error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if data.get("detail"):
            return str(data["detail"])
    return response.text.strip() or response.reason_phrase


def check_response(response: httpx.Response, upstream: str) -> None:
    """Raise ``UpstreamError`` for a non-2xx response.

    The body must already be read (non-streaming responses always are).
    """
    if response.is_success:
        return
    message = extract_error_message(response)
    logger.error("%s API error %d: %s", upstream, response.status_code, message)
    raise UpstreamError(f"{upstream} error {response.status_code}: {message}", status_code=response.status_code)


def transport_error(e: httpx.HTTPError, upstream: str) -> UpstreamError:
    """Wrap a transport-level httpx failure."""
    logger.error("%s request failed: %s", upstream, e)
    return UpstreamError(f"Could not reach {upstream}: {e}")


def json_body(response: httpx.Response, upstream: str):
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(f"{upstream} returned a malformed response") from e
