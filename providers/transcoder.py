"""Conversion between base64 data-URLs and binary payloads."""

import base64
import binascii
import re

from providers.errors import MalformedDataUrl

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]+(?:;[^;,=]+=[^;,]*)*);base64,(?P<data>.*)$", re.DOTALL)


def to_binary(data_url: str) -> tuple[str, bytes]:
    """Split a data-URL into its media type and decoded bytes.

    Media type parameters such as ``;charset=utf-8`` stay part of the
    returned type.

    Raises:
        MalformedDataUrl: If the ``data:<mime>;base64,`` header is missing
            or the payload is not valid base64.
    """
    match = _DATA_URL_RE.match(data_url or "")
    if not match:
        raise MalformedDataUrl("Expected a data URL of the form data:<mime>;base64,<payload>")

    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedDataUrl(f"Data URL payload is not valid base64: {e}") from e

    return match.group("mime"), payload


def to_data_url(mime_type: str, payload: bytes) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
