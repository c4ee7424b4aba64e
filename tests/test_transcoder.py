# tests/test_transcoder.py
import pytest

from providers.errors import MalformedDataUrl
from providers.transcoder import to_binary, to_data_url


def test_to_binary_splits_header_and_payload():
    mime, payload = to_binary("data:text/plain;base64,SGVsbG8=")
    assert mime == "text/plain"
    assert payload == b"Hello"


def test_to_data_url_encodes_payload():
    assert to_data_url("text/plain", b"Hello") == "data:text/plain;base64,SGVsbG8="


@pytest.mark.parametrize(
    "data_url",
    [
        "data:text/plain;base64,SGVsbG8=",
        "data:image/png;base64,",
        "data:video/mp4;base64,AAECAwQF",
        "data:text/plain;charset=utf-8;base64,SGk=",
    ],
)
def test_round_trip_preserves_well_formed_urls(data_url):
    assert to_data_url(*to_binary(data_url)) == data_url


def test_round_trip_of_binary_payload(png_data_url):
    mime, payload = to_binary(png_data_url)
    assert mime == "image/png"
    assert payload.startswith(b"\x89PNG")
    assert to_data_url(mime, payload) == png_data_url


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "SGVsbG8=",
        "data:text/plain,SGVsbG8=",
        "data:;base64,SGVsbG8=",
        "https://example.com/cat.png",
        "data:text/plain;base64,not base64!",
    ],
)
def test_malformed_inputs_are_rejected(bad):
    with pytest.raises(MalformedDataUrl):
        to_binary(bad)


def test_media_type_parameters_are_kept():
    mime, payload = to_binary("data:text/plain;charset=utf-8;base64,SGk=")
    assert mime == "text/plain;charset=utf-8"
    assert payload == b"Hi"
