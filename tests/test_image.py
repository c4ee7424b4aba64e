# tests/test_image.py
import asyncio
import json

import httpx
import pytest
import respx

from config import settings
from generators.image import generate_images
from providers import factory
from providers.errors import InvalidInput, MissingCredential, MissingInput, UnknownProvider, UpstreamError
from providers.image.base import ParallelImageProvider
from providers.transcoder import to_data_url
from tests.conftest import GEMINI_BASE, HF_BASE, OPENAI_BASE

IMAGEN_URL = f"{GEMINI_BASE}/models/imagen-3.0-generate-002:predict"
OPENAI_URL = f"{OPENAI_BASE}/images/generations"
SD3_URL = f"{HF_BASE}/stabilityai/stable-diffusion-3-medium-diffusers"


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize("provider", ["openai", "huggingface_image"])
async def test_missing_credential_fails_before_network(provider):
    with pytest.raises(MissingCredential):
        await generate_images(provider, "", "a red fox", count=2)
    assert respx.calls.call_count == 0


@pytest.mark.asyncio
@respx.mock
async def test_gemini_without_any_key_fails_before_network():
    with pytest.raises(MissingCredential):
        await generate_images("gemini", "", "a red fox")
    assert respx.calls.call_count == 0


@pytest.mark.asyncio
async def test_invalid_requests_are_rejected():
    with pytest.raises(MissingInput):
        await generate_images("openai", "sk-test", "   ")
    with pytest.raises(InvalidInput):
        await generate_images("openai", "sk-test", "a red fox", count=0)
    with pytest.raises(UnknownProvider):
        await generate_images("demo_video", "", "a red fox")


@pytest.mark.asyncio
@respx.mock
async def test_gemini_returns_count_images_in_one_call(monkeypatch):
    # The process-wide key is used when the caller supplies none
    monkeypatch.setattr(settings, "google_api_key", "env-key")
    route = respx.post(IMAGEN_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "predictions": [
                    {"bytesBase64Encoded": "AAAA", "mimeType": "image/png"},
                    {"bytesBase64Encoded": "BBBB", "mimeType": "image/png"},
                ]
            },
        )
    )

    images = await generate_images("gemini", "", "a red fox", count=2, negative_prompt="blur", aspect_ratio="16:9")

    assert images == ["data:image/png;base64,AAAA", "data:image/png;base64,BBBB"]
    assert route.call_count == 1
    request = route.calls.last.request
    assert request.headers["x-goog-api-key"] == "env-key"
    body = json.loads(request.content)
    assert body["instances"] == [{"prompt": "a red fox"}]
    assert body["parameters"]["sampleCount"] == 2
    assert body["parameters"]["aspectRatio"] == "16:9"
    assert body["parameters"]["negativePrompt"] == "blur"


@pytest.mark.asyncio
@respx.mock
async def test_gemini_unsupported_ratio_falls_back_to_square():
    route = respx.post(IMAGEN_URL).mock(
        return_value=httpx.Response(200, json={"predictions": [{"bytesBase64Encoded": "AAAA"}]})
    )
    await generate_images("gemini", "user-key", "a red fox", aspect_ratio="21:9")
    body = json.loads(route.calls.last.request.content)
    assert body["parameters"]["aspectRatio"] == "1:1"
    assert route.calls.last.request.headers["x-goog-api-key"] == "user-key"


@pytest.mark.asyncio
@respx.mock
async def test_gemini_filtered_output_is_an_error():
    respx.post(IMAGEN_URL).mock(return_value=httpx.Response(200, json={"predictions": []}))
    with pytest.raises(UpstreamError):
        await generate_images("gemini", "user-key", "a red fox", count=2)


@pytest.mark.asyncio
@respx.mock
async def test_openai_issues_one_call_per_image():
    route = respx.post(OPENAI_URL).mock(
        side_effect=[
            httpx.Response(200, json={"data": [{"b64_json": "ONE"}]}),
            httpx.Response(200, json={"data": [{"b64_json": "TWO"}]}),
            httpx.Response(200, json={"data": [{"b64_json": "THREE"}]}),
        ]
    )

    images = await generate_images("openai", "sk-test", "a red fox", count=3, negative_prompt="blur", aspect_ratio="9:16")

    assert route.call_count == 3
    assert sorted(images) == sorted(
        ["data:image/png;base64,ONE", "data:image/png;base64,TWO", "data:image/png;base64,THREE"]
    )
    for call in route.calls:
        body = json.loads(call.request.content)
        assert body["n"] == 1
        assert body["size"] == "1024x1792"
        assert body["prompt"] == "a red fox. Avoid: blur"
        assert call.request.headers["Authorization"] == "Bearer sk-test"


@pytest.mark.asyncio
@respx.mock
async def test_openai_unsupported_ratio_uses_default_size():
    route = respx.post(OPENAI_URL).mock(return_value=httpx.Response(200, json={"data": [{"b64_json": "ONE"}]}))
    await generate_images("openai", "sk-test", "a red fox", aspect_ratio="4:3")
    assert json.loads(route.calls.last.request.content)["size"] == "1024x1024"


@pytest.mark.asyncio
@respx.mock
async def test_one_failed_call_fails_the_batch():
    respx.post(OPENAI_URL).mock(
        side_effect=[
            httpx.Response(200, json={"data": [{"b64_json": "ONE"}]}),
            httpx.Response(400, json={"error": {"message": "content policy violation"}}),
        ]
    )
    with pytest.raises(UpstreamError) as exc_info:
        await generate_images("openai", "sk-test", "a red fox", count=2)
    assert "content policy violation" in exc_info.value.message
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
@respx.mock
async def test_huggingface_converts_binary_to_data_urls():
    payload = b"\x89PNG\r\n\x1a\nfake-image"
    route = respx.post(SD3_URL).mock(
        return_value=httpx.Response(200, content=payload, headers={"content-type": "image/png"})
    )

    images = await generate_images("huggingface_image", "hf_test", "a red fox", count=2, aspect_ratio="16:9")

    assert images == [to_data_url("image/png", payload)] * 2
    assert route.call_count == 2
    body = json.loads(route.calls.last.request.content)
    assert body["inputs"] == "a red fox"
    assert body["parameters"]["width"] == 1344
    assert body["parameters"]["height"] == 768


class StaggeredProvider(ParallelImageProvider):
    """First dispatched call finishes last."""

    def __init__(self):
        self.started = 0
        self.completed = []

    @property
    def provider_id(self) -> str:
        return "openai"

    async def generate_one(self, request, credential):
        index = self.started
        self.started += 1
        await asyncio.sleep(0.05 if index == 0 else 0)
        self.completed.append(index)
        return f"image-{index}"


@pytest.mark.asyncio
async def test_results_follow_dispatch_order_not_completion_order(monkeypatch):
    provider = StaggeredProvider()
    monkeypatch.setitem(factory.IMAGE_PROVIDERS, "openai", lambda: provider)

    images = await generate_images("openai", "sk-test", "a red fox", count=3)

    assert images == ["image-0", "image-1", "image-2"]
    assert provider.completed[-1] == 0
