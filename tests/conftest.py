# tests/conftest.py
import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import settings
from providers.transcoder import to_data_url

GEMINI_BASE = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_BASE = "https://api.openai.com/v1"
HF_BASE = "https://api-inference.huggingface.co/models"
HF_WHOAMI = "https://huggingface.co/api/whoami-v2"
REPLICATE_BASE = "https://api.replicate.com/v1"


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch, tmp_path):
    # No real waiting, no process-wide Google key, videos land in tmp
    monkeypatch.setattr(settings, "demo_video_delay", 0)
    monkeypatch.setattr(settings, "veo_poll_interval", 0)
    monkeypatch.setattr(settings, "hf_video_default_wait", 0)
    monkeypatch.setattr(settings, "google_api_key", "")
    monkeypatch.setattr(settings, "video_output_dir", str(tmp_path / "videos"))
    return settings


@pytest.fixture
def png_data_url():
    return to_data_url("image/png", b"\x89PNG\r\n\x1a\nfake-image")


@pytest_asyncio.fixture
async def client():
    import main

    transport = ASGITransport(app=main.app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog
