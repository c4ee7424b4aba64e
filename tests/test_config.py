# tests/test_config.py
from config import Settings


def test_defaults_present():
    # Timing defaults the video providers rely on
    s = Settings(_env_file=None)
    assert s.veo_poll_interval == 10
    assert s.hf_video_max_attempts == 5
    assert s.hf_video_default_wait == 20
    assert s.demo_video_delay == 1.5
    assert s.veo_max_poll_duration > 0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
    monkeypatch.setenv("VEO_POLL_INTERVAL", "3")
    monkeypatch.setenv("HF_VIDEO_MAX_ATTEMPTS", "2")
    s = Settings(_env_file=None)
    assert s.google_api_key == "from-env"
    assert s.veo_poll_interval == 3
    assert s.hf_video_max_attempts == 2
