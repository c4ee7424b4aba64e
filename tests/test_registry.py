# tests/test_registry.py
import pytest

from providers.errors import MissingCredential, UnknownProvider
from providers.factory import get_chat_provider, get_image_provider, get_provider, get_video_provider
from providers.registry import (
    Modality,
    check_modality,
    default_provider,
    ensure_credential,
    modality_of,
    providers_for,
    requires_credential,
)


def test_providers_per_modality_in_display_order():
    assert [p.id for p in providers_for("image")] == ["gemini", "openai", "huggingface_image"]
    assert [p.id for p in providers_for(Modality.VIDEO)] == ["demo_video", "gemini_veo", "huggingface_video"]
    assert [p.id for p in providers_for("chat")] == ["gemini_chat", "replicate_chat", "huggingface_chat"]


def test_every_provider_has_display_text():
    for modality in Modality:
        for info in providers_for(modality):
            assert info.display_name
            assert info.description


def test_unknown_modality_is_rejected():
    with pytest.raises(ValueError):
        providers_for("audio")


def test_free_providers_are_defaults_plus_demo():
    free = {p.id for m in Modality for p in providers_for(m) if not requires_credential(p.id)}
    assert free == {"gemini", "gemini_chat", "demo_video"}
    assert {default_provider(m) for m in Modality} <= free


def test_modality_is_fixed_per_provider():
    assert modality_of("openai") is Modality.IMAGE
    assert modality_of("gemini_veo") is Modality.VIDEO
    assert modality_of("replicate_chat") is Modality.CHAT
    with pytest.raises(UnknownProvider):
        modality_of("midjourney")
    with pytest.raises(UnknownProvider):
        check_modality("gemini_chat", Modality.IMAGE)


def test_ensure_credential():
    ensure_credential("gemini", "")
    ensure_credential("openai", "sk-test")
    with pytest.raises(MissingCredential):
        ensure_credential("openai", "")
    with pytest.raises(MissingCredential):
        ensure_credential("huggingface_video", None)


def test_factory_dispatches_by_id():
    assert get_image_provider("openai").provider_id == "openai"
    assert get_video_provider("gemini_veo").provider_id == "gemini_veo"
    assert get_chat_provider("huggingface_chat").provider_id == "huggingface_chat"
    assert get_provider("demo_video").provider_id == "demo_video"
    with pytest.raises(UnknownProvider):
        get_image_provider("gemini_chat")
