"""Static catalog of providers per modality."""

from dataclasses import dataclass
from enum import Enum

from providers.errors import MissingCredential, UnknownProvider


class Modality(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    CHAT = "chat"


class KeyStatus(str, Enum):
    """Credential state while a provider is being configured."""

    UNVERIFIED = "unverified"
    VERIFYING = "verifying"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ProviderInfo:
    id: str
    display_name: str
    description: str


_CATALOG: dict[Modality, tuple[ProviderInfo, ...]] = {
    Modality.IMAGE: (
        ProviderInfo("gemini", "Google Gemini (Imagen 3)", "Default provider, no API key needed for basic use."),
        ProviderInfo("openai", "OpenAI (DALL·E 3)", "High-quality image generation. Requires an OpenAI API key."),
        ProviderInfo(
            "huggingface_image",
            "Hugging Face (SD3 Medium)",
            "Community-hosted open-source models. Requires a Hugging Face API key.",
        ),
    ),
    Modality.VIDEO: (
        ProviderInfo("demo_video", "Demo Mode (Free Test)", "A stock video is returned for UI testing."),
        ProviderInfo("gemini_veo", "Google Gemini (VEO)", "State-of-the-art video generation. Requires a Google API key."),
        ProviderInfo("huggingface_video", "Hugging Face (SVD)", "Image-to-Video only. Requires a Hugging Face API key."),
    ),
    Modality.CHAT: (
        ProviderInfo("gemini_chat", "Google Gemini", "Free to use for general conversation."),
        ProviderInfo(
            "replicate_chat",
            "Replicate (Community LLM)",
            "Less-filtered, open-source models. Requires a Replicate API key.",
        ),
        ProviderInfo(
            "huggingface_chat",
            "Hugging Face (Llama 3)",
            "Community-hosted open-source models. Requires a Hugging Face API key.",
        ),
    ),
}

# Default provider of each modality plus the demo stub
FREE_PROVIDERS = frozenset({"gemini", "gemini_chat", "demo_video"})

_MODALITY_BY_ID = {info.id: modality for modality, infos in _CATALOG.items() for info in infos}


def providers_for(modality: Modality | str) -> list[ProviderInfo]:
    """Return the ordered provider list for a modality."""
    return list(_CATALOG[Modality(modality)])


def default_provider(modality: Modality | str) -> str:
    return _CATALOG[Modality(modality)][0].id


def requires_credential(provider_id: str) -> bool:
    return provider_id not in FREE_PROVIDERS


def modality_of(provider_id: str) -> Modality:
    try:
        return _MODALITY_BY_ID[provider_id]
    except KeyError:
        raise UnknownProvider(f"Unknown provider: {provider_id}") from None


def check_modality(provider_id: str, modality: Modality) -> None:
    """Raise ``UnknownProvider`` unless ``provider_id`` belongs to ``modality``."""
    if modality_of(provider_id) is not modality:
        raise UnknownProvider(f"Provider {provider_id} does not support {modality.value} generation")


def ensure_credential(provider_id: str, credential: str | None) -> None:
    """Fail fast, before any network call, when a required credential is absent."""
    if requires_credential(provider_id) and not credential:
        raise MissingCredential(f"An API key is required for {provider_id}.")
