"""API key validation and the provider configuration workflow."""

import logging
from dataclasses import dataclass

from providers.errors import UnknownProvider
from providers.factory import get_provider
from providers.registry import KeyStatus, Modality, check_modality, default_provider, requires_credential

logger = logging.getLogger(__name__)


async def validate_api_key(provider_id: str, credential: str) -> bool:
    """Check that a credential works for a provider, without generating anything.

    Returns False without any network call for an empty credential or a
    provider that needs no credential. Upstream and transport failures
    become False; nothing is raised.
    """
    if not credential:
        return False
    try:
        if not requires_credential(provider_id):
            return False
        provider = get_provider(provider_id)
        valid = await provider.validate_key(credential)
    except UnknownProvider as e:
        logger.warning("Key validation skipped: %s", e)
        return False
    except Exception as e:
        logger.warning("Key validation for %s failed: %s", provider_id, e)
        return False

    logger.info("Key for %s is %s", provider_id, "valid" if valid else "invalid")
    return bool(valid)


@dataclass
class ProviderConfig:
    """A provider choice the caller may generate with."""

    provider: str
    api_key: str


class ProviderSelection:
    """Provider and key being configured for one modality.

    The key status resets to ``unverified`` whenever the provider changes.
    Free providers are saved without validation.

    Usage:
        selection = ProviderSelection(Modality.IMAGE)
        selection.select("openai")
        selection.api_key = "sk-..."
        config = await selection.save()
    """

    def __init__(self, modality: Modality | str, provider_id: str | None = None):
        self.modality = Modality(modality)
        self.provider_id = ""
        self.api_key = ""
        self.key_status = KeyStatus.UNVERIFIED
        self.select(provider_id or default_provider(self.modality))

    @property
    def key_required(self) -> bool:
        return requires_credential(self.provider_id)

    def select(self, provider_id: str) -> None:
        check_modality(provider_id, self.modality)
        self.provider_id = provider_id
        self.api_key = ""
        self.key_status = KeyStatus.UNVERIFIED

    async def save(self) -> ProviderConfig | None:
        """Validate the key if needed; return the config only if usable."""
        if self.key_required:
            self.key_status = KeyStatus.VERIFYING
            valid = await validate_api_key(self.provider_id, self.api_key)
            self.key_status = KeyStatus.VALID if valid else KeyStatus.INVALID
            if not valid:
                return None
        return ProviderConfig(provider=self.provider_id, api_key=self.api_key)
