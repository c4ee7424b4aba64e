"""Error kinds raised by providers and generators.

Every failure surfaced to a caller is a ``GenerationError`` subclass whose
message is safe to show to an end user.
"""


class GenerationError(Exception):
    """Base class for all orchestration failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnknownProvider(GenerationError):
    """Provider id is not part of the requested modality."""


class MissingCredential(GenerationError):
    """A credential is required but none was supplied."""


class InvalidInput(GenerationError):
    """Request parameters violate a precondition."""


class MissingInput(InvalidInput):
    """A prompt or input image required by the selected mode is absent."""


class UpstreamError(GenerationError):
    """Non-2xx or malformed response from an upstream provider."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PollTimeout(UpstreamError):
    """A long-running job did not finish within the configured poll budget."""


class MissingOutput(GenerationError):
    """A completed job carried no extractable result reference."""


class RetryExhausted(GenerationError):
    """A bounded retry loop ran out of attempts."""


class MalformedDataUrl(GenerationError):
    """Input is not a ``data:<mime>;base64,<payload>`` URL."""
