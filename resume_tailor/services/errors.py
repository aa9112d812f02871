from typing import Optional


def mask_credential(credential: str) -> str:
    """Short, log-safe hint for an API key."""
    if len(credential) <= 4:
        return "..."
    return f"...{credential[-4:]}"


class GenerationError(Exception):
    """Base class for failures of an outbound text-generation call."""


class ConfigurationError(GenerationError):
    """No usable credentials were configured. Raised before any network call."""


class RetryableServiceError(GenerationError):
    """A single credential was rate limited (429) or the service was unavailable (503).

    The dispatcher only logs these; callers never see one directly.
    """

    def __init__(self, status: int, credential_hint: str):
        self.status = status
        self.credential_hint = credential_hint
        super().__init__(f"Credential {credential_hint} failed with HTTP {status}")


class NonRetryableServiceError(GenerationError):
    def __init__(self, status: Optional[int], body: str = ""):
        self.status = status
        self.body = body
        if status is None:
            message = f"Text generation request failed: {body}"
        else:
            message = f"Text generation failed with HTTP {status}: {body[:200]}"
        super().__init__(message)


class PoolExhaustedError(GenerationError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"All {attempts} API credentials failed.")


class InvalidGenerationError(ValueError):
    """The generated text could not be interpreted the way the endpoint needs."""
