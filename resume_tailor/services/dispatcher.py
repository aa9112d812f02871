import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, Union

from resume_tailor.services.errors import (
    ConfigurationError,
    NonRetryableServiceError,
    PoolExhaustedError,
    RetryableServiceError,
    mask_credential,
)

logger = logging.getLogger("uvicorn.error")


# ---------- Transport outcomes ----------
@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class RateLimited:
    body: str = ""
    status: int = 429


@dataclass(frozen=True)
class Unavailable:
    body: str = ""
    status: int = 503


@dataclass(frozen=True)
class OtherError:
    status: int
    body: str = ""


GenerationOutcome = Union[Success, RateLimited, Unavailable, OtherError]
Transport = Callable[[str, str], Awaitable[GenerationOutcome]]


# ---------- Credential pool ----------
class CredentialPool:
    """Read-only set of API keys. Empty, blank or missing entries are dropped."""

    def __init__(self, credentials: Iterable[Optional[str]]):
        self._credentials: Tuple[str, ...] = tuple(c for c in credentials if c and c.strip())

    def __len__(self) -> int:
        return len(self._credentials)

    def __iter__(self):
        return iter(self._credentials)

    def shuffled(self, rng: Optional[random.Random] = None) -> List[str]:
        order = list(self._credentials)
        (rng or random).shuffle(order)
        return order


# ---------- Dispatcher ----------
class GenerationDispatcher:
    """Runs one generation call, failing over across credentials on 429/503.

    Each credential is tried at most once per call, sequentially and without
    delay. Any other failure is raised immediately.
    """

    def __init__(self, pool: CredentialPool, transport: Transport, rng: Optional[random.Random] = None):
        self.pool = pool
        self.transport = transport
        self._rng = rng

    async def generate(self, prompt: str) -> str:
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")
        if len(self.pool) == 0:
            raise ConfigurationError("No Gemini API keys configured")

        credentials = self.pool.shuffled(self._rng)
        for position, credential in enumerate(credentials, start=1):
            outcome = await self.transport(prompt, credential)

            if isinstance(outcome, Success):
                if position > 1:
                    logger.info("Generation succeeded on credential %d of %d", position, len(credentials))
                return outcome.text

            if isinstance(outcome, (RateLimited, Unavailable)):
                failure = RetryableServiceError(outcome.status, mask_credential(credential))
                logger.warning("Key failed due to rate limit or service unavailable: %s", failure)
                continue

            raise NonRetryableServiceError(outcome.status, outcome.body)

        logger.error("All %d Gemini API keys failed", len(credentials))
        raise PoolExhaustedError(len(credentials))
