import logging
from typing import Optional

import httpx

from resume_tailor.services.config import Settings
from resume_tailor.services.dispatcher import (
    GenerationOutcome,
    OtherError,
    RateLimited,
    Success,
    Unavailable,
)
from resume_tailor.services.errors import NonRetryableServiceError, mask_credential

logger = logging.getLogger("uvicorn.error")


def classify_response(response: httpx.Response) -> GenerationOutcome:
    """Turn a raw generateContent response into one of the outcome variants."""
    status = response.status_code
    if status == 429:
        return RateLimited(body=response.text)
    if status == 503:
        return Unavailable(body=response.text)
    if not response.is_success:
        return OtherError(status=status, body=response.text)

    try:
        data = response.json()
    except ValueError:
        return OtherError(status=status, body="Response body is not JSON")

    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None

    if not isinstance(text, str) or not text:
        logger.error("Gemini returned no text content: %s", str(data)[:200])
        return OtherError(status=status, body="Gemini returned no content")
    return Success(text=text)


class GeminiTransport:
    """Sends a prompt to the Gemini REST API with one specific key."""

    def __init__(
        self,
        model: str,
        base_url: str,
        temperature: float = 0.1,
        top_p: float = 0.95,
        top_k: int = 40,
        timeout: float = 60.0,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.generation_config = {
            "temperature": temperature,
            "topP": top_p,
            "topK": top_k,
        }
        self.timeout = timeout
        self._http_transport = http_transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiTransport":
        return cls(
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            temperature=settings.GEMINI_TEMPERATURE,
            top_p=settings.GEMINI_TOP_P,
            top_k=settings.GEMINI_TOP_K,
            timeout=settings.GEMINI_TIMEOUT,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def __call__(self, prompt: str, credential: str) -> GenerationOutcome:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self.generation_config,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._http_transport) as client:
                response = await client.post(
                    self.url,
                    params={"key": credential},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.RequestError as e:
            logger.error("Request to Gemini failed with key %s: %r", mask_credential(credential), e)
            raise NonRetryableServiceError(None, str(e)) from e

        logger.debug("Gemini responded with HTTP %d", response.status_code)
        return classify_response(response)
