"""
Gemini API client for the AI mentor.

Sends a single free-text prompt to the Generative Language
``generateContent`` endpoint and returns the first generated candidate.

Retry behaviour:
- Transport failures and non-2xx statuses are retried with a fixed
  exponential backoff of 1s, 2s, 4s (4 attempts in total).
- When the retry budget is exhausted the client *returns* an error string
  instead of raising, so callers always get text back.
- A successful response without candidate text yields
  "No response generated." rather than an error.

The backoff is modelled by ``RetrySchedule`` and the waiting is done through
an injectable ``sleep`` coroutine, so tests can run without real delays.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

if TYPE_CHECKING:
    from config import Settings

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_RETRY_DELAYS_MS: tuple[int, ...] = (1000, 2000, 4000)

NO_RESPONSE_TEXT = "No response generated."
ERROR_PREFIX = "Error connecting to AI"

Sleeper = Callable[[float], Awaitable[Any]]


class MissingApiKeyError(RuntimeError):
    """Raised when a request is attempted without a configured API key."""


# =============================================================================
# Retry schedule
# =============================================================================


@dataclass
class RetrySchedule:
    """
    Bounded exponential backoff as a plain state machine.

    ``failures`` counts failed attempts so far. After each failure
    ``record_failure`` returns the delay (seconds) before the next attempt,
    or None once the retry budget is spent.
    """

    delays_ms: tuple[int, ...] = DEFAULT_RETRY_DELAYS_MS
    failures: int = 0

    @property
    def max_attempts(self) -> int:
        return len(self.delays_ms) + 1

    @property
    def exhausted(self) -> bool:
        return self.failures > len(self.delays_ms)

    def next_delay(self) -> float | None:
        """Delay before the next retry given the failures so far."""
        if self.failures == 0 or self.exhausted:
            return None
        return self.delays_ms[self.failures - 1] / 1000.0

    def record_failure(self) -> float | None:
        self.failures += 1
        return self.next_delay()


# =============================================================================
# Client
# =============================================================================


class GeminiClient:
    """HTTP client for Gemini text generation."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 60.0,
        retry_delays_ms: Sequence[int] = DEFAULT_RETRY_DELAYS_MS,
        sleep: Sleeper | None = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Generative Language API key
            model: Model name, e.g. "gemini-2.5-flash-preview-09-2025"
            base_url: API base URL
            timeout_seconds: Timeout for one request
            retry_delays_ms: Backoff before each retry
            sleep: Coroutine used to wait between attempts (asyncio.sleep)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.retry_delays_ms = tuple(retry_delays_ms)
        self._sleep: Sleeper = sleep or asyncio.sleep
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings, sleep: Sleeper | None = None) -> GeminiClient:
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            retry_delays_ms=settings.retry_delays_ms,
            sleep=sleep,
        )

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_request(self, prompt: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        """
        Build the URL, JSON body and headers for one generation call.

        Raises:
            MissingApiKeyError: If no API key is configured.
        """
        if not self.api_key:
            raise MissingApiKeyError("PATHFINDER_GEMINI_API_KEY is not set")
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        return self.endpoint, payload, {"x-goog-api-key": self.api_key}

    async def generate(self, prompt: str) -> str:
        """
        Generate text for ``prompt`` with retry logic.

        Returns:
            The generated text, NO_RESPONSE_TEXT for an empty answer, or an
            "Error connecting to AI: ..." message once retries are exhausted.

        Raises:
            MissingApiKeyError: If the request cannot be built.
        """
        url, payload, headers = self.build_request(prompt)
        schedule = RetrySchedule(self.retry_delays_ms)

        while True:
            attempt = schedule.failures + 1
            try:
                response = await self.client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                # ValueError covers a 2xx response whose body is not JSON
                reason = _describe(e)
                delay = schedule.record_failure()
                if delay is None:
                    logger.error(
                        f"Gemini request failed after {schedule.max_attempts} attempts: {reason}"
                    )
                    return f"{ERROR_PREFIX}: {reason}"
                logger.warning(
                    f"Gemini request failed on attempt {attempt}/{schedule.max_attempts}: "
                    f"{reason}. Retrying in {delay:g}s..."
                )
                await self._sleep(delay)
                continue

            return extract_text(data)


def extract_text(data: Any) -> str:
    """First candidate's first text part, or NO_RESPONSE_TEXT."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_RESPONSE_TEXT
    if not isinstance(text, str) or not text:
        return NO_RESPONSE_TEXT
    return text


def _describe(error: Exception) -> str:
    """Short failure reason without the request URL."""
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP error! status: {error.response.status_code}"
    return str(error) or type(error).__name__
