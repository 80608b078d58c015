"""
Mentor interaction state machine.

Tracks the one AI mentor request currently shown to the learner:

    IDLE -> LOADING -> SUCCESS | ERROR

No state is terminal. Starting a new request overwrites whatever is shown,
even while an older request is still in flight. Every request is tagged with
a generation id; a result whose generation is no longer current is dropped
on arrival, so a slow stale answer never replaces a newer one. In-flight
calls are not cancelled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from loguru import logger

from .prompts import TASK_GUIDE_FAILURE


class TextGenerator(Protocol):
    """Anything that turns a prompt into text (see GeminiClient)."""

    async def generate(self, prompt: str) -> str: ...


class InteractionStatus(str, Enum):
    """Consumer-facing status of the current interaction."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class InteractionSession:
    """Snapshot of what the mentor panel shows."""

    title: str = ""
    status: InteractionStatus = InteractionStatus.IDLE
    text: str = ""
    error: str | None = None
    generation: int = 0

    @property
    def is_open(self) -> bool:
        return self.status != InteractionStatus.IDLE


class MentorInteraction:
    """
    Owner of the current mentor session.

    Usage:
        mentor = MentorInteraction(GeminiClient.from_settings(settings))
        await mentor.start("Guide: ...", prompt)
        mentor.session.text
    """

    def __init__(self, generator: TextGenerator):
        self.generator = generator
        self._generation = 0
        self._session = InteractionSession()

    @property
    def session(self) -> InteractionSession:
        return self._session

    @property
    def generation(self) -> int:
        """Id of the most recently started request."""
        return self._generation

    def begin(self, title: str) -> int:
        """Switch to LOADING for a new request and return its generation id."""
        self._generation += 1
        self._session = InteractionSession(
            title=title,
            status=InteractionStatus.LOADING,
            generation=self._generation,
        )
        return self._generation

    async def start(
        self,
        title: str,
        prompt: str,
        failure_message: str = TASK_GUIDE_FAILURE,
    ) -> int:
        """
        Run one mentor request and apply its outcome.

        The generator's own text (including its retry-exhausted error text)
        lands in SUCCESS. Only a failure to build or dispatch the request
        leads to ERROR, with ``failure_message`` shown to the learner.

        Returns:
            The generation id of this request.
        """
        generation = self.begin(title)
        try:
            text = await self.generator.generate(prompt)
        except Exception as e:
            logger.error(f"Mentor request '{title}' could not be dispatched: {e}")
            self.on_internal_failure(generation, failure_message)
        else:
            self.on_result(generation, text)
        return generation

    def on_result(self, generation: int, text: str) -> bool:
        """Show ``text`` if ``generation`` is current. Returns whether it was applied."""
        if generation != self._generation:
            logger.debug(f"Discarding stale mentor result (gen {generation} < {self._generation})")
            return False
        self._session = InteractionSession(
            title=self._session.title,
            status=InteractionStatus.SUCCESS,
            text=text,
            generation=generation,
        )
        return True

    def on_internal_failure(self, generation: int, message: str) -> bool:
        """Show ``message`` as an error if ``generation`` is current."""
        if generation != self._generation:
            logger.debug(f"Discarding stale mentor failure (gen {generation} < {self._generation})")
            return False
        self._session = InteractionSession(
            title=self._session.title,
            status=InteractionStatus.ERROR,
            error=message,
            generation=generation,
        )
        return True

    def close(self) -> None:
        """
        Hide the panel.

        The generation is bumped so that a request still in flight is
        discarded when it arrives instead of reopening the panel.
        """
        self._generation += 1
        self._session = InteractionSession(generation=self._generation)
