"""Live-typing mood suggestions.

Each text change above the threshold restarts a delayed classification task;
only the latest task may publish a suggestion. The debouncer and the
submission pipeline share nothing but `MoodState`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from zensai.apps.engine.mood import MoodClassifier
from zensai.core.mood import MoodLevel

logger = logging.getLogger(__name__)

DEFAULT_MIN_CHARS = 20
DEFAULT_DELAY_SECONDS = 2.0
DEFAULT_CONFIRMATION_SECONDS = 3.0


@dataclass
class MoodState:
    """The user's currently selected mood, shared by the session's components."""

    selected: MoodLevel | None = None


class SuggestionResponse(str, Enum):
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"


@dataclass(frozen=True, slots=True)
class SuggestionView:
    suggested: MoodLevel | None
    selected: MoodLevel | None
    confirmation: SuggestionResponse | None
    pending: bool


SuggestionListener = Callable[[SuggestionView], None]


class MoodSuggestionDebouncer:
    def __init__(
        self,
        classifier: MoodClassifier,
        mood_state: MoodState,
        *,
        min_chars: int = DEFAULT_MIN_CHARS,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        confirmation_seconds: float = DEFAULT_CONFIRMATION_SECONDS,
    ) -> None:
        self._classifier = classifier
        self._state = mood_state
        self._min_chars = min_chars
        self._delay = delay_seconds
        self._confirmation_seconds = confirmation_seconds
        self._text = ""
        self._suggested: MoodLevel | None = None
        self._confirmation: SuggestionResponse | None = None
        self._timer: asyncio.Task[None] | None = None
        self._confirmation_timer: asyncio.Task[None] | None = None
        self._listeners: list[SuggestionListener] = []
        self._live = True

    @property
    def suggested(self) -> MoodLevel | None:
        return self._suggested

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def live(self) -> bool:
        return self._live

    def view(self) -> SuggestionView:
        return SuggestionView(
            suggested=self._suggested,
            selected=self._state.selected,
            confirmation=self._confirmation,
            pending=self.pending,
        )

    def add_listener(self, listener: SuggestionListener) -> None:
        self._listeners.append(listener)

    def on_text_change(self, text: str) -> None:
        if not self._live:
            return
        self._text = text or ""
        self._cancel_timer()
        if not self._text.strip() or len(self._text) < self._min_chars:
            if self._suggested is not None:
                self._suggested = None
                self._notify()
            return
        self._timer = asyncio.create_task(self._classify_after_delay(self._text))

    def on_submitted(self) -> None:
        """The entry text was consumed by a submission; a pending timer becomes a no-op."""

        self._text = ""
        if self._suggested is not None:
            self._suggested = None
            self._notify()

    def accept(self) -> MoodLevel | None:
        suggested = self._suggested
        if suggested is None:
            return self._state.selected
        self._state.selected = suggested
        self._respond(SuggestionResponse.ACCEPTED)
        return suggested

    def dismiss(self) -> MoodLevel | None:
        if self._suggested is None:
            return self._state.selected
        self._respond(SuggestionResponse.DISMISSED)
        return self._state.selected

    async def close(self) -> None:
        """Leave the entry view: cancel anything still scheduled."""

        self._live = False
        tasks = [task for task in (self._timer, self._confirmation_timer) if task is not None]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._timer = None
        self._confirmation_timer = None

    def _respond(self, response: SuggestionResponse) -> None:
        self._suggested = None
        self._confirmation = response
        if self._confirmation_timer is not None:
            self._confirmation_timer.cancel()
        self._confirmation_timer = asyncio.create_task(self._clear_confirmation())
        self._notify()

    async def _clear_confirmation(self) -> None:
        await asyncio.sleep(self._confirmation_seconds)
        self._confirmation = None
        self._notify()

    async def _classify_after_delay(self, text: str) -> None:
        await asyncio.sleep(self._delay)
        if not self._is_current(text):
            return
        try:
            classification = await self._classifier.classify(text)
        except Exception:
            logger.warning("live mood classification failed", exc_info=True)
            return
        if not self._is_current(text) or classification.degraded:
            return
        if classification.mood != self._state.selected:
            self._suggested = classification.mood
            self._notify()

    def _is_current(self, text: str) -> bool:
        return self._live and self._text == text

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def _notify(self) -> None:
        view = self.view()
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("suggestion listener failed")


__all__ = [
    "DEFAULT_CONFIRMATION_SECONDS",
    "DEFAULT_DELAY_SECONDS",
    "DEFAULT_MIN_CHARS",
    "MoodState",
    "MoodSuggestionDebouncer",
    "SuggestionResponse",
    "SuggestionView",
]
