import asyncio

import pytest

from zensai.apps.engine.mood import MoodClassifier
from zensai.apps.engine.suggestion import MoodState, MoodSuggestionDebouncer, SuggestionResponse
from zensai.core.mood import MoodLevel

LONG_TEXT = "Today I finally finished the garden fence."
OTHER_TEXT = "Today I finally finished the garden fence and painted it."


def _debouncer(mood_service, state=None, *, delay=0.2, confirmation=0.05):
    return MoodSuggestionDebouncer(
        MoodClassifier(mood_service),
        state or MoodState(selected=MoodLevel.NEUTRAL),
        delay_seconds=delay,
        confirmation_seconds=confirmation,
    )


async def _settle(debouncer):
    task = debouncer._timer
    if task is not None:
        await asyncio.gather(task, return_exceptions=True)


@pytest.mark.asyncio
async def test_short_text_never_classifies(mood_service):
    debouncer = _debouncer(mood_service, delay=0.01)

    debouncer.on_text_change("too short")
    await asyncio.sleep(0.05)

    assert debouncer.pending is False
    assert mood_service.requests == []


@pytest.mark.asyncio
async def test_typing_restarts_the_timer(mood_service):
    debouncer = _debouncer(mood_service)

    debouncer.on_text_change(LONG_TEXT)
    await asyncio.sleep(0.1)
    debouncer.on_text_change(OTHER_TEXT)
    await asyncio.sleep(0.15)

    assert mood_service.requests == []

    await _settle(debouncer)
    assert [request.text for request in mood_service.requests] == [OTHER_TEXT]


@pytest.mark.asyncio
async def test_suggestion_is_offered_but_not_applied(mood_service):
    mood_service.label = "low"
    state = MoodState(selected=MoodLevel.GOOD)
    debouncer = _debouncer(mood_service, state, delay=0.01)
    views = []
    debouncer.add_listener(views.append)

    debouncer.on_text_change(LONG_TEXT)
    await _settle(debouncer)

    assert debouncer.suggested == MoodLevel.LOW
    assert state.selected == MoodLevel.GOOD
    assert views[-1].suggested == MoodLevel.LOW


@pytest.mark.asyncio
async def test_matching_mood_is_not_suggested(mood_service):
    mood_service.label = "good"
    debouncer = _debouncer(mood_service, MoodState(selected=MoodLevel.GOOD), delay=0.01)

    debouncer.on_text_change(LONG_TEXT)
    await _settle(debouncer)

    assert debouncer.suggested is None


@pytest.mark.asyncio
async def test_degraded_classification_is_not_suggested(mood_service):
    mood_service.error = ConnectionError("offline")
    debouncer = _debouncer(mood_service, MoodState(selected=MoodLevel.GOOD), delay=0.01)

    debouncer.on_text_change(LONG_TEXT)
    await _settle(debouncer)

    assert debouncer.suggested is None


@pytest.mark.asyncio
async def test_accept_adopts_mood_and_shows_confirmation(mood_service):
    mood_service.label = "amazing"
    state = MoodState(selected=MoodLevel.NEUTRAL)
    debouncer = _debouncer(mood_service, state, delay=0.01)
    debouncer.on_text_change(LONG_TEXT)
    await _settle(debouncer)

    assert debouncer.accept() == MoodLevel.AMAZING

    view = debouncer.view()
    assert state.selected == MoodLevel.AMAZING
    assert view.suggested is None
    assert view.confirmation == SuggestionResponse.ACCEPTED

    await asyncio.sleep(0.1)
    assert debouncer.view().confirmation is None


@pytest.mark.asyncio
async def test_dismiss_keeps_selection(mood_service):
    mood_service.label = "amazing"
    state = MoodState(selected=MoodLevel.NEUTRAL)
    debouncer = _debouncer(mood_service, state, delay=0.01)
    debouncer.on_text_change(LONG_TEXT)
    await _settle(debouncer)

    debouncer.dismiss()

    view = debouncer.view()
    assert state.selected == MoodLevel.NEUTRAL
    assert view.suggested is None
    assert view.confirmation == SuggestionResponse.DISMISSED


@pytest.mark.asyncio
async def test_shrinking_text_clears_suggestion(mood_service):
    mood_service.label = "low"
    debouncer = _debouncer(mood_service, delay=0.01)
    debouncer.on_text_change(LONG_TEXT)
    await _settle(debouncer)
    assert debouncer.suggested == MoodLevel.LOW

    debouncer.on_text_change("Today")

    assert debouncer.suggested is None


@pytest.mark.asyncio
async def test_close_cancels_pending_classification(mood_service):
    debouncer = _debouncer(mood_service, delay=0.05)
    debouncer.on_text_change(LONG_TEXT)

    await debouncer.close()
    await asyncio.sleep(0.1)

    assert mood_service.requests == []
    assert debouncer.pending is False

    debouncer.on_text_change(OTHER_TEXT)
    assert debouncer.pending is False


@pytest.mark.asyncio
async def test_timer_after_submission_is_a_no_op(mood_service):
    mood_service.label = "low"
    debouncer = _debouncer(mood_service, delay=0.05)
    debouncer.on_text_change(LONG_TEXT)

    debouncer.on_submitted()
    await _settle(debouncer)

    assert mood_service.requests == []
    assert debouncer.suggested is None
