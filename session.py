"""Game session as an immutable state value driven by a pure reducer.

Each user action becomes an event; ``transition(state, event)`` returns the
next state without touching any ambient object, so the adapter keeps exactly
one ``SessionState`` and replaces it after every submission.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .grader import GradeResult, GridInput, grade
from .questions import DEFAULT_SETTINGS, Question, QuizSettings

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class SessionState:
    phase: Phase = Phase.NOT_STARTED
    questions: Tuple[Question, ...] = ()
    index: int = 0
    mistakes: int = 0
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    success: Optional[bool] = None
    max_mistakes: int = DEFAULT_SETTINGS.max_mistakes


@dataclass(frozen=True)
class Start:
    questions: Sequence[Question]
    at: float


@dataclass(frozen=True)
class Answered:
    correct: bool
    at: float


@dataclass(frozen=True)
class Retry:
    pass


Event = Union[Start, Answered, Retry]


def new_session(settings: QuizSettings = DEFAULT_SETTINGS) -> SessionState:
    return SessionState(max_mistakes=settings.max_mistakes)


def _finish(state: SessionState, success: bool, at: float) -> SessionState:
    logger.debug("Session finished (success=%s) at question %d", success, state.index + 1)
    return replace(state, phase=Phase.FINISHED, success=success, finished_at=at)


def transition(state: SessionState, event: Event) -> SessionState:
    """Apply one event and return the next session state."""
    if isinstance(event, Retry):
        return SessionState(max_mistakes=state.max_mistakes)

    if isinstance(event, Start) and state.phase is Phase.NOT_STARTED:
        if not event.questions:
            raise ValueError("A session needs at least one question.")
        return replace(
            state,
            phase=Phase.IN_PROGRESS,
            questions=tuple(event.questions),
            index=0,
            mistakes=0,
            started_at=event.at,
        )

    if isinstance(event, Answered) and state.phase is Phase.IN_PROGRESS:
        if event.correct:
            state = replace(state, mistakes=0, index=state.index + 1)
            if state.index >= len(state.questions):
                return _finish(state, True, event.at)
            return state
        state = replace(state, mistakes=state.mistakes + 1)
        if state.mistakes >= state.max_mistakes:
            return _finish(state, False, event.at)
        return state

    logger.debug("Ignoring %s in phase %s", type(event).__name__, state.phase.value)
    return state


def current_question(state: SessionState) -> Optional[Question]:
    if state.phase is Phase.NOT_STARTED or state.index >= len(state.questions):
        return None
    return state.questions[state.index]


def elapsed(state: SessionState, now: float) -> float:
    """Seconds since the session started, frozen once it has finished."""
    if state.started_at is None:
        return 0.0
    end = state.finished_at if state.finished_at is not None else now
    return end - state.started_at


def submit(
    state: SessionState,
    at: float,
    grid: GridInput = None,
    expression: Optional[str] = None,
) -> Tuple[SessionState, Optional[GradeResult]]:
    """Grade the active question and advance the session."""
    question = current_question(state)
    if state.phase is not Phase.IN_PROGRESS or question is None:
        return state, None
    result = grade(question, grid=grid, expression=expression)
    return transition(state, Answered(result.correct, at)), result
