"""Question battery for the K-map drill."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .kmap_engine import format_map
from .logic import evaluate, generate_expression, random_truth_table, validate_truth_table

logger = logging.getLogger(__name__)


class QuestionKind(str, Enum):
    TT_TO_KM = "tt_to_km"
    KM_TO_EX = "km_to_ex"
    TT_TO_KM_TO_EX = "tt_to_km_to_ex"


@dataclass(frozen=True)
class QuizSettings:
    """Composition of the battery and the mistake limit."""

    map_questions: int = 4
    expression_questions: int = 2
    combined_questions: int = 1
    min_terms: int = 2
    max_terms: int = 4
    max_mistakes: int = 5

    @property
    def total_questions(self) -> int:
        return self.map_questions + self.expression_questions + self.combined_questions


DEFAULT_SETTINGS = QuizSettings()


@dataclass(frozen=True)
class Question:
    """One drill question: archetype, canonical table, optional canonical SOP."""

    kind: QuestionKind
    truth_table: Tuple[int, ...]
    correct_expression: Optional[str] = None

    def __post_init__(self) -> None:
        validate_truth_table(self.truth_table)
        if self.needs_expression and not self.correct_expression:
            raise ValueError(f"{self.kind.value} questions need a correct expression.")

    @property
    def needs_map(self) -> bool:
        return self.kind in (QuestionKind.TT_TO_KM, QuestionKind.TT_TO_KM_TO_EX)

    @property
    def needs_expression(self) -> bool:
        return self.kind in (QuestionKind.KM_TO_EX, QuestionKind.TT_TO_KM_TO_EX)


def map_question(rng: random.Random) -> Question:
    return Question(QuestionKind.TT_TO_KM, random_truth_table(rng))


def expression_question(
    kind: QuestionKind, rng: random.Random, settings: QuizSettings = DEFAULT_SETTINGS
) -> Question:
    """Build a question whose table is derived from a random canonical SOP."""
    num_terms = rng.randint(settings.min_terms, settings.max_terms)
    expression = generate_expression(num_terms, rng)
    return Question(kind, evaluate(expression), expression)


def generate_all(
    rng: Optional[random.Random] = None, settings: Optional[QuizSettings] = None
) -> List[Question]:
    """Return the full battery: map questions, then expression, then combined."""
    rng = rng or random.Random()
    settings = settings or DEFAULT_SETTINGS

    questions = [map_question(rng) for _ in range(settings.map_questions)]
    questions += [
        expression_question(QuestionKind.KM_TO_EX, rng, settings)
        for _ in range(settings.expression_questions)
    ]
    questions += [
        expression_question(QuestionKind.TT_TO_KM_TO_EX, rng, settings)
        for _ in range(settings.combined_questions)
    ]

    for number, question in enumerate(questions, start=1):
        logger.debug("Q%d (%s)", number, question.kind.value)
        logger.debug("Canonical K-map:\n%s", format_map(question.truth_table))
        if question.needs_expression:
            logger.debug("Canonical expression: %s", question.correct_expression)
    return questions
