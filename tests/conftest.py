from __future__ import annotations

import random

import pytest

from kmap_quiz.logic import evaluate
from kmap_quiz.questions import Question, QuestionKind


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def single_minterm_table() -> tuple[int, ...]:
    """Only A=B=C=D=0 is true."""
    return (1,) + (0,) * 15


@pytest.fixture
def expression_question() -> Question:
    # AB + ¬CD: 2 terms, 4 literals
    return Question(QuestionKind.KM_TO_EX, evaluate("AB+¬CD"), "AB+¬CD")
