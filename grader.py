"""Answer checking for K-map and expression questions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple, Union

import numpy as np

from .kmap_engine import (
    MAP_COLS,
    MAP_ROWS,
    grid_cells,
    grid_from_cells,
    grid_index_to_truth_index,
    map_grid,
)
from .logic import complexity, evaluate, minimal_expression
from .questions import Question

logger = logging.getLogger(__name__)

GridInput = Union[Mapping[Tuple[int, int], object], np.ndarray, list, tuple, None]


@dataclass(frozen=True)
class GradeResult:
    """Outcome of one submission; sub-results are None when not asked."""

    correct: bool
    map_correct: Optional[bool] = None
    expression_correct: Optional[bool] = None
    feedback: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Reveal:
    """Canonical answer shown after a failed game."""

    grid: np.ndarray
    expression: Optional[str] = None
    minimal_expression: Optional[str] = None


def _as_grid(user_grid: GridInput) -> Optional[np.ndarray]:
    if user_grid is None:
        return None
    if isinstance(user_grid, Mapping):
        return grid_from_cells(user_grid) if user_grid else None
    grid = np.asarray(user_grid)
    if grid.size == 0:
        return None
    if grid.shape != (MAP_ROWS, MAP_COLS):
        raise ValueError(
            f"K-map grid must be {MAP_ROWS}x{MAP_COLS}, got shape {grid.shape}."
        )
    return (grid != 0).astype(int)


def check_map(user_grid: GridInput, truth_table) -> bool:
    """Return True when every map cell matches the truth table.

    ``user_grid`` is a {(row, col): checked} mapping or a 4x4 nested sequence.
    Cells absent from a mapping count as unchecked; an empty answer is wrong.
    """
    grid = _as_grid(user_grid)
    if grid is None:
        return False
    for r, c in grid_cells():
        if int(grid[r, c]) != truth_table[grid_index_to_truth_index(r, c)]:
            logger.debug("K-map mismatch at row %d, col %d", r, c)
            return False
    return True


def check_expression(user_expr, question: Question) -> bool:
    """Logical equivalence first, then no more complex than the reference."""
    if evaluate(user_expr) != tuple(question.truth_table):
        logger.debug("Logic is incorrect: %r", user_expr)
        return False

    user_complexity = complexity(user_expr)
    target_complexity = complexity(question.correct_expression)
    logger.debug(
        "User complexity: %s, target complexity: %s", user_complexity, target_complexity
    )
    return user_complexity <= target_complexity


def _expression_feedback(user_expr, question: Question) -> Tuple[bool, str]:
    if check_expression(user_expr, question):
        return True, "Expression: correct"
    if evaluate(user_expr) != tuple(question.truth_table):
        return False, "Expression: incorrect logic"
    return False, "Expression: not simplified enough"


def grade(
    question: Question, grid: GridInput = None, expression: Optional[str] = None
) -> GradeResult:
    """Grade a submission according to the question kind."""
    feedback: List[str] = []
    map_ok: Optional[bool] = None
    expr_ok: Optional[bool] = None

    if question.needs_map:
        map_ok = check_map(grid, question.truth_table)
        feedback.append(f"Karnaugh map: {'correct' if map_ok else 'incorrect'}")
    if question.needs_expression:
        expr_ok, message = _expression_feedback(expression, question)
        feedback.append(message)

    correct = all(result for result in (map_ok, expr_ok) if result is not None)
    return GradeResult(correct, map_ok, expr_ok, feedback)


def reveal(question: Question) -> Reveal:
    """Return the canonical map and, where asked, the reference expressions."""
    if not question.needs_expression:
        return Reveal(map_grid(question.truth_table))
    return Reveal(
        map_grid(question.truth_table),
        question.correct_expression,
        minimal_expression(question.truth_table),
    )
