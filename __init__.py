"""Convenience exports for the K-map drill core."""

from .logic import (
    VARIABLES,
    complexity,
    evaluate,
    generate_expression,
    get_variables,
    minimal_expression,
    normalize_input,
    random_truth_table,
    to_sympy,
    truth_minterms,
    validate_truth_table,
)
from .kmap_engine import (
    GRAY_MAP,
    format_map,
    grid_index_to_truth_index,
    map_grid,
    truth_index_to_grid_index,
)
from .questions import DEFAULT_SETTINGS, Question, QuestionKind, QuizSettings, generate_all
from .grader import GradeResult, Reveal, check_expression, check_map, grade, reveal
from .session import (
    Answered,
    Phase,
    Retry,
    SessionState,
    Start,
    current_question,
    elapsed,
    new_session,
    submit,
    transition,
)

__all__ = [
    "VARIABLES",
    "GRAY_MAP",
    "DEFAULT_SETTINGS",
    "Answered",
    "GradeResult",
    "Phase",
    "Question",
    "QuestionKind",
    "QuizSettings",
    "Retry",
    "Reveal",
    "SessionState",
    "Start",
    "check_expression",
    "check_map",
    "complexity",
    "current_question",
    "elapsed",
    "evaluate",
    "format_map",
    "generate_all",
    "generate_expression",
    "get_variables",
    "grade",
    "grid_index_to_truth_index",
    "map_grid",
    "minimal_expression",
    "new_session",
    "normalize_input",
    "random_truth_table",
    "reveal",
    "submit",
    "to_sympy",
    "transition",
    "truth_index_to_grid_index",
    "truth_minterms",
    "validate_truth_table",
]
