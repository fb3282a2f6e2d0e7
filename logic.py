"""Boolean logic utilities for the K-Map drill."""

from __future__ import annotations

import logging
import math
import random
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from sympy import And, Not, Or, Symbol, false, symbols, true
from sympy.logic.boolalg import SOPform

logger = logging.getLogger(__name__)

VARIABLES: Tuple[str, ...] = ("A", "B", "C", "D")
NEGATION = "¬"
SEPARATOR = "+"
TABLE_SIZE = 1 << len(VARIABLES)

_LITERAL_RE = re.compile(r"¬?[A-D]")
_SYMBOL_RE = re.compile(r"[A-D]")


def get_variables(n: int = len(VARIABLES)):
    """Return SymPy symbols (A, B, C, ...) for the requested variable count."""
    if n < 1:
        raise ValueError("Number of variables must be positive.")
    return symbols(" ".join(chr(65 + i) for i in range(n)))


def assignment(index: int) -> dict:
    """Return the {variable: bit} mapping encoded by a truth-table index."""
    n = len(VARIABLES)
    return {var: (index >> (n - 1 - pos)) & 1 for pos, var in enumerate(VARIABLES)}


def term_literals(term: str) -> List[Tuple[str, bool]]:
    """Return (variable, negated) pairs for every literal found in a term."""
    return [(tok[-1], tok.startswith(NEGATION)) for tok in _LITERAL_RE.findall(term)]


def _term_holds(literals: Sequence[Tuple[str, bool]], values: dict) -> bool:
    return bool(literals) and all(
        values[var] == (0 if negated else 1) for var, negated in literals
    )


def evaluate(expression) -> Tuple[int, ...]:
    """Evaluate a sum-of-products string into its 16-entry truth table.

    Anything that is not a string evaluates to all zeros, as does a string with
    no usable terms. A term without a single ``¬?[A-D]`` literal never holds.
    """
    if not isinstance(expression, str):
        return (0,) * TABLE_SIZE

    terms = [
        term_literals(term)
        for term in expression.split(SEPARATOR)
        if term.strip()
    ]
    table = []
    for idx in range(TABLE_SIZE):
        values = assignment(idx)
        table.append(1 if any(_term_holds(lits, values) for lits in terms) else 0)
    return tuple(table)


def truth_minterms(table: Sequence[int]) -> List[int]:
    """Return indices whose rows are true."""
    return [idx for idx, value in enumerate(table) if value]


def validate_truth_table(table: Sequence[int]) -> None:
    """Ensure a truth table has exactly 16 binary entries."""
    if len(table) != TABLE_SIZE:
        raise ValueError(
            f"Truth table must have {TABLE_SIZE} entries, got {len(table)}."
        )
    invalid = [value for value in table if value not in (0, 1)]
    if invalid:
        raise ValueError(f"Truth table entries must be 0 or 1: {invalid}")


def term_count(expression: str) -> int:
    return len(expression.split(SEPARATOR))


def literal_count(expression: str) -> int:
    # the negation marker is not counted
    return len(_SYMBOL_RE.findall(expression))


def complexity(expression) -> float:
    """Terms plus literals; missing or empty input is infinitely complex."""
    if not expression or not isinstance(expression, str):
        return math.inf
    return term_count(expression) + literal_count(expression)


def _random_term(rng: random.Random) -> str:
    length = rng.randint(2, 3)
    chosen = sorted(rng.sample(VARIABLES, length))
    return "".join(
        f"{NEGATION}{var}" if rng.random() < 0.5 else var for var in chosen
    )


def generate_expression(num_terms: int, rng: Optional[random.Random] = None) -> str:
    """Build a random simplified-looking SOP expression with distinct terms."""
    if not 2 <= num_terms <= 4:
        raise ValueError(f"Term count must be between 2 and 4, got {num_terms}.")
    rng = rng or random.Random()

    terms: List[str] = []
    while len(terms) < num_terms:
        term = _random_term(rng)
        if term not in terms:
            terms.append(term)
    return SEPARATOR.join(terms)


def random_truth_table(rng: Optional[random.Random] = None) -> Tuple[int, ...]:
    """Draw fair coin flips for every row, redrawing an all-zero table."""
    rng = rng or random.Random()
    while True:
        table = tuple(rng.randint(0, 1) for _ in range(TABLE_SIZE))
        if any(table):
            return table
        logger.debug("Redrawing all-zero truth table")


def to_sympy(expression):
    """Convert an SOP string into a SymPy expression over A-D."""
    if not isinstance(expression, str):
        return false
    local = dict(zip(VARIABLES, get_variables()))
    clauses = []
    for term in expression.split(SEPARATOR):
        if not term.strip():
            continue
        literals = term_literals(term)
        if not literals:
            continue
        clauses.append(
            And(*(Not(local[var]) if negated else local[var] for var, negated in literals))
        )
    return Or(*clauses) if clauses else false


def prime_format(expr, var_order: Tuple[Symbol, ...]) -> str:
    """Format a simplified SymPy expression as SOP text in ``¬`` notation."""
    if expr is false:
        return "0"
    if expr is true:
        return "1"

    def lit_to_str(lit):
        if isinstance(lit, Not) and isinstance(lit.args[0], Symbol):
            return f"{NEGATION}{lit.args[0]}"
        return str(lit)

    terms = list(expr.args) if isinstance(expr, Or) else [expr]
    result = []
    for term in terms:
        literals = list(term.args) if isinstance(term, And) else [term]
        ordered = []
        for var in var_order:
            for lit in literals:
                if lit == var or (isinstance(lit, Not) and lit.args and lit.args[0] == var):
                    ordered.append(lit)
                    break
        result.append("".join(lit_to_str(item) for item in ordered) or "1")
    return SEPARATOR.join(sorted(result, key=_term_sort_key))


def _term_sort_key(term: str):
    return [VARIABLES.index(tok[-1]) for tok in _LITERAL_RE.findall(term)], term


def minimal_expression(table: Sequence[int]) -> str:
    """Return a minimal SOP for a truth table, computed with SymPy."""
    vars_tuple = get_variables()
    minterms = truth_minterms(table)
    if not minterms:
        return "0"
    return prime_format(SOPform(vars_tuple, minterms), vars_tuple)


def normalize_input(raw: str) -> str:
    """Rewrite typed learner input into the fixed ``A-D``/``+``/``¬`` alphabet.

    Accepts postfix ``'`` and prefix ``~`` or ``!`` for negation, lowercase
    variables, ``|`` as OR, and explicit AND markers which are dropped.
    """
    text = (raw or "").replace("`", "'").replace("’", "'")
    for ch in " \t*&·.":
        text = text.replace(ch, "")
    text = text.replace("|", SEPARATOR).replace("~", NEGATION).replace("!", NEGATION)
    text = "".join(ch.upper() if ch in "abcd" else ch for ch in text)

    out: List[str] = []
    for ch in text:
        if ch == "'" and out and out[-1] in VARIABLES:
            out.insert(len(out) - 1, NEGATION)
            continue
        out.append(ch)
    return "".join(out)


def format_truth_table(table: Iterable[int]) -> List[Tuple[int, int, int, int, int]]:
    """Return (A, B, C, D, F) rows for display."""
    rows = []
    for idx, value in enumerate(table):
        bits = assignment(idx)
        rows.append((bits["A"], bits["B"], bits["C"], bits["D"], value))
    return rows
