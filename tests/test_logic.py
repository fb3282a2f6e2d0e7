import itertools
import math
import random

import pytest

from kmap_quiz.logic import (
    VARIABLES,
    complexity,
    evaluate,
    format_truth_table,
    generate_expression,
    get_variables,
    minimal_expression,
    normalize_input,
    random_truth_table,
    term_literals,
    to_sympy,
    truth_minterms,
    validate_truth_table,
)


def _sympy_minterms(expression: str) -> list[int]:
    expr = to_sympy(expression)
    vars_tuple = get_variables()
    mins = []
    for idx, bits in enumerate(itertools.product([0, 1], repeat=len(vars_tuple))):
        subs = {var: bool(bit) for var, bit in zip(vars_tuple, bits)}
        if bool(expr.xreplace(subs)):
            mins.append(idx)
    return mins


def test_single_variable_follows_its_bit() -> None:
    table = evaluate("A")
    negated = evaluate("¬A")
    for i in range(16):
        assert table[i] == (i >> 3) & 1
        assert negated[i] == 1 - ((i >> 3) & 1)


@pytest.mark.parametrize("expression", ["", None, 42, ["A"]])
def test_missing_or_non_string_input_is_all_zero(expression: object) -> None:
    assert evaluate(expression) == (0,) * 16


def test_terms_without_literals_never_hold() -> None:
    assert evaluate("xyz") == (0,) * 16
    assert evaluate("A+xyz") == evaluate("A")
    assert evaluate("A +  + ") == evaluate("A")


def test_contradictory_term_is_false() -> None:
    assert evaluate("A¬A") == (0,) * 16
    assert evaluate("A¬A+D") == evaluate("D")


def test_product_term_covers_expected_rows() -> None:
    assert truth_minterms(evaluate("AB")) == [12, 13, 14, 15]
    assert truth_minterms(evaluate("¬A¬B¬C¬D")) == [0]
    assert truth_minterms(evaluate("C¬D")) == [2, 6, 10, 14]


@pytest.mark.parametrize(
    "expression",
    ["AB+¬CD", "¬A¬B+BCD+A¬C", "B¬D+¬AC+AB¬C+¬BD", "A B + ¬C", "D"],
)
def test_evaluate_agrees_with_sympy(expression: str) -> None:
    assert truth_minterms(evaluate(expression)) == _sympy_minterms(expression)


def test_term_literals_ignores_noise() -> None:
    assert term_literals("A x ¬B") == [("A", False), ("B", True)]
    assert term_literals("¬") == []


def test_complexity_counts_terms_and_variables() -> None:
    assert complexity("AB+¬CD") == 6
    assert complexity("A") == 2
    assert complexity("A+") == 3
    assert complexity("") == math.inf
    assert complexity(None) == math.inf


def test_generate_expression_is_reproducible() -> None:
    first = generate_expression(4, random.Random(7))
    second = generate_expression(4, random.Random(7))
    assert first == second


@pytest.mark.parametrize("num_terms", [2, 3, 4])
def test_generate_expression_shape(rng: random.Random, num_terms: int) -> None:
    for _ in range(50):
        expression = generate_expression(num_terms, rng)
        terms = expression.split("+")
        assert len(terms) == num_terms
        assert len(set(terms)) == num_terms
        for term in terms:
            names = [var for var, _ in term_literals(term)]
            assert 2 <= len(names) <= 3
            assert names == sorted(names)
            assert len(set(names)) == len(names)
            assert term.replace("¬", "") == "".join(names)
        assert any(evaluate(expression))


@pytest.mark.parametrize("num_terms", [0, 1, 5])
def test_generate_expression_rejects_unsupported_term_count(num_terms: int) -> None:
    with pytest.raises(ValueError):
        generate_expression(num_terms, random.Random(0))


def test_random_truth_table_has_a_true_row(rng: random.Random) -> None:
    for _ in range(100):
        table = random_truth_table(rng)
        assert len(table) == 16
        assert set(table) <= {0, 1}
        assert any(table)


class _ZerosFirst:
    """Yields an all-zero draw before falling back to ones."""

    def __init__(self) -> None:
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        self.calls += 1
        return 0 if self.calls <= 16 else 1


def test_random_truth_table_redraws_all_zero() -> None:
    stub = _ZerosFirst()
    assert random_truth_table(stub) == (1,) * 16
    assert stub.calls == 32


def test_minimal_expression_is_equivalent_and_no_larger() -> None:
    table = evaluate("AB+¬CD+AB¬C")
    minimal = minimal_expression(table)
    assert evaluate(minimal) == table
    assert complexity(minimal) <= complexity("AB+¬CD")


def test_minimal_expression_constants() -> None:
    assert minimal_expression((0,) * 16) == "0"
    assert minimal_expression((1,) * 16) == "1"


def test_minimal_expression_uses_negation_marker() -> None:
    assert minimal_expression(evaluate("¬A")) == "¬A"


def test_normalize_input_rewrites_common_notations() -> None:
    assert normalize_input("a'b + c~d") == "¬AB+C¬D"
    assert normalize_input("A*B | !C") == "AB+¬C"
    assert normalize_input("") == ""
    assert evaluate(normalize_input("A'B'")) == evaluate("¬A¬B")


def test_format_truth_table_rows() -> None:
    rows = format_truth_table(evaluate("BD"))
    assert len(rows) == 16
    assert rows[5] == (0, 1, 0, 1, 1)
    assert rows[4] == (0, 1, 0, 0, 0)


def test_validate_truth_table() -> None:
    validate_truth_table((0, 1) * 8)
    with pytest.raises(ValueError):
        validate_truth_table((0,) * 15)
    with pytest.raises(ValueError):
        validate_truth_table((2,) + (0,) * 15)


def test_variables_are_fixed() -> None:
    assert VARIABLES == ("A", "B", "C", "D")
    assert [str(v) for v in get_variables()] == list(VARIABLES)
