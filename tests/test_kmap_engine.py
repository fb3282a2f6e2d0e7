import numpy as np
import pytest

from kmap_quiz.kmap_engine import (
    GRAY_LABELS,
    GRAY_MAP,
    blank_grid,
    format_map,
    grid_cells,
    grid_from_cells,
    grid_index_to_truth_index,
    map_grid,
    truth_index_to_grid_index,
)
from kmap_quiz.logic import evaluate


def test_gray_ordering() -> None:
    assert GRAY_MAP == (0, 1, 3, 2)
    assert GRAY_LABELS == ("00", "01", "11", "10")


def test_grid_mapping_is_a_bijection() -> None:
    indices = [grid_index_to_truth_index(r, c) for r, c in grid_cells()]
    assert sorted(indices) == list(range(16))


@pytest.mark.parametrize(
    ("row", "col", "expected"),
    [(0, 0, 0), (0, 2, 3), (0, 3, 2), (2, 0, 12), (3, 1, 9), (3, 3, 10)],
)
def test_grid_index_to_truth_index(row: int, col: int, expected: int) -> None:
    assert grid_index_to_truth_index(row, col) == expected


def test_inverse_mapping() -> None:
    for idx in range(16):
        assert grid_index_to_truth_index(*truth_index_to_grid_index(idx)) == idx


@pytest.mark.parametrize(("row", "col"), [(4, 0), (0, 4), (-1, 2)])
def test_out_of_range_cell_rejected(row: int, col: int) -> None:
    with pytest.raises(ValueError):
        grid_index_to_truth_index(row, col)


def test_out_of_range_index_rejected() -> None:
    with pytest.raises(ValueError):
        truth_index_to_grid_index(16)


def test_blank_grid_is_not_prefilled() -> None:
    grid = blank_grid()
    assert grid.shape == (4, 4)
    assert not grid.any()


def test_map_grid_places_single_minterm_top_left() -> None:
    grid = map_grid((1,) + (0,) * 15)
    assert grid[0, 0] == 1
    assert grid.sum() == 1


def test_map_grid_rows_follow_ab() -> None:
    # A=1 covers the AB=11 and AB=10 rows
    grid = map_grid(evaluate("A"))
    assert grid[2:].all()
    assert not grid[:2].any()


def test_map_grid_columns_follow_cd() -> None:
    # C¬D is the CD=10 column
    grid = map_grid(evaluate("C¬D"))
    assert np.array_equal(grid[:, 3], np.ones(4, dtype=int))
    assert grid.sum() == 4


def test_grid_from_cells_defaults_missing_to_zero() -> None:
    grid = grid_from_cells({(1, 2): True, (3, 0): 0})
    assert grid[1, 2] == 1
    assert grid.sum() == 1
    with pytest.raises(ValueError):
        grid_from_cells({(5, 0): True})


def test_format_map() -> None:
    lines = format_map(evaluate("¬A¬B¬C¬D")).splitlines()
    assert lines[0] == "AB\\CD 00 01 11 10"
    assert len(lines) == 5
    assert lines[1].split() == ["00", "1", "0", "0", "0"]
    assert lines[4].split() == ["10", "0", "0", "0", "0"]
