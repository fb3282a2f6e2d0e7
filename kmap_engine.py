"""Karnaugh map indexing helpers for the 4-variable drill map."""

from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple

import numpy as np

# Gray-code ordering for two-bit combinations
GRAY4: Sequence[Tuple[int, int]] = ((0, 0), (0, 1), (1, 1), (1, 0))
# Gray position -> two-bit value, i.e. 00, 01, 11, 10
GRAY_MAP: Tuple[int, ...] = tuple((hi << 1) | lo for hi, lo in GRAY4)
GRAY_LABELS: Tuple[str, ...] = tuple(f"{hi}{lo}" for hi, lo in GRAY4)

MAP_ROWS = MAP_COLS = 4
ROW_VARS = "AB"
COL_VARS = "CD"


def _check_coordinate(value: int, size: int, name: str) -> None:
    if not 0 <= value < size:
        raise ValueError(f"K-map {name} must be within 0-{size - 1}, got {value}.")


def grid_index_to_truth_index(row: int, col: int) -> int:
    """Translate (row, col) map coordinates to a truth-table index."""
    _check_coordinate(row, MAP_ROWS, "row")
    _check_coordinate(col, MAP_COLS, "column")
    return (GRAY_MAP[row] << 2) | GRAY_MAP[col]


def truth_index_to_grid_index(idx: int) -> Tuple[int, int]:
    """Translate a truth-table index to (row, col) map coordinates."""
    _check_coordinate(idx, MAP_ROWS * MAP_COLS, "index")
    return GRAY_MAP.index(idx >> 2), GRAY_MAP.index(idx & 0b11)


def grid_cells() -> List[Tuple[int, int]]:
    """All (row, col) cells in row-major visual order."""
    return [(r, c) for r in range(MAP_ROWS) for c in range(MAP_COLS)]


def blank_grid() -> np.ndarray:
    """Editable map: nothing is pre-filled."""
    return np.zeros((MAP_ROWS, MAP_COLS), dtype=int)


def map_grid(table: Sequence[int]) -> np.ndarray:
    """Return the canonical 4x4 K-map for a truth table."""
    grid = blank_grid()
    for r, c in grid_cells():
        grid[r, c] = table[grid_index_to_truth_index(r, c)]
    return grid


def grid_from_cells(cells: Mapping[Tuple[int, int], object]) -> np.ndarray:
    """Build a 0/1 grid from a {(row, col): checked} mapping; missing cells are 0."""
    grid = blank_grid()
    for (r, c), checked in cells.items():
        _check_coordinate(r, MAP_ROWS, "row")
        _check_coordinate(c, MAP_COLS, "column")
        grid[r, c] = 1 if checked else 0
    return grid


def format_map(table: Sequence[int]) -> str:
    """Plain-text rendering of the canonical map with Gray-code headers."""
    grid = map_grid(table)
    lines = [f"{ROW_VARS}\\{COL_VARS} " + " ".join(GRAY_LABELS)]
    for r, label in enumerate(GRAY_LABELS):
        cells = "  ".join(str(int(v)) for v in grid[r])
        lines.append(f"{label:>5}  {cells}")
    return "\n".join(lines)


__all__ = [
    "GRAY4",
    "GRAY_MAP",
    "GRAY_LABELS",
    "MAP_ROWS",
    "MAP_COLS",
    "ROW_VARS",
    "COL_VARS",
    "grid_index_to_truth_index",
    "truth_index_to_grid_index",
    "grid_cells",
    "blank_grid",
    "map_grid",
    "grid_from_cells",
    "format_map",
]
