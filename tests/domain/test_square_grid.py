from __future__ import annotations

import math

import pytest

from domain.models import GridSizing
from domain.services.square_grid import grid_fits, size_square_grid


def _brute_force_best(count: int, width: float, height: float, gap: float) -> int:
    best = 0
    for columns in range(min(3, count), count + 1):
        rows = math.ceil(count / columns)
        size = math.floor(
            min((width - (columns - 1) * gap) / columns, (height - (rows - 1) * gap) / rows)
        )
        best = max(best, size)
    return best


def test_fifty_cells_in_a_wide_panel() -> None:
    sizing = size_square_grid(50, 400, 200, gap=3)

    assert sizing == GridSizing(columns=10, rows=5, size=37)
    assert 10 * 37 + 9 * 3 <= 400
    assert 5 * 37 + 4 * 3 <= 200
    assert sizing.size == _brute_force_best(50, 400, 200, 3)


def test_early_exit_matches_full_scan_on_the_reference_panel() -> None:
    assert size_square_grid(50, 400, 200, gap=3, early_exit_ratio=0.85) == size_square_grid(
        50, 400, 200, gap=3
    )


@pytest.mark.parametrize("early_exit_ratio", [None, 0.85])
@pytest.mark.parametrize("count", range(1, 101))
def test_chosen_grid_always_fits(count: int, early_exit_ratio: float | None) -> None:
    sizing = size_square_grid(count, 400, 200, gap=3, early_exit_ratio=early_exit_ratio)

    assert sizing.rows == math.ceil(count / sizing.columns)
    assert sizing.columns * sizing.size + (sizing.columns - 1) * 3 <= 400
    assert sizing.rows * sizing.size + (sizing.rows - 1) * 3 <= 200
    assert grid_fits(sizing, 400, 200, 3)


@pytest.mark.parametrize("count", [3, 7, 24, 61, 100])
def test_full_scan_finds_the_largest_size(count: int) -> None:
    sizing = size_square_grid(count, 520, 300, gap=3, max_size=10_000)

    assert sizing.size == _brute_force_best(count, 520, 300, 3)


def test_result_is_clamped_to_bounds() -> None:
    assert size_square_grid(1, 400, 200).size == 56
    assert size_square_grid(100, 50, 50).size == 12
    assert size_square_grid(4, 400, 400, max_size=500).size > 56


def test_counts_below_three_columns_use_fewer_columns() -> None:
    single = size_square_grid(1, 400, 200, max_size=1000)
    pair = size_square_grid(2, 400, 200, max_size=1000)

    assert single == GridSizing(columns=1, rows=1, size=200)
    assert pair == GridSizing(columns=2, rows=1, size=198)


def test_zero_cells_is_rejected() -> None:
    with pytest.raises(ValueError):
        size_square_grid(0, 400, 200)
