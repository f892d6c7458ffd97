from __future__ import annotations

import math

from domain.models import GridSizing


def _candidate_size(count: int, columns: int, width: float, height: float, gap: float) -> int:
    rows = math.ceil(count / columns)
    width_size = (width - (columns - 1) * gap) / columns
    height_size = (height - (rows - 1) * gap) / rows
    return math.floor(min(width_size, height_size))


def size_square_grid(
    count: int,
    width: float,
    height: float,
    *,
    gap: float = 3,
    min_size: int = 12,
    max_size: int = 56,
    min_columns: int = 3,
    early_exit_ratio: float | None = None,
) -> GridSizing:
    """Largest square cell that packs ``count`` cells into ``width`` x ``height``.

    Column counts are scanned from ``min(min_columns, count)`` up to ``count``
    and the first column count reaching the largest size wins. With
    ``early_exit_ratio`` set the scan stops once a candidate drops below that
    fraction of the best size so far; this may miss the optimum on some
    shapes, so the full scan is the default.

    The result is clamped to ``[min_size, max_size]``. Clamping up to
    ``min_size`` can overflow a very small area; the caller scrolls then.
    """
    if count < 1:
        msg = f"Grid needs at least one cell, got {count}"
        raise ValueError(msg)

    first_columns = max(1, min(min_columns, count))
    best_columns = first_columns
    best_size = _candidate_size(count, first_columns, width, height, gap)
    for columns in range(first_columns + 1, count + 1):
        size = _candidate_size(count, columns, width, height, gap)
        if size > best_size:
            best_size = size
            best_columns = columns
        if early_exit_ratio is not None and size < best_size * early_exit_ratio:
            break

    size = max(min_size, min(best_size, max_size))
    return GridSizing(
        columns=best_columns,
        rows=math.ceil(count / best_columns),
        size=size,
    )


def grid_fits(sizing: GridSizing, width: float, height: float, gap: float = 3) -> bool:
    return (
        sizing.columns * sizing.size + (sizing.columns - 1) * gap <= width
        and sizing.rows * sizing.size + (sizing.rows - 1) * gap <= height
    )
