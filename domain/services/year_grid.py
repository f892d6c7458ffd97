from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from domain.config import DEFAULT_CURRENT_YEAR, GridConfig
from domain.models import NotableEvent, PersonRecord, YearCell, YearGridPlan
from domain.services.square_grid import size_square_grid


def grid_end_year(
    person: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR, extension_years: int = 25
) -> int:
    if person.death_year is None:
        return current_year
    return min(person.death_year + extension_years, current_year)


def cell_step(total_years: int, max_cells: int = 100) -> int:
    return max(1, math.ceil(total_years / max_cells))


def year_cells(person: PersonRecord, grid_end: int, max_cells: int = 100) -> tuple[list[int], int]:
    # A grid end before birth still yields the birth cell.
    last = max(grid_end, person.birth_year)
    step = cell_step(last - person.birth_year + 1, max_cells)
    return list(range(person.birth_year, last + 1, step)), step


def bucket_events(
    cells: Sequence[int], events: Iterable[NotableEvent], grid_end: int, step: int
) -> dict[int, NotableEvent]:
    """Attach events to the cell whose [year, next year) bucket holds them.

    The first event landing in a bucket wins; events outside the grid are
    dropped.
    """
    buckets: dict[int, NotableEvent] = {}
    for event in events:
        for idx, start in enumerate(cells):
            end = cells[idx + 1] if idx + 1 < len(cells) else grid_end + step
            if start <= event.year < end:
                buckets.setdefault(start, event)
                break
    return buckets


def plan_year_grid(
    person: PersonRecord,
    events: Iterable[NotableEvent],
    width: float,
    height: float,
    config: GridConfig | None = None,
    current_year: int = DEFAULT_CURRENT_YEAR,
) -> YearGridPlan:
    config = config or GridConfig()
    grid_end = grid_end_year(person, current_year, config.extension_years)
    cells, step = year_cells(person, grid_end, config.max_cells)
    event_map = bucket_events(cells, events, grid_end, step)
    death_year = person.effective_end(current_year)

    grid_cells: list[YearCell] = []
    for idx, year in enumerate(cells):
        in_life = year <= death_year
        is_last_alive = (
            not person.is_alive
            and in_life
            and (idx + 1 >= len(cells) or cells[idx + 1] > death_year)
        )
        grid_cells.append(
            YearCell(
                year=year,
                age=year - person.birth_year,
                in_life=in_life,
                is_last_alive=is_last_alive,
                event=event_map.get(year),
            )
        )

    available_height = max(config.min_available_height, height - config.chrome_height)
    sizing = size_square_grid(
        len(cells),
        width,
        available_height,
        gap=config.gap,
        min_size=config.min_size,
        max_size=config.max_size,
        min_columns=config.min_columns,
        early_exit_ratio=config.early_exit_ratio,
    )
    return YearGridPlan(
        person=person,
        step=step,
        grid_end=grid_end,
        cells=grid_cells,
        sizing=sizing,
    )
