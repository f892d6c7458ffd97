from __future__ import annotations

from collections.abc import Sequence

from domain.config import DEFAULT_MIN_TICK_INTERVAL, DEFAULT_TICK_LADDER
from domain.models import TickSet, YearRange


def pick_tick_interval(
    span: int,
    ladder: Sequence[tuple[int, int]] = DEFAULT_TICK_LADDER,
    fallback: int = DEFAULT_MIN_TICK_INTERVAL,
) -> int:
    # Ladder is scanned from the widest threshold down.
    for threshold, interval in ladder:
        if span > threshold:
            return interval
    return fallback


def enumerate_ticks(min_year: int, max_year: int, interval: int) -> list[int]:
    if interval <= 0:
        msg = f"Tick interval must be positive, got {interval}"
        raise ValueError(msg)
    first = -(-min_year // interval) * interval
    return list(range(first, max_year + 1, interval))


def plan_ticks(
    year_range: YearRange,
    ladder: Sequence[tuple[int, int]] = DEFAULT_TICK_LADDER,
    fallback: int = DEFAULT_MIN_TICK_INTERVAL,
) -> TickSet:
    interval = pick_tick_interval(year_range.span, ladder, fallback)
    years = enumerate_ticks(year_range.min_year, year_range.max_year, interval)
    return TickSet(interval=interval, years=tuple(years))


def format_year_label(year: int, bce_suffix: str = "bc") -> str:
    if year < 0:
        return f"{abs(year)} {bce_suffix}"
    return str(year)
