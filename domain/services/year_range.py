from __future__ import annotations

import math
from collections.abc import Sequence

from domain.config import DEFAULT_CURRENT_YEAR
from domain.models import EmptyRosterError, PersonRecord, YearRange


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def effective_end(person: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR) -> int:
    return person.effective_end(current_year)


def compute_year_range(
    people: Sequence[PersonRecord],
    current_year: int = DEFAULT_CURRENT_YEAR,
    *,
    padding_ratio: float = 0.04,
    min_padding: int = 5,
    fallback_span: int = 100,
) -> YearRange:
    """Padded [min, max] window covering every birth and effective end year.

    A zero raw span (every year coincides) pads from ``fallback_span`` so the
    result always satisfies ``min_year < max_year``.
    """
    if not people:
        raise EmptyRosterError("compute_year_range")

    years: list[int] = []
    for person in people:
        years.append(person.birth_year)
        years.append(effective_end(person, current_year))

    raw_min = min(years)
    raw_max = max(years)
    raw_range = (raw_max - raw_min) or fallback_span
    padding = max(min_padding, round_half_up(raw_range * padding_ratio))
    return YearRange(raw_min - padding, raw_max + padding)
