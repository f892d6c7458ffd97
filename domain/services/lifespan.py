from __future__ import annotations

from collections.abc import Sequence

from domain.config import DEFAULT_CURRENT_YEAR
from domain.models import PersonRecord


def lifespan_years(person: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR) -> int:
    return person.effective_end(current_year) - person.birth_year


def ordinal(value: int) -> str:
    tail = value % 100
    if 11 <= tail <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(value % 10, "th")
    return f"{value}{suffix}"


def lifespan_rank(
    person: PersonRecord,
    people: Sequence[PersonRecord],
    current_year: int = DEFAULT_CURRENT_YEAR,
) -> int:
    ranked = sorted(people, key=lambda other: lifespan_years(other, current_year), reverse=True)
    for idx, other in enumerate(ranked, start=1):
        if other.name == person.name:
            return idx
    msg = f"{person.name!r} is not part of the roster"
    raise ValueError(msg)


def lifespan_annotation(
    person: PersonRecord,
    people: Sequence[PersonRecord],
    current_year: int = DEFAULT_CURRENT_YEAR,
) -> str:
    if len(people) == 1:
        return "only one in this chart"
    rank = lifespan_rank(person, people, current_year)
    if rank == 1:
        return "longest-lived in this chart"
    return f"{ordinal(rank)} longest-lived"


def life_clock_fraction(
    person: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR, max_life: int = 120
) -> float:
    return min(max(lifespan_years(person, current_year) / max_life, 0.0), 1.0)
