from __future__ import annotations

from collections.abc import Sequence

from domain.config import DEFAULT_CURRENT_YEAR, DEFAULT_PALETTE
from domain.models import ArcEntry, PersonRecord
from domain.services.colors import assign_category_colors


def overlap_window(
    a: PersonRecord, b: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR
) -> tuple[int, int]:
    start = max(a.birth_year, b.birth_year)
    end = min(a.effective_end(current_year), b.effective_end(current_year))
    return start, end


def overlaps(a: PersonRecord, b: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR) -> bool:
    start, end = overlap_window(a, b, current_year)
    return end > start


def shared_years(
    a: PersonRecord, b: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR
) -> int:
    start, end = overlap_window(a, b, current_year)
    return end - start


def focal_lifespan(focal: PersonRecord, current_year: int = DEFAULT_CURRENT_YEAR) -> int:
    return max(focal.effective_end(current_year) - focal.birth_year, 1)


def select_contemporaries(
    focal: PersonRecord,
    people: Sequence[PersonRecord],
    current_year: int = DEFAULT_CURRENT_YEAR,
    max_contemporaries: int = 10,
) -> list[PersonRecord]:
    """Overlapping people, top ``max_contemporaries`` by shared years.

    The survivors come back ordered by age gap (born latest first), which is
    the order radii are handed out in.
    """
    candidates = [
        person
        for person in people
        if person.name != focal.name and overlaps(person, focal, current_year)
    ]
    by_shared = sorted(
        candidates, key=lambda person: shared_years(person, focal, current_year), reverse=True
    )
    kept = by_shared[:max_contemporaries]
    return sorted(kept, key=lambda person: focal.birth_year - person.birth_year)


def ring_radius(index: int, count: int, min_radius: float, max_radius: float) -> float:
    # Radii encode rank only; equal spacing keeps clustered age gaps apart.
    if count <= 1:
        return (min_radius + max_radius) / 2
    return min_radius + (index / (count - 1)) * (max_radius - min_radius)


def build_overlap_arcs(
    focal: PersonRecord,
    people: Sequence[PersonRecord],
    current_year: int = DEFAULT_CURRENT_YEAR,
    *,
    max_contemporaries: int = 10,
    min_radius: float = 28.0,
    max_radius: float = 106.0,
    max_sweep: float = 359.9,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> list[ArcEntry]:
    color_indices = assign_category_colors(people, len(palette))
    contemporaries = select_contemporaries(focal, people, current_year, max_contemporaries)
    lifespan = focal_lifespan(focal, current_year)
    focal_end = focal.effective_end(current_year)

    arcs: list[ArcEntry] = []
    for idx, other in enumerate(contemporaries):
        start_year, end_year = overlap_window(other, focal, current_year)
        start_fraction = (start_year - focal.birth_year) / lifespan
        start_angle = start_fraction * 360
        end_angle = min((end_year - focal.birth_year) / lifespan * 360, start_angle + max_sweep)
        color_index = color_indices.get(other.category, 0)
        arcs.append(
            ArcEntry(
                person=other,
                color_index=color_index,
                color=palette[color_index],
                radius=ring_radius(idx, len(contemporaries), min_radius, max_radius),
                start_fraction=start_fraction,
                end_fraction=end_angle / 360,
                start_angle=start_angle,
                end_angle=end_angle,
                born_during_focal_life=other.birth_year > focal.birth_year,
                died_during_focal_life=(
                    other.death_year is not None and other.death_year < focal_end
                ),
                age_gap=focal.birth_year - other.birth_year,
                overlap_years=end_year - start_year,
            )
        )
    return arcs


def age_tick_marks(lifespan: int) -> list[int]:
    step = 20 if lifespan > 80 else 10 if lifespan > 50 else 5
    return list(range(step, lifespan, step))


def _first_name(person: PersonRecord) -> str:
    return person.name.split(" ")[0]


def age_gap_caption(arc: ArcEntry, focal: PersonRecord) -> str:
    other = _first_name(arc.person)
    own = _first_name(focal)
    gap = abs(arc.age_gap)
    if arc.age_gap > 0:
        return f"{other} was {gap} when {own} was born"
    if arc.age_gap < 0:
        return f"{own} was {gap} when {other} was born"
    return f"{other} was born the same year as {own}"


def outcome_caption(arc: ArcEntry, focal: PersonRecord) -> str:
    other = _first_name(arc.person)
    own = _first_name(focal)
    if arc.died_during_focal_life and arc.person.death_year is not None:
        return f"{other} died when {own} was {arc.person.death_year - focal.birth_year}"
    if arc.person.death_year is None:
        return f"{other} is still alive today"
    return f"{other} outlived {own}"
