from __future__ import annotations

from collections.abc import Sequence

from domain.config import DEFAULT_PALETTE
from domain.models import EmptyRosterError, PersonRecord, Row
from domain.services.colors import assign_category_colors


def layout_rows(
    people: Sequence[PersonRecord],
    origin_y: float,
    *,
    row_height: float = 18.0,
    row_gap: float = 14.0,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> list[Row]:
    if not people:
        raise EmptyRosterError("layout_rows")

    # Colours follow input order, rows follow birth order.
    color_indices = assign_category_colors(people, len(palette))
    ordered = sorted(people, key=lambda person: person.birth_year)
    pitch = row_height + row_gap
    rows: list[Row] = []
    for idx, person in enumerate(ordered):
        color_index = color_indices.get(person.category, 0)
        rows.append(
            Row(
                person=person,
                y=origin_y + idx * pitch,
                color_index=color_index,
                color=palette[color_index],
            )
        )
    return rows


def content_height(
    count: int,
    row_height: float = 18.0,
    row_gap: float = 14.0,
    bottom_padding: float = 60.0,
) -> float:
    return count * (row_height + row_gap) - row_gap + bottom_padding


def top_offset(
    canvas_height: float,
    content: float,
    reserved_top: float = 120.0,
    bias: float = 0.62,
) -> float:
    if canvas_height <= 0:
        return reserved_top
    return reserved_top + max(0.0, (canvas_height - reserved_top - content) * bias)
