from __future__ import annotations

from collections.abc import Iterable, Sequence

from domain.config import DEFAULT_PALETTE
from domain.models import PersonRecord


def assign_category_colors(
    people: Iterable[PersonRecord], palette_size: int = len(DEFAULT_PALETTE)
) -> dict[str, int]:
    """Map each category to a palette slot in first-appearance order.

    The mapping depends on input order: callers that want colours to stay put
    across renders must pass people in a stable (insertion) order.
    """
    if palette_size <= 0:
        msg = f"Palette size must be positive, got {palette_size}"
        raise ValueError(msg)
    indices: dict[str, int] = {}
    for person in people:
        if person.category not in indices:
            indices[person.category] = len(indices) % palette_size
    return indices


def resolve_category_colors(
    people: Iterable[PersonRecord], palette: Sequence[str] = DEFAULT_PALETTE
) -> dict[str, str]:
    indices = assign_category_colors(people, len(palette))
    return {category: palette[index] for category, index in indices.items()}
