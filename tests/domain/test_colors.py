from __future__ import annotations

from collections.abc import Callable

import pytest

from domain.config import DEFAULT_PALETTE
from domain.models import PersonRecord
from domain.services.colors import assign_category_colors, resolve_category_colors


def _people(
    person_factory: Callable[..., PersonRecord], categories: list[str]
) -> list[PersonRecord]:
    return [
        person_factory(f"P{idx}", 1900 + idx, None, category)
        for idx, category in enumerate(categories)
    ]


def test_categories_follow_first_appearance(person_factory: Callable[..., PersonRecord]) -> None:
    people = _people(person_factory, ["Rulers", "Artists", "Rulers", "Writers", "Artists"])

    assert assign_category_colors(people) == {"Rulers": 0, "Artists": 1, "Writers": 2}


def test_palette_cycles_after_eight_categories(
    person_factory: Callable[..., PersonRecord],
) -> None:
    categories = [f"C{idx}" for idx in range(10)]

    mapping = assign_category_colors(_people(person_factory, categories))

    assert mapping["C7"] == 7
    assert mapping["C8"] == 0
    assert mapping["C9"] == 1


def test_same_order_gives_same_mapping(person_factory: Callable[..., PersonRecord]) -> None:
    people = _people(person_factory, ["Scientists", "Artists", "Other"])

    assert assign_category_colors(people) == assign_category_colors(list(people))


def test_reordering_input_can_change_mapping(person_factory: Callable[..., PersonRecord]) -> None:
    people = _people(person_factory, ["Scientists", "Artists"])

    assert assign_category_colors(people)["Scientists"] == 0
    assert assign_category_colors(list(reversed(people)))["Scientists"] == 1


def test_resolved_colors_come_from_the_palette(
    person_factory: Callable[..., PersonRecord],
) -> None:
    people = _people(person_factory, ["Scientists", "Artists"])

    assert resolve_category_colors(people) == {
        "Scientists": DEFAULT_PALETTE[0],
        "Artists": DEFAULT_PALETTE[1],
    }
    assert resolve_category_colors(people, ["#000"]) == {"Scientists": "#000", "Artists": "#000"}


def test_empty_palette_is_rejected(person_factory: Callable[..., PersonRecord]) -> None:
    with pytest.raises(ValueError):
        assign_category_colors(_people(person_factory, ["A"]), palette_size=0)
