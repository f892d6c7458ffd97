from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest

from domain.config import DEFAULT_PALETTE
from domain.models import PersonRecord
from domain.services.overlap_arcs import (
    age_gap_caption,
    age_tick_marks,
    build_overlap_arcs,
    outcome_caption,
    overlaps,
    ring_radius,
    select_contemporaries,
    shared_years,
)


def test_single_contemporary_arc(person_factory: Callable[..., PersonRecord]) -> None:
    focal = person_factory("Focal Person", 1900, 1980)
    elder = person_factory("Elder Person", 1850, 1920, "Rulers")

    arcs = build_overlap_arcs(focal, [focal, elder], 2026)

    assert len(arcs) == 1
    arc = arcs[0]
    assert arc.person == elder
    assert arc.start_angle == 0
    assert arc.end_angle == pytest.approx(90)
    assert arc.start_fraction == 0
    assert arc.end_fraction == pytest.approx(0.25)
    assert arc.radius == (28 + 106) / 2
    assert arc.born_during_focal_life is False
    assert arc.died_during_focal_life is True
    assert arc.age_gap == 50
    assert arc.overlap_years == 20
    assert arc.color_index == 1
    assert arc.color == DEFAULT_PALETTE[1]


def test_no_contemporaries_yields_empty_list(person_factory: Callable[..., PersonRecord]) -> None:
    focal = person_factory("Focal", 1900, 1980)
    before = person_factory("Before", 1800, 1900)
    after = person_factory("After", 1980, None)

    assert build_overlap_arcs(focal, [focal, before, after], 2026) == []
    assert build_overlap_arcs(focal, [], 2026) == []


def test_focal_person_is_never_its_own_contemporary(
    person_factory: Callable[..., PersonRecord],
) -> None:
    focal = person_factory("Focal", 1900, 1980)

    assert select_contemporaries(focal, [focal], 2026) == []


def test_overlap_is_symmetric(person_factory: Callable[..., PersonRecord]) -> None:
    people = [
        person_factory("A", 1900, 1980),
        person_factory("B", 1850, 1900),
        person_factory("C", 1850, 1901),
        person_factory("D", 1979, None),
        person_factory("E", 2000, 1990),
        person_factory("F", 1950, 1950),
        person_factory("G", -100, -40),
    ]

    for a, b in itertools.permutations(people, 2):
        assert overlaps(a, b, 2026) == overlaps(b, a, 2026)
        assert shared_years(a, b, 2026) == shared_years(b, a, 2026)


def test_keeps_ten_longest_overlaps(person_factory: Callable[..., PersonRecord]) -> None:
    focal = person_factory("Focal", 1900, 2000)
    # Shared years grow with the index: Other 0 shares 5 years, Other 14 shares 75.
    others = [person_factory(f"Other {idx}", 1995 - idx * 5, 2050) for idx in range(15)]

    arcs = build_overlap_arcs(focal, [focal, *others], 2026)

    assert len(arcs) == 10
    assert {arc.person.name for arc in arcs} == {f"Other {idx}" for idx in range(5, 15)}


def test_arcs_ordered_by_age_gap_with_even_radii(
    person_factory: Callable[..., PersonRecord],
) -> None:
    focal = person_factory("Focal", 1900, 1980)
    people = [
        focal,
        person_factory("Much Older", 1840, 1910),
        person_factory("Twin", 1900, 1970),
        person_factory("Younger", 1950, 2010),
        person_factory("Slightly Older", 1899, 1960),
    ]

    arcs = build_overlap_arcs(focal, people, 2026)

    assert [arc.person.name for arc in arcs] == [
        "Younger",
        "Twin",
        "Slightly Older",
        "Much Older",
    ]
    assert [arc.age_gap for arc in arcs] == [-50, 0, 1, 60]
    assert [arc.radius for arc in arcs] == pytest.approx([28, 54, 80, 106])


def test_radii_encode_rank_not_gap_size(person_factory: Callable[..., PersonRecord]) -> None:
    focal = person_factory("Focal", 1900, 1980)
    people = [
        focal,
        person_factory("Close A", 1901, 1970),
        person_factory("Close B", 1902, 1970),
        person_factory("Far", 1950, 1970),
    ]

    radii = [arc.radius for arc in build_overlap_arcs(focal, people, 2026)]

    assert radii == pytest.approx([28, 67, 106])


def test_ring_radius_midpoint_for_single_entry() -> None:
    assert ring_radius(0, 1, 20, 40) == 30
    assert ring_radius(0, 0, 20, 40) == 30
    assert ring_radius(2, 3, 20, 40) == 40


def test_full_overlap_is_clamped_below_a_full_circle(
    person_factory: Callable[..., PersonRecord],
) -> None:
    focal = person_factory("Focal", 1900, 1980)
    elder = person_factory("Elder", 1890, None)

    arc = build_overlap_arcs(focal, [focal, elder], 2026)[0]

    assert arc.start_angle == 0
    assert arc.end_angle == pytest.approx(359.9)
    assert arc.end_fraction == pytest.approx(359.9 / 360)
    assert arc.overlap_years == 80
    assert arc.died_during_focal_life is False


def test_living_focal_person_runs_to_current_year(
    person_factory: Callable[..., PersonRecord],
) -> None:
    focal = person_factory("Focal", 1946)
    other = person_factory("Other", 1986, 2006)

    arc = build_overlap_arcs(focal, [focal, other], 2026)[0]

    assert arc.start_angle == pytest.approx(40 / 80 * 360)
    assert arc.end_angle == pytest.approx(60 / 80 * 360)
    assert arc.born_during_focal_life is True
    assert arc.died_during_focal_life is True


def test_every_arc_sweep_is_positive_and_bounded(roster: list[PersonRecord]) -> None:
    for focal in roster:
        for arc in build_overlap_arcs(focal, roster, 2026):
            assert 0 < arc.sweep <= 359.9 + 1e-9
            assert 0 <= arc.start_fraction < arc.end_fraction <= 1


def test_reversed_lifespans_do_not_crash(person_factory: Callable[..., PersonRecord]) -> None:
    broken_focal = person_factory("Broken", 1950, 1900)
    broken_other = person_factory("Also Broken", 1960, 1940)
    normal = person_factory("Normal", 1900, 1990)

    assert build_overlap_arcs(broken_focal, [broken_focal, normal], 2026) == []
    assert build_overlap_arcs(normal, [normal, broken_other], 2026) == []


def test_age_tick_steps() -> None:
    assert age_tick_marks(30) == [5, 10, 15, 20, 25]
    assert age_tick_marks(80) == [10, 20, 30, 40, 50, 60, 70]
    assert age_tick_marks(81) == [20, 40, 60, 80]
    assert age_tick_marks(1) == []


def test_captions(person_factory: Callable[..., PersonRecord]) -> None:
    focal = person_factory("Focal Person", 1900, 1980)
    people = [
        focal,
        person_factory("Elder Statesman", 1850, 1920),
        person_factory("Young Star", 1950, None),
        person_factory("Twin Sibling", 1900, 1990),
    ]
    arcs = {arc.person.name: arc for arc in build_overlap_arcs(focal, people, 2026)}

    elder = arcs["Elder Statesman"]
    assert age_gap_caption(elder, focal) == "Elder was 50 when Focal was born"
    assert outcome_caption(elder, focal) == "Elder died when Focal was 20"

    young = arcs["Young Star"]
    assert age_gap_caption(young, focal) == "Focal was 50 when Young was born"
    assert outcome_caption(young, focal) == "Young is still alive today"

    twin = arcs["Twin Sibling"]
    assert age_gap_caption(twin, focal) == "Twin was born the same year as Focal"
    assert outcome_caption(twin, focal) == "Twin outlived Focal"
