from __future__ import annotations

import math
from collections.abc import Sequence

from domain.config import ChartConfig
from domain.models import AgeTick, ArcPlacement, ContemporariesPlan, PersonRecord, Point
from domain.ports.layout import ContemporariesLayout
from domain.services.lifespan import life_clock_fraction
from domain.services.overlap_arcs import age_tick_marks, build_overlap_arcs, focal_lifespan


def _fmt(value: float) -> str:
    return f"{round(value, 2):g}"


def polar_to_xy(center: Point, radius: float, degrees: float) -> Point:
    # 0 degrees points at 12 o'clock, angles grow clockwise.
    rad = math.radians(degrees - 90)
    return Point(
        round(center.x + radius * math.cos(rad), 2),
        round(center.y + radius * math.sin(rad), 2),
    )


def describe_arc(
    center: Point, radius: float, start: float, end: float, max_sweep: float = 359.9
) -> str:
    end = min(end, start + max_sweep)
    start_point = polar_to_xy(center, radius, start)
    end_point = polar_to_xy(center, radius, end)
    large_arc = 1 if end - start > 180 else 0
    return (
        f"M{_fmt(start_point.x)},{_fmt(start_point.y)} "
        f"A{_fmt(radius)},{_fmt(radius)} 0 {large_arc},1 "
        f"{_fmt(end_point.x)},{_fmt(end_point.y)}"
    )


def arc_length(radius: float, sweep: float) -> float:
    return radius * math.radians(abs(sweep))


def tick_anchor(degrees: float) -> str:
    if degrees < 10 or degrees > 350:
        return "middle"
    return "start" if degrees < 180 else "end"


class ContemporariesLayoutEngine(ContemporariesLayout):
    def __init__(self, config: ChartConfig | None = None) -> None:
        self.config = config or ChartConfig()

    def build_plan(
        self, focal: PersonRecord, people: Sequence[PersonRecord]
    ) -> ContemporariesPlan:
        arc_cfg = self.config.arcs
        current_year = self.config.current_year
        center = Point(arc_cfg.view_box / 2, arc_cfg.view_box / 2)
        clock_radius = arc_cfg.max_radius + arc_cfg.clock_ring_offset

        arcs = build_overlap_arcs(
            focal,
            people,
            current_year,
            max_contemporaries=arc_cfg.max_contemporaries,
            min_radius=arc_cfg.min_radius,
            max_radius=arc_cfg.max_radius,
            max_sweep=arc_cfg.max_sweep,
            palette=self.config.palette,
        )
        placements = [
            ArcPlacement(
                arc=arc,
                path=describe_arc(
                    center, arc.radius, arc.start_angle, arc.end_angle, arc_cfg.max_sweep
                ),
                start_point=polar_to_xy(center, arc.radius, arc.start_angle),
                end_point=polar_to_xy(center, arc.radius, arc.end_angle),
                length=arc_length(arc.radius, arc.sweep),
            )
            for arc in arcs
        ]

        lifespan = focal_lifespan(focal, current_year)
        age_ticks: list[AgeTick] = []
        for age in age_tick_marks(lifespan):
            degrees = age / lifespan * 360
            age_ticks.append(
                AgeTick(
                    age=age,
                    angle=degrees,
                    inner=polar_to_xy(center, clock_radius - 5, degrees),
                    outer=polar_to_xy(center, clock_radius + 1, degrees),
                    label_position=polar_to_xy(center, clock_radius + 9, degrees),
                    anchor=tick_anchor(degrees),
                )
            )

        return ContemporariesPlan(
            focal=focal,
            view_box=arc_cfg.view_box,
            center=center,
            focal_radius=(arc_cfg.min_radius + arc_cfg.max_radius) / 2,
            clock_radius=clock_radius,
            lifespan=lifespan,
            arcs=placements,
            age_ticks=age_ticks,
            life_fraction=life_clock_fraction(focal, current_year),
        )
