from __future__ import annotations

from collections.abc import Sequence
from typing import List

from domain.config import ChartConfig
from domain.models import (
    BarPlacement,
    ChartPlan,
    EmptyRosterError,
    PersonRecord,
    Point,
    Row,
    Size,
    TickPlacement,
    YearRange,
)
from domain.ports.layout import ChartLayoutEngine
from domain.services.rows import content_height, layout_rows, top_offset
from domain.services.scale import YearScale
from domain.services.ticks import format_year_label, plan_ticks
from domain.services.year_range import compute_year_range


def build_axis(
    people: Sequence[PersonRecord], config: ChartConfig
) -> tuple[YearRange, int, list[int]]:
    axis = config.axis
    year_range = compute_year_range(
        people,
        axis.current_year,
        padding_ratio=axis.padding_ratio,
        min_padding=axis.min_padding,
        fallback_span=axis.fallback_span,
    )
    ticks = plan_ticks(year_range, axis.tick_ladder, axis.min_tick_interval)
    return year_range, ticks.interval, list(ticks.years)


def place_ticks(years: Sequence[int], scale: YearScale, bce_suffix: str) -> List[TickPlacement]:
    return [
        TickPlacement(year=year, x=scale.x(year), label=format_year_label(year, bce_suffix))
        for year in years
    ]


class TimelineLayoutEngine(ChartLayoutEngine):
    def __init__(self, config: ChartConfig | None = None) -> None:
        self.config = config or ChartConfig()

    def build_plan(self, people: Sequence[PersonRecord], canvas: Size) -> ChartPlan:
        if not people:
            raise EmptyRosterError("TimelineLayoutEngine.build_plan")
        rows_cfg = self.config.rows
        canvas_cfg = self.config.canvas

        content = content_height(
            len(people), rows_cfg.row_height, rows_cfg.row_gap, rows_cfg.bottom_padding
        )
        origin_y = top_offset(
            canvas.height, content, canvas_cfg.reserved_top, canvas_cfg.vertical_bias
        )
        rows = layout_rows(
            people,
            origin_y,
            row_height=rows_cfg.row_height,
            row_gap=rows_cfg.row_gap,
            palette=self.config.palette,
        )

        year_range, interval, tick_years = build_axis(people, self.config)
        scale = YearScale.for_canvas(
            year_range, canvas.width, canvas_cfg.pad_left, canvas_cfg.pad_right
        )
        ticks = place_ticks(tick_years, scale, self.config.axis.bce_suffix)
        bars = [self._place_bar(row, scale, canvas) for row in rows]

        return ChartPlan(
            canvas=canvas,
            year_range=year_range,
            tick_interval=interval,
            ticks=ticks,
            bars=bars,
            top_offset=origin_y,
            content_height=content,
            axis_y=origin_y + content - rows_cfg.bottom_padding,
        )

    def _place_bar(self, row: Row, scale: YearScale, canvas: Size) -> BarPlacement:
        canvas_cfg = self.config.canvas
        person = row.person
        end_year = person.effective_end(self.config.current_year)
        start_x = scale.x(person.birth_year)
        end_x = scale.x(end_year)
        width = scale.span_width(person.birth_year, end_year, canvas_cfg.min_bar_width)

        arrow_end_x: float | None = None
        right_edge = end_x
        if person.is_alive:
            arrow_end_x = min(
                end_x + canvas_cfg.arrow_extension, canvas.width - canvas_cfg.arrow_margin
            )
            right_edge = arrow_end_x

        # Name goes right of the bar unless it would run off the canvas.
        label_width = len(person.name) * canvas_cfg.char_width
        right_label_x = right_edge + canvas_cfg.label_gap
        if right_label_x + label_width > canvas.width - canvas_cfg.label_margin:
            label_x = start_x - canvas_cfg.label_inset
            anchor = "end"
        else:
            label_x = right_label_x
            anchor = "start"

        return BarPlacement(
            person=person,
            color_index=row.color_index,
            color=row.color,
            position=Point(start_x, row.y),
            width=width,
            height=self.config.rows.row_height,
            alive=person.is_alive,
            arrow_end_x=arrow_end_x,
            label_x=label_x,
            label_anchor=anchor,
        )
