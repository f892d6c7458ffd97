from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from adapters.layout.timeline import build_axis, place_ticks
from domain.config import ChartConfig
from domain.models import AgeGapPlan, BarPlacement, PersonRecord, Point, Row, Size
from domain.ports.layout import AgeGapLayout
from domain.services.lifespan import lifespan_annotation
from domain.services.rows import layout_rows
from domain.services.scale import YearScale


@dataclass(frozen=True)
class AgeGapConfig:
    view_width: float = 300.0
    pad_left: float = 8.0
    pad_right: float = 8.0
    bar_height: float = 4.0
    selected_bar_height: float = 8.0
    row_height: float = 17.0
    top_pad: float = 14.0
    axis_height: float = 28.0
    min_bar_width: float = 1.5
    min_selected_bar_width: float = 2.0
    char_width: float = 3.7
    label_offset: float = 5.0


class AgeGapLayoutEngine(AgeGapLayout):
    def __init__(
        self, chart: ChartConfig | None = None, config: AgeGapConfig | None = None
    ) -> None:
        self.chart = chart or ChartConfig()
        self.config = config or AgeGapConfig()

    def build_plan(self, people: Sequence[PersonRecord], focal: PersonRecord) -> AgeGapPlan:
        cfg = self.config
        rows = layout_rows(
            people,
            cfg.top_pad,
            row_height=cfg.row_height,
            row_gap=0.0,
            palette=self.chart.palette,
        )
        selected_index = next(
            (idx for idx, row in enumerate(rows) if row.person.name == focal.name), None
        )
        if selected_index is None:
            msg = f"{focal.name!r} is not part of the roster"
            raise ValueError(msg)

        year_range, interval, tick_years = build_axis(people, self.chart)
        scale = YearScale.for_canvas(year_range, cfg.view_width, cfg.pad_left, cfg.pad_right)
        bars = [
            self._place_bar(row, scale, selected=idx == selected_index)
            for idx, row in enumerate(rows)
        ]
        axis_y = cfg.top_pad + len(rows) * cfg.row_height

        return AgeGapPlan(
            focal=focal,
            view_box=Size(cfg.view_width, axis_y + cfg.axis_height),
            year_range=year_range,
            tick_interval=interval,
            ticks=place_ticks(tick_years, scale, self.chart.axis.bce_suffix),
            bars=bars,
            selected_index=selected_index,
            axis_y=axis_y,
            annotation=lifespan_annotation(focal, people, self.chart.current_year),
        )

    def _place_bar(self, row: Row, scale: YearScale, *, selected: bool) -> BarPlacement:
        cfg = self.config
        person = row.person
        end_year = person.effective_end(self.chart.current_year)
        start_x = scale.x(person.birth_year)
        end_x = scale.x(end_year)
        height = cfg.selected_bar_height if selected else cfg.bar_height
        min_width = cfg.min_selected_bar_width if selected else cfg.min_bar_width

        label_x = end_x + cfg.label_offset
        anchor = "start"
        if selected:
            right_gap = cfg.view_width - cfg.pad_right - (end_x + cfg.label_offset)
            if right_gap < len(person.name) * cfg.char_width:
                label_x = start_x - cfg.label_offset
                anchor = "end"

        return BarPlacement(
            person=person,
            color_index=row.color_index,
            color=row.color,
            position=Point(start_x, row.y + (cfg.row_height - height) / 2),
            width=scale.span_width(person.birth_year, end_year, min_width),
            height=height,
            alive=person.is_alive,
            label_x=label_x,
            label_anchor=anchor,
        )
