from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmptyRosterError(ValueError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires at least one person")
        self.operation = operation


class PersonRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    birth_year: int
    death_year: Optional[int] = None
    category: str
    approximate: bool = False
    description: Optional[str] = None

    @property
    def is_alive(self) -> bool:
        return self.death_year is None

    def effective_end(self, current_year: int) -> int:
        return self.death_year if self.death_year is not None else current_year


class NotableEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    label: str


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class YearRange:
    min_year: int
    max_year: int

    @property
    def span(self) -> int:
        return self.max_year - self.min_year

    def contains(self, year: int) -> bool:
        return self.min_year <= year <= self.max_year

    def to_dict(self) -> dict[str, int]:
        return {"min_year": self.min_year, "max_year": self.max_year}


@dataclass(frozen=True)
class TickSet:
    interval: int
    years: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.years)


@dataclass(frozen=True)
class Row:
    person: PersonRecord
    y: float
    color_index: int
    color: str


@dataclass(frozen=True)
class ArcEntry:
    person: PersonRecord
    color_index: int
    color: str
    radius: float
    start_fraction: float
    end_fraction: float
    start_angle: float
    end_angle: float
    born_during_focal_life: bool
    died_during_focal_life: bool
    age_gap: int
    overlap_years: int

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class GridSizing:
    columns: int
    rows: int
    size: int

    def to_dict(self) -> dict[str, int]:
        return {"columns": self.columns, "rows": self.rows, "size": self.size}


@dataclass(frozen=True)
class DensitySample:
    year: int
    count: int


@dataclass(frozen=True)
class YearCell:
    year: int
    age: int
    in_life: bool
    is_last_alive: bool
    event: NotableEvent | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "age": self.age,
            "in_life": self.in_life,
            "is_last_alive": self.is_last_alive,
            "event": self.event.model_dump() if self.event else None,
        }


@dataclass(frozen=True)
class YearGridPlan:
    person: PersonRecord
    step: int
    grid_end: int
    cells: List[YearCell]
    sizing: GridSizing

    def to_dict(self) -> dict[str, Any]:
        return {
            "person": self.person.model_dump(),
            "step": self.step,
            "grid_end": self.grid_end,
            "cells": [cell.to_dict() for cell in self.cells],
            "sizing": self.sizing.to_dict(),
        }


@dataclass(frozen=True)
class TickPlacement:
    year: int
    x: float
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"year": self.year, "x": self.x, "label": self.label}


@dataclass(frozen=True)
class BarPlacement:
    person: PersonRecord
    color_index: int
    color: str
    position: Point
    width: float
    height: float
    alive: bool
    arrow_end_x: float | None = None
    label_x: float = 0.0
    label_anchor: str = "start"  # "start" or "end"

    def to_dict(self) -> dict[str, Any]:
        return {
            "person": self.person.model_dump(),
            "color_index": self.color_index,
            "color": self.color,
            "x": self.position.x,
            "y": self.position.y,
            "width": self.width,
            "height": self.height,
            "alive": self.alive,
            "arrow_end_x": self.arrow_end_x,
            "label_x": self.label_x,
            "label_anchor": self.label_anchor,
        }


@dataclass(frozen=True)
class ChartPlan:
    canvas: Size
    year_range: YearRange
    tick_interval: int
    ticks: List[TickPlacement]
    bars: List[BarPlacement]
    top_offset: float
    content_height: float
    axis_y: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "canvas": {"width": self.canvas.width, "height": self.canvas.height},
            "year_range": self.year_range.to_dict(),
            "tick_interval": self.tick_interval,
            "ticks": [tick.to_dict() for tick in self.ticks],
            "bars": [bar.to_dict() for bar in self.bars],
            "top_offset": self.top_offset,
            "content_height": self.content_height,
            "axis_y": self.axis_y,
        }


@dataclass(frozen=True)
class AgeGapPlan:
    focal: PersonRecord
    view_box: Size
    year_range: YearRange
    tick_interval: int
    ticks: List[TickPlacement]
    bars: List[BarPlacement]
    selected_index: int
    axis_y: float
    annotation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "focal": self.focal.model_dump(),
            "view_box": {"width": self.view_box.width, "height": self.view_box.height},
            "year_range": self.year_range.to_dict(),
            "tick_interval": self.tick_interval,
            "ticks": [tick.to_dict() for tick in self.ticks],
            "bars": [bar.to_dict() for bar in self.bars],
            "selected_index": self.selected_index,
            "axis_y": self.axis_y,
            "annotation": self.annotation,
        }


@dataclass(frozen=True)
class ArcPlacement:
    arc: ArcEntry
    path: str
    start_point: Point
    end_point: Point
    length: float

    def to_dict(self) -> dict[str, Any]:
        arc = self.arc
        return {
            "person": arc.person.model_dump(),
            "color_index": arc.color_index,
            "color": arc.color,
            "radius": arc.radius,
            "start_fraction": arc.start_fraction,
            "end_fraction": arc.end_fraction,
            "start_angle": arc.start_angle,
            "end_angle": arc.end_angle,
            "born_during_focal_life": arc.born_during_focal_life,
            "died_during_focal_life": arc.died_during_focal_life,
            "age_gap": arc.age_gap,
            "overlap_years": arc.overlap_years,
            "path": self.path,
            "start_point": self.start_point.to_dict(),
            "end_point": self.end_point.to_dict(),
            "length": self.length,
        }


@dataclass(frozen=True)
class AgeTick:
    age: int
    angle: float
    inner: Point
    outer: Point
    label_position: Point
    anchor: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "age": self.age,
            "angle": self.angle,
            "inner": self.inner.to_dict(),
            "outer": self.outer.to_dict(),
            "label_position": self.label_position.to_dict(),
            "anchor": self.anchor,
        }


@dataclass(frozen=True)
class ContemporariesPlan:
    focal: PersonRecord
    view_box: float
    center: Point
    focal_radius: float
    clock_radius: float
    lifespan: int
    arcs: List[ArcPlacement]
    age_ticks: List[AgeTick] = field(default_factory=list)
    life_fraction: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.arcs

    def to_dict(self) -> dict[str, Any]:
        return {
            "focal": self.focal.model_dump(),
            "view_box": self.view_box,
            "center": self.center.to_dict(),
            "focal_radius": self.focal_radius,
            "clock_radius": self.clock_radius,
            "lifespan": self.lifespan,
            "arcs": [arc.to_dict() for arc in self.arcs],
            "age_ticks": [tick.to_dict() for tick in self.age_ticks],
            "life_fraction": self.life_fraction,
        }


@dataclass(frozen=True)
class DensityWavePlan:
    view_box: Size
    year_range: YearRange
    samples: List[DensitySample]
    points: List[Point]
    stroke_path: str
    area_path: str
    peak: DensitySample
    peak_x: float
    band_x: float
    band_width: float
    ticks: List[TickPlacement]

    def to_dict(self) -> dict[str, Any]:
        return {
            "view_box": {"width": self.view_box.width, "height": self.view_box.height},
            "year_range": self.year_range.to_dict(),
            "samples": [{"year": s.year, "count": s.count} for s in self.samples],
            "points": [point.to_dict() for point in self.points],
            "stroke_path": self.stroke_path,
            "area_path": self.area_path,
            "peak": {"year": self.peak.year, "count": self.peak.count},
            "peak_x": self.peak_x,
            "band_x": self.band_x,
            "band_width": self.band_width,
            "ticks": [tick.to_dict() for tick in self.ticks],
        }
