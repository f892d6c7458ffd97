from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from adapters.layout.timeline import build_axis, place_ticks
from domain.config import ChartConfig
from domain.models import DensityWavePlan, EmptyRosterError, PersonRecord, Point, Size
from domain.ports.layout import DensityWaveLayout
from domain.services.density import peak_sample, sample_alive_counts
from domain.services.scale import YearScale


@dataclass(frozen=True)
class DensityWaveConfig:
    view_width: float = 300.0
    pad_left: float = 10.0
    pad_right: float = 10.0
    chart_top: float = 22.0
    chart_height: float = 100.0
    axis_height: float = 28.0
    max_samples: int = 180
    min_band_width: float = 2.0


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def smooth_path(points: Sequence[Point]) -> str:
    """Catmull-Rom style cubic path through ``points`` (tension 1/6)."""
    if not points:
        return ""
    if len(points) == 1:
        return f"M{_fmt(points[0].x)},{_fmt(points[0].y)}"

    parts = [f"M{_fmt(points[0].x)},{_fmt(points[0].y)}"]
    last = len(points) - 1
    for idx in range(last):
        p0 = points[max(0, idx - 1)]
        p1 = points[idx]
        p2 = points[idx + 1]
        p3 = points[min(last, idx + 2)]
        cp1 = Point(p1.x + (p2.x - p0.x) / 6, p1.y + (p2.y - p0.y) / 6)
        cp2 = Point(p2.x - (p3.x - p1.x) / 6, p2.y - (p3.y - p1.y) / 6)
        parts.append(
            f"C{_fmt(cp1.x)},{_fmt(cp1.y)} {_fmt(cp2.x)},{_fmt(cp2.y)} "
            f"{_fmt(p2.x)},{_fmt(p2.y)}"
        )
    return " ".join(parts)


class DensityWaveLayoutEngine(DensityWaveLayout):
    def __init__(
        self, chart: ChartConfig | None = None, config: DensityWaveConfig | None = None
    ) -> None:
        self.chart = chart or ChartConfig()
        self.config = config or DensityWaveConfig()

    def build_plan(
        self, people: Sequence[PersonRecord], focal: PersonRecord | None = None
    ) -> DensityWavePlan:
        if not people:
            raise EmptyRosterError("DensityWaveLayoutEngine.build_plan")
        cfg = self.config
        current_year = self.chart.current_year
        year_range, _, tick_years = build_axis(people, self.chart)
        scale = YearScale.for_canvas(year_range, cfg.view_width, cfg.pad_left, cfg.pad_right)
        axis_y = cfg.chart_top + cfg.chart_height

        samples = sample_alive_counts(people, year_range, current_year, cfg.max_samples)
        peak = peak_sample(samples)
        max_count = max(peak.count, 1)
        points = [
            Point(scale.x(sample.year), axis_y - sample.count / max_count * cfg.chart_height)
            for sample in samples
        ]
        stroke = smooth_path(points)
        area = (
            f"{stroke} L{_fmt(points[-1].x)},{_fmt(axis_y)}"
            f" L{_fmt(points[0].x)},{_fmt(axis_y)} Z"
        )

        band_x = 0.0
        band_width = 0.0
        if focal is not None:
            band_x = scale.x(focal.birth_year)
            band_width = scale.span_width(
                focal.birth_year, focal.effective_end(current_year), cfg.min_band_width
            )

        return DensityWavePlan(
            view_box=Size(cfg.view_width, axis_y + cfg.axis_height),
            year_range=year_range,
            samples=samples,
            points=points,
            stroke_path=stroke,
            area_path=area,
            peak=peak,
            peak_x=scale.x(peak.year),
            band_x=band_x,
            band_width=band_width,
            ticks=place_ticks(tick_years, scale, self.chart.axis.bce_suffix),
        )
