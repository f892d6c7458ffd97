from __future__ import annotations

from dataclasses import dataclass

from domain.models import YearRange


def year_to_x(
    year: float, min_year: int, max_year: int, left_pad: float, chart_width: float
) -> float:
    return left_pad + (year - min_year) / (max_year - min_year) * chart_width


@dataclass(frozen=True)
class YearScale:
    year_range: YearRange
    left_pad: float
    chart_width: float

    @classmethod
    def for_canvas(
        cls, year_range: YearRange, canvas_width: float, pad_left: float, pad_right: float
    ) -> YearScale:
        return cls(year_range, pad_left, max(0.0, canvas_width - pad_left - pad_right))

    def x(self, year: float) -> float:
        return year_to_x(
            year,
            self.year_range.min_year,
            self.year_range.max_year,
            self.left_pad,
            self.chart_width,
        )

    def span_width(self, start: float, end: float, min_width: float = 2.0) -> float:
        # Reversed or zero-length lifespans still get a visible sliver.
        return max(min_width, self.x(end) - self.x(start))
