from __future__ import annotations

from collections.abc import Sequence

from domain.config import ChartConfig
from domain.models import NotableEvent, PersonRecord, Size, YearGridPlan
from domain.ports.layout import YearGridLayout
from domain.services.year_grid import plan_year_grid


class YearGridLayoutEngine(YearGridLayout):
    def __init__(self, config: ChartConfig | None = None) -> None:
        self.config = config or ChartConfig()

    def build_plan(
        self, person: PersonRecord, events: Sequence[NotableEvent], area: Size
    ) -> YearGridPlan:
        return plan_year_grid(
            person,
            events,
            area.width,
            area.height,
            self.config.grid,
            self.config.current_year,
        )
