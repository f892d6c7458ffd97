from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from domain.models import (
    AgeGapPlan,
    ChartPlan,
    ContemporariesPlan,
    DensityWavePlan,
    NotableEvent,
    PersonRecord,
    Size,
    YearGridPlan,
)


class ChartLayoutEngine(Protocol):
    def build_plan(self, people: Sequence[PersonRecord], canvas: Size) -> ChartPlan:
        ...


class AgeGapLayout(Protocol):
    def build_plan(self, people: Sequence[PersonRecord], focal: PersonRecord) -> AgeGapPlan:
        ...


class ContemporariesLayout(Protocol):
    def build_plan(
        self, focal: PersonRecord, people: Sequence[PersonRecord]
    ) -> ContemporariesPlan:
        ...


class DensityWaveLayout(Protocol):
    def build_plan(
        self, people: Sequence[PersonRecord], focal: PersonRecord | None = None
    ) -> DensityWavePlan:
        ...


class YearGridLayout(Protocol):
    def build_plan(
        self, person: PersonRecord, events: Sequence[NotableEvent], area: Size
    ) -> YearGridPlan:
        ...
