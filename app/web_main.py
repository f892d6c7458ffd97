from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import cast

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field

from adapters.layout.age_gap import AgeGapLayoutEngine
from adapters.layout.density import DensityWaveLayoutEngine
from adapters.layout.radial import ContemporariesLayoutEngine
from adapters.layout.timeline import TimelineLayoutEngine
from adapters.layout.year_grid import YearGridLayoutEngine
from app.config import AppSettings, load_settings
from domain.models import EmptyRosterError, NotableEvent, PersonRecord, Size

logger = logging.getLogger(__name__)


class ChartRequest(BaseModel):
    people: list[PersonRecord] = Field(..., min_length=1)
    width: float = Field(default=1280.0, ge=0)
    height: float = Field(default=800.0, ge=0)


class FocalRequest(BaseModel):
    people: list[PersonRecord] = Field(..., min_length=1)
    focal: str = Field(..., min_length=1)


class DensityRequest(BaseModel):
    people: list[PersonRecord] = Field(..., min_length=1)
    focal: str | None = None


class YearGridRequest(BaseModel):
    person: PersonRecord
    events: list[NotableEvent] = Field(default_factory=list)
    width: float = Field(default=480.0, gt=0)
    height: float = Field(default=420.0, gt=0)


@dataclass(frozen=True)
class LayoutContext:
    settings: AppSettings
    timeline: TimelineLayoutEngine
    age_gap: AgeGapLayoutEngine
    contemporaries: ContemporariesLayoutEngine
    density: DensityWaveLayoutEngine
    year_grid: YearGridLayoutEngine


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.title)

    chart_config = settings.layout.to_chart_config()
    app.state.context = LayoutContext(
        settings=settings,
        timeline=TimelineLayoutEngine(chart_config),
        age_gap=AgeGapLayoutEngine(chart_config),
        contemporaries=ContemporariesLayoutEngine(chart_config),
        density=DensityWaveLayoutEngine(chart_config),
        year_grid=YearGridLayoutEngine(chart_config),
    )

    @app.get("/health")
    def health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.post("/api/layout/chart")
    def api_chart(
        payload: ChartRequest, context: LayoutContext = Depends(get_context)
    ) -> ORJSONResponse:
        try:
            plan = context.timeline.build_plan(payload.people, Size(payload.width, payload.height))
        except EmptyRosterError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        logger.info("Laid out chart for %d people", len(plan.bars))
        return ORJSONResponse(plan.to_dict())

    @app.post("/api/layout/age-gap")
    def api_age_gap(
        payload: FocalRequest, context: LayoutContext = Depends(get_context)
    ) -> ORJSONResponse:
        focal = find_person(payload.people, payload.focal)
        plan = context.age_gap.build_plan(payload.people, focal)
        return ORJSONResponse(plan.to_dict())

    @app.post("/api/layout/contemporaries")
    def api_contemporaries(
        payload: FocalRequest, context: LayoutContext = Depends(get_context)
    ) -> ORJSONResponse:
        focal = find_person(payload.people, payload.focal)
        plan = context.contemporaries.build_plan(focal, payload.people)
        logger.info("Found %d contemporaries for %s", len(plan.arcs), focal.name)
        return ORJSONResponse(plan.to_dict())

    @app.post("/api/layout/density")
    def api_density(
        payload: DensityRequest, context: LayoutContext = Depends(get_context)
    ) -> ORJSONResponse:
        focal = find_person(payload.people, payload.focal) if payload.focal else None
        plan = context.density.build_plan(payload.people, focal)
        return ORJSONResponse(plan.to_dict())

    @app.post("/api/layout/year-grid")
    def api_year_grid(
        payload: YearGridRequest, context: LayoutContext = Depends(get_context)
    ) -> ORJSONResponse:
        plan = context.year_grid.build_plan(
            payload.person, payload.events, Size(payload.width, payload.height)
        )
        return ORJSONResponse(plan.to_dict())

    return app


def get_context(request: Request) -> LayoutContext:
    return cast(LayoutContext, request.app.state.context)


def find_person(people: Sequence[PersonRecord], name: str) -> PersonRecord:
    for person in people:
        if person.name == name:
            return person
    raise HTTPException(status_code=404, detail=f"Person not found: {name}")


app = create_app(load_settings())
