from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from app.config import AppSettings, LayoutSettings
from domain.config import ChartConfig
from domain.models import PersonRecord


def _clear_lifelines_env() -> None:
    for key in list(os.environ):
        if key.startswith("LIFELINES_"):
            os.environ.pop(key, None)


_clear_lifelines_env()


@pytest.fixture(autouse=True)
def clear_lifelines_env() -> Generator[None, None, None]:
    _clear_lifelines_env()
    yield
    _clear_lifelines_env()


@pytest.fixture
def person_factory() -> Callable[..., PersonRecord]:
    def _factory(
        name: str,
        birth_year: int,
        death_year: int | None = None,
        category: str = "Scientists",
        **extra: object,
    ) -> PersonRecord:
        return PersonRecord.model_validate(
            {
                "name": name,
                "birth_year": birth_year,
                "death_year": death_year,
                "category": category,
                **extra,
            }
        )

    return _factory


@pytest.fixture
def roster(person_factory: Callable[..., PersonRecord]) -> list[PersonRecord]:
    return [
        person_factory("Albert Einstein", 1879, 1955, "Scientists"),
        person_factory("Marie Curie", 1867, 1934, "Scientists"),
        person_factory("Pablo Picasso", 1881, 1973, "Artists"),
        person_factory("Queen Victoria", 1819, 1901, "Rulers"),
        person_factory("Taylor Swift", 1989, None, "Musicians"),
    ]


@pytest.fixture
def chart_config() -> ChartConfig:
    return ChartConfig()


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(layout=LayoutSettings())


@pytest.fixture
def app_settings_factory(app_settings: AppSettings) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return app_settings.model_copy(update=overrides)

    return _factory
