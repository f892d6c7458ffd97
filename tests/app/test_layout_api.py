from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.config import AppSettings, AxisSettings, LayoutSettings
from app.web_main import create_app
from domain.models import PersonRecord


@pytest.fixture
def client(app_settings: AppSettings) -> TestClient:
    return TestClient(create_app(app_settings))


@pytest.fixture
def people_payload(roster: list[PersonRecord]) -> list[dict[str, Any]]:
    return [person.model_dump() for person in roster]


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_chart_layout(client: TestClient, people_payload: list[dict[str, Any]]) -> None:
    response = client.post(
        "/api/layout/chart", json={"people": people_payload, "width": 1280, "height": 800}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["year_range"] == {"min_year": 1811, "max_year": 2034}
    assert body["tick_interval"] == 50
    assert [bar["person"]["name"] for bar in body["bars"]][0] == "Queen Victoria"
    assert body["bars"][-1]["alive"] is True
    assert body["bars"][-1]["arrow_end_x"] is not None


def test_chart_layout_rejects_empty_roster(client: TestClient) -> None:
    response = client.post("/api/layout/chart", json={"people": []})

    assert response.status_code == 422


def test_chart_layout_rejects_malformed_people(client: TestClient) -> None:
    response = client.post(
        "/api/layout/chart", json={"people": [{"name": "No Years", "category": "Artists"}]}
    )

    assert response.status_code == 422


def test_age_gap_layout(client: TestClient, people_payload: list[dict[str, Any]]) -> None:
    response = client.post(
        "/api/layout/age-gap", json={"people": people_payload, "focal": "Albert Einstein"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["selected_index"] == 2
    assert body["annotation"] == "3rd longest-lived"


def test_unknown_focal_person(client: TestClient, people_payload: list[dict[str, Any]]) -> None:
    response = client.post(
        "/api/layout/contemporaries", json={"people": people_payload, "focal": "Nobody"}
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Person not found: Nobody"


def test_contemporaries_layout(
    client: TestClient, people_payload: list[dict[str, Any]]
) -> None:
    response = client.post(
        "/api/layout/contemporaries", json={"people": people_payload, "focal": "Albert Einstein"}
    )

    assert response.status_code == 200
    body = response.json()
    names = [arc["person"]["name"] for arc in body["arcs"]]
    assert sorted(names) == ["Marie Curie", "Pablo Picasso", "Queen Victoria"]
    assert names[0] == "Pablo Picasso"
    assert all(arc["path"].startswith("M") for arc in body["arcs"])
    assert body["lifespan"] == 76


def test_density_layout(client: TestClient, people_payload: list[dict[str, Any]]) -> None:
    response = client.post(
        "/api/layout/density", json={"people": people_payload, "focal": "Marie Curie"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["peak"]["count"] == 4
    assert body["band_width"] > 0
    assert body["area_path"].endswith("Z")


def test_year_grid_layout(client: TestClient, roster: list[PersonRecord]) -> None:
    einstein = roster[0]
    response = client.post(
        "/api/layout/year-grid",
        json={
            "person": einstein.model_dump(),
            "events": [{"year": 1921, "label": "Nobel Prize"}],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["step"] == 2
    assert len(body["cells"]) == 51
    labelled = [cell for cell in body["cells"] if cell["event"]]
    assert [cell["year"] for cell in labelled] == [1921]


def test_settings_drive_the_layout(
    app_settings_factory: Callable[..., AppSettings], person_factory: Callable[..., PersonRecord]
) -> None:
    settings = app_settings_factory(
        layout=LayoutSettings(axis=AxisSettings(current_year=2000))
    )
    client = TestClient(create_app(settings))
    person = person_factory("Alive", 1900)

    response = client.post("/api/layout/chart", json={"people": [person.model_dump()]})

    assert response.json()["year_range"] == {"min_year": 1895, "max_year": 2005}
