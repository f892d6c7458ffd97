from __future__ import annotations

import logging
import re
from typing import Any, Optional, TypeVar

import orjson
from pydantic import BaseModel, Field, StrictBool, StrictStr, ValidationError, field_validator

from domain.models import NotableEvent, PersonRecord

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\n?", re.MULTILINE)
_FENCE_CLOSE = re.compile(r"\n?```$", re.MULTILINE)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _ensure_number(value: Any) -> Any:
    # JSON numbers only; integral floats such as 1879.0 pass on to int coercion.
    if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
        msg = "must be a JSON number"
        raise ValueError(msg)
    return value


class ResolvedPerson(BaseModel):
    """One entry of a resolver response; every key except ``description`` is required."""

    name: StrictStr = Field(..., min_length=1)
    birth_year: int
    death_year: Optional[int]
    category: StrictStr
    approximate: StrictBool
    description: Optional[StrictStr] = None

    @field_validator("birth_year", "death_year", mode="before")
    @classmethod
    def ensure_year_is_number(cls, value: Any) -> Any:
        return _ensure_number(value)

    def to_person(self) -> PersonRecord:
        return PersonRecord.model_validate(self.model_dump())


class ResolvedEvent(BaseModel):
    year: int
    label: StrictStr

    @field_validator("year", mode="before")
    @classmethod
    def ensure_year_is_number(cls, value: Any) -> Any:
        return _ensure_number(value)

    def to_event(self) -> NotableEvent:
        return NotableEvent(year=self.year, label=self.label)


def strip_code_fence(raw_text: str) -> str:
    cleaned = _FENCE_OPEN.sub("", raw_text, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned.strip()


def _load_array(raw_text: str) -> list[Any]:
    try:
        data = orjson.loads(strip_code_fence(raw_text))
    except orjson.JSONDecodeError as exc:
        msg = f"Payload is not valid JSON: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(data, list):
        msg = "Payload was not an array"
        raise ValueError(msg)
    return data


def _validate_items(items: list[Any], model: type[ModelT]) -> list[ModelT]:
    valid: list[ModelT] = []
    for idx, item in enumerate(items):
        try:
            valid.append(model.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "Dropping %s entry %d: %s", model.__name__, idx, exc.errors(include_url=False)
            )
    return valid


def parse_people(items: list[Any]) -> list[PersonRecord]:
    return [entry.to_person() for entry in _validate_items(items, ResolvedPerson)]


def parse_people_payload(raw_text: str) -> list[PersonRecord]:
    return parse_people(_load_array(raw_text))


def parse_events_payload(raw_text: str) -> list[NotableEvent]:
    return [entry.to_event() for entry in _validate_items(_load_array(raw_text), ResolvedEvent)]
