from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Iterable, List

import orjson

from domain.models import NotableEvent, PersonRecord
from domain.ports.repositories import RosterRepository

logger = logging.getLogger(__name__)


class FileSystemRosterRepository(RosterRepository):
    """Rosters stored as JSON: a bare list of people, or an object with a
    ``people`` list and an optional ``events`` mapping of name to events."""

    def load(self, path: Path) -> List[PersonRecord]:
        people = [PersonRecord.model_validate(item) for item in self._people_items(path)]
        logger.debug("Loaded %d people from %s", len(people), path)
        return people

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, List[PersonRecord]]]:
        return [(path, self.load(path)) for path in sorted(self._iter_paths(directory))]

    def load_events(self, path: Path) -> dict[str, list[NotableEvent]]:
        content = self._read(path)
        if not isinstance(content, dict):
            return {}
        raw_events = content.get("events") or {}
        if not isinstance(raw_events, dict):
            msg = f"{path}: 'events' must map names to event lists"
            raise ValueError(msg)
        return {
            str(name): [NotableEvent.model_validate(item) for item in items]
            for name, items in raw_events.items()
        }

    def save(self, people: Sequence[PersonRecord], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [person.model_dump(exclude_none=True) for person in people]
        tmp_path = path.with_suffix(f"{path.suffix}.tmp")
        tmp_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        tmp_path.replace(path)

    def _people_items(self, path: Path) -> list[Any]:
        content = self._read(path)
        if isinstance(content, dict):
            content = content.get("people")
        if not isinstance(content, list):
            msg = f"{path}: expected a list of people or an object with a 'people' list"
            raise ValueError(msg)
        return content

    def _read(self, path: Path) -> Any:
        return orjson.loads(path.read_bytes())

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        yield from directory.glob("*.json")
