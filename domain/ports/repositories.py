from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import NotableEvent, PersonRecord


class RosterRepository(Protocol):
    def load(self, path: Path) -> Sequence[PersonRecord]: ...

    def load_all_with_paths(
        self, directory: Path
    ) -> Sequence[tuple[Path, Sequence[PersonRecord]]]: ...

    def load_events(self, path: Path) -> dict[str, list[NotableEvent]]: ...

    def save(self, people: Sequence[PersonRecord], path: Path) -> None: ...
