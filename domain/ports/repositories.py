from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import EventRecord, StyledEvent


class EventRepository(Protocol):
    def load(self, path: Path) -> Sequence[EventRecord]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, list[EventRecord]]]: ...

    def save_styled(self, styled: Sequence[StyledEvent], path: Path) -> None: ...
