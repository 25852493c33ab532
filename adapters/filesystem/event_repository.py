from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Sequence

from pydantic import TypeAdapter

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import EventRecord, StyledEvent
from domain.ports.repositories import EventRepository

_EVENTS_ADAPTER = TypeAdapter(List[EventRecord])


class FileSystemEventRepository(EventRepository):
    def load(self, path: Path) -> List[EventRecord]:
        content = load_json(path)
        if isinstance(content, dict):
            content = content.get("events", [])
        events = _EVENTS_ADAPTER.validate_python(content)
        # One day column is laid out on a single clock.
        if len({EventRecord.is_aware(event.start) for event in events}) > 1:
            msg = f"{path} mixes timezone-aware and naive event times"
            raise ValueError(msg)
        return events

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, List[EventRecord]]]:
        return [(path, self.load(path)) for path in sorted(self._iter_paths(directory))]

    def save_styled(self, styled: Sequence[StyledEvent], path: Path) -> None:
        write_json_atomic(path, {"events": [self._styled_payload(item) for item in styled]})

    def _styled_payload(self, item: StyledEvent) -> dict[str, Any]:
        return {"event": item.event, "style": item.style.to_dict()}

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        yield from directory.glob("*.json")
