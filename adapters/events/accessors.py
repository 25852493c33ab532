from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from domain.ports.layout import EventAccessors


@dataclass(frozen=True)
class KeyAccessors(EventAccessors):
    """Read event bounds from mapping keys or, failing that, attributes."""

    start_key: str = "start"
    end_key: str = "end"

    def start(self, event: Any) -> Any:
        return self._read(event, self.start_key)

    def end(self, event: Any) -> Any:
        return self._read(event, self.end_key)

    def _read(self, event: Any, key: str) -> Any:
        if isinstance(event, Mapping):
            return event.get(key)
        return getattr(event, key, None)
