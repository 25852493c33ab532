from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from domain.models import SlotRange


@lru_cache(maxsize=1)
def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")


def events_fixture_path(name: str) -> Path:
    return repo_root() / "examples" / "events" / name


class MinuteSlotMetrics:
    """Identity slot metrics: timestamps are already minutes of the day."""

    def get_range(self, start: float, end: float) -> SlotRange:
        return SlotRange(
            start=start,
            end=end,
            start_date=start,
            end_date=end,
            top=start,
            height=end - start,
        )


def make_events(*ranges: tuple[float, float]) -> list[dict[str, Any]]:
    return [
        {"id": chr(ord("a") + index), "start": start, "end": end}
        for index, (start, end) in enumerate(ranges)
    ]


def styles_by_id(styled: list[Any]) -> dict[str, Any]:
    return {item.event["id"]: item.style for item in styled}
