from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime, time
from numbers import Real
from typing import Any

from domain.models import LayoutValidationError, PositionedEvent, SlotRange
from domain.ports.layout import EventAccessors, SlotMetrics


def to_millis(value: Any) -> float:
    if isinstance(value, datetime):
        return value.timestamp() * 1000
    if isinstance(value, date):
        return datetime.combine(value, time.min).timestamp() * 1000
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    msg = f"Unsupported timestamp value: {value!r}"
    raise LayoutValidationError(msg)


def sort_by_render(events: Iterable[PositionedEvent]) -> list[PositionedEvent]:
    # Earlier start first, longer event first on equal starts; ties keep input order.
    return sorted(events, key=lambda event: (event.start_ms, -event.end_ms))


class EventArena:
    """Owns every node of one layout pass; nodes refer to each other by handle."""

    def __init__(self, accessors: EventAccessors, slot_metrics: SlotMetrics) -> None:
        self.accessors = accessors
        self.slot_metrics = slot_metrics
        self._nodes: list[PositionedEvent] = []

    def __getitem__(self, handle: int) -> PositionedEvent:
        return self._nodes[handle]

    def __iter__(self) -> Iterator[PositionedEvent]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def wrap(self, data: Any, *, overlapping: bool = False) -> PositionedEvent:
        start_value = self.accessors.start(data)
        end_value = self.accessors.end(data)
        if start_value is None or end_value is None:
            msg = f"Event has no start or end: {data!r}"
            raise LayoutValidationError(msg)

        # Raw values are opaque here; only the slot range has to be comparable.
        slot = SlotRange.from_value(self.slot_metrics.get_range(start_value, end_value))
        start_ms = to_millis(slot.start_date)
        end_ms = to_millis(slot.end_date)
        if slot.end < slot.start or end_ms < start_ms:
            msg = f"Event ends before it starts: {data!r}"
            raise LayoutValidationError(msg)

        node = PositionedEvent(
            handle=len(self._nodes),
            data=data,
            start=slot.start,
            end=slot.end,
            start_ms=start_ms,
            end_ms=end_ms,
            top=slot.top,
            height=slot.height,
            overlapping=overlapping,
            container_end=slot.end,
        )
        self._nodes.append(node)
        return node

    def wrap_all(
        self, events: Sequence[Any], *, overlapping: bool = False
    ) -> list[PositionedEvent]:
        return [self.wrap(event, overlapping=overlapping) for event in events]

    def spawn_container(self, source: PositionedEvent) -> PositionedEvent:
        """Create a synthetic, never emitted container spanning ``source``."""
        node = PositionedEvent(
            handle=len(self._nodes),
            data=source.data,
            start=source.start,
            end=source.end,
            start_ms=source.start_ms,
            end_ms=source.end_ms,
            top=source.top,
            height=source.height,
            synthetic=True,
            is_container=True,
            container_end=source.end,
            rows=[],
        )
        self._nodes.append(node)
        return node
