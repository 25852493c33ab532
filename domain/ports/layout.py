from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from domain.models import PositionedEvent, SlotRange, StyledEvent

if TYPE_CHECKING:
    from domain.services.positioned_events import EventArena


class EventAccessors(Protocol):
    def start(self, event: Any) -> Any: ...

    def end(self, event: Any) -> Any: ...


class SlotMetrics(Protocol):
    def get_range(self, start: Any, end: Any) -> SlotRange | Mapping[str, Any]: ...


class PlacementStrategy(Protocol):
    overlapping: bool

    def place(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        ...

    def resolve(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        ...


class DayLayoutEngine(Protocol):
    def get_styled_events(
        self,
        events: Sequence[Any],
        *,
        accessors: EventAccessors,
        slot_metrics: SlotMetrics,
    ) -> list[StyledEvent]:
        ...
