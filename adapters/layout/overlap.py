from __future__ import annotations

import logging
from collections.abc import Sequence

from adapters.layout.stacking import resolve_stacked_styles
from domain.models import LayoutValidationError, PositionedEvent
from domain.ports.layout import PlacementStrategy
from domain.services.positioned_events import EventArena

logger = logging.getLogger(__name__)


def on_same_row(
    row: PositionedEvent, event: PositionedEvent, minimum_start_difference: float
) -> bool:
    return (
        # Occupies the same start slot.
        abs(event.start - row.start) < minimum_start_difference
        # Starts while the row is still running.
        or row.start < event.start < row.end
    )


class OverlapPlacement(PlacementStrategy):
    """Stack overlapping events side by side, letting them grow over each other.

    Every event becomes a container, a row inside a container, or a leaf
    beside a row. Containers are the events themselves and are emitted.
    """

    overlapping = True

    def __init__(self, minimum_start_difference: float | None) -> None:
        if minimum_start_difference is None or minimum_start_difference < 0:
            msg = "minimum_start_difference must be a non-negative number for overlap layout"
            raise LayoutValidationError(msg)
        self.minimum_start_difference = minimum_start_difference

    def place(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        containers: list[PositionedEvent] = []

        for event in events:
            container = self._find_container(containers, event)
            if container is None:
                event.rows = []
                event.is_container = True
                containers.append(event)
                logger.debug("Event %d opens container %d", event.handle, len(containers) - 1)
                continue

            event.container = container.handle
            row = self._find_row(arena, container, event)
            if row is None:
                event.leaves = []
                container.rows.append(event.handle)
            else:
                row.leaves.append(event.handle)
                event.row = row.handle

    def resolve(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        resolve_stacked_styles(arena, events)

    def _find_container(
        self, containers: Sequence[PositionedEvent], event: PositionedEvent
    ) -> PositionedEvent | None:
        for container in containers:
            if container.container_end > event.start:
                return container
            if abs(event.start - container.start) < self.minimum_start_difference:
                return container
        return None

    def _find_row(
        self, arena: EventArena, container: PositionedEvent, event: PositionedEvent
    ) -> PositionedEvent | None:
        for handle in reversed(container.rows):
            row = arena[handle]
            if on_same_row(row, event, self.minimum_start_difference):
                return row
        return None
