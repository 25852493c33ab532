from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from domain.models import PositionedEvent
from domain.ports.layout import PlacementStrategy
from domain.services.positioned_events import EventArena

logger = logging.getLogger(__name__)

MAX_WIDTH = 100.0


def ends_after_start(event: PositionedEvent, other: PositionedEvent) -> bool:
    return other.end > event.start


def intervals_intersect(event: PositionedEvent, other: PositionedEvent) -> bool:
    return event.start < other.end and other.start < event.end


def group_columns(events: Sequence[PositionedEvent]) -> list[list[PositionedEvent]]:
    count = max((event.column for event in events if event.column is not None), default=-1) + 1
    columns: list[list[PositionedEvent]] = [[] for _ in range(count)]
    for event in events:
        if event.column is not None:
            columns[event.column].append(event)
    return columns


class ColumnPlacement(PlacementStrategy):
    """Pack events into columns so no two events in a column overlap.

    Each event then stretches right until the first column holding an event
    it overlaps.
    """

    overlapping = False

    def overlaps(self, event: PositionedEvent, other: PositionedEvent) -> bool:
        return ends_after_start(event, other)

    def place(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        columns: list[list[PositionedEvent]] = []
        for event in events:
            for index, column in enumerate(columns):
                if not any(self.overlaps(event, member) for member in column):
                    event.column = index
                    column.append(event)
                    break
            else:
                event.column = len(columns)
                columns.append([event])
                logger.debug("Event %d opens column %d", event.handle, event.column)

    def resolve(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        columns = group_columns(events)
        if not columns:
            return

        column_width = MAX_WIDTH / len(columns)
        for event in events:
            stop = next(
                (
                    index
                    for index in range(event.column + 1, len(columns))
                    if any(self.overlaps(event, other) for other in columns[index])
                ),
                len(columns),
            )
            event.width = (stop - event.column) * column_width
            event.x_offset = event.column * column_width

        self._finish(columns, column_width, events)

    def _finish(
        self,
        columns: Sequence[Sequence[PositionedEvent]],
        column_width: float,
        events: Sequence[PositionedEvent],
    ) -> None:
        for event in events:
            event.z_index = math.floor(event.x_offset)


class BalancedColumnPlacement(ColumnPlacement):
    """Column packing that hands spare width back to single-overlap neighbours.

    An event spanning several columns shares its width with the chain of
    events directly to its left that only overlap one event on their right.
    Earlier events in render order are stacked on top.
    """

    def overlaps(self, event: PositionedEvent, other: PositionedEvent) -> bool:
        return intervals_intersect(event, other)

    def _finish(
        self,
        columns: Sequence[Sequence[PositionedEvent]],
        column_width: float,
        events: Sequence[PositionedEvent],
    ) -> None:
        for event in events:
            if event.adjusted or event.width <= column_width:
                continue
            self._redistribute(columns, event)

        for rank, event in enumerate(events):
            event.z_index = len(events) - 1 - rank

    def _redistribute(
        self, columns: Sequence[Sequence[PositionedEvent]], event: PositionedEvent
    ) -> None:
        stacked: list[PositionedEvent] = []
        frontier = event
        while frontier.column > 0:
            neighbours = [
                other for other in columns[frontier.column - 1] if self.overlaps(frontier, other)
            ]
            if len(neighbours) != 1:
                break
            neighbour = neighbours[0]
            if neighbour.adjusted or self._overlaps_to_right(columns, neighbour) != 1:
                break
            stacked.append(neighbour)
            frontier = neighbour

        if not stacked:
            return

        group = [*reversed(stacked), event]
        share = sum(member.width for member in group) / len(group)
        offset = group[0].x_offset
        for member in group:
            member.x_offset = offset
            member.width = share
            member.adjusted = True
            offset += share
        logger.debug("Event %d shares its width with %d neighbours", event.handle, len(stacked))

    def _overlaps_to_right(
        self, columns: Sequence[Sequence[PositionedEvent]], event: PositionedEvent
    ) -> int:
        return sum(
            1
            for column in columns[event.column + 1 :]
            for other in column
            if self.overlaps(event, other)
        )
