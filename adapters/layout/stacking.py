from __future__ import annotations

import math
from collections.abc import Iterable

from domain.models import PositionedEvent
from domain.services.positioned_events import EventArena

GROWTH_FACTOR = 1.7
MAX_WIDTH = 100.0
LONG_CONTAINER_DURATION = 30
OVERLAP_BUFFER = 5


def overlap_buffer_for(container: PositionedEvent) -> float:
    duration = container.container_end - container.start
    return OVERLAP_BUFFER if duration >= LONG_CONTAINER_DURATION else 0


def base_width(arena: EventArena, node: PositionedEvent) -> float:
    """Width of a node before the overlap growth is applied."""
    if node.is_container and not node.overlapping:
        return 0.0

    # A container is as wide as one column of its widest row, plus its own
    # column when events are drawn overlapping.
    if node.rows is not None:
        columns = max((len(arena[handle].leaves or ()) + 1 for handle in node.rows), default=0)
        columns += 1 if node.overlapping else 0
        return MAX_WIDTH / columns if columns else 0.0

    if node.leaves is not None:
        container = arena[node.container]
        available = MAX_WIDTH - container.container_x_offset - base_width(arena, container)
        return available / (len(node.leaves) + 1)

    return base_width(arena, arena[node.row])


def grown_width(arena: EventArena, node: PositionedEvent) -> float:
    width = base_width(arena, node)
    if not node.overlapping:
        return width

    grown = min(MAX_WIDTH, width * GROWTH_FACTOR)
    if node.rows is not None:
        return grown
    if node.leaves is not None:
        return grown if node.leaves else width

    # The last leaf must not pass the right edge of its row.
    leaves = arena[node.row].leaves
    return width if leaves.index(node.handle) == len(leaves) - 1 else grown


def x_offset(arena: EventArena, node: PositionedEvent) -> float:
    if node.rows is not None or node.is_container:
        return 0.0

    if node.leaves is not None:
        container = arena[node.container]
        if node.overlapping:
            return base_width(arena, container)
        return container.container_x_offset

    row = arena[node.row]
    index = row.leaves.index(node.handle) + 1
    return x_offset(arena, row) + index * base_width(arena, row)


def resolve_stacked_styles(arena: EventArena, events: Iterable[PositionedEvent]) -> None:
    for event in events:
        event.x_offset = x_offset(arena, event)
        event.width = grown_width(arena, event)
        event.z_index = math.floor(event.x_offset)
