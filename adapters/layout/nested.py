from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import pairwise

from adapters.layout.stacking import overlap_buffer_for, resolve_stacked_styles, x_offset
from domain.models import PositionedEvent
from domain.ports.layout import PlacementStrategy
from domain.services.positioned_events import EventArena

logger = logging.getLogger(__name__)

INDENT_OFFSET = 2


class NestedContainerPlacement(PlacementStrategy):
    """Lay events out without overlap, nesting late starters in child containers.

    Containers here are synthetic nodes: each root container clusters
    overlapping events, and an event that starts after the current row has
    finished opens a child container anchored on the row member it still
    overlaps (or a sibling container when there is none).
    """

    overlapping = False

    def place(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        roots: list[PositionedEvent] = []
        children: list[PositionedEvent] = []

        for event in events:
            container = self._find_root(roots, event)
            if container is None:
                container = arena.spawn_container(event)
                container.overlap_buffer = overlap_buffer_for(container)
                container.root_container = container.handle
                container.parent_container = container.handle
                roots.append(container)
                logger.debug("Event %d opens root container %d", event.handle, container.handle)

            event.container = container.handle
            if event.end > container.container_end:
                container.container_end = event.end
                container.overlap_buffer = overlap_buffer_for(container)

            for child in reversed(children):
                if child.start <= event.start and child.container_end > event.start:
                    container = child
                    event.container = child.handle
                    self._grow(arena, child, event)
                    break

            row = arena[container.rows[0]] if container.rows else None
            if row is not None:
                members = [row, *(arena[handle] for handle in row.leaves)]
                if event.start >= members[-1].end:
                    anchor = next((m for m in reversed(members) if m.end > event.start), None)
                    is_sibling = anchor is None
                    child = arena.spawn_container(anchor or arena[row.container])
                    child.parent_container = (
                        container.parent_container if is_sibling else container.handle
                    )
                    child.root_container = container.root_container
                    children.append(child)
                    logger.debug(
                        "Event %d opens %s container %d",
                        event.handle,
                        "sibling" if is_sibling else "child",
                        child.handle,
                    )
                    container = child
                    row = None
                    event.container = child.handle
                    self._grow(arena, child, event)

            if row is None:
                event.leaves = []
                container.rows.append(event.handle)
            else:
                row.leaves.append(event.handle)
                event.row = row.handle

        self._assign_root_indents(arena, roots)
        self._assign_child_indents(arena, children)

    def resolve(self, arena: EventArena, events: Sequence[PositionedEvent]) -> None:
        resolve_stacked_styles(arena, events)

    def _find_root(
        self, roots: Sequence[PositionedEvent], event: PositionedEvent
    ) -> PositionedEvent | None:
        return next(
            (root for root in roots if root.container_end > event.start + root.overlap_buffer),
            None,
        )

    def _grow(self, arena: EventArena, container: PositionedEvent, event: PositionedEvent) -> None:
        if event.end <= container.container_end:
            return
        container.container_end = event.end
        root = arena[container.root_container]
        root.container_end = max(event.end, root.container_end)
        root.overlap_buffer = overlap_buffer_for(root)

    def _assign_root_indents(self, arena: EventArena, roots: Sequence[PositionedEvent]) -> None:
        if len(roots) < 2:
            return
        roots[0].container_x_offset = 0.0
        for previous, current in pairwise(roots):
            indent = 0.0
            if previous.container_end > current.start and previous.rows:
                first_row = arena[previous.rows[0]]
                if first_row.end > current.start:
                    indent = previous.container_x_offset + INDENT_OFFSET
            current.container_x_offset = indent

    def _assign_child_indents(
        self, arena: EventArena, children: Sequence[PositionedEvent]
    ) -> None:
        # Creation order guarantees a parent's indent is final before its children read it.
        for child in children:
            parent = arena[child.parent_container]
            if not parent.rows:
                continue
            parent_row = arena[parent.rows[0]]
            members = [parent_row, *(arena[handle] for handle in parent_row.leaves)]
            for member, following in pairwise(members):
                if child.start == member.start and child.end == member.end:
                    child.container_x_offset = x_offset(arena, following)
