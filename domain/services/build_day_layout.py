from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from domain.models import StyledEvent
from domain.ports.layout import DayLayoutEngine, EventAccessors, PlacementStrategy, SlotMetrics
from domain.services.positioned_events import EventArena, sort_by_render

logger = logging.getLogger(__name__)


class DayLayoutService(DayLayoutEngine):
    """Wrap, sort, place and resolve the events of one day column.

    The placement strategy decides how events are grouped and how wide they
    end up; everything around it (collaborator calls, render order, emission)
    is shared.
    """

    def __init__(self, strategy: PlacementStrategy) -> None:
        self.strategy = strategy

    def get_styled_events(
        self,
        events: Sequence[Any],
        *,
        accessors: EventAccessors,
        slot_metrics: SlotMetrics,
    ) -> list[StyledEvent]:
        if not events:
            return []

        arena = EventArena(accessors, slot_metrics)
        proxies = arena.wrap_all(events, overlapping=self.strategy.overlapping)
        ordered = sort_by_render(proxies)

        self.strategy.place(arena, ordered)
        self.strategy.resolve(arena, ordered)
        logger.debug(
            "Laid out %d events with %s (%d arena nodes)",
            len(ordered),
            type(self.strategy).__name__,
            len(arena),
        )

        return [StyledEvent(event=node.data, style=node.style()) for node in ordered]
