from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from adapters.events.accessors import KeyAccessors
from adapters.layout.columns import BalancedColumnPlacement, ColumnPlacement
from adapters.layout.nested import NestedContainerPlacement
from adapters.layout.overlap import OverlapPlacement
from app.config import LayoutSettings
from domain.models import LayoutAlgorithm, StyledEvent
from domain.ports.layout import EventAccessors, PlacementStrategy, SlotMetrics
from domain.services.build_day_layout import DayLayoutService


def build_placement_strategy(
    algorithm: LayoutAlgorithm | str,
    minimum_start_difference: float | None = None,
) -> PlacementStrategy:
    algorithm = LayoutAlgorithm(algorithm)
    if algorithm is LayoutAlgorithm.OVERLAP:
        return OverlapPlacement(minimum_start_difference)
    if algorithm is LayoutAlgorithm.NESTED:
        return NestedContainerPlacement()
    if algorithm is LayoutAlgorithm.COLUMNS:
        return ColumnPlacement()
    return BalancedColumnPlacement()


def build_layout_service(settings: LayoutSettings) -> DayLayoutService:
    return DayLayoutService(
        build_placement_strategy(settings.algorithm, settings.minimum_start_difference)
    )


def build_accessors(settings: LayoutSettings) -> KeyAccessors:
    return KeyAccessors(start_key=settings.start_key, end_key=settings.end_key)


def get_styled_events(
    events: Sequence[Any],
    *,
    accessors: EventAccessors,
    slot_metrics: SlotMetrics,
    event_overlap: bool = True,
    minimum_start_difference: float | None = None,
    algorithm: LayoutAlgorithm | str | None = None,
) -> list[StyledEvent]:
    """Lay out one day column.

    ``event_overlap`` picks the stacking layout (``True``) or the nested,
    non-overlapping one (``False``); ``algorithm`` overrides that choice.
    """
    if not events:
        return []
    if algorithm is None:
        algorithm = LayoutAlgorithm.OVERLAP if event_overlap else LayoutAlgorithm.NESTED
    service = DayLayoutService(build_placement_strategy(algorithm, minimum_start_difference))
    return service.get_styled_events(events, accessors=accessors, slot_metrics=slot_metrics)


def get_non_overlapping_styled_events(
    events: Sequence[Any],
    *,
    accessors: EventAccessors,
    slot_metrics: SlotMetrics,
) -> list[StyledEvent]:
    service = DayLayoutService(ColumnPlacement())
    return service.get_styled_events(events, accessors=accessors, slot_metrics=slot_metrics)
