from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class LayoutValidationError(ValueError):
    """Raised when an event cannot be laid out (missing or inverted range)."""


class LayoutAlgorithm(str, Enum):
    OVERLAP = "overlap"
    NESTED = "nested"
    COLUMNS = "columns"
    BALANCED_COLUMNS = "balanced_columns"


class EventRecord(BaseModel):
    """Calendar event as read from an events file."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: str = ""
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def ensure_ordered_range(self) -> "EventRecord":
        if self.is_aware(self.start) != self.is_aware(self.end):
            msg = f"Event {self.id or self.title!r} mixes timezone-aware and naive times"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Event {self.id or self.title!r} ends before it starts"
            raise ValueError(msg)
        return self

    @staticmethod
    def is_aware(value: datetime) -> bool:
        return value.utcoffset() is not None


@dataclass(frozen=True)
class SlotRange:
    start: float
    end: float
    start_date: Any
    end_date: Any
    top: float
    height: float

    @classmethod
    def from_value(cls, value: SlotRange | Mapping[str, Any]) -> SlotRange:
        if isinstance(value, SlotRange):
            return value
        try:
            return cls(
                start=value["start"],
                end=value["end"],
                start_date=value.get("start_date", value.get("startDate")),
                end_date=value.get("end_date", value.get("endDate")),
                top=value["top"],
                height=value["height"],
            )
        except (KeyError, TypeError, AttributeError) as exc:
            msg = f"Slot metrics returned an incomplete range: {value!r}"
            raise LayoutValidationError(msg) from exc


@dataclass(frozen=True)
class EventStyle:
    top: float
    height: float
    width: float
    x_offset: float
    z_index: int

    def to_dict(self) -> Dict[str, float | int]:
        return {
            "top": self.top,
            "height": self.height,
            "width": self.width,
            "xOffset": self.x_offset,
            "zIndex": self.z_index,
        }


@dataclass(frozen=True)
class StyledEvent:
    event: Any
    style: EventStyle


@dataclass(eq=False)
class PositionedEvent:
    """Layout node for one render pass.

    A node is a container (``rows`` is a list), a row (``leaves`` is a list)
    or a leaf (neither). Links to other nodes are arena handles.
    """

    handle: int
    data: Any
    start: float
    end: float
    start_ms: float
    end_ms: float
    top: float
    height: float
    overlapping: bool = False
    synthetic: bool = False
    is_container: bool = False
    container_end: float = 0.0
    overlap_buffer: float = 0.0
    container_x_offset: float = 0.0
    container: Optional[int] = None
    row: Optional[int] = None
    parent_container: Optional[int] = None
    root_container: Optional[int] = None
    rows: Optional[List[int]] = None
    leaves: Optional[List[int]] = None
    column: Optional[int] = None
    adjusted: bool = False
    width: float = 0.0
    x_offset: float = 0.0
    z_index: int = 0

    def style(self) -> EventStyle:
        return EventStyle(
            top=self.top,
            height=self.height,
            width=self.width,
            x_offset=self.x_offset,
            z_index=self.z_index,
        )
