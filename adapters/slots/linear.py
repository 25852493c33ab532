from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

from domain.models import SlotRange
from domain.ports.layout import SlotMetrics


def parse_clock(value: str) -> timedelta:
    """Parse ``HH:MM`` into an offset from midnight; ``24:00`` is the end of the day."""
    hours_text, sep, minutes_text = value.strip().partition(":")
    if not sep:
        msg = f"Expected HH:MM, got {value!r}"
        raise ValueError(msg)
    hours, minutes = int(hours_text), int(minutes_text)
    if not (0 <= minutes < 60) or not (0 <= hours <= 24) or (hours == 24 and minutes):
        msg = f"Clock value out of range: {value!r}"
        raise ValueError(msg)
    return timedelta(hours=hours, minutes=minutes)


def _minutes(delta: timedelta) -> float:
    return delta.total_seconds() / 60


@dataclass(frozen=True)
class LinearSlotMetrics(SlotMetrics):
    """Map a time range onto one day column.

    ``start``/``end`` are minutes since ``day_start``; ``top``/``height`` are
    percentages of the visible day. Ranges are clamped to the day.
    """

    day_start: datetime
    day_end: datetime

    def __post_init__(self) -> None:
        if self.day_end <= self.day_start:
            msg = "day_end must be after day_start"
            raise ValueError(msg)

    @classmethod
    def for_day(
        cls, day: date, start_time: str = "00:00", end_time: str = "24:00", tz: tzinfo | None = None
    ) -> LinearSlotMetrics:
        midnight = datetime.combine(day, time.min, tzinfo=tz)
        return cls(
            day_start=midnight + parse_clock(start_time),
            day_end=midnight + parse_clock(end_time),
        )

    @property
    def total_minutes(self) -> float:
        return _minutes(self.day_end - self.day_start)

    def get_range(self, start: datetime, end: datetime) -> SlotRange:
        range_start = min(self.day_end, max(start, self.day_start))
        range_end = max(range_start, min(end, self.day_end))
        start_minutes = _minutes(range_start - self.day_start)
        end_minutes = _minutes(range_end - self.day_start)
        return SlotRange(
            start=start_minutes,
            end=end_minutes,
            start_date=range_start,
            end_date=range_end,
            top=start_minutes / self.total_minutes * 100,
            height=(end_minutes - start_minutes) / self.total_minutes * 100,
        )
