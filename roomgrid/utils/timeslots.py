from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from roomgrid.schemas.allocation import TimeSlot
from roomgrid.schemas.entry import NormalizedEntry
from roomgrid.utils.days import (
    SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY,
)
from roomgrid.utils.timeparse import format_hour_range


def create_slot(start_hour: int, start_minute: int, end_hour: int, end_minute: int,
                highlight: bool = False) -> TimeSlot:
    start = start_hour * 60 + start_minute
    end = end_hour * 60 + end_minute
    return TimeSlot(label=format_hour_range(start, end), start=start, end=end, highlight=highlight)


MON_WED_SLOTS = [create_slot(h, 0, h + 1, 0, highlight=(h == 12)) for h in range(7, 20)]

THU_FRI_SLOTS = [
    create_slot(7, 0, 8, 30),
    create_slot(8, 30, 10, 0),
    create_slot(10, 0, 11, 30),
    create_slot(11, 30, 13, 0, highlight=True),
    create_slot(13, 0, 14, 30),
    create_slot(14, 30, 16, 0),
    create_slot(16, 0, 17, 30),
    create_slot(17, 30, 19, 0),
    create_slot(19, 0, 20, 30),
]

WEEKEND_SLOTS = [
    create_slot(7, 30, 10, 30),
    create_slot(11, 0, 14, 0, highlight=True),
    create_slot(14, 0, 17, 0),
]

# weekday group -> buckets
DEFAULT_PATTERNS: Dict[int, List[TimeSlot]] = {
    MONDAY: MON_WED_SLOTS,
    TUESDAY: MON_WED_SLOTS,
    WEDNESDAY: MON_WED_SLOTS,
    THURSDAY: THU_FRI_SLOTS,
    FRIDAY: THU_FRI_SLOTS,
    SATURDAY: WEEKEND_SLOTS,
    SUNDAY: WEEKEND_SLOTS,
}


def floor_to_hour(minutes: int) -> int:
    return (minutes // 60) * 60


def ceil_to_hour(minutes: int) -> int:
    return -(-minutes // 60) * 60


def derive_fallback_slots(entries: Iterable[NormalizedEntry]) -> List[TimeSlot]:
    """
    One-hour buckets from the earliest start (floored) to the latest end (ceiled).
    Always at least one bucket.
    """
    entries = list(entries)
    if not entries:
        return []
    start = floor_to_hour(min(e.start_minutes for e in entries))
    end = max(start + 60, ceil_to_hour(max(e.end_minutes for e in entries)))
    return [
        TimeSlot(label=format_hour_range(s, s + 60), start=s, end=s + 60)
        for s in range(start, end, 60)
    ]


def overlaps(start: int, end: int, slot: TimeSlot) -> bool:
    # half-open [start, end) against [slot.start, slot.end)
    return start < slot.end and end > slot.start


class SlotCatalog:
    def __init__(self, patterns: Optional[Mapping[int, Sequence[TimeSlot]]] = None,
                 fallback: Optional[Sequence[TimeSlot]] = None):
        self.patterns = dict(DEFAULT_PATTERNS if patterns is None else patterns)
        self.fallback = list(fallback or [])

    @classmethod
    def for_entries(cls, entries: Iterable[NormalizedEntry],
                    patterns: Optional[Mapping[int, Sequence[TimeSlot]]] = None) -> "SlotCatalog":
        return cls(patterns=patterns, fallback=derive_fallback_slots(entries))

    def slots_for(self, weekday: int) -> List[TimeSlot]:
        slots = self.patterns.get(weekday)
        if slots is None:
            return list(self.fallback)
        return list(slots)
