from typing import Dict, Iterable, List, Optional

from roomgrid.schemas.allocation import (
    AllocationGrid, DayAllocation, DetailRecord, RoomCell, Segment, SlotAllocation, TimeSlot,
)
from roomgrid.schemas.entry import NormalizedEntry
from roomgrid.utils.days import ORDERED_DAYS, day_label
from roomgrid.utils.rooms import order_rooms
from roomgrid.utils.timeslots import SlotCatalog, overlaps

UNASSIGNED_INSTRUCTOR = "TBD"


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return min(hi, max(lo, value))


def slot_segment(start: int, end: int, slot: TimeSlot) -> Optional[Segment]:
    """
    Portion of `slot` covered by [start, end) as fractions of the slot.
    9:00-10:30 vs 10:00-11:00 -> [0.0, 0.5]
    """
    if not overlaps(start, end, slot) or slot.duration <= 0:
        return None
    seg_start = clamp((max(start, slot.start) - slot.start) / slot.duration)
    seg_end = clamp((min(end, slot.end) - slot.start) / slot.duration)
    if seg_end <= seg_start:
        return None
    return Segment(start=seg_start, end=seg_end)


def build_allocation(entries: Iterable[NormalizedEntry],
                     catalog: Optional[SlotCatalog] = None) -> Optional[AllocationGrid]:
    """
    Day x slot x room occupancy. None when no entry has a room.
    """
    entries = list(entries)
    placed = [e for e in entries if e.room]
    if not placed:
        return None
    if catalog is None:
        catalog = SlotCatalog.for_entries(entries)

    rooms = order_rooms(e.room for e in placed)

    # weekday -> slot index -> room -> cell
    summary: Dict[int, Dict[int, Dict[str, RoomCell]]] = {}
    for entry in placed:
        for weekday in sorted(entry.days):
            slots = catalog.slots_for(weekday)
            for idx, slot in enumerate(slots):
                segment = slot_segment(entry.start_minutes, entry.end_minutes, slot)
                if segment is None:
                    continue
                cell = (
                    summary.setdefault(weekday, {})
                    .setdefault(idx, {})
                    .setdefault(entry.room, RoomCell())
                )
                cell.segments.append(segment)
                cell.details.append(DetailRecord(
                    title=entry.title,
                    instructor=entry.instructor or UNASSIGNED_INSTRUCTOR,
                    schedule=entry.schedule_label,
                    room=entry.room,
                    pyb=entry.pyb,
                ))

    days: List[DayAllocation] = []
    for weekday in ORDERED_DAYS:
        by_slot = summary.get(weekday)
        if not by_slot:
            continue
        slot_rows = []
        for idx, slot in enumerate(catalog.slots_for(weekday)):
            cells = by_slot.get(idx, {})
            occupied = sum(1 for room in rooms if room in cells and cells[room].is_occupied)
            slot_rows.append(SlotAllocation(
                label=slot.label,
                start=slot.start,
                end=slot.end,
                highlight=slot.highlight,
                occupied_count=occupied,
                vacant_count=len(rooms) - occupied,
                per_room={room: cells.get(room, RoomCell()) for room in rooms},
            ))
        days.append(DayAllocation(day=day_label(weekday), slots=slot_rows))

    return AllocationGrid(rooms=rooms, days=days)
