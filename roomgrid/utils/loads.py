import logging
import re
from typing import Dict, Iterable, List, Optional, Set, Tuple

from roomgrid.schemas.allocation import TimeSlot
from roomgrid.schemas.entry import NormalizedEntry
from roomgrid.schemas.loads import (
    InstructorCell, InstructorLoad, LoadSummary, ScheduleEntry, TeachingLoadReport,
)
from roomgrid.utils.days import DAY_LABELS, ORDERED_DAYS, day_label
from roomgrid.utils.timeslots import overlaps

logger = logging.getLogger("roomgrid.loads")

# "care of" instructors belong to other departments
EXCLUDED_INSTRUCTOR_MARKERS = ["C/O CAS", "C/O NSTP", "C/O PE DEPARTMENT", "C/O PE DEPT", "C/O PE"]


def instructor_key(name: str) -> str:
    """
    "dela cruz,juan " -> "DELA CRUZ, JUAN"
    """
    key = name.upper().replace(",", ", ")
    return re.sub(r"\s+", " ", key).strip()


def is_excluded_instructor(name: str) -> bool:
    upper = name.upper()
    return any(marker in upper for marker in EXCLUDED_INSTRUCTOR_MARKERS)


def day_key(entry: ScheduleEntry) -> Tuple[str, str]:
    return entry.pyb, entry.subject_code


def unit_key(entry: ScheduleEntry) -> Tuple[str, str, str]:
    return (
        entry.pyb or "NO-PYB",
        entry.subject_code or "NO-SUBJECT",
        entry.title.strip().upper(),
    )


class _LoadBuilder:
    def __init__(self, name: str):
        self.name = name
        self.schedule: Dict[str, List[ScheduleEntry]] = {}
        self.seen_units: Set[Tuple[str, str, str]] = set()
        self.summary = LoadSummary()

    def add(self, weekday: int, item: ScheduleEntry):
        day_items = self.schedule.setdefault(day_label(weekday), [])
        # a row fanned out over several rooms lands once per day
        listed = next((s for s in day_items if day_key(s) == day_key(item)), None)
        if listed is not None:
            for room in item.rooms:
                if room not in listed.rooms:
                    listed.rooms.append(room)
            return
        day_items.append(item.model_copy(update={"rooms": list(item.rooms)}))

        key = unit_key(item)
        if key in self.seen_units:
            return
        self.seen_units.add(key)
        self.summary.course_units += item.course_units
        self.summary.ojt_units += item.ojt_units
        self.summary.competency_appraisal_units += item.competency_appraisal_units

    def build(self) -> InstructorLoad:
        s = self.summary
        s.total = s.course_units + s.ojt_units + s.competency_appraisal_units
        ordered = {
            DAY_LABELS[d]: self.schedule[DAY_LABELS[d]]
            for d in ORDERED_DAYS
            if DAY_LABELS[d] in self.schedule
        }
        return InstructorLoad(name=self.name, schedule=ordered, summary=s)


def aggregate_loads(entries: Iterable[NormalizedEntry]) -> Optional[TeachingLoadReport]:
    """
    Per-instructor schedule and deduplicated unit totals. None when no entry
    has a countable instructor.
    """
    builders: Dict[str, _LoadBuilder] = {}

    for entry in entries:
        name = entry.instructor.strip()
        if not name or is_excluded_instructor(name):
            continue
        key = instructor_key(name)
        builder = builders.get(key)
        if builder is None:
            builder = builders[key] = _LoadBuilder(name)

        item = ScheduleEntry(
            start=entry.start_minutes,
            end=entry.end_minutes,
            title=entry.title,
            subject_code=entry.subject_code,
            pyb=entry.pyb,
            schedule_label=entry.schedule_label,
            room=entry.room,
            rooms=[entry.room] if entry.room else [],
            category=entry.category,
            course_units=entry.course_units,
            ojt_units=entry.ojt_units,
            competency_appraisal_units=entry.competency_appraisal_units,
        )
        for weekday in sorted(entry.days, key=ORDERED_DAYS.index):
            builder.add(weekday, item)

    if not builders:
        return None

    instructors = sorted(
        (b.build() for b in builders.values()),
        key=lambda load: load.name.casefold(),
    )
    active_days = [
        DAY_LABELS[d] for d in ORDERED_DAYS
        if any(load.schedule.get(DAY_LABELS[d]) for load in instructors)
    ]
    logger.debug("aggregated %d instructors over %d days", len(instructors), len(active_days))
    return TeachingLoadReport(instructors=instructors, days=active_days)


def instructor_cell(load: InstructorLoad, day: str, slot: TimeSlot) -> InstructorCell:
    matching = [s for s in load.schedule.get(day, []) if overlaps(s.start, s.end, slot)]
    return InstructorCell(
        instructor=load.name,
        day=day,
        slot=slot.label,
        has_schedule=bool(matching),
        rooms=[r for s in matching for r in s.rooms],
        details=matching,
    )


def find_instructor(report: TeachingLoadReport, name: str) -> Optional[InstructorLoad]:
    key = instructor_key(name)
    for load in report.instructors:
        if instructor_key(load.name) == key:
            return load
    return None
