import logging
import re
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

import pandas as pd

from roomgrid.schemas.entry import Category, NormalizedEntry, SkippedRow
from roomgrid.utils.days import expand_days
from roomgrid.utils.rooms import split_rooms
from roomgrid.utils.timeparse import TimeParseError, parse_schedule_range

logger = logging.getLogger("roomgrid.normalize")

RawScheduleRow = Dict[str, Any]

UNIT_COLUMNS = ["UNITS", "Units", "units", "UNITS ", " UNIT", "UNIT", "Unit"]

DEFAULT_TITLE = "Untitled Class"

# checked in order, first match wins
CATEGORY_PATTERNS: List[Tuple[Category, List[str]]] = [
    ("ojt", [
        r"ojt", r"practicum", r"internship", r"on[\s-]*the[\s-]*job",
        r"work\s*integrated", r"\bwil\b", r"immersion", r"capstone",
        r"legal\s*medical", r"oac\s*14", r"aoc\s*15",
    ]),
    ("competency_appraisal", [
        r"competency\s*appraisal", r"cpale\s*review", r"cpa\s*board",
    ]),
]

# categories that may be scheduled without a room
ROOMLESS_CATEGORIES = {"ojt", "competency_appraisal"}

_COMPILED_CATEGORIES = [
    (category, re.compile("|".join(patterns), re.IGNORECASE))
    for category, patterns in CATEGORY_PATTERNS
]


class NormalizationResult(NamedTuple):
    entries: List[NormalizedEntry]
    skipped: List[SkippedRow]


def to_str(v) -> str:
    if v is None:
        return ""
    try:
        if pd.isna(v):
            return ""
    except (TypeError, ValueError):
        pass
    s = str(v).strip()
    return "" if s.lower() == "nan" else s


def to_float(v) -> Optional[float]:
    s = to_str(v)
    if not s:
        return None
    m = re.match(r"[+-]?(\d+(\.\d*)?|\.\d+)", s)
    if not m:
        return None
    return float(m.group(0))


def resolve_units(row: RawScheduleRow) -> float:
    for col in UNIT_COLUMNS:
        units = to_float(row.get(col))
        if units is not None:
            return units
    return 0.0


def classify_title(title: str) -> Category:
    for category, pattern in _COMPILED_CATEGORIES:
        if pattern.search(title):
            return category
    return "course"


def _split_units(category: Category, units: float) -> Dict[str, float]:
    return {
        "course_units": units if category == "course" else 0.0,
        "ojt_units": units if category == "ojt" else 0.0,
        "competency_appraisal_units": units if category == "competency_appraisal" else 0.0,
    }


def normalize_row(row: RawScheduleRow) -> List[NormalizedEntry]:
    """
    One row -> one entry per room. Raises ValueError when the row is malformed.
    """
    schedule_label = to_str(row.get("SCHEDULE"))
    if not schedule_label:
        raise ValueError("missing_schedule")
    days_raw = to_str(row.get("DAYS"))
    if not days_raw:
        raise ValueError("missing_days")

    try:
        start, end = parse_schedule_range(schedule_label)
    except TimeParseError:
        raise ValueError("bad_time") from None
    if end <= start:
        raise ValueError("non_positive_duration")

    days = expand_days(days_raw)
    if not days:
        raise ValueError("bad_days")

    subject = to_str(row.get("SUBJECT"))
    title = to_str(row.get("DESCRIPTIVE TITLE")) or subject or DEFAULT_TITLE
    category = classify_title(title)

    rooms = split_rooms(to_str(row.get("ROOM")))
    if not rooms:
        if category not in ROOMLESS_CATEGORIES:
            raise ValueError("no_room")
        rooms = [""]

    common = dict(
        days=days,
        start_minutes=start,
        end_minutes=end,
        title=title,
        subject_code=subject,
        instructor=to_str(row.get("INSTRUCTOR")),
        schedule_label=schedule_label,
        pyb=to_str(row.get("PYB")),
        category=category,
        **_split_units(category, resolve_units(row)),
    )
    return [NormalizedEntry(room=room, **common) for room in rooms]


def normalize_rows(rows: Iterable[RawScheduleRow]) -> NormalizationResult:
    entries: List[NormalizedEntry] = []
    skipped: List[SkippedRow] = []

    for i, row in enumerate(rows):
        try:
            entries.extend(normalize_row(row))
        except ValueError as e:
            skipped.append(SkippedRow(index=i, reason=str(e)))
            logger.debug("skip row %d: %s", i, e)

    if skipped:
        logger.info("normalized %d entries, skipped %d rows", len(entries), len(skipped))
    return NormalizationResult(entries=entries, skipped=skipped)
