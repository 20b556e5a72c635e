import logging
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from roomgrid.schemas.allocation import TimeSlot
from roomgrid.schemas.report import ScheduleReport, Source
from roomgrid.utils.allocation import build_allocation
from roomgrid.utils.loads import aggregate_loads
from roomgrid.utils.normalize import RawScheduleRow, normalize_rows
from roomgrid.utils.timeslots import SlotCatalog

logger = logging.getLogger("roomgrid.report")


def build_report(rows: Iterable[RawScheduleRow], source: Source = "upload",
                 patterns: Optional[Mapping[int, Sequence[TimeSlot]]] = None) -> ScheduleReport:
    """
    Rebuild both views from scratch. Same rows -> equal report (apart from generated_at).
    """
    rows = list(rows)
    result = normalize_rows(rows)
    catalog = SlotCatalog.for_entries(result.entries, patterns=patterns)

    report = ScheduleReport(
        allocation=build_allocation(result.entries, catalog),
        loads=aggregate_loads(result.entries),
        row_count=len(rows),
        entry_count=len(result.entries),
        skipped=result.skipped,
        source=source,
        generated_at=datetime.now(),
    )
    logger.info(
        "report built from %s: rows=%d entries=%d skipped=%d has_data=%s",
        source, len(rows), len(result.entries), len(result.skipped), report.has_data,
    )
    return report
