from __future__ import annotations
from typing import List, Dict, Any
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment

from roomgrid.schemas.allocation import AllocationGrid
from roomgrid.schemas.loads import TeachingLoadReport


def rows_to_xlsx_bytes(rows: List[Dict[str, Any]], sheet_name: str = "Sheet") -> bytes:
    """
    rows: list of dict, each dict is a row
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    if not rows:
        ws.append(["No data"])
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()

    headers = list(rows[0].keys())
    ws.append(headers)

    header_font = Font(bold=True)
    for col_idx, _h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for r in rows:
        ws.append([r.get(h) for h in headers])

    # autosize columns
    for col_idx, h in enumerate(headers, start=1):
        max_len = len(str(h))
        for row_idx in range(2, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _percent(fraction: float) -> str:
    return f"{fraction * 100:.0f}%"


def allocation_to_rows(grid: AllocationGrid | None) -> List[Dict[str, Any]]:
    """One row per (day, slot, room)."""
    if grid is None:
        return []
    rows = []
    for day in grid.days:
        for slot in day.slots:
            for room, cell in slot.per_room.items():
                rows.append({
                    "Day": day.day,
                    "Slot": slot.label,
                    "Room": room,
                    "Status": "Occupied" if cell.is_occupied else "Vacant",
                    "Segments": ", ".join(f"{_percent(s.start)}-{_percent(s.end)}" for s in cell.segments),
                    "Classes": "; ".join(
                        f"{d.pyb} {d.title} ({d.instructor}, {d.schedule})".strip() for d in cell.details
                    ),
                    "Occupied Rooms": slot.occupied_count,
                    "Vacant Rooms": slot.vacant_count,
                })
    return rows


def loads_to_rows(report: TeachingLoadReport | None) -> List[Dict[str, Any]]:
    if report is None:
        return []
    return [
        {
            "Instructor": load.name,
            "Course Units": round(load.summary.course_units, 2),
            "OJT Units": round(load.summary.ojt_units, 2),
            "Competency Appraisal Units": round(load.summary.competency_appraisal_units, 2),
            "Total Teaching Load": round(load.summary.total, 2),
        }
        for load in report.instructors
    ]


def make_filename(prefix: str = "schedule") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
