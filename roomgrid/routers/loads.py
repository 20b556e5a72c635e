from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from roomgrid.schemas.loads import InstructorCell, TeachingLoadReport
from roomgrid.store import ReportStore, get_store
from roomgrid.utils.days import DAY_LABELS
from roomgrid.utils.excel_export import loads_to_rows, make_filename, rows_to_xlsx_bytes
from roomgrid.utils.loads import find_instructor, instructor_cell
from roomgrid.utils.timeslots import SlotCatalog

router = APIRouter(prefix="/loads", tags=["Teaching Loads"])

DAY_NUMBERS = {label: num for num, label in DAY_LABELS.items()}


def _require_loads(report_store: ReportStore) -> TeachingLoadReport:
    loads = report_store.report.loads
    if loads is None:
        raise HTTPException(status_code=404, detail="No data")
    return loads


@router.get("", response_model=TeachingLoadReport)
def get_loads(report_store: ReportStore = Depends(get_store)):
    return _require_loads(report_store)


@router.get("/cell", response_model=InstructorCell)
def get_instructor_cell(
    instructor: str = Query(..., description="Instructor name, any casing"),
    day: str = Query(..., description="Monday..Sunday"),
    slot: str = Query(..., description="Slot label, e.g. 7:00 AM - 8:00 AM"),
    report_store: ReportStore = Depends(get_store),
):
    loads = _require_loads(report_store)

    load = find_instructor(loads, instructor)
    if load is None:
        raise HTTPException(status_code=404, detail="Instructor not found")
    weekday = DAY_NUMBERS.get(day.strip().capitalize())
    if weekday is None:
        raise HTTPException(status_code=400, detail="Unknown day")

    match = next((s for s in SlotCatalog().slots_for(weekday) if s.label == slot.strip()), None)
    if match is None:
        raise HTTPException(status_code=404, detail="Slot not found")
    return instructor_cell(load, DAY_LABELS[weekday], match)


@router.get("/export")
def export_loads_excel(report_store: ReportStore = Depends(get_store)):
    xlsx_bytes = rows_to_xlsx_bytes(loads_to_rows(_require_loads(report_store)), sheet_name="Teaching Loads")
    filename = make_filename("teaching_loads")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
