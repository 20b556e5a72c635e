from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from roomgrid.schemas.allocation import AllocationGrid
from roomgrid.store import ReportStore, get_store
from roomgrid.utils.excel_export import allocation_to_rows, make_filename, rows_to_xlsx_bytes

router = APIRouter(prefix="/allocation", tags=["Room Allocation"])


def _require_allocation(report_store: ReportStore) -> AllocationGrid:
    grid = report_store.report.allocation
    if grid is None:
        raise HTTPException(status_code=404, detail="No data")
    return grid


@router.get("", response_model=AllocationGrid)
def get_allocation(report_store: ReportStore = Depends(get_store)):
    return _require_allocation(report_store)


@router.get("/export")
def export_allocation_excel(report_store: ReportStore = Depends(get_store)):
    """
    Room allocation grid as .xlsx, one row per day/slot/room
    """
    xlsx_bytes = rows_to_xlsx_bytes(allocation_to_rows(_require_allocation(report_store)), sheet_name="Room Allocation")
    filename = make_filename("room_allocation")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
