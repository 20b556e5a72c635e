import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from roomgrid.config import settings
from roomgrid.schemas.report import StatusOut
from roomgrid.store import ReportStore, get_store
from roomgrid.utils.live_refresh import LiveSheetRefresher, get_refresher
from roomgrid.utils.report import build_report
from roomgrid.utils.sheet_reader import SheetReadError, read_rows

logger = logging.getLogger("roomgrid.schedule")

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def _status(report_store: ReportStore, refresher: LiveSheetRefresher) -> StatusOut:
    report = report_store.report
    return StatusOut(
        source=report.source,
        has_data=report.has_data,
        generated_at=report.generated_at,
        row_count=report.row_count,
        entry_count=report.entry_count,
        skipped_count=len(report.skipped),
        skipped=report.skipped,
        live_mode=refresher.is_running,
        live_last_success=report_store.live_last_success,
        live_last_error=report_store.live_last_error,
    )


@router.post("/upload", response_model=StatusOut)
def upload_schedule(
    file: UploadFile = File(...),
    report_store: ReportStore = Depends(get_store),
    refresher: LiveSheetRefresher = Depends(get_refresher),
):
    content = file.file.read()
    try:
        rows = read_rows(content, file.filename or "", sheet_name=settings.SHEET_NAME)
    except SheetReadError as e:
        logger.warning("upload rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    # a local file replaces the live feed
    refresher.stop()
    ticket = report_store.next_ticket()
    report_store.publish(build_report(rows, source="upload"), ticket)
    return _status(report_store, refresher)


@router.get("/status", response_model=StatusOut)
def schedule_status(
    report_store: ReportStore = Depends(get_store),
    refresher: LiveSheetRefresher = Depends(get_refresher),
):
    return _status(report_store, refresher)


@router.post("/live/start", response_model=StatusOut)
def start_live(
    report_store: ReportStore = Depends(get_store),
    refresher: LiveSheetRefresher = Depends(get_refresher),
):
    if not refresher.url:
        raise HTTPException(status_code=400, detail="LIVE_SHEET_URL is not configured")
    refresher.start()
    return _status(report_store, refresher)


@router.post("/live/stop", response_model=StatusOut)
def stop_live(
    report_store: ReportStore = Depends(get_store),
    refresher: LiveSheetRefresher = Depends(get_refresher),
):
    refresher.stop()
    return _status(report_store, refresher)


@router.post("/live/refresh", response_model=StatusOut)
def refresh_live(
    report_store: ReportStore = Depends(get_store),
    refresher: LiveSheetRefresher = Depends(get_refresher),
):
    if not refresher.url:
        raise HTTPException(status_code=400, detail="LIVE_SHEET_URL is not configured")
    if not refresher.refresh_now():
        raise HTTPException(status_code=409, detail="Refresh already in progress")
    return _status(report_store, refresher)
