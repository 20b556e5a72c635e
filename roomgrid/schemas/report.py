from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel

from roomgrid.schemas.allocation import AllocationGrid
from roomgrid.schemas.entry import SkippedRow
from roomgrid.schemas.loads import TeachingLoadReport

Source = Literal["none", "upload", "live"]


class ScheduleReport(BaseModel):
    allocation: Optional[AllocationGrid] = None
    loads: Optional[TeachingLoadReport] = None
    row_count: int = 0
    entry_count: int = 0
    skipped: List[SkippedRow] = []
    source: Source = "none"
    generated_at: Optional[datetime] = None

    @property
    def has_data(self) -> bool:
        return self.allocation is not None or self.loads is not None


class StatusOut(BaseModel):
    source: Source
    has_data: bool
    generated_at: Optional[datetime] = None
    row_count: int
    entry_count: int
    skipped_count: int
    skipped: List[SkippedRow]
    live_mode: bool
    live_last_success: Optional[datetime] = None
    live_last_error: Optional[str] = None
