import logging
import threading
from datetime import datetime
from typing import Optional

from roomgrid.schemas.report import ScheduleReport

logger = logging.getLogger("roomgrid.store")


class ReportStore:
    """
    Holds the latest published report. Builds take a ticket before they start;
    a report is applied only if its ticket is newer than the one on display,
    so the most recently started build wins.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._next_ticket = 0
        self._applied_ticket = -1
        self._report = ScheduleReport()
        self.live_last_success: Optional[datetime] = None
        self.live_last_error: Optional[str] = None

    def next_ticket(self) -> int:
        with self._lock:
            ticket = self._next_ticket
            self._next_ticket += 1
            return ticket

    def publish(self, report: ScheduleReport, ticket: int) -> bool:
        with self._lock:
            if ticket <= self._applied_ticket:
                logger.info("drop stale report (ticket %d <= %d)", ticket, self._applied_ticket)
                return False
            self._applied_ticket = ticket
            self._report = report
            return True

    @property
    def report(self) -> ScheduleReport:
        return self._report

    def record_live_result(self, error: Optional[str] = None):
        with self._lock:
            if error is None:
                self.live_last_success = datetime.now()
                self.live_last_error = None
            else:
                self.live_last_error = error


store = ReportStore()


def get_store() -> ReportStore:
    return store
