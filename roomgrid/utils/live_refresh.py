import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from roomgrid.config import settings
from roomgrid.store import ReportStore, store
from roomgrid.utils.report import build_report
from roomgrid.utils.sheet_reader import read_rows_from_url

logger = logging.getLogger("roomgrid.live")

Fetcher = Callable[[str], List[Dict[str, Any]]]


class LiveSheetRefresher:
    """
    Periodically re-reads a published sheet and republishes the report.
    At most one refresh runs at a time; overlapping requests are dropped.
    """

    def __init__(self, report_store: ReportStore, url: str, interval_seconds: float = 60,
                 fetch: Fetcher = read_rows_from_url):
        self.store = report_store
        self.url = url
        self.interval_seconds = interval_seconds
        self.fetch = fetch
        self._in_flight = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def refresh_now(self, cancel: Optional[threading.Event] = None) -> bool:
        if not self.url:
            raise ValueError("LIVE_SHEET_URL is not configured")
        if not self._in_flight.acquire(blocking=False):
            logger.info("refresh skipped: another refresh is in flight")
            return False
        try:
            ticket = self.store.next_ticket()
            try:
                rows = self.fetch(self.url)
            except Exception as e:
                logger.warning("live refresh failed: %s", e)
                self.store.record_live_result(error=str(e))
                return True
            if cancel is not None and cancel.is_set():
                logger.info("live refresh discarded: live mode stopped")
                return True
            self.store.publish(build_report(rows, source="live"), ticket)
            self.store.record_live_result()
            return True
        finally:
            self._in_flight.release()

    def _run(self, stop: threading.Event):
        if not stop.is_set():
            self.refresh_now(cancel=stop)
        while not stop.wait(self.interval_seconds):
            self.refresh_now(cancel=stop)

    def start(self) -> bool:
        if not self.url:
            raise ValueError("LIVE_SHEET_URL is not configured")
        if self.is_running:
            return False
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, args=(self._stop,), name="live-sheet-refresh", daemon=True)
        self._thread.start()
        logger.info("live refresh started: every %ss from %s", self.interval_seconds, self.url)
        return True

    def stop(self) -> bool:
        if not self.is_running:
            return False
        self._stop.set()
        logger.info("live refresh stopped")
        return True


refresher = LiveSheetRefresher(store, settings.LIVE_SHEET_URL, settings.LIVE_REFRESH_SECONDS)


def get_refresher() -> LiveSheetRefresher:
    return refresher
