import pytest
from fastapi.testclient import TestClient

from roomgrid.main import app
from roomgrid.store import ReportStore, get_store
from roomgrid.utils.live_refresh import LiveSheetRefresher, get_refresher

SAMPLE_ROWS = [
    {
        "SCHEDULE": "9:00 AM-10:30 AM",
        "DAYS": "MW",
        "ROOM": "201 & 202",
        "INSTRUCTOR": "Dela Cruz,Juan",
        "SUBJECT": "ACC101",
        "DESCRIPTIVE TITLE": "Financial Accounting",
        "PYB": "BSA1A",
        "UNITS": "3",
    },
    {
        "SCHEDULE": "1:00 PM-4:00 PM",
        "DAYS": "F",
        "ROOM": "NA",
        "INSTRUCTOR": "DELA CRUZ, JUAN",
        "SUBJECT": "ACC199",
        "DESCRIPTIVE TITLE": "Practicum",
        "PYB": "BSA4A",
        "Units": 6,
    },
    {
        "SCHEDULE": "7:30 AM-10:30 AM",
        "DAYS": "SAT",
        "ROOM": "IR",
        "INSTRUCTOR": "Santos, Ana",
        "SUBJECT": "ACC301",
        "DESCRIPTIVE TITLE": "CPA Board Review",
        "PYB": "BSA4B",
        "UNIT": "2",
    },
    {
        "SCHEDULE": "8:00 AM-9:00 AM",
        "DAYS": "TTH",
        "ROOM": "SR",
        "INSTRUCTOR": "c/o PE Dept",
        "SUBJECT": "PE1",
        "DESCRIPTIVE TITLE": "Physical Education",
        "PYB": "BSA1A",
        "UNITS": "2",
    },
    {
        # malformed: no DAYS
        "SCHEDULE": "8:00 AM-9:00 AM",
        "ROOM": "101",
        "INSTRUCTOR": "Reyes, Mark",
    },
]

SAMPLE_CSV = (
    "SCHEDULE,DAYS,ROOM,INSTRUCTOR,SUBJECT,DESCRIPTIVE TITLE,PYB,UNITS\n"
    "9:00 AM-10:30 AM,MW,201 & 202,\"Dela Cruz,Juan\",ACC101,Financial Accounting,BSA1A,3\n"
    "1:00 PM-4:00 PM,F,NA,\"DELA CRUZ, JUAN\",ACC199,Practicum,BSA4A,6\n"
    "7:30 AM-10:30 AM,SAT,IR,\"Santos, Ana\",ACC301,CPA Board Review,BSA4B,2\n"
    "8:00 AM-9:00 AM,,101,\"Reyes, Mark\",ACC102,Cost Accounting,BSA2A,3\n"
)


@pytest.fixture
def sample_rows():
    return [dict(r) for r in SAMPLE_ROWS]


class StubFetcher:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = 0

    def __call__(self, url):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.rows


@pytest.fixture
def report_store():
    return ReportStore()


@pytest.fixture
def live_fetcher(sample_rows):
    return StubFetcher(rows=sample_rows)


@pytest.fixture
def refresher(report_store, live_fetcher):
    r = LiveSheetRefresher(report_store, "https://sheets.example/pub?output=csv",
                           interval_seconds=3600, fetch=live_fetcher)
    yield r
    r.stop()


@pytest.fixture
def client(report_store, refresher):
    app.dependency_overrides[get_store] = lambda: report_store
    app.dependency_overrides[get_refresher] = lambda: refresher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
