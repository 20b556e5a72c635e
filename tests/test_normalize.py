import math

import pytest

from roomgrid.utils.normalize import (
    classify_title, normalize_row, normalize_rows, resolve_units, to_str,
)


def base_row(**kw):
    row = {
        "SCHEDULE": "9:00 AM-10:30 AM",
        "DAYS": "MW",
        "ROOM": "201",
        "INSTRUCTOR": "Dela Cruz, Juan",
        "SUBJECT": "ACC101",
        "DESCRIPTIVE TITLE": "Financial Accounting",
        "PYB": "BSA1A",
        "UNITS": "3",
    }
    row.update(kw)
    return row


def test_row_fans_out_per_room():
    entries = normalize_row(base_row(ROOM="201 & 202"))
    assert [e.room for e in entries] == ["201", "202"]
    e = entries[0]
    assert e.days == {1, 3}
    assert (e.start_minutes, e.end_minutes) == (540, 630)
    assert e.schedule_label == "9:00 AM-10:30 AM"
    assert e.category == "course"
    assert (e.course_units, e.ojt_units, e.competency_appraisal_units) == (3, 0, 0)


@pytest.mark.parametrize("title,expected", [
    ("Financial Accounting", "course"),
    ("OJT 1", "ojt"),
    ("Accounting Practicum", "ojt"),
    ("Office Internship", "ojt"),
    ("On-the-Job Training", "ojt"),
    ("Work Integrated Learning", "ojt"),
    ("Capstone Project", "ojt"),
    ("Wildlife Biology", "course"),
    ("Competency Appraisal 2", "competency_appraisal"),
    ("CPALE Review", "competency_appraisal"),
    ("CPA Board Exam Prep", "competency_appraisal"),
    ("Internship and Competency Appraisal", "ojt"),
])
def test_classify_title(title, expected):
    assert classify_title(title) == expected


def test_roomless_exempt_categories_keep_one_entry():
    entries = normalize_row(base_row(ROOM="NA", **{"DESCRIPTIVE TITLE": "Practicum"}))
    assert len(entries) == 1
    assert entries[0].room == ""
    assert entries[0].ojt_units == 3
    assert entries[0].course_units == 0


@pytest.mark.parametrize("overrides,reason", [
    ({"SCHEDULE": ""}, "missing_schedule"),
    ({"DAYS": None}, "missing_days"),
    ({"SCHEDULE": "9 to 10"}, "bad_time"),
    ({"SCHEDULE": "13:00 PM-2:00 PM"}, "bad_time"),
    ({"SCHEDULE": "10:30 AM-9:00 AM"}, "non_positive_duration"),
    ({"SCHEDULE": "9:00 AM-9:00 AM"}, "non_positive_duration"),
    ({"DAYS": "XYZ"}, "bad_days"),
    ({"ROOM": "NA"}, "no_room"),
    ({"ROOM": float("nan")}, "no_room"),
])
def test_malformed_rows(overrides, reason):
    with pytest.raises(ValueError, match=reason):
        normalize_row(base_row(**overrides))


def test_normalize_rows_reports_skips():
    rows = [base_row(), base_row(DAYS=""), base_row(ROOM="101/102"), base_row(SCHEDULE="later")]
    result = normalize_rows(rows)
    assert len(result.entries) == 3
    assert [(s.index, s.reason) for s in result.skipped] == [(1, "missing_days"), (3, "bad_time")]


def test_title_falls_back_to_subject():
    row = base_row()
    del row["DESCRIPTIVE TITLE"]
    assert normalize_row(row)[0].title == "ACC101"
    row.pop("SUBJECT")
    assert normalize_row(row)[0].title == "Untitled Class"


@pytest.mark.parametrize("row,expected", [
    ({"UNITS": "3"}, 3.0),
    ({"UNITS ": "2"}, 2.0),
    ({" UNIT": 1.5}, 1.5),
    ({"UNITS": "", "Unit": 4}, 4.0),
    ({"UNITS": "n/a", "UNIT": "1.5"}, 1.5),
    ({"Units": float("nan"), "units": "5"}, 5.0),
    ({"UNITS": "3 units"}, 3.0),
    ({}, 0.0),
])
def test_resolve_units(row, expected):
    assert resolve_units(row) == expected


def test_to_str():
    assert to_str(None) == ""
    assert to_str(math.nan) == ""
    assert to_str("  x ") == "x"
    assert to_str(3) == "3"
