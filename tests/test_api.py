from io import BytesIO

from openpyxl import load_workbook

from conftest import SAMPLE_CSV

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(client, content=SAMPLE_CSV, filename="loads.csv"):
    return client.post(
        "/schedule/upload",
        files={"file": (filename, content.encode("utf-8"), "text/csv")},
    )


def test_root(client):
    assert client.get("/").status_code == 200


def test_no_data_before_upload(client):
    assert client.get("/allocation").json() == {"detail": "No data"}
    assert client.get("/allocation").status_code == 404
    assert client.get("/loads").status_code == 404
    assert client.get("/allocation/export").status_code == 404
    assert client.get("/loads/export").json() == {"detail": "No data"}

    status = client.get("/schedule/status").json()
    assert status["has_data"] is False
    assert status["source"] == "none"


def test_upload_builds_both_views(client):
    res = upload(client)
    assert res.status_code == 200
    status = res.json()
    assert status["source"] == "upload"
    assert status["has_data"] is True
    assert status["row_count"] == 4
    assert status["skipped_count"] == 1
    assert status["skipped"] == [{"index": 3, "reason": "missing_days"}]

    grid = client.get("/allocation").json()
    assert grid["rooms"] == ["201", "202", "IR"]
    assert [d["day"] for d in grid["days"]] == ["Monday", "Wednesday", "Saturday"]
    monday_nine = grid["days"][0]["slots"][2]
    assert monday_nine["label"] == "9:00 AM - 10:00 AM"
    assert monday_nine["occupied_count"] == 2
    assert monday_nine["vacant_count"] == 1
    assert monday_nine["per_room"]["201"]["is_occupied"] is True
    assert monday_nine["per_room"]["IR"]["segments"] == []

    loads = client.get("/loads").json()
    assert [i["name"] for i in loads["instructors"]] == ["Dela Cruz,Juan", "Santos, Ana"]
    assert loads["instructors"][0]["summary"]["total"] == 9


def test_upload_empty_result(client):
    res = upload(client, content="SCHEDULE,DAYS,ROOM\nsoon,MW,201\n")
    assert res.status_code == 200
    assert res.json()["has_data"] is False
    assert client.get("/allocation").status_code == 404


def test_upload_rejects_unknown_file(client):
    res = client.post("/schedule/upload", files={"file": ("loads.txt", b"hello", "text/plain")})
    assert res.status_code == 400


def test_instructor_cell(client):
    upload(client)
    res = client.get("/loads/cell", params={
        "instructor": "dela cruz, juan", "day": "monday", "slot": "10:00 AM - 11:00 AM",
    })
    assert res.status_code == 200
    cell = res.json()
    assert cell["has_schedule"] is True
    assert cell["rooms"] == ["201", "202"]

    res = client.get("/loads/cell", params={"instructor": "Nobody", "day": "Monday", "slot": "x"})
    assert res.status_code == 404
    res = client.get("/loads/cell", params={
        "instructor": "Santos, Ana", "day": "Funday", "slot": "7:30 AM - 10:30 AM",
    })
    assert res.status_code == 400


def test_exports(client):
    upload(client)

    res = client.get("/allocation/export")
    assert res.status_code == 200
    assert res.headers["content-type"] == XLSX_TYPE
    assert "room_allocation_" in res.headers["content-disposition"]
    ws = load_workbook(BytesIO(res.content)).active
    assert ws.cell(row=1, column=1).value == "Day"

    res = client.get("/loads/export")
    ws = load_workbook(BytesIO(res.content)).active
    assert ws.cell(row=2, column=1).value == "Dela Cruz,Juan"


def test_live_refresh_and_upload_stops_live(client, refresher):
    res = client.post("/schedule/live/refresh")
    assert res.status_code == 200
    assert res.json()["source"] == "live"
    assert res.json()["live_last_success"] is not None

    assert client.post("/schedule/live/start").json()["live_mode"] is True
    status = upload(client).json()
    assert status["live_mode"] is False
    assert status["source"] == "upload"


def test_live_requires_url(client, refresher):
    refresher.url = ""
    assert client.post("/schedule/live/start").status_code == 400
    assert client.post("/schedule/live/refresh").status_code == 400


def test_rejected_upload_keeps_live_mode(client, refresher):
    assert client.post("/schedule/live/start").json()["live_mode"] is True

    res = client.post("/schedule/upload", files={"file": ("loads.txt", b"hello", "text/plain")})
    assert res.status_code == 400

    assert client.get("/schedule/status").json()["live_mode"] is True
