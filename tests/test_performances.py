from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from agency.main import app
from agency.models.performance import Performance, PerformanceStatus
from conftest import make_artist


def _create(client, artist_id, when, status=None, title="Show"):
    body = {"artistId": artist_id, "title": title, "performanceDate": when.isoformat()}
    if status:
        body["status"] = status
    r = client.post("/api/performance.create", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def _pending(client, artist_id, when):
    r = client.post(
        "/api/performance.createPending",
        json={"artistId": artist_id, "title": "Richiesta", "performanceDate": when.isoformat()},
    )
    assert r.status_code == 200, r.text
    return r.json()


def test_monthly_includes_new_performance_with_artist_name(admin):
    a = make_artist(admin, name="Test Artist", genres=["Rock"])
    tonight = datetime.now().replace(hour=19, minute=0, second=0, microsecond=0)
    p = _create(admin, a["id"], tonight, status="scheduled", title="Test Performance")
    assert p["status"] == "scheduled"

    rows = admin.get("/api/performance.getMonthly", params={"year": tonight.year, "month": tonight.month}).json()
    match = [r for r in rows if r["id"] == p["id"]]
    assert len(match) == 1
    assert match[0]["artistName"] == "Test Artist"
    assert match[0]["artistGenres"] == ["Rock"]
    assert match[0]["title"] == "Test Performance"


def test_monthly_range_is_whole_calendar_month(client, admin):
    a = make_artist(admin)
    inside = [datetime(2030, 3, 1, 0, 0), datetime(2030, 3, 15, 12, 30), datetime(2030, 3, 31, 23, 59, 59)]
    outside = [datetime(2030, 2, 28, 23, 59, 59), datetime(2030, 4, 1, 0, 0)]
    for when in outside + inside:
        _create(admin, a["id"], when)

    # il calendario è pubblico
    anon = TestClient(app)
    rows = anon.get("/api/performance.getMonthly", params={"year": 2030, "month": 3}).json()
    got = [datetime.fromisoformat(r["performanceDate"]) for r in rows]
    assert got == sorted(inside)


def test_monthly_december_rolls_over_year(admin):
    a = make_artist(admin)
    _create(admin, a["id"], datetime(2030, 12, 31, 22, 0))
    _create(admin, a["id"], datetime(2031, 1, 1, 0, 0))
    rows = admin.get("/api/performance.getMonthly", params={"year": 2030, "month": 12}).json()
    assert len(rows) == 1


def test_monthly_rejects_bad_month(client):
    assert client.get("/api/performance.getMonthly", params={"year": 2030, "month": 13}).status_code == 422
    assert client.get("/api/performance.getMonthly", params={"year": 2030, "month": 0}).status_code == 422


def test_create_pending_is_public_and_forces_status(client):
    a = make_artist(client)
    r = client.post(
        "/api/performance.createPending",
        json={
            "artistId": a["id"],
            "title": "Richiesta",
            "performanceDate": "2030-05-02T20:00:00",
            "status": "confirmed",
        },
    )
    assert r.status_code == 200
    assert r.json()["status"] == "pending"


def test_admin_create_requires_admin(client):
    a = make_artist(client)
    r = client.post(
        "/api/performance.create",
        json={"artistId": a["id"], "title": "Show", "performanceDate": "2030-05-02T20:00:00"},
    )
    assert r.status_code == 401


def test_unknown_artist_is_constraint_violation(admin, db):
    r = admin.post(
        "/api/performance.create",
        json={"artistId": 4242, "title": "Show", "performanceDate": "2030-05-02T20:00:00"},
    )
    assert r.status_code == 409
    assert "error" in r.json()
    assert db.query(Performance).count() == 0


def test_invalid_shapes_are_rejected(admin):
    a = make_artist(admin)
    base = {"artistId": a["id"], "title": "Show", "performanceDate": "2030-05-02T20:00:00"}
    assert admin.post("/api/performance.create", json={**base, "status": "maybe"}).status_code == 422
    assert admin.post("/api/performance.create", json={**base, "performanceDate": "domani"}).status_code == 422
    assert admin.post("/api/performance.create", json={**base, "artistId": "abc"}).status_code == 422
    assert admin.post("/api/performance.update", json={"id": 1, "status": None}).status_code == 422


def test_duplicate_pending_requests_are_allowed(client, db):
    a = make_artist(client)
    when = datetime(2030, 6, 6, 20, 0)
    _pending(client, a["id"], when)
    _pending(client, a["id"], when)
    assert db.query(Performance).filter(Performance.artist_id == a["id"]).count() == 2


def test_confirm_touches_only_target_row(admin, db):
    a = make_artist(admin)
    when = datetime(2030, 6, 6, 20, 0)
    first = _pending(admin, a["id"], when)
    second = _pending(admin, a["id"], when)
    other_day = _pending(admin, a["id"], when + timedelta(days=1))

    r = admin.post("/api/performance.confirm", json={"id": first["id"]})
    assert r.json() == {"success": True}

    statuses = {p.id: p.status for p in db.query(Performance).all()}
    assert statuses[first["id"]] == PerformanceStatus.CONFIRMED
    assert statuses[second["id"]] == PerformanceStatus.PENDING
    assert statuses[other_day["id"]] == PerformanceStatus.PENDING


def test_confirm_missing_is_404(admin):
    assert admin.post("/api/performance.confirm", json={"id": 999}).status_code == 404


def test_update_and_delete(admin):
    a = make_artist(admin)
    p = _create(admin, a["id"], datetime(2030, 7, 1, 21, 0))
    r = admin.post("/api/performance.update", json={"id": p["id"], "status": "completed", "notes": "ok"})
    assert r.status_code == 200

    got = admin.get("/api/performance.getById", params={"id": p["id"]}).json()
    assert got["status"] == "completed"
    assert got["notes"] == "ok"
    assert got["title"] == "Show"

    assert admin.post("/api/performance.delete", json={"id": p["id"]}).status_code == 200
    assert admin.get("/api/performance.getById", params={"id": p["id"]}).status_code == 404
    assert admin.post("/api/performance.delete", json={"id": p["id"]}).status_code == 404


def test_weekly_window(admin):
    a = make_artist(admin)
    now = datetime.now().replace(microsecond=0)
    soon = _create(admin, a["id"], now + timedelta(days=1))
    _create(admin, a["id"], now + timedelta(days=10))
    _create(admin, a["id"], now - timedelta(days=1))

    rows = admin.get("/api/performance.getWeekly").json()
    assert [r["id"] for r in rows] == [soon["id"]]


def test_list_with_range(admin):
    a = make_artist(admin)
    p1 = _create(admin, a["id"], datetime(2030, 1, 10, 20, 0))
    p2 = _create(admin, a["id"], datetime(2030, 1, 20, 20, 0))
    _create(admin, a["id"], datetime(2030, 2, 10, 20, 0))

    everything = admin.get("/api/performance.list").json()
    assert len(everything) == 3

    rows = admin.get(
        "/api/performance.list",
        params={"startDate": "2030-01-01T00:00:00", "endDate": "2030-01-31T23:59:59"},
    ).json()
    assert [r["id"] for r in rows] == [p1["id"], p2["id"]]


def test_offset_dates_are_stored_as_local_time(admin):
    a = make_artist(admin)
    aware = datetime(2030, 8, 1, 12, 0).astimezone()
    p = _create(admin, a["id"], aware)
    assert datetime.fromisoformat(p["performanceDate"]) == datetime(2030, 8, 1, 12, 0)
