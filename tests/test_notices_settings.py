from agency.models.setting import MESSAGE_TEMPLATE_KEY, Setting


def test_notice_crud_and_latest(admin):
    assert admin.get("/api/notice.getLatest").json() is None

    first = admin.post("/api/notice.create", json={"title": "Uno", "content": "primo"}).json()
    second = admin.post("/api/notice.create", json={"title": "Due", "content": "secondo"}).json()

    listed = admin.get("/api/notice.list").json()
    assert [n["id"] for n in listed] == [second["id"], first["id"]]
    assert admin.get("/api/notice.getLatest").json()["id"] == second["id"]

    assert admin.post("/api/notice.update", json={"id": first["id"], "content": "corretto"}).status_code == 200
    listed = admin.get("/api/notice.list").json()
    assert [n["content"] for n in listed if n["id"] == first["id"]] == ["corretto"]

    assert admin.post("/api/notice.delete", json={"id": second["id"]}).status_code == 200
    assert admin.get("/api/notice.getLatest").json()["id"] == first["id"]
    assert admin.post("/api/notice.delete", json={"id": second["id"]}).status_code == 404


def test_notice_reads_are_public_writes_are_not(client):
    assert client.get("/api/notice.list").status_code == 200
    assert client.get("/api/notice.getLatest").status_code == 200
    assert client.post("/api/notice.create", json={"title": "x", "content": "y"}).status_code == 401
    assert client.post("/api/notice.delete", json={"id": 1}).status_code == 401


def test_notice_requires_title_and_content(admin):
    assert admin.post("/api/notice.create", json={"title": "", "content": "y"}).status_code == 422
    assert admin.post("/api/notice.create", json={"title": "x"}).status_code == 422


def test_settings_upsert_overwrites(admin, db):
    assert admin.get("/api/settings.get", params={"key": MESSAGE_TEMPLATE_KEY}).json() is None

    r = admin.post("/api/settings.update", json={"key": MESSAGE_TEMPLATE_KEY, "value": "Hello"})
    assert r.json() == {"success": True}
    assert admin.get("/api/settings.get", params={"key": MESSAGE_TEMPLATE_KEY}).json() == "Hello"

    admin.post("/api/settings.update", json={"key": MESSAGE_TEMPLATE_KEY, "value": "Ciao {name}"})
    assert admin.get("/api/settings.get", params={"key": MESSAGE_TEMPLATE_KEY}).json() == "Ciao {name}"
    assert db.query(Setting).filter(Setting.key == MESSAGE_TEMPLATE_KEY).count() == 1


def test_settings_require_admin(client):
    assert client.post("/api/settings.update", json={"key": "k", "value": "v"}).status_code == 401


def test_settings_value_is_stored_verbatim(admin):
    template = "Ciao {name},\n\n  grazie per la disponibilità!\n"
    admin.post("/api/settings.update", json={"key": MESSAGE_TEMPLATE_KEY, "value": template})
    assert admin.get("/api/settings.get", params={"key": MESSAGE_TEMPLATE_KEY}).json() == template


def test_notice_keeps_leading_and_trailing_whitespace(admin):
    created = admin.post("/api/notice.create", json={"title": "Orari ", "content": "  indentato\n"}).json()
    assert created["title"] == "Orari "
    assert created["content"] == "  indentato\n"
    assert admin.get("/api/notice.getLatest").json()["content"] == "  indentato\n"
