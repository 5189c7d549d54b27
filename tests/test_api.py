import pytest
from fastapi.testclient import TestClient

from app import app
from modules.inventory.session import FormSession
from tests.fakes import FakeInventoryClient

BASE = "/api/v1/inventory/form"


@pytest.fixture
def api(session):
    app.state.form_session = session
    yield TestClient(app)
    app.state.form_session = None


def test_health(api):
    assert api.get("/api/health").json()["status"] == "ok"
    assert api.get(f"{BASE}/health").status_code == 200


def test_session_missing_is_503():
    app.state.form_session = None
    assert TestClient(app).get(f"{BASE}/").status_code == 503


def test_get_form(api):
    body = api.get(f"{BASE}/").json()

    assert body["form"]["entries"] == {}
    assert body["autosaveStatus"] == "saved"
    assert body["autosaveText"] == "Auto-saved"
    assert body["saveStatus"] == "idle"


def test_catalog(api):
    body = api.get(f"{BASE}/catalog").json()

    assert [p["value"] for p in body["products"]] == ["productA", "productB", "productC"]
    assert body["rooms"][2] == {"value": "yaupon", "label": "Yaupon", "badge": "blue"}
    assert [r["value"] for r in body["reporters"]] == ["ana", "ben"]


def test_add_entries_and_summary(api):
    r = api.post(f"{BASE}/entries", json={"product": "productA", "room": "roomX", "type": "issued", "quantity": "10"})
    assert r.status_code == 200
    assert r.json()["autosaveStatus"] == "saving"
    api.post(f"{BASE}/entries", json={"product": "productA", "room": "roomY", "type": "returned", "quantity": 4})

    summary = api.get(f"{BASE}/summary").json()
    assert summary["products"] == [
        {"id": "productA", "product": "Product A", "totalIssued": 10, "totalReturned": 4, "netTotal": 6},
    ]
    assert [(r["room"], r["totalIssued"], r["totalReturned"], r["netTotal"]) for r in summary["rooms"]] == [
        ("Room X", 10, 0, 10),
        ("Room Y", 0, 4, -4),
    ]
    assert summary["totals"] == {"totalIssued": 10, "totalReturned": 4, "netTotal": 6}


def test_invalid_quantity_is_ignored(api):
    body = api.post(
        f"{BASE}/entries", json={"product": "productA", "room": "roomX", "type": "issued", "quantity": "-5"}
    ).json()

    assert body["form"]["entries"] == {}


def test_overlong_quantity_is_not_a_server_error(api):
    r = api.post(f"{BASE}/entries", json={"product": "productA", "room": "roomX", "type": "issued", "quantity": "9" * 5000})

    assert r.status_code == 200


def test_entries_listing_renders_net(api):
    api.post(f"{BASE}/entries", json={"product": "productB", "room": "roomY", "type": "returned", "quantity": "2"})

    rows = api.get(f"{BASE}/entries").json()
    assert rows == [{
        "product": "productB",
        "room": "roomY",
        "issued": 0,
        "returned": 2,
        "netTotal": -2,
        "productLabel": "Product B",
        "roomLabel": "Room Y",
        "netDisplay": {"text": "-2", "tone": "negative"},
    }]


def test_delete_entry(api):
    api.post(f"{BASE}/entries", json={"product": "productA", "room": "roomX", "type": "issued", "quantity": "4"})
    body = api.delete(f"{BASE}/entries/productA/roomX").json()

    assert body["form"]["entries"] == {}
    assert api.get(f"{BASE}/summary").json()["products"] == []


def test_set_date_and_reporter(api):
    api.put(f"{BASE}/date", json={"date": "2024-03-04"})
    body = api.put(f"{BASE}/reporter", json={"reporter": "ben"}).json()

    assert body["form"]["date"] == "2024-03-04"
    assert body["form"]["reporter"] == "ben"


def test_save_without_reporter_is_400(api, client):
    r = api.post(f"{BASE}/save")

    assert r.status_code == 400
    assert r.json()["detail"] == "Please fill in all required fields"
    assert r.json()["notice"]["variant"] == "destructive"
    assert client.saved == []


def test_save_success(api, client, storage):
    api.put(f"{BASE}/reporter", json={"reporter": "ana"})
    r = api.post(f"{BASE}/save")

    assert r.status_code == 200
    assert r.json()["result"] == {"id": 1}
    assert r.json()["notice"]["title"] == "Success"
    assert len(client.saved) == 1
    assert storage.load_saved() is None


def test_save_backend_failure_is_502(storage, scheduler, catalog):
    failing = FormSession(storage=storage, client=FakeInventoryClient(fail=True), scheduler=scheduler, catalog=catalog)
    failing.start()
    failing.set_reporter("ana")
    app.state.form_session = failing
    try:
        r = TestClient(app).post(f"{BASE}/save")
        assert r.status_code == 502
        assert r.json()["detail"] == "Failed to save inventory entry"
        assert r.json()["notice"] == {
            "title": "Error",
            "description": "Failed to save inventory entry",
            "variant": "destructive",
        }
        # delivered with the error, not queued for the next read
        assert TestClient(app).get(f"{BASE}/").json()["notice"] is None
        assert failing.state.reporter == "ana"
    finally:
        app.state.form_session = None


def test_export_download(api, client):
    api.post(f"{BASE}/entries", json={"product": "productA", "room": "roomX", "type": "issued", "quantity": "1"})
    r = api.post(f"{BASE}/export")

    assert r.status_code == 200
    assert r.content == client.csv
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="inventory-export-' in r.headers["content-disposition"]


def test_clear(api, scheduler):
    api.put(f"{BASE}/reporter", json={"reporter": "ana"})
    api.post(f"{BASE}/entries", json={"product": "productA", "room": "roomX", "type": "issued", "quantity": "1"})

    body = api.post(f"{BASE}/clear").json()

    assert body["form"]["entries"] == {}
    assert body["form"]["reporter"] == ""
    assert body["notice"]["title"] == "Form Cleared"
    assert scheduler.jobs == {}


def test_export_backend_failure_is_502_with_notice(storage, scheduler, catalog):
    failing = FormSession(storage=storage, client=FakeInventoryClient(fail=True), scheduler=scheduler, catalog=catalog)
    failing.start()
    app.state.form_session = failing
    try:
        r = TestClient(app).post(f"{BASE}/export")
        assert r.status_code == 502
        assert r.json()["detail"] == "Failed to export inventory data"
        assert r.json()["notice"]["variant"] == "destructive"
    finally:
        app.state.form_session = None
