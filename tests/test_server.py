import pytest
from fastapi.testclient import TestClient

from slaangle.server.app import create_app


@pytest.fixture
def client(controller):
    return TestClient(create_app(controller))


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_printers(client):
    data = client.get("/api/printers").json()
    assert len(data["printers"]) == 4
    assert data["printers"][0]["pixelX"] == 35.0
    assert data["error"] is None


def test_derive_is_stateless(client):
    res = client.post("/api/derive", json={"manual_pixel_x": 20, "manual_pixel_y": 20, "layer_height": 50})
    assert res.status_code == 200
    assert res.json()["angle_x"]["display"] == 21.8014
    assert client.get("/api/state").json()["input"]["manual_pixel_x"] is None


def test_derive_invalid_layer_height(client):
    res = client.post("/api/derive", json={"printer_id": "mars-3", "layer_height": 5})
    data = res.json()
    assert data["angle_x"] is None
    assert data["diagrams"]["combined"]["fallback"] is True


def test_derive_unknown_printer(client):
    assert client.post("/api/derive", json={"printer_id": "nope"}).status_code == 404


def test_update_state(client):
    data = client.post("/api/state", json={"printer_id": "saturn-3-ultra"}).json()
    assert data["input"]["selected_printer"]["id"] == "saturn-3-ultra"
    assert set(data["derived"]["diagrams"]) == {"x", "y"}
    data = client.post("/api/state", json={"printer_id": None, "manual_pixel_x": "abc"}).json()
    assert data["input"]["selected_printer"] is None
    assert data["derived"]["errors"]["manual_pixel_x"] == "Please enter a valid number"


def test_update_state_rejects_unknown_fields(client):
    assert client.post("/api/state", json={"colour": "red"}).status_code == 400


def test_toggle_favorite(client):
    data = client.post("/api/favorites/photon-m5s").json()
    assert data["favorite"] is True
    assert data["favorites"] == ["photon-m5s"]


def test_key_navigation(client):
    data = client.post("/api/key", json={"key": "ArrowDown"}).json()
    assert data["dropdown_open"] is True and data["highlighted_index"] == 0
    data = client.post("/api/key", json={"key": "Enter"}).json()
    assert data["selected"]["id"] == "mars-3"
    assert client.post("/api/key", json={}).status_code == 400


def test_manual_entry_replaces_selected_printer(client):
    client.post("/api/state", json={"printer_id": "mars-3"})
    data = client.post("/api/state", json={"manual_pixel_x": 20000}).json()
    assert data["input"]["selected_printer"] is None
    assert data["derived"]["errors"]["manual_pixel_x"] == "Value must not exceed 10000μm"
    assert data["derived"]["angle_x"] is None


def test_printer_in_same_update_wins_over_manual_values(client):
    data = client.post("/api/state", json={"manual_pixel_x": "abc", "printer_id": "mars-3"}).json()
    assert data["input"]["selected_printer"]["id"] == "mars-3"
    assert data["input"]["manual_pixel_x"] is None
    assert data["derived"]["angle_x"] is not None


def test_derive_with_inline_printer(client):
    printer = {"id": "x", "manufacturer": "Acme", "model": "One", "pixelX": 20, "pixelY": 20}
    data = client.post("/api/derive", json={"printer": printer, "layer_height": 50}).json()
    assert data["angle_x"]["display"] == 21.8014


def test_derive_malformed_inline_printer(client):
    res = client.post("/api/derive", json={"printer": {"id": "x", "manufacturer": "Acme"}})
    assert res.status_code == 400
    assert "Malformed printer" in res.json()["detail"]
