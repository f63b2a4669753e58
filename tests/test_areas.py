from nexus.schemas.records import LogAction
from nexus.services.areas import DEFAULT_AREA_IMAGE


def test_seeded_areas_listed(client, user_headers):
    r = client.get("/areas", headers=user_headers)
    assert r.status_code == 200
    assert [a["id"] for a in r.json()] == [f"area-{i}" for i in range(1, 7)]


def test_create_area(client, admin_headers, gateway):
    r = client.post("/areas", json={"name": "Warehouse", "description": "Main storage"}, headers=admin_headers)
    assert r.status_code == 201
    area = r.json()
    assert area["image"] == DEFAULT_AREA_IMAGE
    assert gateway.get_area(area["id"]).name == "Warehouse"
    assert gateway.get_logs()[0].details == "New area created: Warehouse"


def test_create_area_requires_name_and_description(client, admin_headers):
    assert client.post("/areas", json={"name": "Warehouse"}, headers=admin_headers).status_code == 400
    assert client.post("/areas", json={"description": "x"}, headers=admin_headers).status_code == 400


def test_users_cannot_manage_areas(client, user_headers):
    assert client.post("/areas", json={"name": "A", "description": "B"}, headers=user_headers).status_code == 403
    assert client.delete("/areas/area-1", headers=user_headers).status_code == 403


def test_update_area_keeps_omitted_fields(client, admin_headers, gateway):
    r = client.put("/areas/area-1", json={"name": "Loading Dock"}, headers=admin_headers)
    assert r.status_code == 200
    area = gateway.get_area("area-1")
    assert area.name == "Loading Dock"
    assert area.description == "Designated space for operations."
    log = gateway.get_logs()[0]
    assert log.action == LogAction.UPDATE
    assert log.details == "Area updated: Loading Dock"


def test_update_area_requires_name(client, admin_headers):
    assert client.put("/areas/area-1", json={"name": "  "}, headers=admin_headers).status_code == 400


def test_update_missing_area(client, admin_headers):
    assert client.put("/areas/nope", json={"name": "X"}, headers=admin_headers).status_code == 404


def test_delete_area_leaves_items(client, admin_headers, gateway):
    item = client.post(
        "/inventory/items",
        json={"name": "Drill", "category": "Tools", "areaId": "area-3"},
        headers=admin_headers,
    ).json()
    r = client.delete("/areas/area-3", headers=admin_headers)
    assert r.status_code == 200
    assert gateway.get_area("area-3") is None
    assert gateway.get_item(item["id"]).area_id == "area-3"
    assert gateway.get_logs()[0].details == "Area deleted ID: area-3"

    csv = client.get("/inventory/export.csv", headers=admin_headers).text
    assert ",N/A," in csv
