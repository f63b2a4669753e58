from nexus.schemas.records import Item, ItemStatus, LogAction
from nexus.services.inventory import DEFAULT_ITEM_IMAGE, filter_items, generate_item_code


def _item(name, code="", category="", status=ItemStatus.SERVICE, area_id=""):
    return Item(id=name, name=name, code=code, category=category, status=status, area_id=area_id)


def test_generate_item_code_format():
    code = generate_item_code()
    assert code.startswith("INV-")
    assert len(code) == 10
    assert code[4:].isdigit()


def test_filter_items_search_status_and_area():
    items = [
        _item("Forklift", code="INV-1", category="Vehicles", area_id="a1"),
        _item("Drill", code="INV-2", category="Tools", status=ItemStatus.MAINTENANCE, area_id="a1"),
        _item("Hammer", code="INV-3", category="Tools", area_id="a2"),
        _item("Pallet Jack", code="FORK-9", category="Vehicles", status=ItemStatus.MAINTENANCE, area_id="a2"),
    ]
    assert [i.name for i in filter_items(items, q="fork")] == ["Forklift", "Pallet Jack"]
    assert [i.name for i in filter_items(items, q="TOOLS")] == ["Drill", "Hammer"]
    assert [i.name for i in filter_items(items, status=ItemStatus.MAINTENANCE)] == ["Drill", "Pallet Jack"]
    assert [i.name for i in filter_items(items, area_id="a2")] == ["Hammer", "Pallet Jack"]
    assert [i.name for i in filter_items(items, q="tools", area_id="a1")] == ["Drill"]
    assert filter_items(items) == items
    assert filter_items(items, q="nothing-matches") == []


def _payload(**overrides):
    body = {"name": "Drill", "category": "Tools", "areaId": "area-1", "description": "Cordless"}
    body.update(overrides)
    return body


def test_create_item_defaults(client, admin_headers, gateway):
    r = client.post("/inventory/items", json=_payload(), headers=admin_headers)
    assert r.status_code == 201
    item = r.json()
    assert item["code"].startswith("INV-")
    assert item["status"] == "SERVICE"
    assert item["image"] == DEFAULT_ITEM_IMAGE
    assert item["createdAt"] == item["updatedAt"]

    log = gateway.get_logs()[0]
    assert log.action == LogAction.CREATE
    assert log.details == "Created item: Drill"
    assert log.username == "PlainAdmin"


def test_create_item_keeps_given_code(client, admin_headers):
    r = client.post("/inventory/items", json=_payload(code="TOOL-42"), headers=admin_headers)
    assert r.json()["code"] == "TOOL-42"


def test_create_item_requires_name_category_area(client, admin_headers, gateway):
    for missing in ("name", "category", "areaId"):
        r = client.post("/inventory/items", json=_payload(**{missing: ""}), headers=admin_headers)
        assert r.status_code == 400
    assert gateway.get_items() == []


def test_users_cannot_mutate_items(client, user_headers, admin_headers):
    assert client.post("/inventory/items", json=_payload(), headers=user_headers).status_code == 403
    item = client.post("/inventory/items", json=_payload(), headers=admin_headers).json()
    assert client.put(f"/inventory/items/{item['id']}", json=_payload(), headers=user_headers).status_code == 403
    assert client.delete(f"/inventory/items/{item['id']}", headers=user_headers).status_code == 403


def test_users_can_list_items(client, user_headers, admin_headers):
    client.post("/inventory/items", json=_payload(), headers=admin_headers)
    r = client.get("/inventory/items", headers=user_headers)
    assert r.status_code == 200
    assert [i["name"] for i in r.json()] == ["Drill"]


def test_list_requires_session(client):
    assert client.get("/inventory/items").status_code == 401


def test_list_filters_over_http(client, admin_headers):
    client.post("/inventory/items", json=_payload(name="Drill"), headers=admin_headers)
    client.post("/inventory/items", json=_payload(name="Crane", category="Vehicles", areaId="area-2", status="MAINTENANCE"), headers=admin_headers)
    client.post("/inventory/items", json=_payload(name="Saw", areaId="area-2"), headers=admin_headers)

    everything = [i["name"] for i in client.get("/inventory/items", headers=admin_headers).json()]
    by_area = [i["name"] for i in client.get("/inventory/items", params={"areaId": "area-2"}, headers=admin_headers).json()]
    assert sorted(by_area) == ["Crane", "Saw"]
    assert by_area == [n for n in everything if n in by_area]

    r = client.get("/inventory/items", params={"status": "MAINTENANCE"}, headers=admin_headers)
    assert [i["name"] for i in r.json()] == ["Crane"]
    r = client.get("/inventory/items", params={"q": "tool", "areaId": "area-2"}, headers=admin_headers)
    assert [i["name"] for i in r.json()] == ["Saw"]


def test_update_item(client, admin_headers, gateway):
    item = client.post("/inventory/items", json=_payload(), headers=admin_headers).json()
    r = client.put(
        f"/inventory/items/{item['id']}",
        json=_payload(name="Hammer Drill", code=item["code"], status="OUT_OF_SERVICE", image=item["image"]),
        headers=admin_headers,
    )
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == item["id"]
    assert updated["createdAt"] == item["createdAt"]
    assert updated["status"] == "OUT_OF_SERVICE"
    assert gateway.get_item(item["id"]).name == "Hammer Drill"
    assert gateway.get_logs()[0].details == "Updated item: Hammer Drill"


def test_update_without_code_or_image_keeps_them(client, admin_headers, gateway):
    item = client.post("/inventory/items", json=_payload(), headers=admin_headers).json()
    r = client.put(
        f"/inventory/items/{item['id']}",
        json={"name": "Drill", "category": "Tools", "areaId": "area-2"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    stored = gateway.get_item(item["id"])
    assert stored.code == item["code"]
    assert stored.image == DEFAULT_ITEM_IMAGE
    assert stored.description == "Cordless"
    assert stored.area_id == "area-2"


def test_update_can_clear_image_and_description(client, admin_headers, gateway):
    item = client.post("/inventory/items", json=_payload(), headers=admin_headers).json()
    client.put(f"/inventory/items/{item['id']}", json=_payload(image="", description=""), headers=admin_headers)
    stored = gateway.get_item(item["id"])
    assert stored.image == ""
    assert stored.description == ""
    assert stored.code == item["code"]


def test_update_missing_item(client, admin_headers):
    r = client.put("/inventory/items/missing", json=_payload(), headers=admin_headers)
    assert r.status_code == 404


def test_delete_item(client, admin_headers, gateway):
    item = client.post("/inventory/items", json=_payload(), headers=admin_headers).json()
    r = client.delete(f"/inventory/items/{item['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert gateway.get_item(item["id"]) is None
    log = gateway.get_logs()[0]
    assert log.action == LogAction.DELETE
    assert log.details == f"Deleted item ID: {item['id']}"
    assert client.delete(f"/inventory/items/{item['id']}", headers=admin_headers).status_code == 404
