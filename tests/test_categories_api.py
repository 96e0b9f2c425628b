from __future__ import annotations
import pytest
from app import create_app

API = "/api/v1"

@pytest.fixture()
def app():
    app = create_app("test")
    yield app
    app.extensions["catalog_store"].close()

@pytest.fixture()
def client(app):
    with app.app_context():
        with app.test_client() as c:
            yield c

def _major(client, code="CS-2566"):
    r = client.post(f"{API}/majors", json={
        "major_code": code, "majorNameTH": "วิทย์คอม", "majorNameENG": "Computer Science",
        "majorYear": 2566, "majorUnit": 128,
    })
    assert r.status_code == 201
    return r.get_json()["major_id"]

def test_category_create_with_unknown_major_inserts_nothing(client):
    r = client.post(f"{API}/categories", json={"category_name": "General", "category_unit": 30, "major_id": 42})
    assert r.status_code == 400
    assert r.get_json()["error"] == "Invalid major_id: No matching major found"
    r = client.get(f"{API}/categories")
    assert r.status_code == 200
    assert r.get_json() == []

def test_category_crud(client):
    mid = _major(client)
    r = client.post(f"{API}/categories", json={"category_name": "General", "category_unit": 30, "major_id": mid})
    assert r.status_code == 201
    cat = r.get_json()
    assert cat["major_id"] == mid
    cid = cat["category_id"]

    r = client.get(f"{API}/categories/{cid}")
    assert r.status_code == 200
    assert r.get_json()["category_name"] == "General"

    r = client.put(f"{API}/categories/{cid}", json={"category_name": "General Ed", "category_unit": 32, "major_id": mid})
    assert r.status_code == 200
    assert r.get_json()["category_unit"] == 32

    r = client.delete(f"{API}/categories/{cid}")
    assert r.status_code == 200
    assert r.get_json()["message"] == "Category successfully deleted"
    assert client.get(f"{API}/categories/{cid}").status_code == 404

def test_category_missing_fields(client):
    mid = _major(client)
    r = client.post(f"{API}/categories", json={"category_name": "General", "major_id": mid})
    assert r.status_code == 400
    assert r.get_json()["error"] == "Missing required fields"
    assert any(e["loc"] == ["category_unit"] for e in r.get_json()["detail"])

def test_category_invalid_and_missing_ids(client):
    assert client.get(f"{API}/categories/abc").status_code == 400
    assert client.get(f"{API}/categories/999").status_code == 404
    assert client.delete(f"{API}/categories/abc").status_code == 400
    assert client.delete(f"{API}/categories/999").status_code == 404

def test_update_missing_category_is_404(client):
    mid = _major(client)
    r = client.put(f"{API}/categories/999", json={"category_name": "X", "category_unit": 3, "major_id": mid})
    assert r.status_code == 404
    assert r.get_json()["error"] == "Category not found"

def test_update_category_guards(client):
    mid = _major(client)
    cid = client.post(f"{API}/categories", json={"category_name": "G", "category_unit": 3, "major_id": mid}).get_json()["category_id"]
    assert client.put(f"{API}/categories/x", json={"category_name": "G", "category_unit": 3, "major_id": mid}).status_code == 400
    assert client.put(f"{API}/categories/{cid}", json={"category_name": "G"}).status_code == 400
    r = client.put(f"{API}/categories/{cid}", json={"category_name": "G", "category_unit": 3, "major_id": 777})
    assert r.status_code == 400
    assert client.get(f"{API}/categories/{cid}").get_json()["major_id"] == mid

def test_categories_by_major_code(client):
    r = client.get(f"{API}/categories/by-major/NOPE")
    assert r.status_code == 404
    assert r.get_json()["error"] == "Major not found"

    mid = _major(client)
    r = client.get(f"{API}/categories/by-major/CS-2566")
    assert r.status_code == 200
    assert r.get_json() == []

    other = _major(client, "IT-2566")
    client.post(f"{API}/categories", json={"category_name": "A", "category_unit": 3, "major_id": mid})
    client.post(f"{API}/categories", json={"category_name": "B", "category_unit": 3, "major_id": mid})
    client.post(f"{API}/categories", json={"category_name": "Other", "category_unit": 3, "major_id": other})
    r = client.get(f"{API}/categories/by-major/CS-2566")
    assert r.status_code == 200
    assert [c["category_name"] for c in r.get_json()] == ["A", "B"]

def test_category_oversized_ids_are_400(client):
    assert client.get(f"{API}/categories/99999999999999999999").status_code == 400
    assert client.get(f"{API}/groups/by-category/99999999999999999999").status_code == 400
    r = client.post(f"{API}/categories", json={"category_name": "General", "category_unit": 30, "major_id": 10**20})
    assert r.status_code == 400
    assert r.get_json()["error"] == "Invalid field values"
    assert client.get(f"{API}/categories").get_json() == []
