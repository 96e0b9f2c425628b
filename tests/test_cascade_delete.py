from __future__ import annotations
import pytest
from app import create_app
from models import Major

API = "/api/v1"

COURSE = {"courseNameTH": "วิชา", "courseNameENG": "Course", "courseUnit": 3, "courseTheory": 2, "coursePractice": 1}

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

def _build(client, code: str, prefix: str):
    """Специальность → 2 категории → группа в первой → курсы разных видов привязки."""
    mid = client.post(f"{API}/majors", json={
        "major_code": code, "majorNameTH": "ท", "majorNameENG": code,
        "majorYear": 2566, "majorUnit": 120,
    }).get_json()["major_id"]
    c1 = client.post(f"{API}/categories", json={"category_name": "C1", "category_unit": 30, "major_id": mid}).get_json()["category_id"]
    c2 = client.post(f"{API}/categories", json={"category_name": "C2", "category_unit": 30, "major_id": mid}).get_json()["category_id"]
    g1 = client.post(f"{API}/groups", json={"group_name": "G1", "group_unit": 15, "category_id": c1}).get_json()["group_id"]
    courses = {
        "by_category": f"{prefix}1",   # только category_id
        "by_group": f"{prefix}2",      # только group_id
        "by_both": f"{prefix}3",
        "by_other_cat": f"{prefix}4",
    }
    for body in (
        dict(COURSE, course_id=courses["by_category"], category_id=c1),
        dict(COURSE, course_id=courses["by_group"], group_id=g1),
        dict(COURSE, course_id=courses["by_both"], category_id=c1, group_id=g1),
        dict(COURSE, course_id=courses["by_other_cat"], category_id=c2),
    ):
        assert client.post(f"{API}/courses", json=body).status_code == 201
    return {"major": mid, "categories": [c1, c2], "group": g1, "courses": courses}

def test_delete_major_removes_whole_tree(client):
    doomed = _build(client, "CS-2566", "CS")
    kept = _build(client, "IT-2566", "IT")

    r = client.delete(f"{API}/majors/{doomed['major']}")
    assert r.status_code == 200
    assert r.get_json()["message"] == "Major and related courses successfully deleted"

    assert client.get(f"{API}/majors/{doomed['major']}").status_code == 404
    for cid in doomed["categories"]:
        assert client.get(f"{API}/categories/{cid}").status_code == 404
    assert client.get(f"{API}/groups/{doomed['group']}").status_code == 404
    for course_id in doomed["courses"].values():
        assert client.get(f"{API}/courses/{course_id}").status_code == 404

    # соседняя специальность не задета
    assert client.get(f"{API}/majors/{kept['major']}").status_code == 200
    assert client.get(f"{API}/groups/{kept['group']}").status_code == 200
    for course_id in kept["courses"].values():
        assert client.get(f"{API}/courses/{course_id}").status_code == 200

def test_delete_category_removes_groups_and_their_courses(client):
    tree = _build(client, "CS-2566", "CS")
    c1, c2 = tree["categories"]
    courses = tree["courses"]

    assert client.delete(f"{API}/categories/{c1}").status_code == 200
    assert client.get(f"{API}/categories/{c1}").status_code == 404
    assert client.get(f"{API}/groups/{tree['group']}").status_code == 404
    assert client.get(f"{API}/courses/{courses['by_group']}").status_code == 404
    assert client.get(f"{API}/courses/{courses['by_both']}").status_code == 404

    # курс без группы остаётся, но теряет привязку к удалённой категории
    r = client.get(f"{API}/courses/{courses['by_category']}")
    assert r.status_code == 200
    assert r.get_json()["category_id"] is None
    assert client.get(f"{API}/courses/{courses['by_other_cat']}").get_json()["category_id"] == c2
    assert client.get(f"{API}/categories/{c2}").status_code == 200

def test_failed_major_cascade_leaves_everything_in_place(app, client):
    tree = _build(client, "CS-2566", "CS")
    store = app.extensions["catalog_store"]
    real_delete_where = store.delete_where

    def flaky_delete_where(model, *criteria):
        # падаем на последнем шаге, когда курсы/группы/категории уже удалены
        if model is Major:
            raise RuntimeError("disk on fire")
        return real_delete_where(model, *criteria)

    store.delete_where = flaky_delete_where
    try:
        r = client.delete(f"{API}/majors/{tree['major']}")
    finally:
        store.delete_where = real_delete_where
    assert r.status_code == 500
    assert r.get_json()["error"] == "An error occurred while deleting the major"

    assert client.get(f"{API}/majors/{tree['major']}").status_code == 200
    for cid in tree["categories"]:
        assert client.get(f"{API}/categories/{cid}").status_code == 200
    assert client.get(f"{API}/groups/{tree['group']}").status_code == 200
    for course_id in tree["courses"].values():
        assert client.get(f"{API}/courses/{course_id}").status_code == 200
