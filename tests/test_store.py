from __future__ import annotations
import pytest
from sqlalchemy.exc import IntegrityError

from app import create_app
from blueprints.catalog.errors import DuplicateEntity
from blueprints.catalog.store import CatalogStore, get_store
from extensions import db
from models import Category, Major

def _major(code: str) -> Major:
    return Major(major_code=code, majorNameTH="ท", majorNameENG="Major", majorYear=2566, majorUnit=120)

@pytest.fixture()
def app():
    app = create_app("test")
    yield app
    app.extensions["catalog_store"].close()

def test_store_is_registered_and_open(app):
    with app.app_context():
        store = get_store()
        assert isinstance(store, CatalogStore)
        assert store.is_open

def test_closed_store_refuses_work(app):
    store = app.extensions["catalog_store"]
    store.close()
    assert not store.is_open
    with app.app_context():
        with pytest.raises(RuntimeError):
            store.get(Major, 1)
    # повторный close безопасен
    store.close()

def test_open_requires_init_app():
    with pytest.raises(RuntimeError):
        CatalogStore(db).open()

def test_add_maps_unique_violation(app):
    with app.app_context():
        store = get_store()
        store.add(_major("CS"))
        with pytest.raises(DuplicateEntity) as exc:
            store.add(_major("CS"), conflict="Major code already exists")
        assert exc.value.status == 409
        assert exc.value.message == "Major code already exists"
        assert len(store.all(Major)) == 1

def test_transaction_rolls_back_on_error(app):
    with app.app_context():
        store = get_store()
        major = store.add(_major("CS"))
        mid = major.major_id
        with pytest.raises(ValueError):
            with store.transaction() as session:
                session.add(Category(category_name="C", category_unit=3, major_id=mid))
                session.flush()
                store.delete_where(Major, Major.major_id == mid)
                raise ValueError("abort")
        assert store.get(Major, mid) is not None
        assert store.all(Category) == []

def test_ids_and_filters(app):
    with app.app_context():
        store = get_store()
        a = store.add(_major("A"))
        b = store.add(_major("B"))
        with store.transaction() as session:
            session.add_all([
                Category(category_name="A1", category_unit=3, major_id=a.major_id),
                Category(category_name="A2", category_unit=3, major_id=a.major_id),
                Category(category_name="B1", category_unit=3, major_id=b.major_id),
            ])
        names = [c.category_name for c in store.all(Category, Category.major_id == a.major_id, order_by=Category.category_id)]
        assert names == ["A1", "A2"]
        assert len(store.ids(Category.category_id, Category.major_id == b.major_id)) == 1
        assert store.first(Major, major_code="B").major_id == b.major_id
        assert store.first(Major, major_code="Z") is None

def test_add_keeps_not_null_violation_as_integrity_error(app):
    # только нарушение уникальности — это 409; NOT NULL уходит как есть
    with app.app_context():
        store = get_store()
        broken = _major("CS")
        broken.majorNameTH = None
        with pytest.raises(IntegrityError):
            store.add(broken)
        assert store.all(Major) == []
