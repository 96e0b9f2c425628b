"""
Idempotent seed-скрипт демо-каталога.
Запуск:
  python seed.py --reset   # дропнуть и пересоздать таблицы + демо-данные
  python seed.py           # мягкое наполнение недостающих данных (idempotent)
"""
from __future__ import annotations
import argparse

from blueprints.catalog.store import CatalogStore
from models import Category, Course, GroupMajor, Major

DEMO_MAJOR = {
    "major_code": "CS-2566",
    "majorNameTH": "วิทยาการคอมพิวเตอร์",
    "majorNameENG": "Computer Science",
    "majorYear": 2566,
    "majorUnit": 128,
    "status": "active",
}

DEMO_CATEGORIES = [
    {"category_name": "General Education", "category_unit": 30},
    {"category_name": "Specific Courses", "category_unit": 92},
    {"category_name": "Free Electives", "category_unit": 6},
]

DEMO_GROUPS = {
    "Specific Courses": [
        {"group_name": "Core Courses", "group_unit": 60},
        {"group_name": "Major Electives", "group_unit": 32},
    ],
}

DEMO_COURSES = {
    "Core Courses": [
        {"course_id": "CS101", "courseNameTH": "การเขียนโปรแกรมเบื้องต้น", "courseNameENG": "Introduction to Programming",
         "courseUnit": 3, "courseTheory": 2, "coursePractice": 2},
        {"course_id": "CS102", "courseNameTH": "โครงสร้างข้อมูล", "courseNameENG": "Data Structures",
         "courseUnit": 3, "courseTheory": 2, "coursePractice": 2},
    ],
    "Major Electives": [
        {"course_id": "CS341", "courseNameTH": "การเรียนรู้ของเครื่อง", "courseNameENG": "Machine Learning",
         "courseUnit": 3, "courseTheory": 3, "coursePractice": 0},
    ],
}

def get_or_create(store: CatalogStore, model, defaults=None, **filters):
    inst = store.first(model, **filters)
    if inst:
        return inst, False
    data = dict(filters)
    if defaults:
        data.update(defaults)
    inst = model(**data)
    store.session.add(inst)
    store.session.flush()
    return inst, True

def seed_demo_catalog(store: CatalogStore) -> int:
    """Наполнить каталог демо-данными; возвращает число созданных строк."""
    created = 0
    with store.transaction():
        defaults = {k: v for k, v in DEMO_MAJOR.items() if k != "major_code"}
        major, new = get_or_create(store, Major, defaults=defaults, major_code=DEMO_MAJOR["major_code"])
        created += new
        for cat in DEMO_CATEGORIES:
            category, new = get_or_create(
                store, Category, defaults={"category_unit": cat["category_unit"]},
                major_id=major.major_id, category_name=cat["category_name"],
            )
            created += new
            for grp in DEMO_GROUPS.get(cat["category_name"], []):
                group, new = get_or_create(
                    store, GroupMajor, defaults={"group_unit": grp["group_unit"]},
                    category_id=category.category_id, group_name=grp["group_name"],
                )
                created += new
                for course in DEMO_COURSES.get(grp["group_name"], []):
                    defaults = {k: v for k, v in course.items() if k != "course_id"}
                    defaults.update(category_id=category.category_id, group_id=group.group_id)
                    _, new = get_or_create(store, Course, defaults=defaults, course_id=course["course_id"])
                    created += new
    return created

def main() -> None:
    from app import create_app
    from extensions import db

    parser = argparse.ArgumentParser(description="Seed the demo curriculum catalog")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    parser.add_argument("--config", default="dev")
    args = parser.parse_args()

    app = create_app(args.config)
    store = app.extensions["catalog_store"]
    try:
        with app.app_context():
            if args.reset:
                db.drop_all()
                db.create_all()
            created = seed_demo_catalog(store)
        print(f"Seed complete: {created} rows created")
    finally:
        store.close()

if __name__ == "__main__":
    main()
