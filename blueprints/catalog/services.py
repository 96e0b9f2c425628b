# blueprints/catalog/services.py
from __future__ import annotations
import logging
from typing import List, Optional

from sqlalchemy import or_

from models import Category, Course, GroupMajor, Major
from .errors import DuplicateEntity, EntityNotFound, InvalidRequest
from .schemas import CategoryIn, CourseIn, CourseUpdateIn, GroupMajorIn, MajorIn, MajorPatch
from .store import CatalogStore

log = logging.getLogger(__name__)

MAJOR_CODE_TAKEN = "Major code already exists"
COURSE_ID_TAKEN = "Course with this ID already exists"


def _require(store: CatalogStore, model, pk, message: str):
    obj = store.get(model, pk)
    if obj is None:
        raise EntityNotFound(message)
    return obj

def _check_reference(store: CatalogStore, model, pk: Optional[int], message: str) -> None:
    """Ссылка на родителя в теле запроса: отсутствующий родитель — это 400, а не 404."""
    if pk is not None and store.get(model, pk) is None:
        raise InvalidRequest(message)

def _check_course_links(store: CatalogStore, category_id: Optional[int], group_id: Optional[int]) -> None:
    _check_reference(store, Category, category_id, "Invalid category_id: No matching category found")
    _check_reference(store, GroupMajor, group_id, "Invalid group_id: No matching group major found")


# ---------- Majors ----------
def create_major(store: CatalogStore, data: MajorIn) -> Major:
    if store.first(Major, major_code=data.major_code):
        raise DuplicateEntity(MAJOR_CODE_TAKEN)
    major = Major(**data.model_dump())
    store.add(major, conflict=MAJOR_CODE_TAKEN)
    log.info("major created", extra={"event": "catalog_create", "entity": "major", "entity_id": major.major_id})
    return major

def list_majors(store: CatalogStore) -> List[Major]:
    majors = store.all(Major, order_by=Major.major_id)
    if not majors:
        raise EntityNotFound("No majors found")
    return majors

def get_major_by_code(store: CatalogStore, major_code: str) -> Major:
    code = (major_code or "").strip()
    if not code:
        raise InvalidRequest("Missing major_code")
    major = store.first(Major, major_code=code)
    if major is None:
        raise EntityNotFound("Major not found")
    return major

def get_major(store: CatalogStore, major_id: int) -> Major:
    return _require(store, Major, major_id, "Major not found")

def update_major(store: CatalogStore, major_id: int, data: MajorPatch) -> Major:
    major = _require(store, Major, major_id, "Major not found")
    changes = data.model_dump(exclude_unset=True)
    new_code = changes.get("major_code")
    if new_code and new_code != major.major_code and store.first(Major, major_code=new_code):
        raise DuplicateEntity(MAJOR_CODE_TAKEN)
    with store.transaction(conflict=MAJOR_CODE_TAKEN):
        for field, value in changes.items():
            setattr(major, field, value)
    return major

def delete_major(store: CatalogStore, major_id: int, *, allow_empty: bool = False) -> None:
    """Удалить специальность вместе с категориями, группами и курсами.

    Без категорий по умолчанию отвечаем 404 (историческое поведение API);
    ``allow_empty=True`` удаляет такую специальность как пустой каскад.
    Все DELETE выполняются в одной транзакции.
    """
    _require(store, Major, major_id, "Major not found")

    category_ids = store.ids(Category.category_id, Category.major_id == major_id)
    if not category_ids and not allow_empty:
        raise EntityNotFound("No categories found related to this major")
    group_ids = store.ids(GroupMajor.group_id, GroupMajor.category_id.in_(category_ids))

    with store.transaction():
        courses = store.delete_where(
            Course,
            or_(Course.category_id.in_(category_ids), Course.group_id.in_(group_ids)),
        )
        store.delete_where(GroupMajor, GroupMajor.category_id.in_(category_ids))
        store.delete_where(Category, Category.major_id == major_id)
        store.delete_where(Major, Major.major_id == major_id)
    log.info(
        "major deleted: %d categories, %d groups, %d courses",
        len(category_ids), len(group_ids), courses,
        extra={"event": "catalog_delete", "entity": "major", "entity_id": major_id},
    )


# ---------- Categories ----------
def create_category(store: CatalogStore, data: CategoryIn) -> Category:
    _check_reference(store, Major, data.major_id, "Invalid major_id: No matching major found")
    category = Category(**data.model_dump())
    store.add(category, conflict="Category with this ID already exists")
    return category

def list_categories(store: CatalogStore) -> List[Category]:
    # пустой список — нормальный ответ 200
    return store.all(Category, order_by=Category.category_id)

def get_category(store: CatalogStore, category_id: int) -> Category:
    return _require(store, Category, category_id, "Category not found")

def update_category(store: CatalogStore, category_id: int, data: CategoryIn) -> Category:
    category = _require(store, Category, category_id, "Category not found")
    _check_reference(store, Major, data.major_id, "Invalid major_id: No matching major found")
    with store.transaction(conflict="Category with this ID already exists"):
        category.category_name = data.category_name
        category.category_unit = data.category_unit
        category.major_id = data.major_id
    return category

def delete_category(store: CatalogStore, category_id: int) -> None:
    _require(store, Category, category_id, "Category not found")
    group_ids = store.ids(GroupMajor.group_id, GroupMajor.category_id == category_id)
    with store.transaction():
        courses = store.delete_where(Course, Course.group_id.in_(group_ids))
        # курсы, привязанные к категории напрямую (без группы), остаются, но отвязываются
        store.update_where(Course, Course.category_id == category_id, values={"category_id": None})
        store.delete_where(GroupMajor, GroupMajor.category_id == category_id)
        store.delete_where(Category, Category.category_id == category_id)
    log.info(
        "category deleted: %d groups, %d courses", len(group_ids), courses,
        extra={"event": "catalog_delete", "entity": "category", "entity_id": category_id},
    )

def list_categories_by_major_code(store: CatalogStore, major_code: str) -> List[Category]:
    code = (major_code or "").strip()
    if not code:
        raise InvalidRequest("Major Code is required")
    major = store.first(Major, major_code=code)
    if major is None:
        raise EntityNotFound("Major not found")
    return store.all(Category, Category.major_id == major.major_id, order_by=Category.category_id)


# ---------- Group majors ----------
def create_group_major(store: CatalogStore, data: GroupMajorIn) -> GroupMajor:
    _check_reference(store, Category, data.category_id, "Invalid category_id: No matching category found")
    group = GroupMajor(**data.model_dump())
    store.add(group, conflict="Group Major with this ID already exists")
    return group

def list_group_majors(store: CatalogStore) -> List[GroupMajor]:
    groups = store.all(GroupMajor, order_by=GroupMajor.group_id)
    if not groups:
        raise EntityNotFound("No Group Majors found")
    return groups

def get_group_major(store: CatalogStore, group_id: int) -> GroupMajor:
    return _require(store, GroupMajor, group_id, "Group Major not found")

def update_group_major(store: CatalogStore, group_id: int, data: GroupMajorIn) -> GroupMajor:
    group = _require(store, GroupMajor, group_id, "Group Major not found")
    _check_reference(store, Category, data.category_id, "Invalid category_id: No matching category found")
    with store.transaction(conflict="Group Major with this ID already exists"):
        group.group_name = data.group_name
        group.group_unit = data.group_unit
        group.category_id = data.category_id
    return group

def delete_group_major(store: CatalogStore, group_id: int) -> None:
    _require(store, GroupMajor, group_id, "Group Major not found")
    with store.transaction():
        courses = store.delete_where(Course, Course.group_id == group_id)
        store.delete_where(GroupMajor, GroupMajor.group_id == group_id)
    log.info(
        "group major deleted: %d courses", courses,
        extra={"event": "catalog_delete", "entity": "group_major", "entity_id": group_id},
    )

def list_groups_by_category(store: CatalogStore, category_id: int) -> List[GroupMajor]:
    return store.all(GroupMajor, GroupMajor.category_id == category_id, order_by=GroupMajor.group_id)


# ---------- Courses ----------
def create_course(store: CatalogStore, data: CourseIn) -> Course:
    if store.get(Course, data.course_id) is not None:
        raise DuplicateEntity(COURSE_ID_TAKEN)
    _check_course_links(store, data.category_id, data.group_id)
    course = Course(**data.model_dump())
    store.add(course, conflict=COURSE_ID_TAKEN)
    log.info("course created", extra={"event": "catalog_create", "entity": "course", "entity_id": course.course_id})
    return course

def list_courses(store: CatalogStore) -> List[Course]:
    courses = store.all(Course, order_by=Course.course_id)
    if not courses:
        raise EntityNotFound("No courses found")
    return courses

def get_course(store: CatalogStore, course_id: str) -> Course:
    return _require(store, Course, course_id, "Course not found")

def update_course(store: CatalogStore, course_id: str, data: CourseUpdateIn) -> Course:
    course = _require(store, Course, course_id, "Course not found for update")
    _check_course_links(store, data.category_id, data.group_id)
    with store.transaction(conflict=COURSE_ID_TAKEN):
        course.courseNameTH = data.courseNameTH
        course.courseNameENG = data.courseNameENG
        course.courseUnit = data.courseUnit
        course.courseTheory = data.courseTheory
        course.coursePractice = data.coursePractice
        if "categoryResearch" in data.model_fields_set:
            course.categoryResearch = data.categoryResearch
        # не переданные привязки обнуляются
        course.category_id = data.category_id
        course.group_id = data.group_id
        if data.freesubject is not None:
            course.freesubject = data.freesubject
    return course

def delete_course(store: CatalogStore, course_id: str) -> None:
    course = _require(store, Course, course_id, "Course not found for deletion")
    with store.transaction() as session:
        session.delete(course)

def list_courses_by_category(store: CatalogStore, category_id: int) -> List[Course]:
    return store.all(Course, Course.category_id == category_id, order_by=Course.course_id)

def list_courses_by_group(store: CatalogStore, group_id: int) -> List[Course]:
    return store.all(Course, Course.group_id == group_id, order_by=Course.course_id)
