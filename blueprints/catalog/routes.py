from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable, Iterable, Type

from flask import current_app, jsonify, request, url_for
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import HTTPException

from . import bp
from . import services as svc
from .errors import CatalogError, InvalidRequest
from .schemas import (
    MAX_ID,
    CategoryIn, CategoryOut,
    CourseIn, CourseOut, CourseUpdateIn,
    GroupMajorIn, GroupMajorOut,
    MajorIn, MajorOut, MajorPatch,
)
from .store import get_store

log = logging.getLogger(__name__)

# ----------------------- Helpers -----------------------
def ok(data: Any, status: int = 200):
    return jsonify(data), status

def created(location: str, data: Any):
    resp = jsonify(data)
    resp.status_code = 201
    resp.headers["Location"] = location
    return resp

def error(msg: str, status: int = 400):
    return jsonify({"error": msg}), status

def _dump(schema: Type[BaseModel], obj) -> dict:
    return schema.model_validate(obj).model_dump(mode="json")

def _dump_many(schema: Type[BaseModel], rows: Iterable) -> list:
    return [_dump(schema, r) for r in rows]

def _pydantic_errors_safe(ve: ValidationError):
    errs = ve.errors(include_url=False)
    for e in errs:
        if "ctx" in e and isinstance(e["ctx"], dict):
            e["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
    return errs

def _is_missing(err: dict) -> bool:
    return err["type"] in ("missing", "string_too_short") or err.get("input", ...) is None

def _payload(schema: Type[BaseModel]):
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    try:
        return schema.model_validate(payload)
    except ValidationError as ve:
        errs = _pydantic_errors_safe(ve)
        msg = "Missing required fields" if any(_is_missing(e) for e in errs) else "Invalid field values"
        raise InvalidRequest(msg, detail=errs) from ve

def _parse_id(raw: str, what: str) -> int:
    # строго: "12abc" и "-1" не считаются id
    raw = (raw or "").strip()
    if not raw.isascii() or not raw.isdigit():
        raise InvalidRequest(f"Invalid {what} format")
    value = int(raw)
    if not 1 <= value <= MAX_ID:
        raise InvalidRequest(f"Invalid {what} format")
    return value

def guarded(action: str):
    """Unexpected exceptions become a logged 500 with a generic message for ``action``."""
    def decorator(fn: Callable):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except (CatalogError, HTTPException):
                raise
            except Exception:
                log.exception("Error %s", action)
                return error(f"An error occurred while {action}", 500)
        return wrapper
    return decorator

@bp.errorhandler(CatalogError)
def _catalog_error(ex: CatalogError):
    return jsonify(ex.to_dict()), ex.status

# ----------------------- Majors -----------------------
@bp.post("/majors")
@guarded("creating the major")
def major_create():
    data = _payload(MajorIn)
    major = svc.create_major(get_store(), data)
    return created(url_for("catalog.major_get", major_id=major.major_id), _dump(MajorOut, major))

@bp.get("/majors")
@guarded("fetching majors")
def major_list():
    return ok(_dump_many(MajorOut, svc.list_majors(get_store())))

@bp.get("/majors/code/<major_code>")
@guarded("fetching the major")
def major_get_by_code(major_code: str):
    return ok(_dump(MajorOut, svc.get_major_by_code(get_store(), major_code)))

@bp.get("/majors/<major_id>")
@guarded("fetching the major")
def major_get(major_id: str):
    mid = _parse_id(major_id, "major ID")
    return ok(_dump(MajorOut, svc.get_major(get_store(), mid)))

@bp.put("/majors/<major_id>")
@guarded("updating the major")
def major_update(major_id: str):
    mid = _parse_id(major_id, "major ID")
    data = _payload(MajorPatch)
    return ok(_dump(MajorOut, svc.update_major(get_store(), mid, data)))

@bp.delete("/majors/<major_id>")
@guarded("deleting the major")
def major_delete(major_id: str):
    mid = _parse_id(major_id, "major ID")
    allow_empty = bool(current_app.config.get("CATALOG_ALLOW_EMPTY_MAJOR_DELETE", False))
    svc.delete_major(get_store(), mid, allow_empty=allow_empty)
    return ok({"message": "Major and related courses successfully deleted"})

# ----------------------- Categories -----------------------
@bp.post("/categories")
@guarded("creating the category")
def category_create():
    data = _payload(CategoryIn)
    category = svc.create_category(get_store(), data)
    return created(url_for("catalog.category_get", category_id=category.category_id),
                   _dump(CategoryOut, category))

@bp.get("/categories")
@guarded("fetching categories")
def category_list():
    return ok(_dump_many(CategoryOut, svc.list_categories(get_store())))

@bp.get("/categories/<category_id>")
@guarded("fetching the category")
def category_get(category_id: str):
    cid = _parse_id(category_id, "category_id")
    return ok(_dump(CategoryOut, svc.get_category(get_store(), cid)))

@bp.put("/categories/<category_id>")
@guarded("updating the category")
def category_update(category_id: str):
    cid = _parse_id(category_id, "category_id")
    data = _payload(CategoryIn)
    return ok(_dump(CategoryOut, svc.update_category(get_store(), cid, data)))

@bp.delete("/categories/<category_id>")
@guarded("deleting the category")
def category_delete(category_id: str):
    cid = _parse_id(category_id, "category_id")
    svc.delete_category(get_store(), cid)
    return ok({"message": "Category successfully deleted"})

@bp.get("/categories/by-major/<major_code>")
@guarded("fetching categories by major code")
def categories_by_major(major_code: str):
    return ok(_dump_many(CategoryOut, svc.list_categories_by_major_code(get_store(), major_code)))

# ----------------------- Group majors -----------------------
@bp.post("/groups")
@guarded("creating the group major")
def group_create():
    data = _payload(GroupMajorIn)
    group = svc.create_group_major(get_store(), data)
    return created(url_for("catalog.group_get", group_id=group.group_id), _dump(GroupMajorOut, group))

@bp.get("/groups")
@guarded("fetching group majors")
def group_list():
    return ok(_dump_many(GroupMajorOut, svc.list_group_majors(get_store())))

@bp.get("/groups/<group_id>")
@guarded("fetching the group major")
def group_get(group_id: str):
    gid = _parse_id(group_id, "group ID")
    return ok(_dump(GroupMajorOut, svc.get_group_major(get_store(), gid)))

@bp.put("/groups/<group_id>")
@guarded("updating the group major")
def group_update(group_id: str):
    gid = _parse_id(group_id, "group ID")
    data = _payload(GroupMajorIn)
    return ok(_dump(GroupMajorOut, svc.update_group_major(get_store(), gid, data)))

@bp.delete("/groups/<group_id>")
@guarded("deleting the group major")
def group_delete(group_id: str):
    gid = _parse_id(group_id, "group ID")
    svc.delete_group_major(get_store(), gid)
    return ok({"message": "Group Major successfully deleted"})

@bp.get("/groups/by-category/<category_id>")
@guarded("fetching groups by category ID")
def groups_by_category(category_id: str):
    cid = _parse_id(category_id, "category_id")
    return ok(_dump_many(GroupMajorOut, svc.list_groups_by_category(get_store(), cid)))

# ----------------------- Courses -----------------------
@bp.post("/courses")
@guarded("creating the course")
def course_create():
    data = _payload(CourseIn)
    course = svc.create_course(get_store(), data)
    return created(url_for("catalog.course_get", course_id=course.course_id), _dump(CourseOut, course))

@bp.get("/courses")
@guarded("fetching courses")
def course_list():
    return ok(_dump_many(CourseOut, svc.list_courses(get_store())))

@bp.get("/courses/<course_id>")
@guarded("fetching the course")
def course_get(course_id: str):
    # course_id — строковый код («CS101»), числа не парсим
    return ok(_dump(CourseOut, svc.get_course(get_store(), course_id)))

@bp.put("/courses/<course_id>")
@guarded("updating the course")
def course_update(course_id: str):
    data = _payload(CourseUpdateIn)
    return ok(_dump(CourseOut, svc.update_course(get_store(), course_id, data)))

@bp.delete("/courses/<course_id>")
@guarded("deleting the course")
def course_delete(course_id: str):
    svc.delete_course(get_store(), course_id)
    return ok({"message": "Course successfully deleted"})

@bp.get("/courses/by-category/<category_id>")
@guarded("fetching courses by category ID")
def courses_by_category(category_id: str):
    cid = _parse_id(category_id, "category_id")
    return ok(_dump_many(CourseOut, svc.list_courses_by_category(get_store(), cid)))

@bp.get("/courses/by-group/<group_id>")
@guarded("fetching courses by group ID")
def courses_by_group(group_id: str):
    gid = _parse_id(group_id, "group ID")
    return ok(_dump_many(CourseOut, svc.list_courses_by_group(get_store(), gid)))
