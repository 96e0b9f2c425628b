from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# потолок BIGINT: большие id не должны доходить до драйвера
MAX_ID = 2**63 - 1

class _In(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

# ---------- Majors ----------
class MajorIn(_In):
    major_code: str = Field(min_length=1, max_length=50)
    majorNameTH: str = Field(min_length=1, max_length=255)
    majorNameENG: str = Field(min_length=1, max_length=255)
    majorYear: int
    majorUnit: int = Field(ge=0)
    status: Optional[str] = Field(None, max_length=50)

class MajorPatch(_In):
    """PUT body for a major: only the fields present in the body are written."""
    major_code: Optional[str] = Field(None, min_length=1, max_length=50)
    majorNameTH: Optional[str] = Field(None, min_length=1, max_length=255)
    majorNameENG: Optional[str] = Field(None, min_length=1, max_length=255)
    majorYear: Optional[int] = None
    majorUnit: Optional[int] = Field(None, ge=0)
    status: Optional[str] = Field(None, max_length=50)

    @field_validator("major_code", "majorNameTH", "majorNameENG", "majorYear", "majorUnit", mode="before")
    @classmethod
    def _not_null(cls, v):
        # поле можно не передавать, но нельзя обнулить
        if v is None:
            raise ValueError("field cannot be null")
        return v

class MajorOut(MajorIn):
    model_config = ConfigDict(from_attributes=True)
    major_id: int

# ---------- Categories ----------
class CategoryIn(_In):
    category_name: str = Field(min_length=1, max_length=255)
    category_unit: int = Field(ge=0)
    major_id: int = Field(ge=1, le=MAX_ID)

class CategoryOut(CategoryIn):
    model_config = ConfigDict(from_attributes=True)
    category_id: int

# ---------- Group majors ----------
class GroupMajorIn(_In):
    group_name: str = Field(min_length=1, max_length=255)
    group_unit: int = Field(ge=0)
    category_id: int = Field(ge=1, le=MAX_ID)

class GroupMajorOut(GroupMajorIn):
    model_config = ConfigDict(from_attributes=True)
    group_id: int

# ---------- Courses ----------
class CourseUpdateIn(_In):
    courseNameTH: str = Field(min_length=1, max_length=255)
    courseNameENG: str = Field(min_length=1, max_length=255)
    courseUnit: int = Field(ge=0)
    courseTheory: int = Field(ge=0)
    coursePractice: int = Field(ge=0)
    categoryResearch: Optional[str] = Field(None, max_length=255)
    category_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    group_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    freesubject: Optional[bool] = None

    @field_validator("category_id", "group_id", mode="before")
    @classmethod
    def _blank_link_is_null(cls, v):
        # клиенты шлют 0 / "" вместо null для «без привязки»
        if v == "" or v == "0" or (type(v) is int and v == 0):
            return None
        return v

class CourseIn(CourseUpdateIn):
    course_id: str = Field(min_length=1, max_length=50)
    freesubject: bool = False

    @field_validator("freesubject", mode="before")
    @classmethod
    def _null_is_false(cls, v):
        return False if v is None else v

class CourseOut(CourseIn):
    model_config = ConfigDict(from_attributes=True)
