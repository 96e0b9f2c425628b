from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from extensions import db

class Course(db.Model):
    __tablename__ = "course"

    # user-supplied code such as "CS101", not an autoincrement id
    course_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    courseNameTH: Mapped[str] = mapped_column(String(255), nullable=False)
    courseNameENG: Mapped[str] = mapped_column(String(255), nullable=False)
    courseUnit: Mapped[int] = mapped_column(Integer, nullable=False)
    courseTheory: Mapped[int] = mapped_column(Integer, nullable=False)
    coursePractice: Mapped[int] = mapped_column(Integer, nullable=False)
    categoryResearch: Mapped[str | None] = mapped_column(String(255))
    category_id: Mapped[int | None] = mapped_column(ForeignKey("category.category_id"), nullable=True, index=True)
    group_id: Mapped[int | None] = mapped_column(ForeignKey("group_major.group_id"), nullable=True, index=True)
    freesubject: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    category = relationship("Category")
    group_major = relationship("GroupMajor")

    def __repr__(self):
        return f"<Course {self.course_id}>"
