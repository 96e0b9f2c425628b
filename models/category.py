from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from extensions import db

class Category(db.Model):
    __tablename__ = "category"

    category_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_unit: Mapped[int] = mapped_column(Integer, nullable=False)
    major_id: Mapped[int] = mapped_column(ForeignKey("major.major_id"), nullable=False, index=True)

    major = relationship("Major", back_populates="categories")
    groups = relationship("GroupMajor", back_populates="category")

    def __repr__(self):
        return f"<Category {self.category_id} {self.category_name}>"
