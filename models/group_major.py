from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from extensions import db

class GroupMajor(db.Model):
    __tablename__ = "group_major"

    group_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_name: Mapped[str] = mapped_column(String(255), nullable=False)
    group_unit: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("category.category_id"), nullable=False, index=True)

    category = relationship("Category", back_populates="groups")

    def __repr__(self):
        return f"<GroupMajor {self.group_id} {self.group_name}>"
