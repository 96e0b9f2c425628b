from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from extensions import db

class Major(db.Model):
    __tablename__ = "major"

    major_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    major_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    majorNameTH: Mapped[str] = mapped_column(String(255), nullable=False)
    majorNameENG: Mapped[str] = mapped_column(String(255), nullable=False)
    majorYear: Mapped[int] = mapped_column(Integer, nullable=False)
    majorUnit: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str | None] = mapped_column(String(50))

    categories = relationship("Category", back_populates="major")

    def __repr__(self):
        return f"<Major {self.major_code}>"
