"""
RecipeBook Backend: Category ORM Model
=======================================

What:  Maps the `categories` table.

Table design:
    - pk: integer surrogate key, gives a stable insertion order for list()
    - id: public UUID string returned by the API, unique
    - name: trimmed display name; uniqueness is enforced by CategoryService
    - created_at: UTC timestamp set in Python at creation
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipebook.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<CategoryModel(id={self.id}, name='{self.name}')>"
