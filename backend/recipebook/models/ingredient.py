"""
RecipeBook Backend: Ingredient ORM Model
=========================================

What:  Maps the `ingredients` table. Same layout as `categories`.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipebook.database import Base


class IngredientModel(Base):
    __tablename__ = "ingredients"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<IngredientModel(id={self.id}, name='{self.name}')>"
