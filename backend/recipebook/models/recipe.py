"""
RecipeBook Backend: Recipe ORM Models
======================================

What:  Maps the `recipes` and `recipe_ingredients` tables.

Table design:
    recipes.category_id   plain indexed column holding a category id.
                          CategoryService checks references before a
                          category is deleted.
    recipes.status        'draft' | 'published' | 'archived'
    recipe_ingredients    one row per ingredient line; `position` keeps the
                          order the client sent. Lines belong to their recipe
                          (delete-orphan) and are replaced wholesale when a
                          patch carries `ingredients`.
    recipe_ingredients.ingredient_id
                          no foreign key: ingredients may be deleted while
                          recipes still list them.

Lines are loaded with selectinload so they are available after the async
session closes.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipebook.database import Base


class RecipeModel(Base):
    __tablename__ = "recipes"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    category_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    portions: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    lines: Mapped[List["RecipeIngredientModel"]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredientModel.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<RecipeModel(id={self.id}, name='{self.name}', status='{self.status}')>"


class RecipeIngredientModel(Base):
    __tablename__ = "recipe_ingredients"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_pk: Mapped[int] = mapped_column(
        ForeignKey("recipes.pk", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    ingredient_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)

    recipe: Mapped[RecipeModel] = relationship(back_populates="lines")
