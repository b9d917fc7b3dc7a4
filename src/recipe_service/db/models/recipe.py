"""Recipe aggregate model."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_service.db.base import Base, utcnow
from recipe_service.db.models.ingredient import Ingredient
from recipe_service.enums import RecipeCategory, RecipeDifficulty


if TYPE_CHECKING:
    from recipe_service.db.models.user import User


class Recipe(Base):
    """SQLAlchemy ORM model for the 'recipes' table.

    A recipe is owned by exactly one user and owns its ingredients: deleting
    the recipe deletes them, and the ingredient list is only ever replaced
    as a whole.
    """

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    cooking_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prep_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    servings: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    category: Mapped[RecipeCategory] = mapped_column(
        SAEnum(RecipeCategory, name="recipe_category", native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    difficulty: Mapped[RecipeDifficulty] = mapped_column(
        SAEnum(RecipeDifficulty, name="recipe_difficulty", native_enum=False, length=10),
        nullable=False,
    )
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )
    is_ai_generated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    source: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    owner: Mapped[User] = relationship(lazy="joined", innerjoin=True)
    ingredients: Mapped[list[Ingredient]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by=Ingredient.order_position,
        lazy="selectin",
    )

    @property
    def total_time_minutes(self) -> int | None:
        """Prep plus cooking time; None when neither is known."""
        if self.prep_time_minutes is None and self.cooking_time_minutes is None:
            return None
        return (self.prep_time_minutes or 0) + (self.cooking_time_minutes or 0)

    def is_owned_by(self, user_id: int | None) -> bool:
        return user_id is not None and self.owner_id == user_id

    def set_tags(self, tags: Iterable[str]) -> None:
        """Replace tags, normalised to trimmed lower case without duplicates."""
        normalised: list[str] = []
        for tag in tags:
            value = tag.strip().lower()
            if value and value not in normalised:
                normalised.append(value)
        self.tags = normalised

    def add_tag(self, tag: str) -> None:
        self.set_tags([*(self.tags or []), tag])

    def replace_ingredients(self, items: Iterable[dict[str, Any]]) -> None:
        """Discard every current ingredient and build new ones from ``items``.

        Order positions are assigned 1..N in the order given.
        """
        self.ingredients = [
            Ingredient(**item, order_position=position)
            for position, item in enumerate(items, start=1)
        ]
