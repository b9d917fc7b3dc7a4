"""Ingredient line item model."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_service.db.base import Base
from recipe_service.enums import IngredientCategory, MeasurementUnit
from recipe_service.enums.measurement_unit import convert_to_grams, unit_display_name


if TYPE_CHECKING:
    from recipe_service.db.models.recipe import Recipe


_ONE = Decimal(1)


class Ingredient(Base):
    """SQLAlchemy ORM model for the 'ingredients' table.

    Ingredients are owned by their recipe and have no access rules of their
    own. They are only ever created through ``Recipe.replace_ingredients``.
    """

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    unit: Mapped[MeasurementUnit] = mapped_column(
        SAEnum(MeasurementUnit, name="measurement_unit", native_enum=False, length=20),
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[IngredientCategory] = mapped_column(
        SAEnum(
            IngredientCategory, name="ingredient_category", native_enum=False, length=20
        ),
        nullable=False,
        default=IngredientCategory.OTHER,
    )
    is_optional: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order_position: Mapped[int] = mapped_column(Integer, nullable=False)

    # Nutrition per 100g
    calories_per_100g: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))
    protein_per_100g: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))
    carbs_per_100g: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))
    fat_per_100g: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))
    fiber_per_100g: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))

    recipe: Mapped[Recipe] = relationship(back_populates="ingredients")

    @property
    def quantity_display(self) -> str:
        """Quantity without trailing zeros plus the unit name, e.g. ``1.5 cups``."""
        amount = self.quantity.normalize()
        # normalize() turns 100 into 1E+2
        text = f"{amount:f}"
        unit_name = unit_display_name(self.unit, plural=self.quantity != _ONE)
        return f"{text} {unit_name}"

    @property
    def display_text(self) -> str:
        text = f"{self.quantity_display} {self.name}"
        if self.is_optional:
            text += " (optional)"
        return text

    @property
    def has_nutritional_info(self) -> bool:
        return any(
            value is not None
            for value in (
                self.calories_per_100g,
                self.protein_per_100g,
                self.carbs_per_100g,
                self.fat_per_100g,
                self.fiber_per_100g,
            )
        )

    @property
    def weight_in_grams(self) -> Decimal | None:
        return convert_to_grams(self.unit, self.quantity)
