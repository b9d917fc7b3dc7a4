"""Unit tests for ORM model behaviour that does not need a database."""

from __future__ import annotations

from decimal import Decimal

import pytest

from recipe_service.db.models import Ingredient, Recipe, User
from recipe_service.enums import IngredientCategory, MeasurementUnit


pytestmark = pytest.mark.unit


def make_ingredient(quantity: str, unit: MeasurementUnit, **kwargs) -> Ingredient:
    return Ingredient(
        name=kwargs.pop("name", "Flour"),
        quantity=Decimal(quantity),
        unit=unit,
        category=IngredientCategory.BAKING,
        is_optional=kwargs.pop("is_optional", False),
        order_position=1,
        **kwargs,
    )


class TestIngredient:
    @pytest.mark.parametrize(
        ("quantity", "unit", "expected"),
        [
            ("1.50", MeasurementUnit.CUP, "1.5 cups"),
            ("1.00", MeasurementUnit.CUP, "1 cup"),
            ("100.00", MeasurementUnit.GRAM, "100 grams"),
            ("0.25", MeasurementUnit.TEASPOON, "0.25 teaspoons"),
        ],
    )
    def test_quantity_display(self, quantity, unit, expected):
        assert make_ingredient(quantity, unit).quantity_display == expected

    def test_display_text_marks_optional(self):
        ingredient = make_ingredient(
            "2", MeasurementUnit.CLOVE, name="Garlic", is_optional=True
        )

        assert ingredient.display_text == "2 cloves Garlic (optional)"

    def test_weight_in_grams(self):
        assert make_ingredient("2", MeasurementUnit.TABLESPOON).weight_in_grams == Decimal(
            "30.00"
        )
        assert make_ingredient("2", MeasurementUnit.PIECE).weight_in_grams is None

    def test_nutritional_info(self):
        assert not make_ingredient("1", MeasurementUnit.CUP).has_nutritional_info
        assert make_ingredient(
            "1", MeasurementUnit.CUP, fiber_per_100g=Decimal("2.7")
        ).has_nutritional_info


class TestRecipe:
    def test_total_time(self):
        assert Recipe(prep_time_minutes=10, cooking_time_minutes=20).total_time_minutes == 30
        assert Recipe(cooking_time_minutes=20).total_time_minutes == 20
        assert Recipe().total_time_minutes is None

    def test_tags_normalised(self):
        recipe = Recipe()

        recipe.set_tags(["Vegan ", "vegan", "", "Quick"])
        recipe.add_tag("QUICK")
        recipe.add_tag("Spicy")

        assert recipe.tags == ["vegan", "quick", "spicy"]

    def test_replace_ingredients_positions(self):
        """Should number ingredients from 1 in the order given."""
        recipe = Recipe()

        recipe.replace_ingredients(
            [
                {"name": "Rice", "quantity": Decimal(1), "unit": MeasurementUnit.CUP},
                {"name": "Salt", "quantity": Decimal(1), "unit": MeasurementUnit.PINCH},
            ]
        )

        assert [(i.name, i.order_position) for i in recipe.ingredients] == [
            ("Rice", 1),
            ("Salt", 2),
        ]

    def test_is_owned_by(self):
        recipe = Recipe(owner_id=7)

        assert recipe.is_owned_by(7)
        assert not recipe.is_owned_by(8)
        assert not recipe.is_owned_by(None)


class TestUser:
    def test_full_name(self):
        assert User(username="chef", first_name="Ada", last_name="Lovelace").full_name == (
            "Ada Lovelace"
        )
        assert User(username="chef", last_name="Lovelace").full_name == "Lovelace"
        assert User(username="chef").full_name == "chef"
