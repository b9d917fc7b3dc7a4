"""Ingredient food categories and the classifications derived from them."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class IngredientCategory(StrEnum):
    """Food group an ingredient belongs to."""

    VEGETABLES = "VEGETABLES"
    FRUITS = "FRUITS"
    MEAT = "MEAT"
    POULTRY = "POULTRY"
    SEAFOOD = "SEAFOOD"
    DAIRY = "DAIRY"
    EGGS = "EGGS"
    GRAINS = "GRAINS"
    LEGUMES = "LEGUMES"
    NUTS_SEEDS = "NUTS_SEEDS"
    HERBS = "HERBS"
    SPICES = "SPICES"
    OILS_FATS = "OILS_FATS"
    SWEETENERS = "SWEETENERS"
    CONDIMENTS = "CONDIMENTS"
    SAUCES = "SAUCES"
    VINEGAR = "VINEGAR"
    ALCOHOL = "ALCOHOL"
    BEVERAGES = "BEVERAGES"
    BAKING = "BAKING"
    PANTRY = "PANTRY"
    FROZEN = "FROZEN"
    CANNED = "CANNED"
    PROCESSED = "PROCESSED"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _DISPLAY_OVERRIDES.get(self, self.value.title())


class DietType(StrEnum):
    VEGAN = "VEGAN"
    VEGETARIAN = "VEGETARIAN"
    PESCATARIAN = "PESCATARIAN"
    KETO = "KETO"
    PALEO = "PALEO"
    GLUTEN_FREE = "GLUTEN_FREE"


_C = IngredientCategory

_DISPLAY_OVERRIDES: Final = {
    _C.NUTS_SEEDS: "Nuts & Seeds",
    _C.OILS_FATS: "Oils & Fats",
}

FRESH: Final = frozenset(
    {_C.VEGETABLES, _C.FRUITS, _C.MEAT, _C.POULTRY, _C.SEAFOOD, _C.DAIRY, _C.EGGS, _C.HERBS}
)
PROTEIN: Final = frozenset(
    {_C.MEAT, _C.POULTRY, _C.SEAFOOD, _C.EGGS, _C.LEGUMES, _C.NUTS_SEEDS, _C.DAIRY}
)
PLANT_BASED: Final = frozenset(
    {_C.VEGETABLES, _C.FRUITS, _C.GRAINS, _C.LEGUMES, _C.NUTS_SEEDS, _C.HERBS, _C.SPICES}
)
ANIMAL_PRODUCT: Final = frozenset({_C.MEAT, _C.POULTRY, _C.SEAFOOD, _C.DAIRY, _C.EGGS})
SEASONING: Final = frozenset({_C.HERBS, _C.SPICES, _C.CONDIMENTS, _C.SAUCES, _C.VINEGAR})
SHELF_STABLE: Final = frozenset(
    {
        _C.GRAINS,
        _C.LEGUMES,
        _C.NUTS_SEEDS,
        _C.SPICES,
        _C.OILS_FATS,
        _C.SWEETENERS,
        _C.CONDIMENTS,
        _C.BAKING,
        _C.PANTRY,
        _C.CANNED,
        _C.PROCESSED,
    }
)
REQUIRES_REFRIGERATION: Final = frozenset(
    {_C.MEAT, _C.POULTRY, _C.SEAFOOD, _C.DAIRY, _C.EGGS, _C.VEGETABLES, _C.FRUITS}
)

# Categories each diet excludes
_DIET_EXCLUSIONS: Final[dict[DietType, frozenset[IngredientCategory]]] = {
    DietType.VEGAN: ANIMAL_PRODUCT,
    DietType.VEGETARIAN: frozenset({_C.MEAT, _C.POULTRY, _C.SEAFOOD}),
    DietType.PESCATARIAN: frozenset({_C.MEAT, _C.POULTRY}),
    DietType.KETO: frozenset({_C.GRAINS, _C.SWEETENERS, _C.FRUITS}),
    DietType.PALEO: frozenset(
        {_C.PROCESSED, _C.CANNED, _C.GRAINS, _C.LEGUMES, _C.DAIRY}
    ),
    DietType.GLUTEN_FREE: frozenset({_C.GRAINS}),
}


def is_suitable_for_diet(category: IngredientCategory, diet: DietType) -> bool:
    return category not in _DIET_EXCLUSIONS[diet]


def storage_recommendation(category: IngredientCategory) -> str:
    if category in REQUIRES_REFRIGERATION:
        return "Refrigerate"
    if category is IngredientCategory.FROZEN:
        return "Keep frozen"
    if category in SHELF_STABLE:
        return "Store in pantry"
    return "Store in cool, dry place"


def is_fresh(category: IngredientCategory) -> bool:
    return category in FRESH


def is_protein_source(category: IngredientCategory) -> bool:
    return category in PROTEIN


def is_plant_based(category: IngredientCategory) -> bool:
    return category in PLANT_BASED


def is_animal_product(category: IngredientCategory) -> bool:
    return category in ANIMAL_PRODUCT


def is_seasoning(category: IngredientCategory) -> bool:
    return category in SEASONING


def is_shelf_stable(category: IngredientCategory) -> bool:
    return category in SHELF_STABLE


def requires_refrigeration(category: IngredientCategory) -> bool:
    return category in REQUIRES_REFRIGERATION


def ingredient_category_from_display_name(name: str) -> IngredientCategory | None:
    wanted = name.strip().casefold()
    for category in IngredientCategory:
        if category.display_name.casefold() == wanted:
            return category
    return None


def parse_ingredient_category(
    value: str | None, default: IngredientCategory
) -> IngredientCategory:
    """Lenient parse of member or display names; unknown input yields ``default``."""
    if not value:
        return default
    try:
        return IngredientCategory(value.strip().upper().replace(" ", "_"))
    except ValueError:
        return ingredient_category_from_display_name(value) or default
