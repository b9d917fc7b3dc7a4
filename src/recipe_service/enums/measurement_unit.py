"""Measurement units for ingredient quantities.

Each unit has an abbreviation, singular and plural names, a unit type and,
where a fixed factor exists, a grams-per-unit conversion. Volume factors
assume the density of water.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Final, NamedTuple


class UnitType(StrEnum):
    WEIGHT = "WEIGHT"
    VOLUME = "VOLUME"
    COUNT = "COUNT"
    SPECIAL = "SPECIAL"


class MeasurementUnit(StrEnum):
    """Unit an ingredient quantity is expressed in."""

    GRAM = "GRAM"
    KILOGRAM = "KILOGRAM"
    OUNCE = "OUNCE"
    POUND = "POUND"
    MILLILITER = "MILLILITER"
    LITER = "LITER"
    FLUID_OUNCE = "FLUID_OUNCE"
    CUP = "CUP"
    PINT = "PINT"
    QUART = "QUART"
    GALLON = "GALLON"
    TEASPOON = "TEASPOON"
    TABLESPOON = "TABLESPOON"
    PIECE = "PIECE"
    ITEM = "ITEM"
    SLICE = "SLICE"
    CLOVE = "CLOVE"
    HEAD = "HEAD"
    BUNCH = "BUNCH"
    PACKAGE = "PACKAGE"
    CAN = "CAN"
    BOTTLE = "BOTTLE"
    PINCH = "PINCH"
    DASH = "DASH"
    DROP = "DROP"
    TO_TASTE = "TO_TASTE"

    @property
    def info(self) -> UnitInfo:
        return UNIT_INFO[self]

    @property
    def abbreviation(self) -> str:
        return UNIT_INFO[self].abbreviation

    @property
    def unit_type(self) -> UnitType:
        return UNIT_INFO[self].unit_type


class UnitInfo(NamedTuple):
    abbreviation: str
    singular: str
    plural: str
    unit_type: UnitType
    grams: Decimal | None


def _info(
    abbreviation: str,
    singular: str,
    plural: str,
    unit_type: UnitType,
    grams: str | None = None,
) -> UnitInfo:
    return UnitInfo(
        abbreviation,
        singular,
        plural,
        unit_type,
        Decimal(grams) if grams is not None else None,
    )


_W, _V, _C, _S = UnitType.WEIGHT, UnitType.VOLUME, UnitType.COUNT, UnitType.SPECIAL

UNIT_INFO: Final[dict[MeasurementUnit, UnitInfo]] = {
    MeasurementUnit.GRAM: _info("g", "gram", "grams", _W, "1"),
    MeasurementUnit.KILOGRAM: _info("kg", "kilogram", "kilograms", _W, "1000"),
    MeasurementUnit.OUNCE: _info("oz", "ounce", "ounces", _W, "28.35"),
    MeasurementUnit.POUND: _info("lb", "pound", "pounds", _W, "453.59"),
    MeasurementUnit.MILLILITER: _info("ml", "milliliter", "milliliters", _V, "1"),
    MeasurementUnit.LITER: _info("l", "liter", "liters", _V, "1000"),
    MeasurementUnit.FLUID_OUNCE: _info(
        "fl oz", "fluid ounce", "fluid ounces", _V, "29.57"
    ),
    MeasurementUnit.CUP: _info("cup", "cup", "cups", _V, "240"),
    MeasurementUnit.PINT: _info("pint", "pint", "pints", _V, "473"),
    MeasurementUnit.QUART: _info("quart", "quart", "quarts", _V, "946"),
    MeasurementUnit.GALLON: _info("gallon", "gallon", "gallons", _V, "3785"),
    MeasurementUnit.TEASPOON: _info("tsp", "teaspoon", "teaspoons", _V, "5"),
    MeasurementUnit.TABLESPOON: _info("tbsp", "tablespoon", "tablespoons", _V, "15"),
    MeasurementUnit.PIECE: _info("piece", "piece", "pieces", _C),
    MeasurementUnit.ITEM: _info("item", "item", "items", _C),
    MeasurementUnit.SLICE: _info("slice", "slice", "slices", _C),
    MeasurementUnit.CLOVE: _info("clove", "clove", "cloves", _C),
    MeasurementUnit.HEAD: _info("head", "head", "heads", _C),
    MeasurementUnit.BUNCH: _info("bunch", "bunch", "bunches", _C),
    MeasurementUnit.PACKAGE: _info("package", "package", "packages", _C),
    MeasurementUnit.CAN: _info("can", "can", "cans", _C),
    MeasurementUnit.BOTTLE: _info("bottle", "bottle", "bottles", _C),
    MeasurementUnit.PINCH: _info("pinch", "pinch", "pinches", _S, "0.3"),
    MeasurementUnit.DASH: _info("dash", "dash", "dashes", _S, "0.6"),
    MeasurementUnit.DROP: _info("drop", "drop", "drops", _S, "0.05"),
    MeasurementUnit.TO_TASTE: _info("to taste", "to taste", "to taste", _S),
}

_TWO_PLACES = Decimal("0.01")


def can_convert_to_grams(unit: MeasurementUnit) -> bool:
    return UNIT_INFO[unit].grams is not None


def convert_to_grams(unit: MeasurementUnit, quantity: Decimal | None) -> Decimal | None:
    """Convert ``quantity`` of ``unit`` to grams, rounded half-up to 2 places.

    Returns None when the quantity is missing or the unit has no fixed
    conversion factor (counts, "to taste").
    """
    grams = UNIT_INFO[unit].grams
    if quantity is None or grams is None:
        return None
    return (quantity * grams).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def unit_display_name(unit: MeasurementUnit, *, plural: bool) -> str:
    info = UNIT_INFO[unit]
    return info.plural if plural else info.singular


def units_by_type(unit_type: UnitType) -> list[MeasurementUnit]:
    return [unit for unit, info in UNIT_INFO.items() if info.unit_type == unit_type]


def unit_from_display_name(name: str) -> MeasurementUnit | None:
    """Match an abbreviation, singular or plural name, ignoring case."""
    wanted = name.strip().casefold()
    for unit, info in UNIT_INFO.items():
        if wanted in (
            info.abbreviation.casefold(),
            info.singular.casefold(),
            info.plural.casefold(),
        ):
            return unit
    return None


def parse_unit(value: str | None, default: MeasurementUnit) -> MeasurementUnit:
    """Lenient parse of member names or display names; unknown input yields ``default``."""
    if not value:
        return default
    try:
        return MeasurementUnit(value.strip().upper().replace(" ", "_"))
    except ValueError:
        return unit_from_display_name(value) or default
