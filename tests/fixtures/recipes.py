"""Recipe request payloads for tests."""

from __future__ import annotations

from typing import Any


def ingredient(name: str, quantity: float = 1, unit: str = "PIECE", **extra: Any) -> dict[str, Any]:
    return {"name": name, "quantity": quantity, "unit": unit, **extra}


def recipe_payload(
    title: str = "Pasta Carbonara",
    *,
    description: str | None = "Creamy Roman pasta with guanciale",
    is_public: bool = True,
    ingredients: list[dict[str, Any]] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Valid recipe body in API (camelCase) naming."""
    payload: dict[str, Any] = {
        "title": title,
        "description": description,
        "instructions": "Boil the pasta, fry the guanciale, toss with egg and cheese.",
        "cookingTimeMinutes": 20,
        "prepTimeMinutes": 10,
        "servings": 2,
        "category": "PASTA",
        "difficulty": "EASY",
        "isPublic": is_public,
        "ingredients": ingredients
        or [
            ingredient("Tomato", 2, "PIECE", category="VEGETABLES"),
            ingredient("Onion", 1, "PIECE", category="VEGETABLES"),
        ],
        "tags": ["Italian", "quick"],
    }
    payload.update(overrides)
    return payload
