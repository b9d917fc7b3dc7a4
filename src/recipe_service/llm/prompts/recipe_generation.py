"""Prompt for generating a recipe from a list of ingredients."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import BasePrompt, require


class RecipeGenerationPrompt(BasePrompt):
    """Generate a complete recipe as JSON in the recipe request shape.

    Example input:
        ingredients=["chicken", "rice", "peas"], cuisine="Spanish"
    """

    system_prompt: ClassVar[str | None] = (
        "You are a professional chef and recipe creator."
    )

    temperature: ClassVar[float | None] = 0.7

    def format(self, **kwargs: Any) -> str:
        """Format the prompt.

        Args:
            **kwargs: Must contain 'ingredients' (list of names). May contain
                'cuisine' and 'difficulty' preferences.

        Returns:
            Formatted prompt string.

        Raises:
            ValueError: If 'ingredients' is missing.
        """
        ingredients: list[str] = require(kwargs, "ingredients")
        cuisine = (kwargs.get("cuisine") or "").strip()
        difficulty = (kwargs.get("difficulty") or "").strip()

        preferences = []
        if cuisine:
            preferences.append(f"Style: Create this as a {cuisine} cuisine dish.")
        if difficulty:
            preferences.append(f"Difficulty: Make this recipe {difficulty} level.")
        preferences_str = "\n".join(preferences)

        return f"""Create a detailed recipe using the following ingredients: {", ".join(ingredients)}.

{preferences_str}

Return the recipe as a JSON object in exactly this format:
{{
    "title": "Recipe Name",
    "description": "Brief description of the dish",
    "instructions": "Step-by-step cooking instructions",
    "cookingTimeMinutes": 30,
    "prepTimeMinutes": 15,
    "servings": 4,
    "category": "MAIN_COURSE",
    "difficulty": "MEDIUM",
    "ingredients": [
        {{
            "name": "ingredient name",
            "quantity": 1.5,
            "unit": "CUP",
            "category": "VEGETABLES",
            "isOptional": false
        }}
    ],
    "tags": ["tag1", "tag2"]
}}

Guidelines:
- Use the provided ingredients as the main ingredients; common seasonings and basics may be added
- Make the recipe realistic and achievable
- Provide detailed, step-by-step instructions
- Use measurement units such as CUP, TABLESPOON, TEASPOON, GRAM, PIECE
- Choose a category such as APPETIZER, MAIN_COURSE, SIDE_DISH, DESSERT
- Choose a difficulty from BEGINNER, EASY, MEDIUM, HARD, EXPERT
- Add relevant tags
- Ensure the JSON is valid"""
