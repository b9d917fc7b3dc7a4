"""Prompt for estimating the nutritional content of a recipe."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import BasePrompt, require


class NutritionAnalysisPrompt(BasePrompt):
    """Estimate per-serving and per-recipe nutrition as JSON."""

    system_prompt: ClassVar[str | None] = "You are a professional nutritionist."

    temperature: ClassVar[float | None] = 0.2

    def format(self, **kwargs: Any) -> str:
        """Format the prompt.

        Args:
            **kwargs: Must contain 'title', 'servings' and 'ingredients'
                (list of display lines such as ``2 cups flour``).

        Returns:
            Formatted prompt string.
        """
        title = require(kwargs, "title")
        servings = require(kwargs, "servings")
        ingredients: list[str] = require(kwargs, "ingredients")
        ingredients_str = "\n".join(f"- {line}" for line in ingredients) or "- N/A"

        return f"""Analyze the nutritional content of this recipe:

Recipe: {title}
Servings: {servings}
Ingredients:
{ingredients_str}

Return the analysis as a JSON object in this format:
{{
    "perServing": {{
        "calories": 450, "protein": 25.5, "carbohydrates": 35.2,
        "fat": 18.7, "fiber": 8.3, "sugar": 12.1, "sodium": 890
    }},
    "perRecipe": {{
        "calories": 1800, "protein": 102.0, "carbohydrates": 140.8,
        "fat": 74.8, "fiber": 33.2, "sugar": 48.4, "sodium": 3560
    }},
    "macronutrientRatios": {{
        "proteinPercentage": 23, "carbohydratePercentage": 31, "fatPercentage": 37
    }},
    "healthScore": 8.5,
    "dietaryTags": ["high-protein"],
    "allergens": ["dairy"],
    "vitaminsAndMinerals": [
        {{"name": "Vitamin C", "amount": "45mg", "dailyValue": "50%"}}
    ],
    "nutritionNotes": "Short notes on the nutritional profile."
}}

Guidelines:
- Give realistic estimates based on the ingredients and quantities
- Values are in grams unless otherwise specified; sodium in milligrams
- Health score is 1-10 (10 being the healthiest)
- Include relevant dietary tags and allergen warnings
- Ensure the JSON is valid"""
