"""Prompt for wine (and non-alcoholic) pairing suggestions."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import BasePrompt, require


class WinePairingPrompt(BasePrompt):
    """Suggest wine pairings for a recipe as JSON."""

    system_prompt: ClassVar[str | None] = (
        "You are a professional sommelier with extensive knowledge of wine pairings."
    )

    temperature: ClassVar[float | None] = 0.5

    def format(self, **kwargs: Any) -> str:
        """Format the prompt.

        Args:
            **kwargs: Must contain 'title', 'category' and 'cooking_method'.
                May contain 'description' and 'ingredients'.

        Returns:
            Formatted prompt string.
        """
        title = require(kwargs, "title")
        category = require(kwargs, "category")
        cooking_method = require(kwargs, "cooking_method")
        description = kwargs.get("description") or "No description provided"
        ingredients: list[str] = kwargs.get("ingredients") or []

        return f"""Recommend the best wine pairings for this recipe:

Recipe: {title}
Description: {description}
Category: {category}
Main Ingredients: {", ".join(ingredients) or "N/A"}
Cooking Method: Based on the instructions, this appears to be {cooking_method}

Return the suggestions as a JSON object in this format:
{{
    "primaryRecommendation": {{
        "wineType": "Pinot Noir",
        "specificWines": ["Willamette Valley Pinot Noir"],
        "reasoning": "Why it works with the dish",
        "servingTemperature": "60-65°F",
        "priceRange": "$25-50"
    }},
    "alternativeRecommendations": [
        {{
            "wineType": "Chardonnay",
            "specificWines": ["Chablis"],
            "reasoning": "Why it works with the dish",
            "servingTemperature": "45-50°F",
            "priceRange": "$20-40"
        }}
    ],
    "nonAlcoholicOptions": [
        {{"beverage": "Sparkling Apple Cider", "reasoning": "Why it works"}}
    ],
    "pairingPrinciples": ["Match the weight of the wine to the weight of the dish"],
    "servingSuggestions": "Practical serving advice."
}}

Guidelines:
- Consider the main flavors, textures, and cooking method
- Name specific wines with regions when possible
- Include both premium and accessible price options
- Include non-alcoholic alternatives
- Ensure the JSON is valid"""
