"""LLM prompt templates."""

from recipe_service.llm.prompts.base import BasePrompt
from recipe_service.llm.prompts.nutrition import NutritionAnalysisPrompt
from recipe_service.llm.prompts.recipe_generation import RecipeGenerationPrompt
from recipe_service.llm.prompts.wine_pairing import WinePairingPrompt


__all__ = [
    "BasePrompt",
    "NutritionAnalysisPrompt",
    "RecipeGenerationPrompt",
    "WinePairingPrompt",
]
