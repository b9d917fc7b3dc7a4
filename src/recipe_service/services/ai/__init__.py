"""AI helper service package."""

from recipe_service.services.ai.service import (
    AiService,
    GeneratedRecipe,
    extract_json,
    infer_cooking_method,
    parse_generated_recipe,
)


__all__ = [
    "AiService",
    "GeneratedRecipe",
    "extract_json",
    "infer_cooking_method",
    "parse_generated_recipe",
]
