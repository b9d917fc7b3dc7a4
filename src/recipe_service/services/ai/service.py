"""AI helper service: recipe generation, nutrition estimates, wine pairing.

The LLM is treated as an untrusted text source. Each completion is cut down
to the span between the first ``{`` and the last ``}`` and must parse as a
JSON object; anything else is an :class:`InvalidAiResponseError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

import orjson
from pydantic import ValidationError

from recipe_service.auth.exceptions import UserNotFoundError
from recipe_service.enums import (
    IngredientCategory,
    MeasurementUnit,
    RecipeCategory,
    RecipeDifficulty,
)
from recipe_service.enums.ingredient_category import parse_ingredient_category
from recipe_service.enums.measurement_unit import parse_unit
from recipe_service.enums.recipe_category import parse_category
from recipe_service.enums.recipe_difficulty import parse_difficulty
from recipe_service.llm.exceptions import InvalidAiResponseError, LLMUnavailableError
from recipe_service.llm.prompts import (
    NutritionAnalysisPrompt,
    RecipeGenerationPrompt,
    WinePairingPrompt,
)
from recipe_service.observability.logging import get_logger
from recipe_service.schemas.recipe import RecipeRequest


if TYPE_CHECKING:
    from recipe_service.auth.principal import CurrentUser
    from recipe_service.db.models import Recipe
    from recipe_service.llm.client.protocol import LLMClientProtocol
    from recipe_service.llm.prompts import BasePrompt
    from recipe_service.services.recipes import RecipeService


logger = get_logger(__name__)

INVALID_JSON_MESSAGE: Final = "AI generated invalid JSON response"

# Checked in order; the first keyword found in the instructions wins.
_COOKING_METHODS: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (("grill", "barbecue"), "grilled"),
    (("roast", "bake"), "roasted/baked"),
    (("fry", "sauté"), "pan-fried/sautéed"),
    (("steam",), "steamed"),
    (("boil", "simmer"), "boiled/simmered"),
    (("braise",), "braised"),
)


def extract_json(text: str) -> str:
    """Cut ``text`` down to its JSON object and check that it parses.

    Returns:
        The substring from the first ``{`` to the last ``}``.

    Raises:
        InvalidAiResponseError: The span is not a valid JSON object.
    """
    start = text.find("{")
    candidate = text[start:] if start >= 0 else text
    end = candidate.rfind("}")
    candidate = candidate[: end + 1] if end >= 0 else candidate

    try:
        parsed = orjson.loads(candidate)
    except orjson.JSONDecodeError as e:
        raise InvalidAiResponseError(f"{INVALID_JSON_MESSAGE}: {e}") from e
    if not isinstance(parsed, dict):
        raise InvalidAiResponseError(f"{INVALID_JSON_MESSAGE}: expected an object")
    return candidate


def infer_cooking_method(instructions: str | None) -> str:
    """Guess the dominant cooking method from free-text instructions."""
    if instructions is None:
        return "unknown cooking method"
    lowered = instructions.lower()
    for keywords, method in _COOKING_METHODS:
        if any(keyword in lowered for keyword in keywords):
            return method
    return "mixed cooking methods"


def parse_generated_recipe(ai_json: str) -> RecipeRequest:
    """Turn generated recipe JSON into a recipe request.

    Unknown category, difficulty, unit and ingredient category values fall
    back to OTHER, MEDIUM, PIECE and OTHER.

    Raises:
        ValidationError: The JSON does not describe a valid recipe.
    """
    data: dict[str, Any] = orjson.loads(ai_json)
    data["category"] = parse_category(_text(data.get("category")), RecipeCategory.OTHER)
    data["difficulty"] = parse_difficulty(
        _text(data.get("difficulty")), RecipeDifficulty.MEDIUM
    )
    ingredients = data.get("ingredients")
    if isinstance(ingredients, list):
        for item in ingredients:
            if not isinstance(item, dict):
                continue
            item["unit"] = parse_unit(_text(item.get("unit")), MeasurementUnit.PIECE)
            item["category"] = parse_ingredient_category(
                _text(item.get("category")), IngredientCategory.OTHER
            )
    return RecipeRequest.model_validate(data)


def _text(value: object) -> str | None:
    return None if value is None else str(value)


@dataclass(frozen=True, slots=True)
class GeneratedRecipe:
    """Outcome of a generation request; ``saved`` is None when not saved."""

    ai_json: str
    saved: Recipe | None = None
    save_error: str | None = None

    @property
    def message(self) -> str:
        if self.saved is not None:
            return "Recipe generated and saved successfully"
        if self.save_error is not None:
            return f"Recipe generated but could not be saved: {self.save_error}"
        return "Recipe generated successfully (not saved)"


class AiService:
    """Thin prompt-in, JSON-out wrapper over the configured LLM client."""

    def __init__(
        self,
        llm_client: LLMClientProtocol | None,
        recipes: RecipeService,
    ) -> None:
        """Initialize the service.

        Args:
            llm_client: LLM client, or None when AI features are disabled.
            recipes: Recipe service used to save generated recipes.
        """
        self._llm_client = llm_client
        self._recipes = recipes
        self._generation_prompt = RecipeGenerationPrompt()
        self._nutrition_prompt = NutritionAnalysisPrompt()
        self._pairing_prompt = WinePairingPrompt()

    @property
    def enabled(self) -> bool:
        return self._llm_client is not None

    async def generate_recipe(
        self,
        caller: CurrentUser,
        ingredients: list[str],
        *,
        cuisine: str | None = None,
        difficulty: str | None = None,
        save: bool = True,
    ) -> GeneratedRecipe:
        """Generate a recipe from ingredients and optionally save it.

        A failed save does not fail the request: the generated JSON is
        returned along with the reason it could not be stored.

        Raises:
            InvalidAiResponseError: The completion held no valid JSON object.
            LLMError: The provider could not be reached or returned an error.
        """
        ai_json = await self._complete(
            self._generation_prompt,
            ingredients=ingredients,
            cuisine=cuisine,
            difficulty=difficulty,
        )
        if not save:
            return GeneratedRecipe(ai_json=ai_json)

        try:
            request = parse_generated_recipe(ai_json)
            saved = await self._recipes.create(request, caller, ai_generated=True)
        except (ValidationError, UserNotFoundError) as e:
            logger.warning("Generated recipe could not be saved", error=str(e))
            return GeneratedRecipe(ai_json=ai_json, save_error=_describe(e))
        return GeneratedRecipe(ai_json=ai_json, saved=saved)

    async def analyze_nutrition(self, recipe: Recipe) -> dict[str, Any]:
        """Estimate nutrition for a recipe the caller is allowed to see."""
        ai_json = await self._complete(
            self._nutrition_prompt,
            title=recipe.title,
            servings=recipe.servings,
            ingredients=[f"{i.quantity_display} {i.name}" for i in recipe.ingredients],
        )
        return orjson.loads(ai_json)

    async def suggest_wine_pairing(self, recipe: Recipe) -> dict[str, Any]:
        """Suggest wine pairings for a recipe the caller is allowed to see."""
        ai_json = await self._complete(
            self._pairing_prompt,
            title=recipe.title,
            description=recipe.description,
            category=recipe.category.display_name,
            ingredients=[i.name for i in recipe.ingredients],
            cooking_method=infer_cooking_method(recipe.instructions),
        )
        return orjson.loads(ai_json)

    async def _complete(self, prompt: BasePrompt, **kwargs: Any) -> str:
        if self._llm_client is None:
            msg = "AI features are disabled"
            raise LLMUnavailableError(msg)

        result = await self._llm_client.generate(
            prompt.format(**kwargs),
            system=prompt.system_prompt,
            json_mode=prompt.json_mode,
            options=prompt.get_options(),
        )
        logger.debug(
            "LLM completion received",
            prompt=prompt.name,
            model=result.model,
            completion_tokens=result.completion_tokens,
        )
        try:
            return extract_json(result.raw_response)
        except InvalidAiResponseError:
            logger.warning(
                "LLM returned invalid JSON",
                prompt=prompt.name,
                raw_response=result.raw_response[:500],
            )
            raise


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return f"{location}: {first['msg']}" if location else first["msg"]
    return str(error)
