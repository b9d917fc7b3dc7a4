"""Recipe difficulty levels, ordered from BEGINNER (1) to EXPERT (5)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final, NamedTuple


class RecipeDifficulty(StrEnum):
    """How demanding a recipe is to cook."""

    BEGINNER = "BEGINNER"
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    EXPERT = "EXPERT"

    @property
    def display_name(self) -> str:
        return DIFFICULTY_INFO[self].display_name

    @property
    def description(self) -> str:
        return DIFFICULTY_INFO[self].description

    @property
    def level(self) -> int:
        return DIFFICULTY_INFO[self].level


class DifficultyInfo(NamedTuple):
    display_name: str
    description: str
    level: int


DIFFICULTY_INFO: Final[dict[RecipeDifficulty, DifficultyInfo]] = {
    RecipeDifficulty.BEGINNER: DifficultyInfo(
        "Beginner", "Perfect for cooking newcomers", 1
    ),
    RecipeDifficulty.EASY: DifficultyInfo(
        "Easy", "Simple techniques and common ingredients", 2
    ),
    RecipeDifficulty.MEDIUM: DifficultyInfo(
        "Medium", "Some cooking experience recommended", 3
    ),
    RecipeDifficulty.HARD: DifficultyInfo(
        "Hard", "Advanced techniques and skills required", 4
    ),
    RecipeDifficulty.EXPERT: DifficultyInfo(
        "Expert", "Professional-level complexity", 5
    ),
}

_BY_LEVEL: Final = {info.level: d for d, info in DIFFICULTY_INFO.items()}


def is_beginner_friendly(difficulty: RecipeDifficulty) -> bool:
    return difficulty.level <= RecipeDifficulty.EASY.level


def is_advanced(difficulty: RecipeDifficulty) -> bool:
    return difficulty.level >= RecipeDifficulty.HARD.level


def difficulty_from_level(level: int) -> RecipeDifficulty | None:
    return _BY_LEVEL.get(level)


def next_difficulty(difficulty: RecipeDifficulty) -> RecipeDifficulty:
    """Next harder level; EXPERT is its own successor."""
    return _BY_LEVEL.get(difficulty.level + 1, difficulty)


def previous_difficulty(difficulty: RecipeDifficulty) -> RecipeDifficulty:
    """Next easier level; BEGINNER is its own predecessor."""
    return _BY_LEVEL.get(difficulty.level - 1, difficulty)


def difficulty_from_display_name(name: str) -> RecipeDifficulty | None:
    wanted = name.strip().casefold()
    for difficulty, info in DIFFICULTY_INFO.items():
        if info.display_name.casefold() == wanted:
            return difficulty
    return None


def parse_difficulty(
    value: str | None, default: RecipeDifficulty
) -> RecipeDifficulty:
    """Lenient parse of member or display names; unknown input yields ``default``."""
    if not value:
        return default
    try:
        return RecipeDifficulty(value.strip().upper())
    except ValueError:
        return difficulty_from_display_name(value) or default
