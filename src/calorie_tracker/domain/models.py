"""Domain models for persisted calorie tracker records."""

from dataclasses import dataclass, field

DEFAULT_DAILY_GOAL = 2000


@dataclass(frozen=True)
class FoodLogEntry:
    """A single food logged on a calendar day."""

    id: str
    name: str
    calories: int
    date: str


@dataclass(frozen=True)
class RecipeIngredient:
    """Ingredient line of a recipe."""

    name: str
    calories: int


@dataclass(frozen=True)
class Recipe:
    """A named list of ingredients."""

    id: str
    name: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)


@dataclass(frozen=True)
class AppSettings:
    """User preferences."""

    daily_goal: int = DEFAULT_DAILY_GOAL
