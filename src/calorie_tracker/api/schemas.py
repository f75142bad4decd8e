"""Pydantic models for the local JSON API."""

from pydantic import BaseModel, Field


class FoodLogEntryIn(BaseModel):
    """Manual food log entry."""

    name: str
    calories: int = Field(ge=0)
    date: str | None = None


class FoodSelectionIn(BaseModel):
    """Food chosen from search, scaled by weight."""

    name: str
    calories_per_100g: float = Field(ge=0)
    weight_grams: float = Field(gt=0)
    date: str | None = None


class RecipeIngredientIn(BaseModel):
    """Ingredient line of a recipe request."""

    name: str
    calories: int = Field(ge=0)


class RecipeIn(BaseModel):
    """Create or update a recipe; updates carry the existing ``id``."""

    id: str | None = None
    name: str
    ingredients: list[RecipeIngredientIn]


class SettingsIn(BaseModel):
    """Settings update."""

    daily_goal: int
