"""Pydantic models for Edamam Food Database parser responses."""

from pydantic import BaseModel, Field


class EdamamNutrients(BaseModel):
    """Nutrient values per 100 g."""

    enerc_kcal: float | None = Field(default=None, alias="ENERC_KCAL")


class EdamamFood(BaseModel):
    """Food object inside a parsed item."""

    food_id: str | None = Field(default=None, alias="foodId")
    label: str | None = None
    nutrients: EdamamNutrients | None = None


class EdamamMeasure(BaseModel):
    """Alternate measurement unit for a food."""

    uri: str | None = None
    label: str | None = None
    weight: float | None = None


class EdamamParsedItem(BaseModel):
    """Single entry of the ``parsed`` list."""

    food: EdamamFood | None = None
    measures: list[EdamamMeasure] | None = None


class EdamamParserResponse(BaseModel):
    """Top-level parser response."""

    parsed: list[EdamamParsedItem] | None = None
