"""Pydantic models for Open Food Facts product responses."""

from pydantic import BaseModel, Field


class OpenFoodFactsNutriments(BaseModel):
    """Energy values per 100 g; Open Food Facts reports ``energy`` in kJ."""

    energy_100g: float | None = None
    energy_kcal_100g: float | None = Field(default=None, alias="energy-kcal_100g")


class OpenFoodFactsProduct(BaseModel):
    """Product payload."""

    product_name: str | None = None
    nutriments: OpenFoodFactsNutriments | None = None


class OpenFoodFactsResponse(BaseModel):
    """Top-level product lookup response."""

    status: int | str | None = None
    product: OpenFoodFactsProduct | None = None
