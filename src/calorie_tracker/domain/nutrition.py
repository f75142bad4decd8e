"""Nutrition domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EdamamCredentials:
    """Credentials for the Edamam Food Database API."""

    app_id: str | None
    app_key: str | None
    user_id: str | None = None

    @property
    def is_complete(self) -> bool:
        """Return True when both the application id and key are set."""
        return bool(self.app_id and self.app_key)


@dataclass(frozen=True)
class Measure:
    """Provider-supplied unit such as "Cup" with its gram weight."""

    label: str
    weight_grams: float | None = None
    uri: str = ""


@dataclass(frozen=True)
class FoodSearchResult:
    """Normalized food returned by a nutrition search."""

    label: str
    calories_per_100g: int
    id: str
    measures: list[Measure] = field(default_factory=list)


@dataclass(frozen=True)
class FoodItem:
    """A search result scaled to a chosen weight."""

    id: str
    name: str
    calories_per_100g: float
    weight_grams: float
    total_calories: int


@dataclass(frozen=True)
class FoodSelectionResult:
    """Outcome of picking a food, either from search or typed in by hand."""

    name: str
    calories: int
    weight_grams: float
    calories_per_100g: float


@dataclass(frozen=True)
class WeightPreset:
    """Quick-pick weight offered for a food."""

    label: str
    weight_grams: float


@dataclass(frozen=True)
class ProductResult:
    """A product found by barcode."""

    barcode: str
    name: str
    calories_per_100g: int | None

    @property
    def has_calorie_data(self) -> bool:
        """Return True when the product reports a usable energy value."""
        return bool(self.calories_per_100g)


@dataclass(frozen=True)
class ProductNotFound:
    """Barcode lookup found no product."""

    barcode: str
