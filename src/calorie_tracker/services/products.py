"""Barcode product lookup via Open Food Facts."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from calorie_tracker.adapters.openfoodfacts_client import OpenFoodFactsClient
from calorie_tracker.domain.nutrition import ProductNotFound, ProductResult
from calorie_tracker.domain.openfoodfacts import (
    OpenFoodFactsNutriments,
    OpenFoodFactsResponse,
)
from calorie_tracker.errors import ApiError, ValidationError
from calorie_tracker.services.calculator import round_half_up

KILOJOULES_PER_KILOCALORIE = 4.184
PRODUCT_FOUND_STATUSES = (1, "1")
UNKNOWN_PRODUCT_NAME = "Unknown Product"

_logger = logging.getLogger(__name__)


@dataclass
class ProductLookupService:
    """Looks up products by barcode and extracts per-100 g calories."""

    client: OpenFoodFactsClient

    async def lookup(self, barcode: str) -> ProductResult | ProductNotFound:
        """Return the product for a barcode, or ``ProductNotFound``."""
        cleaned = barcode.strip()
        if not cleaned:
            raise ValidationError("Barcode is required", field="barcode")

        payload = await self.client.get_product(cleaned)
        try:
            response = OpenFoodFactsResponse.model_validate(payload)
        except PydanticValidationError as exc:
            raise ApiError(f"Unexpected Open Food Facts response: {exc}") from exc

        if response.status not in PRODUCT_FOUND_STATUSES or response.product is None:
            _logger.info("Product not found: barcode=%s", cleaned)
            return ProductNotFound(barcode=cleaned)

        product = response.product
        return ProductResult(
            barcode=cleaned,
            name=product.product_name or UNKNOWN_PRODUCT_NAME,
            calories_per_100g=_calories_per_100g(product.nutriments),
        )


def _calories_per_100g(nutriments: OpenFoodFactsNutriments | None) -> int | None:
    """Prefer kcal, else convert kJ; ``None`` when neither gives a value."""
    if nutriments is None:
        return None
    calories = nutriments.energy_kcal_100g or 0.0
    if not calories and nutriments.energy_100g:
        calories = nutriments.energy_100g / KILOJOULES_PER_KILOCALORIE
    rounded = round_half_up(calories)
    return rounded if rounded > 0 else None
