"""Nutrition search service backed by the Edamam food parser."""

import logging
from dataclasses import dataclass
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from calorie_tracker.adapters.edamam_client import EdamamClient
from calorie_tracker.config import SearchStrategy
from calorie_tracker.domain.edamam import EdamamParserResponse
from calorie_tracker.domain.nutrition import FoodSearchResult, Measure
from calorie_tracker.errors import ApiError, ConfigurationError
from calorie_tracker.services.calculator import round_half_up

_ACCOUNT_NUTRITION_TYPE = "cooking"

_logger = logging.getLogger(__name__)


@dataclass
class NutritionSearchService:
    """Searches foods and normalizes results to per-100 g calories."""

    client: EdamamClient
    strategy: SearchStrategy = SearchStrategy.PARSER
    nutrition_type: str | None = None
    category: str | None = None
    debug: bool = False

    async def search(self, query: str) -> list[FoodSearchResult]:
        """Search foods by name, sorted by label ignoring case."""
        if not query.strip():
            return []

        if self.strategy is SearchStrategy.ACCOUNT_PARSER:
            payload = await self._account_parser(query)
        elif self.strategy is SearchStrategy.PARSER_WITH_FALLBACK:
            payload = await self._parser_with_fallback(query)
        else:
            payload = await self._parser(query)

        results = parse_search_results(payload)
        if self.debug:
            _logger.info("Nutrition search: query=%s results=%s", query, len(results))
        return results

    async def _parser(self, query: str) -> object:
        return await self.client.parse_foods(
            query, nutrition_type=self.nutrition_type, category=self.category
        )

    async def _account_parser(self, query: str) -> object:
        return await self.client.parse_foods(
            query,
            nutrition_type=self.nutrition_type or _ACCOUNT_NUTRITION_TYPE,
            category=self.category,
            account_user=True,
        )

    async def _parser_with_fallback(self, query: str) -> object:
        try:
            return await self._parser(query)
        except ApiError as exc:
            _logger.warning(
                "Nutrition search failed (status=%s), trying account endpoint: %s",
                exc.status_code if exc.status_code is not None else "n/a",
                exc.message,
            )
            primary_error = exc
        try:
            return await self._account_parser(query)
        except ConfigurationError:
            raise primary_error from None


def parse_search_results(payload: object) -> list[FoodSearchResult]:
    """Convert a parser response into sorted search results."""
    try:
        response = EdamamParserResponse.model_validate(payload)
    except PydanticValidationError as exc:
        raise ApiError(f"Unexpected Edamam response: {exc}") from exc

    results: list[FoodSearchResult] = []
    for item in response.parsed or []:
        food = item.food
        if food is None or food.nutrients is None:
            continue
        energy = food.nutrients.enerc_kcal
        if energy is None or energy <= 0:
            continue
        results.append(
            FoodSearchResult(
                label=food.label or "Unknown Food",
                calories_per_100g=round_half_up(energy),
                id=food.food_id or uuid4().hex,
                measures=[
                    Measure(
                        label=measure.label or "",
                        weight_grams=measure.weight,
                        uri=measure.uri or "",
                    )
                    for measure in item.measures or []
                ],
            )
        )
    return sorted(results, key=lambda result: result.label.casefold())
