"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.schemas import (
    FoodLogEntryIn,
    FoodSelectionIn,
    RecipeIn,
    SettingsIn,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import AppSettings, Recipe, RecipeIngredient
from calorie_tracker.domain.nutrition import (
    FoodSearchResult,
    ProductNotFound,
    ProductResult,
)
from calorie_tracker.domain.summary import DailySummary
from calorie_tracker.errors import (
    ApiError,
    ConfigurationError,
    StorageWriteError,
    ValidationError,
)
from calorie_tracker.services.calculator import (
    default_measurement,
    selection_from_manual,
    total_calories,
    weight_presets,
)
from calorie_tracker.services.settings import is_unusual_goal
from calorie_tracker.services.summary import recipe_total

DEFAULT_WEIGHT_GRAMS = 100


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error(_: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("Configuration error: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": exc.message},
        )

    @app.exception_handler(ApiError)
    async def api_error(_: Request, exc: ApiError) -> JSONResponse:
        logger.warning("Provider error (status=%s): %s", exc.status_code, exc.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message, "provider_status": exc.status_code},
        )

    @app.exception_handler(StorageWriteError)
    async def storage_error(_: Request, exc: StorageWriteError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": exc.message},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/summary")
    async def summary(request: Request, date: str | None = None) -> dict[str, object]:
        """Return calories eaten and remaining for a day."""
        state_container: AppContainer = request.app.state.container
        daily = await state_container.summary_service.get_daily_summary(date)
        return _format_summary(daily)

    @app.get("/food-log")
    async def food_log(request: Request, date: str | None = None) -> dict[str, object]:
        """Return food log entries for a day."""
        state_container: AppContainer = request.app.state.container
        entries = await state_container.food_log_service.entries_for_date(date)
        return {"entries": [asdict(entry) for entry in entries]}

    @app.post("/food-log", status_code=status.HTTP_201_CREATED)
    async def add_food(payload: FoodLogEntryIn, request: Request) -> dict[str, object]:
        """Log a food with a known calorie amount."""
        state_container: AppContainer = request.app.state.container
        entry = await state_container.food_log_service.add_entry(
            payload.name, payload.calories, payload.date
        )
        return asdict(entry)

    @app.post("/food-log/selection", status_code=status.HTTP_201_CREATED)
    async def add_selection(
        payload: FoodSelectionIn, request: Request
    ) -> dict[str, object]:
        """Log a food by per-100 g calories and eaten weight."""
        state_container: AppContainer = request.app.state.container
        selection = selection_from_manual(
            name=payload.name,
            calories=total_calories(payload.calories_per_100g, payload.weight_grams),
            weight_grams=payload.weight_grams,
            calories_per_100g=payload.calories_per_100g,
        )
        entry = await state_container.food_log_service.add_selection(
            selection, payload.date
        )
        return asdict(entry)

    @app.get("/foods/search")
    async def search_foods(request: Request, q: str = "") -> dict[str, object]:
        """Search the nutrition database."""
        state_container: AppContainer = request.app.state.container
        results = await state_container.nutrition_service.search(q)
        return {"results": [_format_search_result(result) for result in results]}

    @app.get("/products/{barcode}")
    async def lookup_product(barcode: str, request: Request) -> dict[str, object]:
        """Look up a scanned barcode."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.product_service.lookup(barcode)
        return _format_product(result)

    @app.get("/recipes")
    async def list_recipes(request: Request) -> dict[str, object]:
        """Return saved recipes with totals."""
        state_container: AppContainer = request.app.state.container
        recipes = await state_container.recipe_service.list_recipes()
        return {"recipes": [_format_recipe(recipe) for recipe in recipes]}

    @app.post("/recipes")
    async def save_recipe(payload: RecipeIn, request: Request) -> dict[str, object]:
        """Create a recipe, or update it when an id is given."""
        state_container: AppContainer = request.app.state.container
        recipe = await state_container.recipe_service.save_recipe(
            name=payload.name,
            ingredients=[
                RecipeIngredient(name=item.name, calories=item.calories)
                for item in payload.ingredients
            ],
            recipe_id=payload.id,
        )
        return _format_recipe(recipe)

    @app.delete("/recipes/{recipe_id}")
    async def delete_recipe(recipe_id: str, request: Request) -> dict[str, str]:
        """Delete a recipe."""
        state_container: AppContainer = request.app.state.container
        await state_container.recipe_service.delete_recipe(recipe_id)
        return {"status": "ok"}

    @app.get("/settings")
    async def get_settings(request: Request) -> dict[str, object]:
        """Return the daily goal."""
        state_container: AppContainer = request.app.state.container
        return _format_settings(await state_container.settings_service.get_settings())

    @app.put("/settings")
    async def update_settings(
        payload: SettingsIn, request: Request
    ) -> dict[str, object]:
        """Set the daily goal."""
        state_container: AppContainer = request.app.state.container
        saved = await state_container.settings_service.set_daily_goal(
            payload.daily_goal
        )
        return _format_settings(saved)

    @app.post("/settings/reset")
    async def reset_settings(request: Request) -> dict[str, object]:
        """Restore the default daily goal."""
        state_container: AppContainer = request.app.state.container
        return _format_settings(await state_container.settings_service.reset())

    return app


def _format_summary(daily: DailySummary) -> dict[str, object]:
    return {
        "date": daily.date,
        "daily_goal": daily.daily_goal,
        "total_calories": daily.total_calories,
        "remaining_calories": daily.remaining_calories,
        "over_goal": daily.over_goal,
        "entries": [asdict(entry) for entry in daily.entries],
    }


def _format_search_result(result: FoodSearchResult) -> dict[str, object]:
    return {
        "id": result.id,
        "label": result.label,
        "calories_per_100g": result.calories_per_100g,
        "measures": [asdict(measure) for measure in result.measures],
        "default_measurement": asdict(
            default_measurement(result, DEFAULT_WEIGHT_GRAMS)
        ),
        "weight_presets": [asdict(preset) for preset in weight_presets(result)],
    }


def _format_product(result: ProductResult | ProductNotFound) -> dict[str, object]:
    """Describe the three lookup outcomes a client must handle."""
    if isinstance(result, ProductNotFound):
        return {"status": "not_found", "barcode": result.barcode}
    return {
        "status": "found" if result.has_calorie_data else "no_calorie_data",
        "barcode": result.barcode,
        "name": result.name,
        "calories_per_100g": result.calories_per_100g,
    }


def _format_recipe(recipe: Recipe) -> dict[str, object]:
    return {**asdict(recipe), "total_calories": recipe_total(recipe)}


def _format_settings(settings: AppSettings) -> dict[str, object]:
    return {
        "daily_goal": settings.daily_goal,
        "unusual_goal": is_unusual_goal(settings.daily_goal),
    }
