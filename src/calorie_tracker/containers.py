"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.edamam_client import HttpxEdamamClient
from calorie_tracker.adapters.file_kv_store import FileKeyValueStore
from calorie_tracker.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from calorie_tracker.adapters.supabase_kv_store import SupabaseKeyValueStore
from calorie_tracker.config import Settings, StorageBackend
from calorie_tracker.errors import ConfigurationError
from calorie_tracker.services.food_log import FoodLogService
from calorie_tracker.services.nutrition import NutritionSearchService
from calorie_tracker.services.products import ProductLookupService
from calorie_tracker.services.recipes import RecipeService
from calorie_tracker.services.settings import SettingsService
from calorie_tracker.services.storage import KeyValueStore, StorageService
from calorie_tracker.services.summary import SummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage_service: StorageService
    food_log_service: FoodLogService
    recipe_service: RecipeService
    settings_service: SettingsService
    summary_service: SummaryService
    nutrition_service: NutritionSearchService
    product_service: ProductLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage_service = StorageService(_build_store(resolved_settings))
    edamam_client = HttpxEdamamClient.create(
        credentials=resolved_settings.edamam_credentials(),
        base_url=resolved_settings.edamam_base_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.openfoodfacts_base_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    nutrition_service = NutritionSearchService(
        client=edamam_client,
        strategy=resolved_settings.edamam_search_strategy,
        nutrition_type=resolved_settings.edamam_nutrition_type,
        category=resolved_settings.edamam_category,
        debug=resolved_settings.environment == "local",
    )

    async def close_resources() -> None:
        await edamam_client.close()
        await openfoodfacts_client.close()

    return AppContainer(
        settings=resolved_settings,
        storage_service=storage_service,
        food_log_service=FoodLogService(storage_service),
        recipe_service=RecipeService(storage_service),
        settings_service=SettingsService(storage_service),
        summary_service=SummaryService(storage_service),
        nutrition_service=nutrition_service,
        product_service=ProductLookupService(openfoodfacts_client),
        close_resources=close_resources,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by configuration."""
    if settings.storage_backend is StorageBackend.SUPABASE:
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ConfigurationError(
                "Supabase storage selected: set SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client)
    return FileKeyValueStore.create(settings.data_dir)
