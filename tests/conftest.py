"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from calorie_tracker.adapters.edamam_client import EdamamClient
from calorie_tracker.adapters.openfoodfacts_client import OpenFoodFactsClient
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.food_log import FoodLogService
from calorie_tracker.services.nutrition import NutritionSearchService
from calorie_tracker.services.products import ProductLookupService
from calorie_tracker.services.recipes import RecipeService
from calorie_tracker.services.settings import SettingsService
from calorie_tracker.services.storage import KeyValueStore, StorageService
from calorie_tracker.services.summary import SummaryService


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    items: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    async def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.items[key] = value


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose reads and/or writes raise."""

    fail_reads: bool = True
    fail_writes: bool = True
    items: dict[str, str] = field(default_factory=dict)

    async def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("disk unavailable")
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.items[key] = value


def edamam_payload() -> dict[str, object]:
    return {
        "parsed": [
            {
                "food": {
                    "foodId": "food_banana",
                    "label": "banana",
                    "nutrients": {"ENERC_KCAL": 89.0},
                },
                "measures": [
                    {"uri": "m#medium", "label": "Medium", "weight": 118.0},
                    {"uri": "m#cup", "label": "Cup", "weight": 150.0},
                ],
            },
            {
                "food": {
                    "foodId": "food_apple",
                    "label": "Apple",
                    "nutrients": {"ENERC_KCAL": 52.4},
                },
            },
            {
                "food": {
                    "foodId": "food_water",
                    "label": "Water",
                    "nutrients": {"ENERC_KCAL": 0},
                },
            },
            {
                "food": {
                    "foodId": "food_pie",
                    "label": "apple pie",
                    "nutrients": {"ENERC_KCAL": 237.6},
                },
            },
        ]
    }


@dataclass
class FakeEdamamClient(EdamamClient):
    """Fake Edamam client that records calls."""

    payload: dict[str, object] = field(default_factory=edamam_payload)
    account_payload: dict[str, object] | None = None
    fail_primary: Exception | None = None
    fail_account: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def parse_foods(
        self,
        query: str,
        *,
        nutrition_type: str | None = None,
        category: str | None = None,
        account_user: bool = False,
    ) -> object:
        self.calls.append(
            {
                "query": query,
                "nutrition_type": nutrition_type,
                "category": category,
                "account_user": account_user,
            }
        )
        if account_user:
            if self.fail_account is not None:
                raise self.fail_account
            return self.account_payload or self.payload
        if self.fail_primary is not None:
            raise self.fail_primary
        return self.payload


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {
            "status": 1,
            "product": {
                "product_name": "Oat Biscuits",
                "nutriments": {"energy-kcal_100g": 480, "energy_100g": 2008},
            },
        }
    )
    error: Exception | None = None
    barcodes: list[str] = field(default_factory=list)

    async def get_product(self, barcode: str) -> object:
        self.barcodes.append(barcode)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        edamam_app_id="app-id",
        edamam_app_key="app-key",
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(store: InMemoryKeyValueStore) -> StorageService:
    return StorageService(store)


@pytest.fixture
def edamam_client() -> FakeEdamamClient:
    return FakeEdamamClient()


@pytest.fixture
def openfoodfacts_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def container(
    settings: Settings,
    storage: StorageService,
    edamam_client: FakeEdamamClient,
    openfoodfacts_client: FakeOpenFoodFactsClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        storage_service=storage,
        food_log_service=FoodLogService(storage),
        recipe_service=RecipeService(storage),
        settings_service=SettingsService(storage),
        summary_service=SummaryService(storage),
        nutrition_service=NutritionSearchService(client=edamam_client),
        product_service=ProductLookupService(openfoodfacts_client),
        close_resources=close_resources,
    )
