"""Persistence gateway for the food log, recipes and settings collections.

Each collection is stored as one JSON blob under its own key and is always
read and written whole. A blob that cannot be read or parsed yields the
collection default. Write failures surface as ``StorageWriteError``.

``append_food_log_entry``, ``upsert_recipe`` and ``remove_recipe`` read the
collection, modify it and write it back. There is no locking between the read
and the write, so two overlapping updates may lose one of them.
"""

import json
import logging
import random
import string
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Protocol

from calorie_tracker.domain.models import (
    DEFAULT_DAILY_GOAL,
    AppSettings,
    FoodLogEntry,
    Recipe,
    RecipeIngredient,
)
from calorie_tracker.errors import StorageReadError, StorageWriteError

_logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_RANDOM_LENGTH = 9

CollectionValue = list[FoodLogEntry] | list[Recipe] | AppSettings


class Collection(StrEnum):
    """Stored collections and their storage keys."""

    FOOD_LOG = "food_log"
    RECIPES = "recipes"
    SETTINGS = "settings"


class KeyValueStore(Protocol):
    """Async string key-value store."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value for a key, if any."""

    async def set_item(self, key: str, value: str) -> None:
        """Replace the stored value for a key."""


@dataclass
class StorageService:
    """Reads and writes whole collections through a key-value store."""

    store: KeyValueStore

    async def load(self, collection: Collection) -> CollectionValue:
        """Load a collection, falling back to its default on any read error."""
        try:
            raw = await self._read(collection)
        except StorageReadError:
            _logger.exception("Error loading %s", collection.value)
            return _default_for(collection)
        if raw is None:
            return _default_for(collection)
        return raw

    async def save(self, collection: Collection, value: CollectionValue) -> None:
        """Serialize and store an entire collection."""
        payload = _serialize(value)
        try:
            await self.store.set_item(collection.value, payload)
        except Exception as exc:
            _logger.exception("Error saving %s", collection.value)
            raise StorageWriteError(
                f"Failed to save {collection.value}: {exc}"
            ) from exc

    async def load_food_log(self) -> list[FoodLogEntry]:
        """Return every logged food entry."""
        return await self.load(Collection.FOOD_LOG)  # type: ignore[return-value]

    async def save_food_log(self, entries: list[FoodLogEntry]) -> None:
        """Replace the food log."""
        await self.save(Collection.FOOD_LOG, entries)

    async def append_food_log_entry(self, entry: FoodLogEntry) -> None:
        """Add an entry to the food log."""
        entries = await self.load_food_log()
        entries.append(entry)
        await self.save_food_log(entries)

    async def food_log_for_date(self, date: str) -> list[FoodLogEntry]:
        """Return entries logged on a ``YYYY-MM-DD`` date."""
        return [entry for entry in await self.load_food_log() if entry.date == date]

    async def load_recipes(self) -> list[Recipe]:
        """Return all saved recipes."""
        return await self.load(Collection.RECIPES)  # type: ignore[return-value]

    async def save_recipes(self, recipes: list[Recipe]) -> None:
        """Replace the recipe collection."""
        await self.save(Collection.RECIPES, recipes)

    async def upsert_recipe(self, recipe: Recipe) -> None:
        """Replace the recipe with the same id in place, or append it."""
        recipes = await self.load_recipes()
        for index, existing in enumerate(recipes):
            if existing.id == recipe.id:
                recipes[index] = recipe
                break
        else:
            recipes.append(recipe)
        await self.save_recipes(recipes)

    async def remove_recipe(self, recipe_id: str) -> None:
        """Delete a recipe by id. Unknown ids leave the collection unchanged."""
        recipes = await self.load_recipes()
        await self.save_recipes(
            [recipe for recipe in recipes if recipe.id != recipe_id]
        )

    async def load_settings(self) -> AppSettings:
        """Return the stored settings or the defaults."""
        return await self.load(Collection.SETTINGS)  # type: ignore[return-value]

    async def save_settings(self, settings: AppSettings) -> None:
        """Overwrite the stored settings."""
        await self.save(Collection.SETTINGS, settings)

    async def _read(self, collection: Collection) -> CollectionValue | None:
        try:
            data = await self.store.get_item(collection.value)
        except Exception as exc:
            raise StorageReadError(
                f"Failed to read {collection.value}: {exc}"
            ) from exc
        if data is None:
            return None
        try:
            return _deserialize(collection, json.loads(data))
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise StorageReadError(
                f"Stored {collection.value} is malformed: {exc}"
            ) from exc


def generate_id() -> str:
    """Return a device-unique id: millisecond timestamp plus random base-36."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_RANDOM_LENGTH))
    return f"{time.time_ns() // 1_000_000}{suffix}"


def today_date_string() -> str:
    """Return today's UTC date as ``YYYY-MM-DD``."""
    return datetime.now(tz=UTC).date().isoformat()


def _default_for(collection: Collection) -> CollectionValue:
    if collection is Collection.SETTINGS:
        return AppSettings(daily_goal=DEFAULT_DAILY_GOAL)
    return []


def _serialize(value: CollectionValue) -> str:
    if isinstance(value, AppSettings):
        return json.dumps({"dailyGoal": value.daily_goal})
    return json.dumps([asdict(item) for item in value])


def _deserialize(collection: Collection, data: object) -> CollectionValue:
    if collection is Collection.SETTINGS:
        if not isinstance(data, dict):
            raise TypeError("settings must be a JSON object")
        daily_goal = int(data.get("dailyGoal", DEFAULT_DAILY_GOAL))
        if daily_goal <= 0:
            raise ValueError(f"dailyGoal must be positive, got {daily_goal}")
        return AppSettings(daily_goal=daily_goal)
    if not isinstance(data, list):
        raise TypeError(f"{collection.value} must be a JSON array")
    if collection is Collection.FOOD_LOG:
        return [_parse_entry(row) for row in data]
    return [_parse_recipe(row) for row in data]


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    return FoodLogEntry(
        id=str(row["id"]),
        name=str(row["name"]),
        calories=int(row["calories"]),
        date=str(row["date"]),
    )


def _parse_recipe(row: dict[str, object]) -> Recipe:
    ingredients = row.get("ingredients") or []
    return Recipe(
        id=str(row["id"]),
        name=str(row["name"]),
        ingredients=[
            RecipeIngredient(name=str(item["name"]), calories=int(item["calories"]))
            for item in ingredients
        ],
    )
