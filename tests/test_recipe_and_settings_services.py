"""Tests for recipe and settings services."""

import asyncio

import pytest

from calorie_tracker.domain.models import RecipeIngredient
from calorie_tracker.errors import ValidationError
from calorie_tracker.services.recipes import RecipeService
from calorie_tracker.services.settings import SettingsService, is_unusual_goal
from calorie_tracker.services.storage import StorageService


def test_save_recipe_creates_and_updates(storage: StorageService) -> None:
    service = RecipeService(storage)

    created = asyncio.run(
        service.save_recipe(
            " Omelette ",
            [
                RecipeIngredient(name="Eggs", calories=140),
                RecipeIngredient(name="Cheese", calories=110),
            ],
        )
    )
    updated = asyncio.run(
        service.save_recipe(
            "Omelette",
            [RecipeIngredient(name="Eggs", calories=140)],
            recipe_id=created.id,
        )
    )

    recipes = asyncio.run(service.list_recipes())
    assert created.name == "Omelette"
    assert updated.id == created.id
    assert len(recipes) == 1
    assert recipes[0].ingredients == [RecipeIngredient(name="Eggs", calories=140)]
    assert asyncio.run(service.get_recipe(created.id)) == updated
    assert asyncio.run(service.get_recipe("missing")) is None


def test_save_recipe_validates(storage: StorageService) -> None:
    service = RecipeService(storage)

    with pytest.raises(ValidationError):
        asyncio.run(
            service.save_recipe("", [RecipeIngredient(name="Eggs", calories=1)])
        )
    with pytest.raises(ValidationError):
        asyncio.run(service.save_recipe("Omelette", []))
    with pytest.raises(ValidationError):
        asyncio.run(
            service.save_recipe("Omelette", [RecipeIngredient(name=" ", calories=1)])
        )
    with pytest.raises(ValidationError):
        asyncio.run(
            service.save_recipe(
                "Omelette", [RecipeIngredient(name="Eggs", calories=-5)]
            )
        )

    assert asyncio.run(service.list_recipes()) == []


@pytest.mark.parametrize("calories", [12.6, True, "120"])
def test_save_recipe_requires_whole_number_calories(
    storage: StorageService, calories: object
) -> None:
    service = RecipeService(storage)

    with pytest.raises(ValidationError):
        asyncio.run(
            service.save_recipe(
                "Soup", [RecipeIngredient(name="Leek", calories=calories)]
            )
        )

    assert asyncio.run(service.list_recipes()) == []


def test_saved_recipe_matches_loaded_recipe(storage: StorageService) -> None:
    service = RecipeService(storage)

    saved = asyncio.run(
        service.save_recipe("Soup", [RecipeIngredient(name="Leek", calories=13)])
    )

    assert asyncio.run(service.list_recipes()) == [saved]


def test_delete_recipe(storage: StorageService) -> None:
    service = RecipeService(storage)
    recipe = asyncio.run(
        service.save_recipe("Tea", [RecipeIngredient(name="Milk", calories=20)])
    )

    asyncio.run(service.delete_recipe(recipe.id))

    assert asyncio.run(service.list_recipes()) == []


def test_settings_goal_roundtrip(storage: StorageService) -> None:
    service = SettingsService(storage)

    assert asyncio.run(service.get_settings()).daily_goal == 2000

    asyncio.run(service.set_daily_goal(1800))
    assert asyncio.run(service.get_settings()).daily_goal == 1800

    asyncio.run(service.reset())
    assert asyncio.run(service.get_settings()).daily_goal == 2000


def test_settings_rejects_non_positive_goal(storage: StorageService) -> None:
    service = SettingsService(storage)

    with pytest.raises(ValidationError):
        asyncio.run(service.set_daily_goal(0))
    with pytest.raises(ValidationError):
        asyncio.run(service.set_daily_goal(-100))


def test_unusual_goal_bounds() -> None:
    assert is_unusual_goal(799)
    assert not is_unusual_goal(800)
    assert not is_unusual_goal(5000)
    assert is_unusual_goal(5001)
