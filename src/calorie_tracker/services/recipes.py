"""Recipe management service."""

from dataclasses import dataclass

from calorie_tracker.domain.models import Recipe, RecipeIngredient
from calorie_tracker.errors import ValidationError
from calorie_tracker.services.storage import StorageService, generate_id


@dataclass
class RecipeService:
    """Application service for recipe operations."""

    storage: StorageService

    async def list_recipes(self) -> list[Recipe]:
        """Return all saved recipes."""
        return await self.storage.load_recipes()

    async def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        for recipe in await self.storage.load_recipes():
            if recipe.id == recipe_id:
                return recipe
        return None

    async def save_recipe(
        self,
        name: str,
        ingredients: list[RecipeIngredient],
        recipe_id: str | None = None,
    ) -> Recipe:
        """Create a recipe, or replace the one with ``recipe_id``."""
        cleaned_name = name.strip()
        if not cleaned_name:
            raise ValidationError("Please enter a recipe name", field="name")
        if not ingredients:
            raise ValidationError(
                "Please add at least one ingredient", field="ingredients"
            )
        cleaned_ingredients = [_clean_ingredient(item) for item in ingredients]

        recipe = Recipe(
            id=recipe_id or generate_id(),
            name=cleaned_name,
            ingredients=cleaned_ingredients,
        )
        await self.storage.upsert_recipe(recipe)
        return recipe

    async def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe by id."""
        await self.storage.remove_recipe(recipe_id)


def _clean_ingredient(ingredient: RecipeIngredient) -> RecipeIngredient:
    name = ingredient.name.strip()
    if not name:
        raise ValidationError("Ingredient name is required", field="ingredients")
    calories = ingredient.calories
    if isinstance(calories, bool) or not isinstance(calories, int) or calories < 0:
        raise ValidationError(
            "Ingredient calories must be a whole number of at least 0",
            field="ingredients",
        )
    return RecipeIngredient(name=name, calories=ingredient.calories)
