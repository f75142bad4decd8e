"""Daily and recipe calorie totals."""

from dataclasses import dataclass

from calorie_tracker.domain.models import FoodLogEntry, Recipe
from calorie_tracker.domain.summary import DailySummary
from calorie_tracker.services.storage import StorageService, today_date_string


def daily_total(entries: list[FoodLogEntry]) -> int:
    """Sum the calories of food log entries."""
    return sum(entry.calories for entry in entries)


def remaining_calories(daily_goal: int, total: int) -> int:
    """Return calories left for the day; negative once over the goal."""
    return daily_goal - total


def recipe_total(recipe: Recipe) -> int:
    """Sum the calories of a recipe's ingredients."""
    return sum(ingredient.calories for ingredient in recipe.ingredients)


@dataclass
class SummaryService:
    """Builds the daily summary from freshly loaded collections."""

    storage: StorageService

    async def get_daily_summary(self, date: str | None = None) -> DailySummary:
        """Return totals for ``date`` (today when omitted)."""
        day = date or today_date_string()
        entries = await self.storage.food_log_for_date(day)
        settings = await self.storage.load_settings()
        total = daily_total(entries)
        return DailySummary(
            date=day,
            daily_goal=settings.daily_goal,
            total_calories=total,
            remaining_calories=remaining_calories(settings.daily_goal, total),
            entries=entries,
        )
