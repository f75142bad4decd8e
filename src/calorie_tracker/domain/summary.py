"""Domain models for aggregate views."""

from dataclasses import dataclass

from calorie_tracker.domain.models import FoodLogEntry


@dataclass(frozen=True)
class DailySummary:
    """Calories eaten on a day against the daily goal."""

    date: str
    daily_goal: int
    total_calories: int
    remaining_calories: int
    entries: list[FoodLogEntry]

    @property
    def over_goal(self) -> bool:
        """Return True when more calories were eaten than the goal allows."""
        return self.remaining_calories < 0
