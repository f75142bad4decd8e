"""User settings service."""

from dataclasses import dataclass

from calorie_tracker.domain.models import DEFAULT_DAILY_GOAL, AppSettings
from calorie_tracker.errors import ValidationError
from calorie_tracker.services.storage import StorageService

MIN_USUAL_GOAL = 800
MAX_USUAL_GOAL = 5000


@dataclass
class SettingsService:
    """Service for the daily calorie goal."""

    storage: StorageService

    async def get_settings(self) -> AppSettings:
        """Return the stored settings or the defaults."""
        return await self.storage.load_settings()

    async def set_daily_goal(self, daily_goal: int) -> AppSettings:
        """Persist a new daily goal."""
        if isinstance(daily_goal, bool) or not isinstance(daily_goal, int):
            raise ValidationError(
                "Please enter a valid daily calorie goal", field="daily_goal"
            )
        if daily_goal <= 0:
            raise ValidationError(
                "Please enter a valid daily calorie goal (greater than 0)",
                field="daily_goal",
            )
        settings = AppSettings(daily_goal=daily_goal)
        await self.storage.save_settings(settings)
        return settings

    async def reset(self) -> AppSettings:
        """Restore the default daily goal."""
        return await self.set_daily_goal(DEFAULT_DAILY_GOAL)


def is_unusual_goal(daily_goal: int) -> bool:
    """Return True for goals outside the range most adults target."""
    return daily_goal < MIN_USUAL_GOAL or daily_goal > MAX_USUAL_GOAL
