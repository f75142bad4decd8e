"""Food log service."""

import re
from dataclasses import dataclass
from datetime import date as calendar_date

from calorie_tracker.domain.models import FoodLogEntry
from calorie_tracker.domain.nutrition import FoodSelectionResult
from calorie_tracker.errors import ValidationError
from calorie_tracker.services.storage import (
    StorageService,
    generate_id,
    today_date_string,
)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class FoodLogService:
    """Validates and records food log entries."""

    storage: StorageService

    async def add_entry(
        self, name: str, calories: int, date: str | None = None
    ) -> FoodLogEntry:
        """Log a food by name and calories."""
        cleaned_name = name.strip()
        if not cleaned_name:
            raise ValidationError("Please enter a food name", field="name")
        if isinstance(calories, bool) or not isinstance(calories, int) or calories < 0:
            raise ValidationError(
                "Please enter a valid calorie amount", field="calories"
            )
        if date is not None and not _is_calendar_date(date):
            raise ValidationError("Date must be formatted YYYY-MM-DD", field="date")

        entry = FoodLogEntry(
            id=generate_id(),
            name=cleaned_name,
            calories=calories,
            date=date or today_date_string(),
        )
        await self.storage.append_food_log_entry(entry)
        return entry

    async def add_selection(
        self, selection: FoodSelectionResult, date: str | None = None
    ) -> FoodLogEntry:
        """Log a food picked from search or entered by weight."""
        if selection.weight_grams <= 0:
            raise ValidationError("Please enter a valid weight", field="weight_grams")
        return await self.add_entry(selection.name, selection.calories, date)

    async def entries_for_date(self, date: str | None = None) -> list[FoodLogEntry]:
        """Return entries for ``date`` (today when omitted)."""
        return await self.storage.food_log_for_date(date or today_date_string())


def _is_calendar_date(value: str) -> bool:
    """Return True for an existing ``YYYY-MM-DD`` date."""
    if not _DATE_PATTERN.match(value):
        return False
    try:
        calendar_date.fromisoformat(value)
    except ValueError:
        return False
    return True
