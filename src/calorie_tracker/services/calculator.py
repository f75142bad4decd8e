"""Calorie arithmetic and weight preset selection.

Everything here is pure. Rounding is half away from zero: 133.5 becomes 134
and 0.5 becomes 1, unlike the built-in ``round``.
"""

import math

from calorie_tracker.domain.nutrition import (
    FoodItem,
    FoodSearchResult,
    FoodSelectionResult,
    Measure,
    WeightPreset,
)

CLOSE_MATCH_GRAMS = 20
PRESET_COUNT = 4
MAX_PRESET_WEIGHT_GRAMS = 500
MIN_PRESET_SPACING_GRAMS = 10
DEFAULT_PRESET_WEIGHTS = (50, 100, 150, 200)
BACKFILL_PRESET_WEIGHTS = (50, 100, 150, 200, 250)

DEFAULT_MEASURE_KEYWORDS = ("cup", "piece", "serving")
COMMON_UNIT_KEYWORDS = (
    "cup",
    "piece",
    "serving",
    "slice",
    "tablespoon",
    "teaspoon",
    "ounce",
    "item",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    rounded = math.floor(abs(value) + 0.5)
    return -rounded if value < 0 else rounded


def total_calories(calories_per_100g: float, weight_grams: float) -> int:
    """Scale a per-100 g energy value to a weight."""
    return round_half_up(calories_per_100g * weight_grams / 100)


def create_food_item(result: FoodSearchResult, weight_grams: float = 100) -> FoodItem:
    """Build a food item for a search result at a given weight."""
    return FoodItem(
        id=result.id,
        name=result.label,
        calories_per_100g=result.calories_per_100g,
        weight_grams=weight_grams,
        total_calories=total_calories(result.calories_per_100g, weight_grams),
    )


def selection_from_result(
    result: FoodSearchResult, weight_grams: float
) -> FoodSelectionResult:
    """Return the selection produced by picking a search result."""
    return FoodSelectionResult(
        name=result.label,
        calories=total_calories(result.calories_per_100g, weight_grams),
        weight_grams=weight_grams,
        calories_per_100g=result.calories_per_100g,
    )


def selection_from_manual(
    name: str,
    calories: int,
    weight_grams: float,
    calories_per_100g: float | None = None,
) -> FoodSelectionResult:
    """Return the selection for a hand-typed food.

    Without a known per-100 g value it is derived from the typed calories,
    or left at 0 when the weight is not positive.
    """
    if not calories_per_100g:
        calories_per_100g = calories * 100 / weight_grams if weight_grams > 0 else 0
    return FoodSelectionResult(
        name=name,
        calories=calories,
        weight_grams=weight_grams,
        calories_per_100g=calories_per_100g,
    )


def grams_label(weight_grams: float) -> str:
    """Format a weight as ``"100g"`` or ``"12.5g"``."""
    if float(weight_grams).is_integer():
        return f"{int(weight_grams)}g"
    return f"{weight_grams:g}g"


def default_measurement(
    result: FoodSearchResult, target_weight_grams: float
) -> WeightPreset:
    """Pick the measurement shown first for a search result."""
    fallback = WeightPreset(
        label=grams_label(target_weight_grams), weight_grams=target_weight_grams
    )
    if not result.measures:
        return fallback

    for measure in result.measures:
        if (
            measure.weight_grams
            and abs(measure.weight_grams - target_weight_grams) <= CLOSE_MATCH_GRAMS
        ):
            return WeightPreset(label=measure.label, weight_grams=measure.weight_grams)

    for measure in result.measures:
        if _has_keyword(measure, DEFAULT_MEASURE_KEYWORDS):
            if measure.weight_grams:
                return WeightPreset(
                    label=measure.label, weight_grams=measure.weight_grams
                )
            break

    return fallback


def weight_presets(result: FoodSearchResult) -> list[WeightPreset]:
    """Return up to four quick-pick weights for a search result."""
    if not result.measures:
        return [
            WeightPreset(label=grams_label(weight), weight_grams=weight)
            for weight in DEFAULT_PRESET_WEIGHTS
        ]

    usable = [
        measure
        for measure in result.measures
        if measure.weight_grams and 0 < measure.weight_grams <= MAX_PRESET_WEIGHT_GRAMS
    ]
    plain = sorted(
        (m for m in usable if not _has_keyword(m, COMMON_UNIT_KEYWORDS)),
        key=lambda m: m.weight_grams,
    )
    common = sorted(
        (m for m in usable if _has_keyword(m, COMMON_UNIT_KEYWORDS)),
        key=lambda m: m.weight_grams,
    )
    presets = [
        WeightPreset(label=m.label, weight_grams=m.weight_grams)
        for m in (plain + common)[:PRESET_COUNT]
    ]

    for weight in BACKFILL_PRESET_WEIGHTS:
        if len(presets) >= PRESET_COUNT:
            break
        if any(
            abs(preset.weight_grams - weight) <= MIN_PRESET_SPACING_GRAMS
            for preset in presets
        ):
            continue
        presets.append(WeightPreset(label=grams_label(weight), weight_grams=weight))
    return presets


def _has_keyword(measure: Measure, keywords: tuple[str, ...]) -> bool:
    label = measure.label.lower()
    return any(keyword in label for keyword in keywords)
