"""Tests for calorie arithmetic and weight presets."""

from calorie_tracker.domain.nutrition import FoodSearchResult, Measure, WeightPreset
from calorie_tracker.services.calculator import (
    create_food_item,
    default_measurement,
    grams_label,
    round_half_up,
    selection_from_manual,
    selection_from_result,
    total_calories,
    weight_presets,
)


def _result(*measures: Measure) -> FoodSearchResult:
    return FoodSearchResult(
        label="Banana", calories_per_100g=89, id="food_banana", measures=list(measures)
    )


def test_total_calories_scales_per_100g() -> None:
    assert total_calories(200, 100) == 200
    assert total_calories(89, 150) == 134
    assert total_calories(0, 250) == 0
    assert total_calories(52, 0) == 0


def test_total_calories_rounds_half_up_for_whole_numbers() -> None:
    for per_100g in range(0, 400, 7):
        for weight in range(0, 600, 13):
            expected = (per_100g * weight + 50) // 100
            assert total_calories(per_100g, weight) == expected


def test_round_half_up_rounds_halves_away_from_zero() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(-2.5) == -3
    assert round_half_up(0) == 0


def test_create_food_item_defaults_to_100g() -> None:
    item = create_food_item(_result())

    assert item.name == "Banana"
    assert item.weight_grams == 100
    assert item.total_calories == 89
    assert item.id == "food_banana"


def test_selection_from_result_uses_weight() -> None:
    selection = selection_from_result(_result(), 150)

    assert selection.calories == 134
    assert selection.calories_per_100g == 89


def test_selection_from_manual_derives_per_100g() -> None:
    selection = selection_from_manual("Toast", calories=200, weight_grams=50)

    assert selection.calories_per_100g == 400
    assert selection.calories == 200


def test_selection_from_manual_with_zero_weight_does_not_raise() -> None:
    selection = selection_from_manual("Apple", calories=50, weight_grams=0)

    assert selection.calories_per_100g == 0
    assert selection.weight_grams == 0


def test_grams_label_drops_trailing_zero() -> None:
    assert grams_label(100) == "100g"
    assert grams_label(100.0) == "100g"
    assert grams_label(12.5) == "12.5g"


def test_default_measurement_without_measures_uses_grams() -> None:
    assert default_measurement(_result(), 100) == WeightPreset(
        label="100g", weight_grams=100
    )


def test_default_measurement_prefers_close_weight() -> None:
    result = _result(
        Measure(label="Cup", weight_grams=240),
        Measure(label="Medium", weight_grams=118),
    )

    assert default_measurement(result, 100) == WeightPreset(
        label="Medium", weight_grams=118
    )


def test_default_measurement_falls_back_to_common_unit() -> None:
    result = _result(
        Measure(label="Whole", weight_grams=400),
        Measure(label="Cup, sliced", weight_grams=240),
    )

    assert default_measurement(result, 100) == WeightPreset(
        label="Cup, sliced", weight_grams=240
    )


def test_default_measurement_common_unit_without_weight_uses_grams() -> None:
    result = _result(
        Measure(label="Serving", weight_grams=None),
        Measure(label="Cup", weight_grams=240),
    )

    assert default_measurement(result, 100) == WeightPreset(
        label="100g", weight_grams=100
    )


def test_default_measurement_uses_grams_when_nothing_matches() -> None:
    result = _result(Measure(label="Whole", weight_grams=400))

    assert default_measurement(result, 150) == WeightPreset(
        label="150g", weight_grams=150
    )


def test_weight_presets_without_measures() -> None:
    presets = weight_presets(_result())

    assert [p.weight_grams for p in presets] == [50, 100, 150, 200]
    assert [p.label for p in presets] == ["50g", "100g", "150g", "200g"]


def test_weight_presets_orders_plain_before_common_units() -> None:
    result = _result(
        Measure(label="Cup", weight_grams=150),
        Measure(label="Whole", weight_grams=118),
        Measure(label="Slice", weight_grams=25),
        Measure(label="Large", weight_grams=600),
        Measure(label="Kilogram", weight_grams=1000),
    )

    presets = weight_presets(result)

    assert [p.label for p in presets] == ["Whole", "Slice", "Cup", "50g"]


def test_weight_presets_backfill_skips_nearby_weights() -> None:
    result = _result(Measure(label="Handful", weight_grams=95))

    presets = weight_presets(result)

    assert [p.weight_grams for p in presets] == [95, 50, 150, 200]
    weights = [p.weight_grams for p in presets]
    for index, weight in enumerate(weights):
        for other in weights[index + 1 :]:
            assert abs(weight - other) > 10


def test_weight_presets_keeps_at_most_four_measures() -> None:
    result = _result(
        *[Measure(label=f"Portion {n}", weight_grams=n * 40) for n in range(6, 0, -1)]
    )

    presets = weight_presets(result)

    assert [p.weight_grams for p in presets] == [40, 80, 120, 160]


def test_weight_presets_ignores_measures_without_weight() -> None:
    result = _result(
        Measure(label="Serving", weight_grams=None),
        Measure(label="Gram", weight_grams=0),
    )

    presets = weight_presets(result)

    assert [p.weight_grams for p in presets] == [50, 100, 150, 200]
