"""
Tests for nutrition and price arithmetic (domain.nutrition).
"""

from decimal import Decimal
from types import SimpleNamespace

from domain.nutrition import (
    CustomMealTotals,
    PricedComponent,
    meal_nutrition,
    portion_nutrition,
    price_contribution,
)

CHICKEN = SimpleNamespace(
    calories_per_100g=Decimal("165"),
    protein_per_100g=Decimal("31"),
    carbs_per_100g=Decimal("0"),
    fat_per_100g=Decimal("3.6"),
    price_per_100g=Decimal("30"),
)
RICE = SimpleNamespace(
    calories_per_100g=Decimal("130"),
    protein_per_100g=Decimal("2.7"),
    carbs_per_100g=Decimal("28"),
    fat_per_100g=Decimal("0.3"),
    price_per_100g=Decimal("8"),
)
HOMEMADE = SimpleNamespace(
    calories_per_100g=Decimal("100"),
    protein_per_100g=Decimal("5"),
    carbs_per_100g=Decimal("10"),
    fat_per_100g=Decimal("5"),
    price_per_100g=Decimal("10"),
)


def test_portion_scales_per_100g_values():
    portion = portion_nutrition(CHICKEN, 50)
    assert portion.calories == Decimal("82.5")
    assert portion.protein == Decimal("15.5")
    assert portion.fat == Decimal("1.8")


def test_meal_nutrition_rounds_calories_and_macros():
    """
    200 g chicken + 150 g rice:
    - calories 330 + 195 = 525 (whole kcal)
    - protein 62 + 4.05 = 66.05 -> 66.1
    - fat 7.2 + 0.45 = 7.65 -> 7.7
    """
    totals = meal_nutrition([(CHICKEN, Decimal("200")), (RICE, Decimal("150"))])
    assert totals["calories"] == 525
    assert totals["protein"] == Decimal("66.1")
    assert totals["carbs"] == Decimal("42.0")
    assert totals["fat"] == Decimal("7.7")


def test_meal_nutrition_of_nothing_is_zero():
    totals = meal_nutrition([])
    assert totals["calories"] == 0
    assert totals["protein"] == Decimal("0.0")


def test_standard_ingredient_priced_by_calories():
    # 82.5 kcal -> 82.5 / 100 * 5 = 4.125 -> 4
    assert price_contribution(CHICKEN, 50, False, Decimal("5")) == Decimal("4")
    # 165 kcal -> 8.25 -> 8
    assert price_contribution(CHICKEN, 100, False, Decimal("5")) == Decimal("8")
    # 390 kcal -> 19.5 -> 20 (half rounds up)
    assert price_contribution(RICE, 300, False, Decimal("5")) == Decimal("20")


def test_custom_ingredient_priced_per_100g():
    assert price_contribution(HOMEMADE, 150, True, Decimal("5")) == Decimal("15.00")
    assert price_contribution(HOMEMADE, 25, True, Decimal("5")) == Decimal("2.50")


def test_custom_meal_totals():
    """
    Verifies:
    - total price is base price plus every contribution
    - calories are whole kcal, macros are rounded to two decimals
    """
    totals = CustomMealTotals(base_price=Decimal("49"))
    for source, grams, is_custom in ((CHICKEN, 100, False), (HOMEMADE, 150, True)):
        totals.components.append(
            PricedComponent(
                name="x",
                quantity_grams=Decimal(grams),
                is_custom=is_custom,
                nutrition=portion_nutrition(source, grams),
                price_contribution=price_contribution(source, grams, is_custom, Decimal("5")),
            )
        )

    assert totals.total_price == Decimal("72.00")
    nutrition = totals.nutrition
    assert nutrition.calories == Decimal("315")
    assert nutrition.protein == Decimal("38.50")
    assert nutrition.carbs == Decimal("15.00")
    assert nutrition.fat == Decimal("11.10")


def test_custom_meal_without_components_costs_base_price():
    totals = CustomMealTotals(base_price=Decimal("49"))
    assert totals.total_price == Decimal("49.00")
    assert totals.nutrition.calories == Decimal("0")


def test_custom_meal_calories_round_to_whole_kcal():
    """82.5 kcal of chicken plus 46.8 kcal of rice shows as 129 kcal."""
    totals = CustomMealTotals(base_price=Decimal("49"))
    for source, grams in ((CHICKEN, 50), (RICE, 36)):
        totals.components.append(
            PricedComponent(
                name="x",
                quantity_grams=Decimal(grams),
                is_custom=False,
                nutrition=portion_nutrition(source, grams),
                price_contribution=Decimal("0"),
            )
        )

    nutrition = totals.nutrition
    assert nutrition.calories == Decimal("129")
    assert nutrition.calories == nutrition.calories.to_integral_value()
    assert nutrition.protein == Decimal("16.47")
