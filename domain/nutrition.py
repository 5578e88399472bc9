"""
Nutrition and price arithmetic shared by the catalog and the custom meal builder.

All per-ingredient values are stored per 100 grams; a portion scales them by
grams / 100.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Protocol

HUNDRED = Decimal("100")
ONE_DECIMAL = Decimal("0.1")
TWO_DECIMALS = Decimal("0.01")


class Per100g(Protocol):
    calories_per_100g: Decimal
    protein_per_100g: Decimal
    carbs_per_100g: Decimal
    fat_per_100g: Decimal
    price_per_100g: Decimal


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def round_to(value: Decimal, step: Decimal) -> Decimal:
    return to_decimal(value).quantize(step, rounding=ROUND_HALF_UP)


def round_int(value: Decimal) -> int:
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class Nutrition:
    calories: Decimal = Decimal("0")
    protein: Decimal = Decimal("0")
    carbs: Decimal = Decimal("0")
    fat: Decimal = Decimal("0")

    def __add__(self, other: "Nutrition") -> "Nutrition":
        return Nutrition(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


def portion_nutrition(source: Per100g, grams) -> Nutrition:
    factor = to_decimal(grams) / HUNDRED
    return Nutrition(
        calories=to_decimal(source.calories_per_100g) * factor,
        protein=to_decimal(source.protein_per_100g) * factor,
        carbs=to_decimal(source.carbs_per_100g) * factor,
        fat=to_decimal(source.fat_per_100g) * factor,
    )


def meal_nutrition(portions: Iterable[tuple]) -> dict:
    """
    Sum the nutrition of (ingredient, grams) portions of a catalog meal.

    Calories are rounded to whole kcal, macros to one decimal, matching what
    the admin meal form stores.
    """
    total = Nutrition()
    for source, grams in portions:
        total = total + portion_nutrition(source, grams)
    return {
        "calories": round_int(total.calories),
        "protein": round_to(total.protein, ONE_DECIMAL),
        "carbs": round_to(total.carbs, ONE_DECIMAL),
        "fat": round_to(total.fat, ONE_DECIMAL),
    }


def price_contribution(
    source: Per100g,
    grams,
    is_custom: bool,
    price_per_100_kcal: Decimal,
) -> Decimal:
    """
    Price a custom meal component.

    Customer-defined ingredients carry their own price per 100 g. Catalog
    ingredients are priced by energy: price_per_100_kcal for every 100 kcal,
    rounded to a whole currency unit.
    """
    if is_custom:
        return round_to(
            to_decimal(source.price_per_100g) * to_decimal(grams) / HUNDRED,
            TWO_DECIMALS,
        )
    calories = portion_nutrition(source, grams).calories
    return Decimal(round_int(calories / HUNDRED * to_decimal(price_per_100_kcal)))


@dataclass
class PricedComponent:
    name: str
    quantity_grams: Decimal
    is_custom: bool
    nutrition: Nutrition
    price_contribution: Decimal
    ingredient_id: Optional[object] = None
    custom_ingredient_id: Optional[object] = None


@dataclass
class CustomMealTotals:
    base_price: Decimal
    components: List[PricedComponent] = field(default_factory=list)

    @property
    def nutrition(self) -> Nutrition:
        total = Nutrition()
        for comp in self.components:
            total = total + comp.nutrition
        return Nutrition(
            calories=Decimal(round_int(total.calories)),
            protein=round_to(total.protein, TWO_DECIMALS),
            carbs=round_to(total.carbs, TWO_DECIMALS),
            fat=round_to(total.fat, TWO_DECIMALS),
        )

    @property
    def total_price(self) -> Decimal:
        return round_to(
            self.base_price + sum((c.price_contribution for c in self.components), Decimal("0")),
            TWO_DECIMALS,
        )
