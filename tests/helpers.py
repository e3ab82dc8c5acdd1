"""Builders shared by the test modules: a settable clock, ingredients and recipe lines."""
from datetime import datetime, timedelta

from pantry_match.models import Ingredient, IngredientCategory, RecipeIngredient, SeasonalInfo


class FakeClock:
    """Callable clock returning a fixed, settable datetime."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_ingredient(id, name, category=IngredientCategory.VEGETABLES, subcategory="", months=None, peak=None):
    seasonal = SeasonalInfo(months=months, peak_months=peak or [], season="") if months is not None else None
    return Ingredient(id=id, name=name, category=category, subcategory=subcategory, seasonal=seasonal)


def line(ingredient, quantity=1, unit="pièce", optional=False, order_index=0):
    return RecipeIngredient(
        ingredient_id=ingredient.id,
        ingredient=ingredient,
        quantity=quantity,
        unit=unit,
        optional=optional,
        order_index=order_index,
    )
