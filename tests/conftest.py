"""
Pytest configuration and shared fixtures.

Ingredients and recipes mirror a small French catalog; the clock fixture pins the month
so seasonal results are deterministic.
"""
from datetime import datetime

import pytest

from pantry_match.models import IngredientCategory, Recipe
from tests.helpers import FakeClock, line, make_ingredient


@pytest.fixture
def june():
    """A moment in June (month 6)."""
    return datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def clock(june):
    return FakeClock(june)


@pytest.fixture
def carotte():
    return make_ingredient("ing-carotte", "Carotte", subcategory="racines", months=[6, 7, 8, 9, 10], peak=[9])


@pytest.fixture
def persil():
    return make_ingredient("ing-persil", "Persil", category=IngredientCategory.GROCERY, subcategory="herbes")


@pytest.fixture
def navet():
    """Same category and subcategory as carotte."""
    return make_ingredient("ing-navet", "Navet", subcategory="racines", months=[10, 11, 12, 1, 2, 3])


@pytest.fixture
def courgette():
    """Same category as carotte, different subcategory; peak in June."""
    return make_ingredient("ing-courgette", "Courgette", subcategory="cucurbitacées", months=[5, 6, 7, 8, 9], peak=[6, 7])


@pytest.fixture
def fraise():
    """Fruit in season in June."""
    return make_ingredient("ing-fraise", "Fraise", category=IngredientCategory.FRUITS, subcategory="baies", months=[5, 6, 7])


@pytest.fixture
def soupe(carotte, persil):
    return Recipe(
        id="rec-soupe",
        name="Soupe de légumes",
        description="Une soupe simple",
        category="entree",
        difficulty="facile",
        prep_time=15,
        cook_time=30,
        ingredients=[
            line(carotte, quantity=2, unit="pièce", order_index=0),
            line(persil, quantity=1, unit="botte", optional=True, order_index=1),
        ],
    )


@pytest.fixture
def ratatouille(courgette, carotte, navet):
    return Recipe(
        id="rec-ratatouille",
        name="Ratatouille",
        description="Légumes du soleil mijotés",
        category="plats",
        difficulty="moyen",
        prep_time=30,
        cook_time=60,
        is_favorite=True,
        ingredients=[line(courgette), line(carotte), line(navet)],
    )


@pytest.fixture
def tarte(fraise):
    return Recipe(
        id="rec-tarte",
        name="Tarte aux fraises",
        category="dessert",
        difficulty="difficile",
        prep_time=45,
        ingredients=[line(fraise, quantity=500, unit="g")],
    )


@pytest.fixture
def catalog(soupe, ratatouille, tarte):
    return [soupe, ratatouille, tarte]
