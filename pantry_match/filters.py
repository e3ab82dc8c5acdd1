"""
Recipe filters for advanced search. Each filter is independent; a recipe must pass all set filters.
Order of the input list is preserved.
"""
from typing import Callable, Optional

from pantry_match.models import AdvancedSearchFilters, Recipe
from pantry_match.seasonal import HasMonth, is_in_season
from pantry_match.text import sanitize_search_query

FAVORITES_CATEGORY = "favoris"
ALL = "all"

RecipePredicate = Callable[[Recipe], bool]


def _matches_text(recipe: Recipe, query: str) -> bool:
    if query in recipe.name.lower():
        return True
    if recipe.description and query in recipe.description.lower():
        return True
    return any(query in ri.ingredient.name.lower() for ri in recipe.ingredients)


def _in_range(value: Optional[int], low: Optional[int], high: Optional[int]) -> bool:
    """Inclusive bounds; a missing value fails any bound that is set."""
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def build_predicates(filters: AdvancedSearchFilters, now: HasMonth) -> list[RecipePredicate]:
    """One predicate per filter that is set, in the order they are applied."""
    predicates: list[RecipePredicate] = []

    query = sanitize_search_query(filters.search_query).lower()
    if query:
        predicates.append(lambda r: _matches_text(r, query))

    category = filters.category
    if category and category != ALL:
        if category == FAVORITES_CATEGORY:
            predicates.append(lambda r: r.is_favorite)
        else:
            predicates.append(lambda r: r.category == category)

    difficulty = filters.difficulty
    if difficulty and difficulty != ALL:
        predicates.append(lambda r: r.difficulty == difficulty)

    if filters.prep_time_min is not None or filters.prep_time_max is not None:
        predicates.append(lambda r: _in_range(r.prep_time, filters.prep_time_min, filters.prep_time_max))
    if filters.cook_time_min is not None or filters.cook_time_max is not None:
        predicates.append(lambda r: _in_range(r.cook_time, filters.cook_time_min, filters.cook_time_max))

    if filters.excluded_ingredients:
        excluded = set(filters.excluded_ingredients)
        predicates.append(lambda r: not any(ri.ingredient_id in excluded for ri in r.ingredients))

    if filters.favorites_only:
        predicates.append(lambda r: r.is_favorite)

    if filters.seasonal_only:
        predicates.append(lambda r: any(is_in_season(ri.ingredient, now) for ri in r.ingredients))

    return predicates


def apply_filters(recipes: list[Recipe], filters: AdvancedSearchFilters, now: HasMonth) -> list[Recipe]:
    """Return the recipes passing every filter that is set, in input order."""
    predicates = build_predicates(filters, now)
    return [r for r in recipes if all(p(r) for p in predicates)]
