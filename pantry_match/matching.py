"""
Match a recipe against the pantry: what is available, what is missing (with substitutes),
the match percentage and the seasonal bonus.
"""
import math

from pantry_match.models import Ingredient, Recipe, RecipeIngredient, RecipeIngredientMatch, RecipeMatchResult
from pantry_match.seasonal import HasMonth, SeasonStatus, classify_season
from pantry_match.substitutions import DEFAULT_MAX_SUGGESTIONS, find_substitutions
from pantry_match.synonyms import DEFAULT_SYNONYMS, SynonymTable

MAX_SEASONAL_BONUS = 15
IN_SEASON_POINTS = 2
PEAK_SEASON_POINTS = 3


def _round_half_up(value: float) -> int:
    # 12.5 -> 13, not Python's banker's rounding
    return int(math.floor(value + 0.5))


def match_percentage(available_count: int, total: int) -> int:
    """Share of ingredient lines available, 0-100. A recipe without ingredients is a full match."""
    if total == 0:
        return 100
    return _round_half_up(100 * available_count / total)


def seasonal_bonus(recipe: Recipe, now: HasMonth) -> int:
    """
    2 points per ingredient in season (peak included), 3 more per ingredient at peak, capped at 15.
    Counts every ingredient line, required or optional; year-round ingredients earn nothing.
    """
    in_season = peak = 0
    for ri in recipe.ingredients:
        status = classify_season(ri.ingredient, now)
        if status in (SeasonStatus.IN_SEASON, SeasonStatus.PEAK_SEASON):
            in_season += 1
        if status is SeasonStatus.PEAK_SEASON:
            peak += 1
    return min(MAX_SEASONAL_BONUS, IN_SEASON_POINTS * in_season + PEAK_SEASON_POINTS * peak)


def _missing(
    ri: RecipeIngredient,
    available: list[Ingredient],
    now: HasMonth,
    synonyms: SynonymTable,
    max_substitutions: int,
) -> RecipeIngredientMatch:
    subs = find_substitutions(
        ri.ingredient,
        available,
        now,
        max_suggestions=max_substitutions,
        synonyms=synonyms,
    )
    return RecipeIngredientMatch(
        ingredient_id=ri.ingredient_id,
        ingredient=ri.ingredient,
        quantity=ri.quantity,
        unit=ri.unit,
        optional=ri.optional,
        substitutions=[s.ingredient for s in subs],
    )


def compute_match(
    recipe: Recipe,
    available: list[Ingredient],
    now: HasMonth,
    *,
    synonyms: SynonymTable = DEFAULT_SYNONYMS,
    max_substitutions: int = DEFAULT_MAX_SUGGESTIONS,
) -> RecipeMatchResult:
    """
    Compare one recipe with the available ingredients.

    Required lines are processed before optional ones; a line is available when its
    ingredient id is in the pantry, otherwise it is reported missing with ranked substitutes.
    Pure: the same (recipe, available, now) always gives an equal result.
    """
    available_ids = {ing.id for ing in available}
    required = [ri for ri in recipe.ingredients if not ri.optional]
    optional = [ri for ri in recipe.ingredients if ri.optional]

    available_matches: list[str] = []
    missing_required: list[RecipeIngredientMatch] = []
    missing_optional: list[RecipeIngredientMatch] = []

    for ri in required:
        if ri.ingredient_id in available_ids:
            available_matches.append(ri.ingredient_id)
        else:
            missing_required.append(_missing(ri, available, now, synonyms, max_substitutions))

    for ri in optional:
        if ri.ingredient_id in available_ids:
            available_matches.append(ri.ingredient_id)
        else:
            missing_optional.append(_missing(ri, available, now, synonyms, max_substitutions))

    return RecipeMatchResult(
        recipe=recipe,
        match_percentage=match_percentage(len(available_matches), len(required) + len(optional)),
        available_ingredients=available_matches,
        missing_ingredients=missing_required,
        optional_missing=missing_optional,
        can_make=not missing_required,
        seasonal_bonus=seasonal_bonus(recipe, now),
    )
