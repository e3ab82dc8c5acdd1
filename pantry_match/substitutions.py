"""
Heuristic substitutes for a missing ingredient, picked from the pantry.

Each pantry ingredient gets the first rule it satisfies, best first:
  exact    (0.95) same category and subcategory
  category (0.75) same category
  seasonal (0.60) different category, both in season right now
  similar  (0.40) names share a synonym group
Anything else is not a substitute.
"""
from typing import Optional

from pantry_match.models import Ingredient, Substitution, SubstitutionType
from pantry_match.seasonal import HasMonth, is_in_season
from pantry_match.synonyms import DEFAULT_SYNONYMS, SynonymTable

DEFAULT_MAX_SUGGESTIONS = 5

CONFIDENCE: dict[SubstitutionType, float] = {
    SubstitutionType.EXACT: 0.95,
    SubstitutionType.CATEGORY: 0.75,
    SubstitutionType.SEASONAL: 0.6,
    SubstitutionType.SIMILAR: 0.4,
}


def _same_season(a: Ingredient, b: Ingredient, now: HasMonth) -> bool:
    return is_in_season(a, now) and is_in_season(b, now)


def classify_substitution(
    target: Ingredient,
    candidate: Ingredient,
    now: HasMonth,
    exact_category_match: bool = False,
    include_seasonal_alternatives: bool = True,
    synonyms: SynonymTable = DEFAULT_SYNONYMS,
) -> Optional[Substitution]:
    """Return how `candidate` can replace `target`, or None if it cannot."""
    if candidate.category == target.category:
        if candidate.subcategory == target.subcategory:
            kind = SubstitutionType.EXACT
            reason = f"Même sous-catégorie: {candidate.subcategory}"
        elif exact_category_match:
            return None
        else:
            kind = SubstitutionType.CATEGORY
            reason = f"Même catégorie: {candidate.category.value}"
    elif include_seasonal_alternatives and _same_season(target, candidate, now):
        kind = SubstitutionType.SEASONAL
        reason = "Alternative saisonnière"
    elif synonyms.are_similar(target.name, candidate.name):
        kind = SubstitutionType.SIMILAR
        reason = "Ingrédient similaire"
    else:
        return None
    return Substitution(ingredient=candidate, type=kind, confidence=CONFIDENCE[kind], reason=reason)


def find_substitutions(
    target: Ingredient,
    pool: list[Ingredient],
    now: HasMonth,
    *,
    exact_category_match: bool = False,
    include_seasonal_alternatives: bool = True,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    synonyms: SynonymTable = DEFAULT_SYNONYMS,
) -> list[Substitution]:
    """
    Rank pool ingredients that could replace `target`.

    The target itself (same id) is never proposed. Ties keep pool order.
    Returns at most `max_suggestions` entries, best confidence first.
    """
    found = []
    for candidate in pool:
        if candidate.id == target.id:
            continue
        sub = classify_substitution(
            target,
            candidate,
            now,
            exact_category_match=exact_category_match,
            include_seasonal_alternatives=include_seasonal_alternatives,
            synonyms=synonyms,
        )
        if sub is not None:
            found.append(sub)
    found.sort(key=lambda s: s.confidence, reverse=True)
    return found[:max(0, max_suggestions)]
