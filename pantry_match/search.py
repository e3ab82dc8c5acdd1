"""
Recipe search service: advanced search (filtered, ranked, cached), makeable recipes, and
search-box suggestions.

The public methods never raise: an unexpected failure is passed to the error reporter
and an empty list is returned.

Usage:
  service = RecipeSearchService.from_settings(load_settings())
  results = service.search_recipes(recipes, pantry, AdvancedSearchFilters(search_query="soupe"))
  for r in results:
      print(r.recipe.name, r.match_percentage, [m.ingredient.name for m in r.missing_ingredients])
"""
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Union

from pantry_match.cache import Clock, SearchCache
from pantry_match.config import SearchSettings
from pantry_match.filters import apply_filters
from pantry_match.matching import compute_match
from pantry_match.models import (
    AdvancedSearchFilters,
    Ingredient,
    Recipe,
    RecipeCategory,
    RecipeMatchResult,
    SearchSuggestion,
)
from pantry_match.synonyms import DEFAULT_SYNONYMS, SynonymTable

logger = logging.getLogger(__name__)

MIN_SUGGESTION_QUERY_LENGTH = 2
MAX_RECIPE_SUGGESTIONS = 5
MAX_INGREDIENT_SUGGESTIONS = 5
# Lenient threshold: any recipe with at least one available ingredient is kept
LOW_THRESHOLD = 50

CATEGORY_LABELS: list[tuple[str, str]] = [
    (RecipeCategory.ENTREE.value, "Entrées"),
    (RecipeCategory.PLATS.value, "Plats"),
    (RecipeCategory.DESSERT.value, "Desserts"),
]

ErrorReporter = Callable[[Exception, dict[str, Any]], None]


def log_error(error: Exception, context: dict[str, Any]) -> None:
    """Default error reporter: log with traceback."""
    logger.error("Recipe search failed (%s): %s", context.get("action", "unknown"), error, exc_info=error)


def keep_result(result: RecipeMatchResult, threshold: int) -> bool:
    """
    Threshold rule: keep makeable recipes, recipes meeting the threshold, and, when the
    threshold is low, any recipe with at least one available ingredient.
    """
    if result.can_make or result.match_percentage >= threshold:
        return True
    return threshold <= LOW_THRESHOLD and bool(result.available_ingredients)


def count_recipes_with_ingredient(recipes: list[Recipe], ingredient_id: str) -> int:
    return sum(1 for r in recipes if any(ri.ingredient_id == ingredient_id for ri in r.ingredients))


class RecipeSearchService:
    """Composes filters, matching and the result cache. The clock is injected for seasonality and TTL."""

    def __init__(
        self,
        cache: Optional[SearchCache] = None,
        clock: Clock = datetime.now,
        synonyms: SynonymTable = DEFAULT_SYNONYMS,
        settings: Optional[SearchSettings] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self.settings = settings or SearchSettings()
        self.clock = clock
        self.cache = cache if cache is not None else SearchCache(
            ttl=self.settings.cache_ttl,
            max_entries=self.settings.cache_max_entries,
            clock=clock,
        )
        self.synonyms = synonyms
        self.error_reporter = error_reporter or log_error

    @classmethod
    def from_settings(
        cls,
        settings: SearchSettings,
        clock: Clock = datetime.now,
        error_reporter: Optional[ErrorReporter] = None,
    ) -> "RecipeSearchService":
        """Build the service, its cache and its synonym table from settings."""
        synonyms = SynonymTable.load(settings.synonyms_path) if settings.synonyms_path else DEFAULT_SYNONYMS
        return cls(clock=clock, synonyms=synonyms, settings=settings, error_reporter=error_reporter)

    def _report(self, error: Exception, context: dict[str, Any]) -> None:
        try:
            self.error_reporter(error, context)
        except Exception:
            logger.exception("Error reporter failed while reporting %r", error)

    def _match(self, recipe: Recipe, available: list[Ingredient], now: datetime) -> RecipeMatchResult:
        return compute_match(
            recipe,
            available,
            now,
            synonyms=self.synonyms,
            max_substitutions=self.settings.max_substitutions,
        )

    # ------------------------------------------------------------------
    # Advanced search
    # ------------------------------------------------------------------

    def _run_search(
        self,
        recipes: list[Recipe],
        available: list[Ingredient],
        filters: AdvancedSearchFilters,
    ) -> list[RecipeMatchResult]:
        now = self.clock()
        filtered = apply_filters(recipes, filters, now)
        results = [self._match(r, available, now) for r in filtered]
        # sorted() is stable: equal scores keep catalog order
        results = sorted(results, key=lambda r: r.score, reverse=True)
        threshold = filters.match_threshold
        if threshold is None:
            threshold = self.settings.default_match_threshold
        kept = [r for r in results if keep_result(r, threshold)]
        logger.debug(
            "Search: %d recipes, %d after filters, %d kept at threshold %d",
            len(recipes), len(filtered), len(kept), threshold,
        )
        return kept

    def search_recipes(
        self,
        recipes: list[Recipe],
        available: list[Ingredient],
        filters: Optional[Union[AdvancedSearchFilters, dict[str, Any]]] = None,
    ) -> list[RecipeMatchResult]:
        """
        Filter, match and rank recipes (match percentage + seasonal bonus, best first).
        Filters may be given as a dict of AdvancedSearchFilters fields.

        Results are cached per filter set for the cache TTL; a hit returns the stored list
        without recomputing, even if recipes or pantry changed (call clear_cache() then).
        """
        try:
            search_filters = AdvancedSearchFilters.model_validate(filters or {})
            key = search_filters.cache_key()
            return self.cache.get_or_compute(key, lambda: self._run_search(recipes, available, search_filters))
        except Exception as e:
            # repr() only: the filters argument may be what failed
            self._report(e, {"action": "search_recipes", "filters": repr(filters)})
            return []

    # ------------------------------------------------------------------
    # Makeable recipes
    # ------------------------------------------------------------------

    def find_makeable_recipes(
        self,
        recipes: list[Recipe],
        available: list[Ingredient],
    ) -> list[RecipeMatchResult]:
        """Recipes with every required ingredient available, best match first. Never cached."""
        try:
            now = self.clock()
            results = [self._match(r, available, now) for r in recipes]
            makeable = [r for r in results if r.can_make]
            return sorted(makeable, key=lambda r: r.match_percentage, reverse=True)
        except Exception as e:
            self._report(e, {"action": "find_makeable_recipes"})
            return []

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def generate_search_suggestions(
        self,
        recipes: list[Recipe],
        ingredients: list[Ingredient],
        query: str = "",
    ) -> list[SearchSuggestion]:
        """Recipe names, ingredient names and categories containing the query (2+ characters)."""
        try:
            if len(query or "") < MIN_SUGGESTION_QUERY_LENGTH:
                return []
            q = query.lower()

            recipe_suggestions = [
                SearchSuggestion(type="recipe", value=r.name, label=r.name, count=1)
                for r in recipes
                if q in r.name.lower()
            ][:MAX_RECIPE_SUGGESTIONS]

            ingredient_suggestions = [
                SearchSuggestion(
                    type="ingredient",
                    value=ing.name,
                    label=ing.name,
                    count=count_recipes_with_ingredient(recipes, ing.id),
                )
                for ing in [i for i in ingredients if q in i.name.lower()][:MAX_INGREDIENT_SUGGESTIONS]
            ]

            category_suggestions = [
                SearchSuggestion(
                    type="category",
                    value=category_id,
                    label=label,
                    count=sum(1 for r in recipes if r.category == category_id),
                )
                for category_id, label in CATEGORY_LABELS
                if q in label.lower()
            ]

            return recipe_suggestions + ingredient_suggestions + category_suggestions
        except Exception as e:
            self._report(e, {"action": "generate_search_suggestions"})
            return []

    # ------------------------------------------------------------------
    # Cache maintenance
    # ------------------------------------------------------------------

    def clean_expired_cache(self) -> int:
        return self.cache.clean_expired()

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_size(self) -> int:
        return len(self.cache)
