"""Recipe/pantry matching and search engine."""
from pantry_match.cache import SearchCache
from pantry_match.config import SearchSettings, load_settings
from pantry_match.filters import apply_filters
from pantry_match.matching import compute_match
from pantry_match.models import (
    AdvancedSearchFilters,
    Ingredient,
    IngredientCategory,
    Recipe,
    RecipeIngredient,
    RecipeIngredientMatch,
    RecipeMatchResult,
    SearchSuggestion,
    SeasonalInfo,
    Substitution,
    SubstitutionType,
)
from pantry_match.search import RecipeSearchService
from pantry_match.seasonal import (
    DetailedSeasonStatus,
    SeasonStatus,
    classify_season,
    classify_season_detailed,
)
from pantry_match.substitutions import find_substitutions
from pantry_match.synonyms import DEFAULT_SYNONYMS, SynonymTable

__all__ = [
    "AdvancedSearchFilters",
    "DEFAULT_SYNONYMS",
    "DetailedSeasonStatus",
    "Ingredient",
    "IngredientCategory",
    "Recipe",
    "RecipeIngredient",
    "RecipeIngredientMatch",
    "RecipeMatchResult",
    "RecipeSearchService",
    "SearchCache",
    "SearchSettings",
    "SearchSuggestion",
    "SeasonStatus",
    "SeasonalInfo",
    "Substitution",
    "SubstitutionType",
    "SynonymTable",
    "apply_filters",
    "classify_season",
    "classify_season_detailed",
    "compute_match",
    "find_substitutions",
    "load_settings",
]
