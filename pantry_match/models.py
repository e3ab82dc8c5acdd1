"""
Pydantic models for ingredients, recipes, search filters and match results.
Ingredients and recipes come from the caller's repository layer; match results
and suggestions are produced by the search service.
"""
import json
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IngredientCategory(str, Enum):
    """Closed set of ingredient categories (drives exact/category substitutions)."""
    FRUITS = "fruits"
    VEGETABLES = "vegetables"
    MEAT = "meat"
    DAIRY = "dairy"
    GROCERY = "grocery"
    FISH = "fish"
    OTHER = "other"


class RecipeCategory(str, Enum):
    """Recipe categories offered by the search screen."""
    ENTREE = "entree"
    PLATS = "plats"
    DESSERT = "dessert"


class RecipeDifficulty(str, Enum):
    FACILE = "facile"
    MOYEN = "moyen"
    DIFFICILE = "difficile"


class SubstitutionType(str, Enum):
    """How a pantry ingredient relates to the missing one, best first."""
    EXACT = "exact"
    CATEGORY = "category"
    SEASONAL = "seasonal"
    SIMILAR = "similar"


class SeasonalInfo(BaseModel):
    """Months (1-12) when an ingredient is in season, and its best months."""
    model_config = ConfigDict(frozen=True)

    months: list[int] = Field(default_factory=list, description="Months when the ingredient is in season (1-12)")
    peak_months: list[int] = Field(default_factory=list, description="Best months; expected to be a subset of months")
    season: str = Field("", description="Season label (e.g. 'hiver', 'printemps-été')")

    @field_validator("months", "peak_months")
    @classmethod
    def _check_month_range(cls, value: list[int]) -> list[int]:
        for month in value:
            if not 1 <= month <= 12:
                raise ValueError(f"month must be between 1 and 12, got {month}")
        return value


class Ingredient(BaseModel):
    """A catalog ingredient. Immutable for the duration of a search."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque identifier from the repository layer")
    name: str = Field(..., description="Display name (e.g. 'Carotte')")
    category: IngredientCategory = Field(IngredientCategory.OTHER, description="Broad category")
    subcategory: str = Field("", description="Free-text subcategory (e.g. 'légumes racines')")
    seasonal: Optional[SeasonalInfo] = Field(None, description="Seasonality; None means available year-round")
    is_favorite: bool = Field(False, description="Marked as favorite by the user")
    is_user_created: bool = Field(False, description="Created by the user rather than shipped with the catalog")
    units: list[str] = Field(default_factory=list, description="Units this ingredient is usually measured in")
    description: Optional[str] = Field(None, description="Optional free-text description")


class RecipeIngredient(BaseModel):
    """One line of a recipe: which ingredient, how much, and whether it is optional."""
    ingredient_id: str = Field(..., description="Id of the referenced ingredient")
    ingredient: Ingredient = Field(..., description="The resolved ingredient")
    quantity: float = Field(0, description="Amount in `unit`")
    unit: str = Field("", description="Unit (e.g. 'g', 'pièce', 'botte')")
    optional: bool = Field(False, description="Optional ingredients count toward the match but not toward can_make")
    order_index: int = Field(0, description="Display order; need not be contiguous")


class Recipe(BaseModel):
    """A catalog recipe with its ingredient lines."""
    id: str = Field(..., description="Opaque identifier from the repository layer")
    name: str = Field(..., description="Recipe title")
    description: Optional[str] = Field(None, description="Short description, searched by text queries")
    # Plain strings so an unknown category or difficulty never fails validation
    category: str = Field(RecipeCategory.PLATS.value, description="One of entree, plats, dessert")
    difficulty: str = Field(RecipeDifficulty.FACILE.value, description="One of facile, moyen, difficile")
    prep_time: Optional[int] = Field(None, description="Preparation time in minutes")
    cook_time: Optional[int] = Field(None, description="Cooking time in minutes")
    servings: int = Field(4, description="Number of servings")
    is_favorite: bool = Field(False, description="Marked as favorite by the user")
    ingredients: list[RecipeIngredient] = Field(default_factory=list, description="Ingredient lines")
    instructions: list[str] = Field(default_factory=list, description="Ordered instruction steps")

    def ordered_ingredients(self) -> list[RecipeIngredient]:
        """Ingredient lines in display order (order_index ascending)."""
        return sorted(self.ingredients, key=lambda ri: ri.order_index)


class Substitution(BaseModel):
    """A pantry ingredient proposed in place of a missing one."""
    ingredient: Ingredient
    type: SubstitutionType
    confidence: float = Field(..., ge=0, le=1, description="0-1, higher is a better stand-in")
    reason: str = Field("", description="Short human-readable explanation")


class RecipeIngredientMatch(BaseModel):
    """A recipe ingredient missing from the pantry, with ranked stand-ins."""
    ingredient_id: str
    ingredient: Ingredient
    quantity: float
    unit: str
    optional: bool
    substitutions: list[Ingredient] = Field(default_factory=list, description="Ranked pantry substitutes, best first")


class RecipeMatchResult(BaseModel):
    """How well the pantry covers one recipe."""
    recipe: Recipe
    match_percentage: int = Field(..., ge=0, le=100, description="Share of all ingredient lines available")
    available_ingredients: list[str] = Field(default_factory=list, description="Ids of ingredient lines in the pantry")
    missing_ingredients: list[RecipeIngredientMatch] = Field(default_factory=list, description="Missing required ingredients")
    optional_missing: list[RecipeIngredientMatch] = Field(default_factory=list, description="Missing optional ingredients")
    can_make: bool = Field(..., description="True when no required ingredient is missing")
    seasonal_bonus: int = Field(0, ge=0, le=15, description="Ranking boost for in-season ingredients")

    @property
    def score(self) -> int:
        """Ranking score used by search: match percentage plus seasonal bonus."""
        return self.match_percentage + self.seasonal_bonus


class AdvancedSearchFilters(BaseModel):
    """Search query and filters. Every field is optional; unset fields do not filter."""
    search_query: Optional[str] = Field(None, description="Text matched against name, description and ingredient names")
    category: Optional[str] = Field(None, description="Recipe category, 'favoris' for favorites, or 'all'")
    difficulty: Optional[str] = Field(None, description="Recipe difficulty or 'all'")
    prep_time_min: Optional[int] = None
    prep_time_max: Optional[int] = None
    cook_time_min: Optional[int] = None
    cook_time_max: Optional[int] = None
    excluded_ingredients: list[str] = Field(default_factory=list, description="Reject recipes using any of these ingredient ids")
    favorites_only: bool = False
    seasonal_only: bool = Field(False, description="Keep recipes with at least one in-season ingredient")
    match_threshold: Optional[int] = Field(None, description="Minimum match percentage (0-100); None uses the default")

    def cache_key(self) -> str:
        """
        Canonical serialization for the search cache.
        Unset/default fields are dropped, keys are sorted and excluded ids are sorted, so two
        filter sets that select the same recipes share one key.
        """
        data = self.model_dump(mode="json", exclude_defaults=True)
        if "excluded_ingredients" in data:
            data["excluded_ingredients"] = sorted(set(data["excluded_ingredients"]))
        return json.dumps(data, sort_keys=True, ensure_ascii=False)


class SearchSuggestion(BaseModel):
    """Autocomplete entry for the search box."""
    type: Literal["recipe", "ingredient", "category"]
    value: str = Field(..., description="Value to search or filter with")
    label: str = Field(..., description="Text to display")
    count: int = Field(0, description="Number of recipes behind this suggestion")


class SeasonalRecommendations(BaseModel):
    """Ingredients grouped by where they stand in their season this month."""
    current_season: list[Ingredient] = Field(default_factory=list)
    peak_season: list[Ingredient] = Field(default_factory=list)
    coming_soon: list[Ingredient] = Field(default_factory=list, description="Out of season now, in season next month")
