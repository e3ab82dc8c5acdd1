from datetime import datetime

import pytest

from pantry_match.filters import apply_filters
from pantry_match.models import AdvancedSearchFilters, Recipe
from tests.helpers import line


def names(recipes):
    return [r.name for r in recipes]


def run(catalog, june, **kwargs):
    return names(apply_filters(catalog, AdvancedSearchFilters(**kwargs), june))


def test_no_filters_keeps_everything_in_order(catalog, june):
    assert run(catalog, june) == ["Soupe de légumes", "Ratatouille", "Tarte aux fraises"]


class TestTextQuery:
    def test_matches_name_case_insensitive(self, catalog, june):
        assert run(catalog, june, search_query="SOUPE") == ["Soupe de légumes"]

    def test_matches_description(self, catalog, june):
        assert run(catalog, june, search_query="soleil") == ["Ratatouille"]

    def test_matches_ingredient_name(self, catalog, june):
        assert run(catalog, june, search_query="carot") == ["Soupe de légumes", "Ratatouille"]

    def test_query_is_sanitized(self, catalog, june):
        assert run(catalog, june, search_query="<fraises>") == ["Tarte aux fraises"]

    def test_query_empty_after_sanitizing_does_not_filter(self, catalog, june):
        assert len(run(catalog, june, search_query="<>()")) == 3

    def test_no_match(self, catalog, june):
        assert run(catalog, june, search_query="chocolat") == []


class TestCategoryAndDifficulty:
    def test_category(self, catalog, june):
        assert run(catalog, june, category="dessert") == ["Tarte aux fraises"]

    def test_favoris_category_means_favorites(self, catalog, june):
        assert run(catalog, june, category="favoris") == ["Ratatouille"]

    def test_all_means_no_filter(self, catalog, june):
        assert len(run(catalog, june, category="all", difficulty="all")) == 3

    def test_unknown_category_matches_nothing(self, catalog, june):
        assert run(catalog, june, category="boissons") == []

    def test_difficulty(self, catalog, june):
        assert run(catalog, june, difficulty="moyen") == ["Ratatouille"]


class TestTimeRanges:
    def test_bounds_are_inclusive(self, catalog, june):
        assert run(catalog, june, prep_time_min=15, prep_time_max=30) == ["Soupe de légumes", "Ratatouille"]

    def test_missing_cook_time_fails_bounds(self, catalog, june):
        # the tarte has no cook time
        assert run(catalog, june, cook_time_max=500) == ["Soupe de légumes", "Ratatouille"]
        assert run(catalog, june, cook_time_min=0) == ["Soupe de légumes", "Ratatouille"]

    def test_cook_time_range(self, catalog, june):
        assert run(catalog, june, cook_time_min=45) == ["Ratatouille"]


class TestExclusionsAndFlags:
    def test_excluded_required_ingredient(self, catalog, june):
        assert run(catalog, june, excluded_ingredients=["ing-carotte"]) == ["Tarte aux fraises"]

    def test_excluded_optional_ingredient(self, catalog, june):
        assert run(catalog, june, excluded_ingredients=["ing-persil"]) == ["Ratatouille", "Tarte aux fraises"]

    def test_unknown_excluded_id_is_harmless(self, catalog, june):
        assert len(run(catalog, june, excluded_ingredients=["nope"])) == 3

    def test_favorites_only(self, catalog, june):
        assert run(catalog, june, favorites_only=True) == ["Ratatouille"]

    def test_seasonal_only(self, catalog, june, persil):
        herbs_only = Recipe(id="rec-herbes", name="Sauce verte", ingredients=[line(persil)])
        recipes = catalog + [herbs_only]
        # persil is year-round, so the sauce has no in-season ingredient
        assert run(recipes, june, seasonal_only=True) == ["Soupe de légumes", "Ratatouille", "Tarte aux fraises"]

    def test_seasonal_only_out_of_season(self, catalog):
        march = datetime(2024, 3, 1)
        # March: navet in season (ratatouille), carotte/fraise/courgette out
        assert names(apply_filters(catalog, AdvancedSearchFilters(seasonal_only=True), march)) == ["Ratatouille"]


def test_filters_compose(catalog, june):
    assert run(catalog, june, search_query="carotte", difficulty="facile", prep_time_max=20) == ["Soupe de légumes"]


@pytest.mark.parametrize("field", ["prep_time_min", "cook_time_max"])
def test_recipe_without_times(june, field):
    bare = Recipe(id="rec-bare", name="Pain")
    assert apply_filters([bare], AdvancedSearchFilters(**{field: 10}), june) == []
