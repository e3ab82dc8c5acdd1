"""
Seasonal classification of ingredients for a given moment.

Every function takes `now` explicitly (anything with a `.month`, e.g. datetime or date);
nothing here reads the system clock.
"""
from datetime import date
from enum import Enum
from typing import Protocol

from pantry_match.models import Ingredient, SeasonalRecommendations


class HasMonth(Protocol):
    month: int


class SeasonStatus(str, Enum):
    YEAR_ROUND = "year-round"
    IN_SEASON = "in-season"
    PEAK_SEASON = "peak-season"
    OUT_OF_SEASON = "out-of-season"


class DetailedSeasonStatus(str, Enum):
    YEAR_ROUND = "year-round"
    OUT_OF_SEASON = "out-of-season"
    PEAK_SEASON = "peak-season"
    BEGINNING_OF_SEASON = "beginning-of-season"
    END_OF_SEASON = "end-of-season"
    IN_SEASON = "in-season"


MONTH_NAMES = [
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
]

SEASON_DISPLAY_NAMES: dict[str, str] = {
    "printemps": "Printemps",
    "été": "Été",
    "automne": "Automne",
    "hiver": "Hiver",
    "printemps-été": "Printemps-Été",
    "été-automne": "Été-Automne",
    "automne-hiver": "Automne-Hiver",
    "hiver-printemps": "Hiver-Printemps",
    "fin été": "Fin d'été",
    "fin été-automne": "Fin d'été - Automne",
}


def classify_season(ingredient: Ingredient, now: HasMonth) -> SeasonStatus:
    """Year-round if not seasonal; otherwise peak, in or out of season for now.month."""
    seasonal = ingredient.seasonal
    if seasonal is None:
        return SeasonStatus.YEAR_ROUND
    month = now.month
    if month in seasonal.peak_months:
        return SeasonStatus.PEAK_SEASON
    if month in seasonal.months:
        return SeasonStatus.IN_SEASON
    return SeasonStatus.OUT_OF_SEASON


def _season_segments(months: list[int]) -> list[list[int]]:
    """
    Split season months into runs of consecutive months.
    December followed by January counts as consecutive: [1, 2, 12] -> [[12, 1, 2]].
    """
    ordered = sorted(set(months))
    if not ordered:
        return []
    segments = [[ordered[0]]]
    for month in ordered[1:]:
        if month == segments[-1][-1] + 1:
            segments[-1].append(month)
        else:
            segments.append([month])
    if len(segments) > 1 and segments[0][0] == 1 and segments[-1][-1] == 12:
        wrapped = segments.pop()
        segments[0] = wrapped + segments[0]
    return segments


def classify_season_detailed(ingredient: Ingredient, now: HasMonth) -> DetailedSeasonStatus:
    """
    Like classify_season, but also says whether now.month opens or closes its run of season months.

    Peak months always win. A single-month run is reported as beginning-of-season.
    """
    status = classify_season(ingredient, now)
    if status is SeasonStatus.YEAR_ROUND:
        return DetailedSeasonStatus.YEAR_ROUND
    if status is SeasonStatus.PEAK_SEASON:
        return DetailedSeasonStatus.PEAK_SEASON
    if status is SeasonStatus.OUT_OF_SEASON:
        return DetailedSeasonStatus.OUT_OF_SEASON

    month = now.month
    for segment in _season_segments(ingredient.seasonal.months):
        if month not in segment:
            continue
        if segment[0] == month:
            return DetailedSeasonStatus.BEGINNING_OF_SEASON
        if segment[-1] == month:
            return DetailedSeasonStatus.END_OF_SEASON
        break
    return DetailedSeasonStatus.IN_SEASON


def is_in_season(ingredient: Ingredient, now: HasMonth) -> bool:
    """True for in-season and peak-season (year-round ingredients are not 'in season')."""
    return classify_season(ingredient, now) in (SeasonStatus.IN_SEASON, SeasonStatus.PEAK_SEASON)


def is_in_peak_season(ingredient: Ingredient, now: HasMonth) -> bool:
    return classify_season(ingredient, now) is SeasonStatus.PEAK_SEASON


def season_for_month(month: int) -> str:
    """Meteorological season label for a month (1-12)."""
    if 3 <= month <= 5:
        return "printemps"
    if 6 <= month <= 8:
        return "été"
    if 9 <= month <= 11:
        return "automne"
    return "hiver"


def current_season(now: HasMonth) -> str:
    return season_for_month(now.month)


def month_name(month: int) -> str:
    """French month name, or "" for a month outside 1-12."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def season_display_name(season: str) -> str:
    return SEASON_DISPLAY_NAMES.get(season, season)


def next_season_start(ingredient: Ingredient, now: date) -> date | None:
    """
    First day of the next month (strictly after now's month, up to a year ahead) in which
    the ingredient is in season. None for year-round ingredients or empty month lists.
    """
    if ingredient.seasonal is None:
        return None
    months = set(ingredient.seasonal.months)
    for offset in range(1, 13):
        month = now.month + offset
        year = now.year
        if month > 12:
            month -= 12
            year += 1
        if month in months:
            return date(year, month, 1)
    return None


def seasonal_recommendations(ingredients: list[Ingredient], now: HasMonth) -> SeasonalRecommendations:
    """Group ingredients into in season now, at peak now, and arriving next month."""
    next_month = 1 if now.month == 12 else now.month + 1
    current, peak, coming = [], [], []
    for ingredient in ingredients:
        status = classify_season(ingredient, now)
        if status in (SeasonStatus.IN_SEASON, SeasonStatus.PEAK_SEASON):
            current.append(ingredient)
        if status is SeasonStatus.PEAK_SEASON:
            peak.append(ingredient)
        if status is SeasonStatus.OUT_OF_SEASON and next_month in ingredient.seasonal.months:
            coming.append(ingredient)
    return SeasonalRecommendations(current_season=current, peak_season=peak, coming_soon=coming)
