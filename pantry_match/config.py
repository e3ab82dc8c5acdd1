"""Search settings from env (.env supported): cache TTL/size, default threshold, synonym table."""
import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "PANTRY_MATCH_"


class SearchSettings(BaseModel):
    cache_ttl_seconds: float = Field(300, description="How long search results stay cached")
    cache_max_entries: Optional[int] = Field(None, description="LRU bound on cached searches; None = unbounded")
    default_match_threshold: int = Field(70, description="Threshold used when filters leave match_threshold unset")
    max_substitutions: int = Field(5, description="Substitutes proposed per missing ingredient")
    synonyms_path: Optional[Path] = Field(None, description="JSON synonym table replacing the built-in one")

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.cache_ttl_seconds)


def _env_number(name: str, default, cast):
    raw = os.environ.get(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r (not a number), using %r", ENV_PREFIX, name, raw, default)
        return default


def load_settings(env_file: Optional[Path] = None) -> SearchSettings:
    """Load .env (or env_file) into the environment, then read PANTRY_MATCH_* variables."""
    load_dotenv(env_file)
    max_entries = _env_number("CACHE_MAX_ENTRIES", None, int)
    synonyms_path = os.environ.get(ENV_PREFIX + "SYNONYMS_PATH", "").strip()
    return SearchSettings(
        cache_ttl_seconds=_env_number("CACHE_TTL_SECONDS", 300.0, float),
        cache_max_entries=max_entries if max_entries else None,
        default_match_threshold=_env_number("DEFAULT_THRESHOLD", 70, int),
        max_substitutions=_env_number("MAX_SUBSTITUTIONS", 5, int),
        synonyms_path=Path(synonyms_path) if synonyms_path else None,
    )
