"""
Groups of ingredient names that can stand in for each other ("similar" substitutions).

The table is configuration data, versioned so callers can tell which groups they run with.
The built-in DEFAULT_SYNONYMS can be replaced by a JSON file of the same shape:

  {"version": "...", "groups": {"tag": ["name", "name", ...], ...}}

Two names are similar when some group contains both (lowercased, stripped).
"""
import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from pantry_match.text import normalize_name

logger = logging.getLogger(__name__)

DEFAULT_SYNONYMS_VERSION = "1"

# ---------------------------------------------------------------------------
# Built-in groups (tag -> names, lowercase)
# ---------------------------------------------------------------------------

DEFAULT_GROUPS: dict[str, list[str]] = {
    # Vegetables
    "tomate": ["tomate", "tomates"],
    "oignon": ["oignon", "oignons", "échalote", "échalotes"],
    "pomme_de_terre": ["pomme de terre", "pommes de terre", "patate"],
    "carotte": ["carotte", "carottes"],
    "courgette": ["courgette", "courgettes", "aubergine", "aubergines"],
    "poivron": ["poivron", "poivrons"],
    # Meat and fish
    "viande_rouge": ["bœuf", "veau", "porc"],
    "volaille": ["poulet", "dinde", "volaille"],
    "poisson": ["saumon", "truite", "cabillaud"],
    # Dairy and fats
    "laitage": ["lait", "crème", "yaourt"],
    "matiere_grasse": ["beurre", "margarine", "huile"],
    # Grocery
    "farine": ["farine", "fécule"],
    "sucrant": ["sucre", "miel", "sirop"],
}


class SynonymTable(BaseModel):
    """Versioned, tagged groups of interchangeable ingredient names. Immutable: use extended() to add names."""
    model_config = ConfigDict(frozen=True)

    version: str = Field(DEFAULT_SYNONYMS_VERSION, description="Version of the group table")
    groups: dict[str, list[str]] = Field(default_factory=dict, description="Tag -> names in the group")

    _index: dict[str, set[str]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        for tag, names in self.groups.items():
            for name in names:
                self._index.setdefault(normalize_name(name), set()).add(tag)

    def tags_for(self, name: str) -> set[str]:
        """Tags of every group containing this name (empty if none)."""
        return set(self._index.get(normalize_name(name), ()))

    def are_similar(self, name1: str, name2: str) -> bool:
        """True if a single group contains both names."""
        return bool(self.tags_for(name1) & self.tags_for(name2))

    def extended(self, tag: str, names: list[str], version: str | None = None) -> "SynonymTable":
        """Return a new table with `names` added to group `tag` (created if missing)."""
        groups = {t: list(n) for t, n in self.groups.items()}
        existing = groups.setdefault(tag, [])
        for name in names:
            key = normalize_name(name)
            if key and key not in existing:
                existing.append(key)
        return SynonymTable(version=version or self.version, groups=groups)

    @classmethod
    def load(cls, path: Path) -> "SynonymTable":
        """Load a table from JSON. Raises OSError if unreadable, ValueError if malformed."""
        raw = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Synonym table {path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Synonym table {path} must be a JSON object")
        try:
            table = cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Synonym table {path} has an invalid shape: {e}") from e
        logger.info("Loaded synonym table %s (version %s, %d groups)", path, table.version, len(table.groups))
        return table


DEFAULT_SYNONYMS = SynonymTable(version=DEFAULT_SYNONYMS_VERSION, groups=DEFAULT_GROUPS)
