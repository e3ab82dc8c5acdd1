"""
Deterministic cleanup of user-typed search text.
Keeps accented characters; drops markup/quoting characters and caps the length.
"""
import re
from typing import Optional

MAX_QUERY_LENGTH = 100

# Characters stripped from search queries: <>"/\&'`;(){}[]
_UNSAFE_CHARS_RE = re.compile(r"""[<>"/\\&'`;(){}\[\]]""")


def sanitize_search_query(query: Optional[str]) -> str:
    """
    Return the query trimmed, without unsafe characters, at most MAX_QUERY_LENGTH long.

    Returns "" for None, non-strings and whitespace-only input.
    """
    if not query or not isinstance(query, str):
        return ""
    cleaned = _UNSAFE_CHARS_RE.sub("", query.strip())
    return cleaned[:MAX_QUERY_LENGTH]


def normalize_name(name: Optional[str]) -> str:
    """Lowercase, stripped name used for synonym lookups and substring matching."""
    return (name or "").strip().lower()
