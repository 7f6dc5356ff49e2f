"""
Ignore-file content parsing and sibling ordering helpers
"""

from typing import List

from ..constants import COMMENT_PREFIX


def split_rules(data: bytes) -> List[str]:
    """
    Split buffered ignore-file content into raw lines.

    Handles ``\\n``, ``\\r\\n`` and lone ``\\r`` line endings. Lines are
    returned untrimmed; use ``is_rule_line`` to drop blanks and comments.
    """
    return data.decode('utf-8', errors='replace').splitlines()


def is_rule_line(line: str) -> bool:
    """True for lines that hold a pattern (not blank, not a ``#`` comment)."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIX)


def alphasort(a: str, b: str) -> int:
    """Case-insensitive alphabetical comparator, ties broken on the raw names."""
    if a == b:
        return 0
    la, lb = a.lower(), b.lower()
    if la > lb:
        return 1
    if la < lb:
        return -1
    return 1 if a > b else -1


def nosort(a: str, b: str) -> int:
    # Stable sort keeps the lister's order
    return 0
