"""
Trigram similarity as computed by PostgreSQL's pg_trgm extension.

PostgreSQL uses the native `similarity()` function; SQLite connections
get this implementation registered under the same name (see db/session.py),
so text search ranks identically on both backends.
"""
import re
from typing import Optional, Set

_WORD_RE = re.compile(r"[^\W_]+", re.UNICODE)


def trigrams(text: Optional[str]) -> Set[str]:
    """
    Set of trigrams of `text`: lower-cased alphanumeric words, each padded
    with two blanks in front and one behind.
    """
    if not text:
        return set()

    result: Set[str] = set()
    for word in _WORD_RE.findall(text.lower()):
        padded = f"  {word} "
        for i in range(len(padded) - 2):
            result.add(padded[i:i + 3])
    return result


def similarity(lhs: Optional[str], rhs: Optional[str]) -> float:
    """Number of shared trigrams divided by the number of distinct trigrams."""
    left = trigrams(lhs)
    right = trigrams(rhs)
    if not left or not right:
        return 0.0

    shared = len(left & right)
    return shared / float(len(left) + len(right) - shared)
