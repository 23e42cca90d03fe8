from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost insertion/deletion/substitution edit distance."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalised edit similarity in [0, 1]; 0 when either string is empty."""
    if not a or not b:
        return 0.0
    longest = max(len(a), len(b))
    return (longest - levenshtein_distance(a, b)) / longest
