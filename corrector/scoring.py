"""Edit-distance and phonetic similarity scoring."""
from __future__ import annotations

import jellyfish
from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings."""
    return Levenshtein.distance(a, b)


def sounds_alike(a: str, b: str) -> bool:
    """True when both words share a Soundex code."""
    return jellyfish.soundex(a) == jellyfish.soundex(b)


def normalized_score(distance: int, a: str, b: str) -> float:
    """Edit distance scaled by the longer string; 1.0 when both are empty."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return distance / max_len


def apply_phonetic_discount(score: float, query: str, candidate: str, phonetic_discount: float = 0.3) -> float:
    """Scale ``score`` down when the two words sound alike."""
    if sounds_alike(query, candidate):
        return score * phonetic_discount
    return score
