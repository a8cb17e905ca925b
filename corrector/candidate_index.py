"""
Candidate retrieval for fuzzy vocabulary matching.

Two interchangeable indexes answer "which vocabulary words are close enough
to this cleaned token to be worth scoring?":

    LengthBucketIndex: groups words by length and scans a fixed window
        around the query length. Cheap to build, linear per bucket, used for
        small vocabularies.
    BKTreeIndex: a Burkhard-Keller tree over Levenshtein distance. Range
        queries prune whole subtrees with the triangle inequality, so lookups
        stay sub-linear for large vocabularies.

The strategy is chosen once, by ``build_index``, from the vocabulary size.
Indexes are never mutated after construction and can be shared between
threads; a changed vocabulary gets a new index.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_POLICY, MatchingPolicy
from .scoring import edit_distance

Candidate = Tuple[int, str]


class CandidateIndex(ABC):
    """Interface shared by all candidate retrieval strategies."""

    strategy = "abstract"

    def __init__(self, words_lower: Sequence[str], policy: MatchingPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self._words: Tuple[str, ...] = tuple(words_lower)

    def __len__(self) -> int:
        return len(self._words)

    @property
    def words(self) -> Tuple[str, ...]:
        """Lowercase vocabulary in insertion order."""
        return self._words

    @abstractmethod
    def find(self, query: str, threshold: float) -> List[Candidate]:
        """
        Return (distance, candidate) pairs worth scoring for ``query``.

        Args:
            query: Cleaned, lowercase token
            threshold: Caller's acceptance threshold in [0, 1]

        Returns:
            Unordered list of (edit distance, lowercase candidate)
        """


class LengthBucketIndex(CandidateIndex):
    """Vocabulary grouped by word length, searched within a length window."""

    strategy = "length-bucket"

    def __init__(self, words_lower: Sequence[str], policy: MatchingPolicy = DEFAULT_POLICY) -> None:
        super().__init__(words_lower, policy)
        buckets: Dict[int, List[Tuple[int, str]]] = {}
        for position, word in enumerate(self._words):
            buckets.setdefault(len(word), []).append((position, word))
        self._buckets = {length: tuple(entries) for length, entries in buckets.items()}

    def find(self, query: str, threshold: float) -> List[Candidate]:
        candidates = []
        for length in self.policy.length_range(len(query)):
            for _position, word in self._buckets.get(length, ()):
                candidates.append((edit_distance(query, word), word))
        return candidates


class _BKNode:
    __slots__ = ("word", "children")

    def __init__(self, word: str) -> None:
        self.word = word
        self.children: Dict[int, "_BKNode"] = {}


class BKTreeIndex(CandidateIndex):
    """Metric tree keyed by Levenshtein distance between parent and child."""

    strategy = "bk-tree"

    def __init__(self, words_lower: Sequence[str], policy: MatchingPolicy = DEFAULT_POLICY) -> None:
        super().__init__(words_lower, policy)
        self._root: Optional[_BKNode] = None
        for word in self._words:
            self._insert(word)

    def _insert(self, word: str) -> None:
        if self._root is None:
            self._root = _BKNode(word)
            return

        node = self._root
        while True:
            distance = edit_distance(word, node.word)
            if distance == 0:
                # Duplicate lowercase form; the first occurrence already represents it
                return
            child = node.children.get(distance)
            if child is None:
                node.children[distance] = _BKNode(word)
                return
            node = child

    def search(self, query: str, max_distance: int) -> List[Candidate]:
        """All stored words within ``max_distance`` edits of ``query``."""
        if self._root is None:
            return []

        results = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            distance = edit_distance(query, node.word)
            if distance <= max_distance:
                results.append((distance, node.word))
            low, high = distance - max_distance, distance + max_distance
            for child_distance, child in node.children.items():
                if low <= child_distance <= high:
                    stack.append(child)
        return results

    def find(self, query: str, threshold: float) -> List[Candidate]:
        return self.search(query, self.policy.search_radius(len(query), threshold))


def build_index(words_lower: Sequence[str], policy: MatchingPolicy = DEFAULT_POLICY) -> CandidateIndex:
    """Pick the retrieval strategy for a vocabulary of this size."""
    if len(words_lower) >= policy.tree_threshold:
        return BKTreeIndex(words_lower, policy)
    return LengthBucketIndex(words_lower, policy)
