"""Matching policy shared by the candidate indexes and the correction engine."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchingPolicy:
    """Tunable heuristics for fuzzy vocabulary matching.

    Attributes:
        length_window: Length-bucket index scans lengths within +/- this value
        distance_multiplier: Loosening factor for the metric-tree distance bound
        tree_threshold: Vocabulary size at which the metric tree replaces buckets
        max_token_length: Cleaned tokens longer than this are never corrected
        phonetic_discount: Score multiplier applied when Soundex codes match
    """
    length_window: int = 5
    distance_multiplier: float = 1.5
    tree_threshold: int = 200
    max_token_length: int = 50
    phonetic_discount: float = 0.3

    def max_distance(self, query_length: int, threshold: float) -> int:
        """Largest edit distance a candidate may have for a query of this length."""
        return math.ceil(query_length * threshold * self.distance_multiplier)

    def search_radius(self, query_length: int, threshold: float) -> int:
        """Metric-tree query radius that still reaches every in-window candidate scoring within ``threshold``.

        A candidate of length ``lc`` in the window passes the score test only if
        its distance is at most ``threshold * max(query_length, lc)``, and ``lc``
        never exceeds ``query_length + length_window``.
        """
        window_bound = math.ceil(threshold * (query_length + self.length_window))
        return max(self.max_distance(query_length, threshold), window_bound)

    def length_range(self, query_length: int) -> range:
        """Candidate lengths scanned for a query of this length."""
        return range(max(0, query_length - self.length_window), query_length + self.length_window + 1)

    @classmethod
    def from_app_config(cls, correction_config) -> "MatchingPolicy":
        """Build the policy from the application's correction section."""
        return cls(
            length_window=correction_config.length_window,
            distance_multiplier=correction_config.distance_multiplier,
            tree_threshold=correction_config.tree_threshold,
            max_token_length=correction_config.max_token_length,
            phonetic_discount=correction_config.phonetic_discount,
        )


DEFAULT_POLICY = MatchingPolicy()
