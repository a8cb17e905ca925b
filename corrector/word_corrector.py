"""
Vocabulary correction for speech-to-text transcripts.

This module repairs out-of-vocabulary words in recognized text using a
user-supplied list of terms (brand names, jargon, people). Each
whitespace-delimited token is compared against the vocabulary with a
normalized Levenshtein score, discounted when the two words share a Soundex
code, and replaced by the best candidate under the caller's threshold.

Classes:
    VocabularyEntry: Original-case vocabulary term with its lowercase key
    CorrectionEngine: Immutable vocabulary snapshot plus its candidate index

Functions:
    apply_custom_words: One-shot correction without keeping an engine around

Matching Rules:
    1. Tokens with no letters, or longer than the policy limit, pass through
    2. An exact (case-insensitive) match wins immediately
    3. Candidates whose raw score exceeds the threshold are rejected
    4. Soundex agreement multiplies the score by the phonetic discount
    5. The lowest discounted score strictly below the threshold is applied

Case and punctuation of the original token are preserved around the
replacement. The engine never raises and never logs while correcting.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .candidate_index import Candidate, CandidateIndex, build_index
from .config import DEFAULT_POLICY, MatchingPolicy
from .scoring import apply_phonetic_discount, normalized_score
from .text_utils import Token, preserve_case_pattern, tokenize_text


class VocabularyEntry(NamedTuple):
    """A vocabulary term as authored and the lowercase form used for matching."""
    original: str
    lowered: str


class CorrectionEngine:
    """
    Vocabulary snapshot with a prebuilt candidate index.

    Build one engine per vocabulary and reuse it for any number of
    ``correct`` calls. The engine holds no mutable state after construction,
    so a single instance may serve several threads; to change the vocabulary
    build a new engine with ``rebuild``.

    Usage:
        engine = CorrectionEngine(["Kubernetes", "PostgreSQL"])
        engine.correct("deploy to kubernetis", threshold=0.3)
    """

    def __init__(self, vocabulary: Iterable[str], policy: Optional[MatchingPolicy] = None) -> None:
        self.policy = policy or DEFAULT_POLICY
        self.entries: Tuple[VocabularyEntry, ...] = tuple(
            VocabularyEntry(word, word.lower()) for word in vocabulary
        )

        # First occurrence wins when several entries share a lowercase form
        positions: Dict[str, int] = {}
        for position, entry in enumerate(self.entries):
            positions.setdefault(entry.lowered, position)
        self._positions = positions

        self.index: Optional[CandidateIndex] = None
        if self.entries:
            self.index = build_index([entry.lowered for entry in self.entries], self.policy)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def strategy(self) -> Optional[str]:
        """Name of the candidate index in use, None for an empty vocabulary."""
        return self.index.strategy if self.index is not None else None

    def rebuild(self, vocabulary: Iterable[str]) -> "CorrectionEngine":
        """Return a new engine for a changed vocabulary, leaving this one intact."""
        return CorrectionEngine(vocabulary, self.policy)

    def correct(self, text: str, threshold: float) -> str:
        """
        Correct every token in ``text`` against the vocabulary.

        Args:
            text: Transcript to correct
            threshold: Maximum accepted score; 0 only allows exact matches

        Returns:
            Corrected tokens joined by single spaces, or ``text`` unchanged
            when the vocabulary is empty
        """
        if self.index is None:
            return text
        return " ".join(self.correct_token(token, threshold) for token in tokenize_text(text))

    def correct_token(self, token: Token, threshold: float) -> str:
        """Return the replacement text for one token (the token itself when nothing fits)."""
        if not token.cleaned or len(token.cleaned) > self.policy.max_token_length:
            return token.original

        match = self.best_match(token.cleaned, threshold)
        if match is None:
            return token.original

        return f"{token.prefix}{preserve_case_pattern(token.original, match)}{token.suffix}"

    def best_match(self, cleaned: str, threshold: float) -> Optional[str]:
        """
        Find the vocabulary entry (original case) that best matches ``cleaned``.

        Args:
            cleaned: Lowercase token with surrounding punctuation removed
            threshold: Maximum accepted score

        Returns:
            The original-case entry, or None when no candidate qualifies
        """
        if self.index is None:
            return None

        best: Optional[str] = None
        best_score = float("inf")

        for distance, candidate in self._ranked_candidates(cleaned, threshold):
            original = self.entries[self._positions[candidate]].original
            if distance == 0:
                return original

            score = normalized_score(distance, cleaned, candidate)
            if score > threshold:
                continue

            score = apply_phonetic_discount(score, cleaned, candidate, self.policy.phonetic_discount)
            if score < threshold and score < best_score:
                best = original
                best_score = score

        return best

    def _ranked_candidates(self, cleaned: str, threshold: float) -> List[Candidate]:
        """Candidates inside the length window, ordered by distance then vocabulary position.

        The tree index searches a radius wide enough to reach every in-window
        candidate that can pass the score test, so filtering both indexes by
        the window keeps the result independent of which one was built.
        """
        lengths = self.policy.length_range(len(cleaned))

        admitted = {}
        for distance, candidate in self.index.find(cleaned, threshold):
            if len(candidate) in lengths:
                admitted[candidate] = distance

        return sorted(
            ((distance, candidate) for candidate, distance in admitted.items()),
            key=lambda pair: (pair[0], self._positions[pair[1]]),
        )


def apply_custom_words(
    text: str,
    vocabulary: Sequence[str],
    threshold: float,
    policy: Optional[MatchingPolicy] = None,
) -> str:
    """
    Correct ``text`` against ``vocabulary`` in one call.

    Builds a throwaway engine; callers correcting many transcripts against
    the same vocabulary should keep a CorrectionEngine instead.

    Args:
        text: Transcript to correct
        vocabulary: Terms in their preferred spelling and case
        threshold: Maximum accepted score in [0, 1]
        policy: Optional matching heuristics, defaults preserved otherwise

    Returns:
        Corrected transcript
    """
    if not vocabulary:
        return text
    return CorrectionEngine(vocabulary, policy).correct(text, threshold)
