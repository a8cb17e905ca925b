"""
Transcript Corrector Package.

This package repairs speech-to-text output against a user vocabulary and
rewrites spoken numbers as digits. It needs no language model: corrections
come from edit distance and phonetic codes, number rewriting from ordered
regex cascades.

Main Components:
    CorrectionEngine: Vocabulary snapshot with an adaptive candidate index
    CandidateIndex: Length-bucket index (small vocabularies) or BK-tree (large)
    MatchingPolicy: Tunable matching heuristics with their default values
    TextNormalizer: Year, measurement and time normalizers chained together
    Number parsing: word_to_number, parse_tens_and_ones, parse_spoken_number
    Vocabulary helpers: file loading, merging and validation

Architecture:
    - Strategy pattern for candidate retrieval, chosen once per vocabulary
    - Immutable engines and indexes, safe to share between threads
    - Ordered pattern/converter rules with collect-then-splice rewriting

Examples:
    >>> apply_custom_words("helo wrold", ["hello", "world"], 0.5)
    'hello world'
    >>> normalize_years("nineteen ninety-nine")
    '1999'
    >>> normalize_measurements("One hundred fifty pounds")
    '150 lbs'
    >>> normalize_times("ten oh five")
    '10:05'
"""

from __future__ import annotations

from .candidate_index import BKTreeIndex, CandidateIndex, LengthBucketIndex, build_index
from .config import DEFAULT_POLICY, MatchingPolicy
from .number_parser import parse_spoken_number, parse_tens_and_ones, word_to_number
from .text_normalizer import (
    PatternNormalizer,
    PatternRule,
    TextNormalizer,
    normalize_measurements,
    normalize_times,
    normalize_years,
)
from .text_utils import Token, tokenize_text
from .word_corrector import CorrectionEngine, VocabularyEntry, apply_custom_words

__all__ = [
    # Vocabulary correction
    "CorrectionEngine",
    "VocabularyEntry",
    "apply_custom_words",
    "MatchingPolicy",
    "DEFAULT_POLICY",

    # Candidate retrieval
    "CandidateIndex",
    "LengthBucketIndex",
    "BKTreeIndex",
    "build_index",

    # Spoken numbers
    "word_to_number",
    "parse_tens_and_ones",
    "parse_spoken_number",
    "PatternRule",
    "PatternNormalizer",
    "TextNormalizer",
    "normalize_years",
    "normalize_measurements",
    "normalize_times",

    # Tokenization
    "Token",
    "tokenize_text",
]

__version__ = "1.0.0"
