"""Vocabulary loading, merging and validation.

Vocabulary files are plain UTF-8 text with one term per line. Surrounding
whitespace is trimmed; blank lines and lines starting with ``#`` are skipped.
"""
from __future__ import annotations

import unicodedata
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from core.exceptions import ValidationError, VocabularyError

MAX_WORD_LENGTH = 100
MAX_WORDS = 10_000


def parse_vocabulary_lines(lines: Iterable[str]) -> List[str]:
    """Terms from vocabulary file lines, in file order."""
    words = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        words.append(line)
    return words


def load_vocabulary_file(path: Path | str, required: bool = False) -> List[str]:
    """
    Read a vocabulary file.

    Args:
        path: File to read
        required: Raise instead of returning an empty list when unreadable

    Returns:
        Terms in file order

    Raises:
        VocabularyError: If ``required`` and the file cannot be read
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = parse_vocabulary_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        if required:
            raise VocabularyError(f"Cannot read vocabulary file {path}: {e}") from e
        logger.warning(f"Failed to read vocabulary file {path}: {e}")
        return []

    logger.info(f"Loaded {len(words)} vocabulary terms from {path}")
    return words


def merge_vocabularies(bundled: Sequence[str], custom: Sequence[str]) -> List[str]:
    """Bundled terms first, then custom terms not already present."""
    merged = list(bundled)
    seen = set(merged)
    for word in custom:
        if word not in seen:
            merged.append(word)
            seen.add(word)
    return merged


def validate_vocabulary_word(word: str, max_word_length: int = MAX_WORD_LENGTH) -> None:
    """Raise ValidationError if ``word`` is not an acceptable vocabulary term."""
    if not word.strip():
        raise ValidationError("Custom word cannot be empty")
    if len(word) > max_word_length:
        raise ValidationError(f"Custom word too long (max {max_word_length} characters)")
    if any(unicodedata.category(ch) == "Cc" for ch in word):
        raise ValidationError("Custom word contains invalid control characters")


def validate_vocabulary(
    words: Sequence[str],
    max_word_length: int = MAX_WORD_LENGTH,
    max_words: int = MAX_WORDS,
) -> None:
    """
    Validate a whole vocabulary.

    Raises:
        ValidationError: On too many words or the first invalid word
            (message prefixed with its 1-based position)
    """
    if len(words) > max_words:
        raise ValidationError(f"Too many custom words (max {max_words})")

    for i, word in enumerate(words, start=1):
        try:
            validate_vocabulary_word(word, max_word_length)
        except ValidationError as e:
            raise ValidationError(f"Word {i}: {e}") from e


def build_vocabulary(
    bundled_path: Optional[Path | str] = None,
    user_path: Optional[Path | str] = None,
    words: Sequence[str] = (),
    max_word_length: int = MAX_WORD_LENGTH,
    max_words: int = MAX_WORDS,
) -> List[str]:
    """
    Assemble the vocabulary from the bundled file, inline words and a user file.

    A missing bundled file is tolerated; an explicitly given user file must
    be readable.

    Returns:
        Validated, de-duplicated vocabulary in precedence order
    """
    bundled = load_vocabulary_file(bundled_path) if bundled_path else []
    custom = list(words)
    if user_path:
        custom = merge_vocabularies(custom, load_vocabulary_file(user_path, required=True))

    vocabulary = merge_vocabularies(bundled, custom)
    validate_vocabulary(vocabulary, max_word_length, max_words)
    logger.debug(f"Vocabulary assembled: {len(vocabulary)} terms ({len(bundled)} bundled)")
    return vocabulary
