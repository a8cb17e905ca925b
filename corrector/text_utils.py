"""Text utility functions for the corrector."""

from typing import List, NamedTuple, Tuple


class Token(NamedTuple):
    """A whitespace-delimited word split into its matching parts.

    ``cleaned`` is the lowercase alphabetic core used for matching;
    ``prefix`` and ``suffix`` are the stripped non-alphabetic runs.
    """
    original: str
    cleaned: str
    prefix: str
    suffix: str


def extract_punctuation(word: str) -> Tuple[str, str, str]:
    """
    Split a word into leading punctuation, alphabetic core and trailing punctuation.

    Args:
        word: A single token without whitespace

    Returns:
        (prefix, core, suffix); a word with no letters is returned entirely as prefix
    """
    start = 0
    while start < len(word) and not word[start].isalpha():
        start += 1

    end = len(word)
    while end > start and not word[end - 1].isalpha():
        end -= 1

    return word[:start], word[start:end], word[end:]


def tokenize_text(text: str) -> List[Token]:
    """
    Tokenize text on whitespace for vocabulary matching.

    Args:
        text: Input text to tokenize

    Returns:
        List of tokens in input order
    """
    tokens = []
    for word in text.split():
        prefix, core, suffix = extract_punctuation(word)
        tokens.append(Token(word, core.lower(), prefix, suffix))
    return tokens


def preserve_case_pattern(original: str, replacement: str) -> str:
    """Carry the capitalisation of ``original`` over to ``replacement``."""
    if original and all(ch.isupper() for ch in original):
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement
