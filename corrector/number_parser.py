"""Spoken-number parsing for English number words from zero to nine hundred ninety-nine."""

import re
from typing import Optional

NUMBER_WORDS = {
    "zero": 0, "oh": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18,
    "nineteen": 19, "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

_TENS_AND_ONES_SEPARATOR = re.compile(r"[ -]")


def word_to_number(word: str) -> Optional[int]:
    """Value of a single number word ("oh" counts as zero), None if unknown."""
    return NUMBER_WORDS.get(word.lower())


def parse_tens_and_ones(phrase: str) -> Optional[int]:
    """
    Parse "twenty-five", "twenty five" or a single number word.

    Args:
        phrase: One word, or two words joined by a space or hyphen

    Returns:
        Value between 0 and 99, or None when the phrase has another shape
    """
    parts = _TENS_AND_ONES_SEPARATOR.split(phrase)

    if len(parts) == 1:
        return word_to_number(parts[0])

    if len(parts) == 2:
        tens = word_to_number(parts[0])
        ones = word_to_number(parts[1])
        if tens is None or ones is None:
            return None
        if 20 <= tens <= 90 and tens % 10 == 0 and ones <= 9:
            return tens + ones

    return None


def parse_spoken_number(text: str) -> Optional[int]:
    """
    Convert a spoken number phrase to an integer.

    Handles single words, tens-and-ones compounds and hundreds:
    "seven", "forty-two", "three hundred", "one hundred fifty five".

    Args:
        text: Phrase to parse, any case, surrounding whitespace ignored

    Returns:
        Value between 0 and 999, or None when the phrase is not a number
    """
    text = text.strip().lower()

    value = parse_tens_and_ones(text)
    if value is not None:
        return value

    parts = text.split()

    if len(parts) == 1:
        return word_to_number(parts[0])

    if len(parts) >= 2 and parts[1] == "hundred":
        hundreds = word_to_number(parts[0])
        if hundreds is None or hundreds > 9:
            return None
        base = hundreds * 100
        if len(parts) == 2:
            return base

        remainder = parse_tens_and_ones(" ".join(parts[2:]))
        # Unparsable remainder falls back to the bare hundreds
        return base + (remainder or 0)

    return None
