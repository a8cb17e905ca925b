"""
Spoken-number normalization for years, measurements and clock times.

Each normalizer is an ordered list of rules. A rule pairs a compiled pattern
with a converter that turns one match into replacement text, or returns
None to leave that match alone. Rules run in order, each over the output of
the previous one, so longer phrase shapes are listed before the shorter ones
that could match part of them.

Within one rule every match is collected first and spliced back from the
rightmost to the leftmost, keeping earlier offsets valid.
"""
from __future__ import annotations

import re
from typing import Callable, List, NamedTuple, Optional, Sequence

from .number_parser import parse_spoken_number, parse_tens_and_ones, word_to_number

Converter = Callable[["re.Match[str]"], Optional[str]]


class PatternRule(NamedTuple):
    """A compiled pattern and the converter applied to each of its matches."""
    pattern: "re.Pattern[str]"
    convert: Converter


def splice_matches(text: str, rule: PatternRule) -> str:
    """Apply one rule to ``text`` using collect-then-splice replacement."""
    replacements = []
    for match in rule.pattern.finditer(text):
        replacement = rule.convert(match)
        if replacement is not None:
            replacements.append((match.start(), match.end(), replacement))

    for start, end, replacement in reversed(replacements):
        text = text[:start] + replacement + text[end:]
    return text


class PatternNormalizer:
    """Ordered cascade of pattern rules."""

    def __init__(self, name: str, rules: Sequence[PatternRule]) -> None:
        self.name = name
        self.rules = tuple(rules)

    def __call__(self, text: str) -> str:
        return self.normalize(text)

    def normalize(self, text: str) -> str:
        for rule in self.rules:
            text = splice_matches(text, rule)
        return text


def _rule(pattern: str, convert: Converter) -> PatternRule:
    return PatternRule(re.compile(pattern, re.IGNORECASE), convert)


# ---------------------------------------------------------------------------
# Years
# ---------------------------------------------------------------------------

def _twenty_twenty(match: "re.Match[str]") -> Optional[str]:
    ones = word_to_number(match.group(3))
    if ones is None or ones > 9:
        return None
    return f"20{20 + ones}"


def _two_thousand(parse: Callable[[str], Optional[int]]) -> Converter:
    def convert(match: "re.Match[str]") -> Optional[str]:
        last_two = parse(match.group(2).strip())
        if last_two is None or last_two > 99:
            return None
        return f"20{last_two:02d}"
    return convert


def _century(prefix: str) -> Converter:
    def convert(match: "re.Match[str]") -> Optional[str]:
        second_part = match.group(2)
        if " " in second_part or "-" in second_part:
            last_two = parse_tens_and_ones(second_part)
        else:
            last_two = word_to_number(second_part)
        if last_two is None or last_two > 99:
            return None
        return f"{prefix}{last_two:02d}"
    return convert


def build_year_rules() -> List[PatternRule]:
    return [
        # "twenty twenty-five" -> 2025
        _rule(r"\b(twenty)[\s-]+(twenty)[\s-]+(\w+)\b", _twenty_twenty),
        # "two thousand and twenty-five" -> 2025, before the one-word form
        _rule(r"\b(two\s+thousand)(?:\s+and)?\s+(\w+[\s-]+\w+)\b", _two_thousand(parse_tens_and_ones)),
        # "two thousand ten" -> 2010
        _rule(r"\b(two\s+thousand)(?:\s+and)?\s+(\w+)\b", _two_thousand(word_to_number)),
        # "nineteen ninety-nine" -> 1999
        _rule(r"\b(nineteen)[\s-]+(\w+[\s-]+\w+|\w+)\b", _century("19")),
        # "eighteen eighty-five" -> 1885
        _rule(r"\b(eighteen)[\s-]+(\w+[\s-]+\w+|\w+)\b", _century("18")),
    ]


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------

UNIT_ABBREVIATIONS = [
    # Weight
    ("milligrams?", "mg"),
    ("grams?", "g"),
    ("kilograms?", "kg"),
    ("pounds?", "lbs"),
    ("ounces?", "oz"),
    # Length
    ("millimeters?", "mm"),
    ("centimeters?", "cm"),
    ("meters?", "m"),
    ("kilometers?", "km"),
    ("inches?", "in"),
    ("feet", "ft"),
    ("foot", "ft"),
    ("yards?", "yd"),
    ("miles?", "mi"),
    # Volume
    ("milliliters?", "ml"),
    ("liters?", "l"),
    ("gallons?", "gal"),
    ("quarts?", "qt"),
    ("pints?", "pt"),
    ("cups?", "c"),
    ("tablespoons?", "tbsp"),
    ("teaspoons?", "tsp"),
]

MAX_NUMBER_WORDS = 4


def _measurement(abbreviation: str) -> Converter:
    def convert(match: "re.Match[str]") -> Optional[str]:
        number = parse_spoken_number(match.group(1))
        if number is None:
            return None
        return f"{number} {abbreviation}"
    return convert


def build_measurement_rules() -> List[PatternRule]:
    rules = []
    for unit_pattern, abbreviation in UNIT_ABBREVIATIONS:
        # Longest phrase first so "one hundred fifty" wins over "fifty"
        for word_count in range(MAX_NUMBER_WORDS, 0, -1):
            words = r"\w+" + r"(?:\s+\w+)" * (word_count - 1)
            rules.append(_rule(rf"\b({words})\s+({unit_pattern})\b", _measurement(abbreviation)))
    return rules


# ---------------------------------------------------------------------------
# Times
# ---------------------------------------------------------------------------

HOUR_WORDS = r"(?:one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve)"
ONES_WORDS = r"(?:one|two|three|four|five|six|seven|eight|nine)"


def _clock(minute_range: range) -> Converter:
    def convert(match: "re.Match[str]") -> Optional[str]:
        hour = word_to_number(match.group(1))
        minutes = sum(word_to_number(word) or 0 for word in match.groups()[1:])
        if hour is None or not 1 <= hour <= 12 or minutes not in minute_range:
            return None
        return f"{hour}:{minutes:02d}"
    return convert


def build_time_rules() -> List[PatternRule]:
    return [
        # "ten o'clock" -> 10:00
        _rule(rf"\b({HOUR_WORDS})\s+o'?clock\b", _clock(range(0, 1))),
        # "ten oh five" -> 10:05
        _rule(rf"\b({HOUR_WORDS})\s+oh\s+({ONES_WORDS})\b", _clock(range(1, 10))),
        # "ten twenty-five" -> 10:25
        _rule(
            rf"\b({HOUR_WORDS})[\s-]+(twenty|thirty|forty|fifty)[\s-]+({ONES_WORDS})\b",
            _clock(range(21, 60)),
        ),
        # "ten fifteen" -> 10:15
        _rule(
            rf"\b({HOUR_WORDS})\s+(ten|eleven|twelve|thirteen|fourteen|fifteen|sixteen|"
            r"seventeen|eighteen|nineteen|twenty|thirty|forty|fifty)\b",
            _clock(range(10, 60)),
        ),
    ]


YEAR_NORMALIZER = PatternNormalizer("years", build_year_rules())
MEASUREMENT_NORMALIZER = PatternNormalizer("measurements", build_measurement_rules())
TIME_NORMALIZER = PatternNormalizer("times", build_time_rules())


def normalize_years(text: str) -> str:
    """Rewrite spoken years ("nineteen ninety-nine") as digits ("1999")."""
    return YEAR_NORMALIZER.normalize(text)


def normalize_measurements(text: str) -> str:
    """Rewrite spoken quantities with units ("twenty five milligrams") as "25 mg"."""
    return MEASUREMENT_NORMALIZER.normalize(text)


def normalize_times(text: str) -> str:
    """Rewrite spoken clock times ("ten oh five") as "10:05"."""
    return TIME_NORMALIZER.normalize(text)


class TextNormalizer:
    """Chains the enabled normalizers: years, then measurements, then times."""

    def __init__(self, years: bool = True, measurements: bool = True, times: bool = True) -> None:
        self.normalizers: List[PatternNormalizer] = []
        if years:
            self.normalizers.append(YEAR_NORMALIZER)
        if measurements:
            self.normalizers.append(MEASUREMENT_NORMALIZER)
        if times:
            self.normalizers.append(TIME_NORMALIZER)

    @classmethod
    def from_app_config(cls, normalization_config) -> "TextNormalizer":
        return cls(
            years=normalization_config.years,
            measurements=normalization_config.measurements,
            times=normalization_config.times,
        )

    @property
    def enabled(self) -> List[str]:
        return [normalizer.name for normalizer in self.normalizers]

    def normalize(self, text: str) -> str:
        if not text:
            return text
        for normalizer in self.normalizers:
            text = normalizer.normalize(text)
        return text
