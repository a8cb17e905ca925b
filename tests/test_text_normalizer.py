"""Tests for spoken-number normalization."""
import re

import pytest

from corrector.text_normalizer import (
    PatternNormalizer,
    PatternRule,
    TextNormalizer,
    normalize_measurements,
    normalize_times,
    normalize_years,
    splice_matches,
)


class TestYears:

    @pytest.mark.parametrize("text,expected", [
        ("twenty twenty-five", "2025"),
        ("twenty twenty five", "2025"),
        ("two thousand and twenty-five", "2025"),
        ("two thousand twenty five", "2025"),
        ("two thousand ten", "2010"),
        ("two thousand and five", "2005"),
        ("nineteen ninety-nine", "1999"),
        ("nineteen fifty", "1950"),
        ("eighteen eighty-five", "1885"),
        ("Born in Nineteen Eighty Four.", "Born in 1984."),
    ])
    def test_year_phrases(self, text, expected):
        assert normalize_years(text) == expected

    def test_multiple_years_in_one_sentence(self):
        assert normalize_years("from nineteen ninety-one to twenty twenty-one") == "from 1991 to 2021"

    def test_failed_long_form_falls_back_to_short_form(self):
        assert normalize_years("two thousand ten apples") == "2010 apples"

    @pytest.mark.parametrize("text", [
        "I have two cats",
        "nineteen people came",
        "two thousand",
        "twenty twenty",
        "",
    ])
    def test_no_op(self, text):
        assert normalize_years(text) == text


class TestMeasurements:

    @pytest.mark.parametrize("text,expected", [
        ("Take twenty five milligrams daily", "Take 25 mg daily"),
        ("One hundred fifty pounds", "150 lbs"),
        ("five feet", "5 ft"),
        ("one foot", "1 ft"),
        ("two cups of flour", "2 c of flour"),
        ("ten centimeters", "10 cm"),
        ("five kilometers", "5 km"),
        ("three hundred milliliters", "300 ml"),
        ("one gram", "1 g"),
        ("add two tablespoons and one teaspoon", "add 2 tbsp and 1 tsp"),
    ])
    def test_measurement_phrases(self, text, expected):
        assert normalize_measurements(text) == expected

    def test_hyphenated_compound_before_unit_is_a_known_limitation(self):
        # Known limitation: the hyphen splits the phrase, so only the ones word
        # after it is converted and the tens word stays spelled out
        assert normalize_measurements("twenty-five milligrams") == "twenty-5 mg"

    @pytest.mark.parametrize("text", [
        "I walked many miles",
        "no units here",
        "milligrams",
        "",
    ])
    def test_no_op(self, text):
        assert normalize_measurements(text) == text


class TestTimes:

    @pytest.mark.parametrize("text,expected", [
        ("ten oh five", "10:05"),
        ("ten twenty-five", "10:25"),
        ("ten o'clock", "10:00"),
        ("ten oclock", "10:00"),
        ("ten fifteen", "10:15"),
        ("meet at three thirty", "meet at 3:30"),
        ("Twelve Forty Five", "12:45"),
    ])
    def test_time_phrases(self, text, expected):
        assert normalize_times(text) == expected

    @pytest.mark.parametrize("text", [
        "the ten commandments",
        "thirteen oh five",
        "",
    ])
    def test_no_op(self, text):
        assert normalize_times(text) == text


class TestPatternNormalizer:

    def test_splice_replaces_right_to_left(self):
        rule = PatternRule(re.compile(r"\b(\w)\w*\b"), lambda m: m.group(1).upper() * 3)
        assert splice_matches("alpha be c", rule) == "AAA BBB CCC"

    def test_converter_returning_none_leaves_match(self):
        rule = PatternRule(re.compile(r"\d+"), lambda m: None if m.group() == "2" else "#")
        assert splice_matches("1 2 3", rule) == "# 2 #"

    def test_rules_run_in_order_on_previous_output(self):
        normalizer = PatternNormalizer("demo", [
            PatternRule(re.compile("a"), lambda m: "b"),
            PatternRule(re.compile("b"), lambda m: "c"),
        ])
        assert normalizer("ab") == "cc"
        assert normalizer.name == "demo"


class TestTextNormalizer:

    def test_chains_years_measurements_times(self):
        normalizer = TextNormalizer()
        text = "On nineteen ninety-nine at ten fifteen take twenty five milligrams"
        assert normalizer.normalize(text) == "On 1999 at 10:15 take 25 mg"

    def test_disabled_normalizers_are_skipped(self):
        normalizer = TextNormalizer(years=False, times=False)
        text = "nineteen ninety-nine ten fifteen five pounds"

        assert normalizer.enabled == ["measurements"]
        assert normalizer.normalize(text) == "nineteen ninety-nine ten fifteen 5 lbs"

    def test_nothing_enabled_is_identity(self):
        normalizer = TextNormalizer(years=False, measurements=False, times=False)
        assert normalizer.normalize("ten fifteen") == "ten fifteen"

    def test_empty_text(self):
        assert TextNormalizer().normalize("") == ""
