"""Layered configuration for the transcript corrector.

Implements a hierarchical configuration system with the following precedence:
1. Default values (lowest priority)
2. JSON settings file (``settings.json`` in the config directory)
3. Environment variables
4. Command-line arguments (highest priority)

Configuration is deep-merged across all sources, allowing partial overrides
at any level of the configuration hierarchy.
"""
from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import ConfigurationError

CONFIG_DIR = Path(__file__).resolve().parent

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CorrectionConfig:
    """Vocabulary correction settings.

    Attributes:
        enabled: Run vocabulary correction at all
        threshold: Maximum accepted match score (0 = exact matches only)
        length_window: Length-bucket search window around the token length
        distance_multiplier: Loosening factor for the BK-tree distance bound
        tree_threshold: Vocabulary size at which the BK-tree index is used
        max_token_length: Longer tokens are never corrected
        phonetic_discount: Score multiplier for Soundex matches
    """
    enabled: bool = True
    threshold: float = 0.18
    length_window: int = 5
    distance_multiplier: float = 1.5
    tree_threshold: int = 200
    max_token_length: int = 50
    phonetic_discount: float = 0.3

    def __post_init__(self):
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(f"Invalid threshold: {self.threshold} (expected 0.0-1.0)")
        if self.length_window < 0:
            raise ConfigurationError(f"Invalid length_window: {self.length_window}")
        if self.distance_multiplier <= 0:
            raise ConfigurationError(f"Invalid distance_multiplier: {self.distance_multiplier}")
        if self.tree_threshold < 1:
            raise ConfigurationError(f"Invalid tree_threshold: {self.tree_threshold}")
        if self.max_token_length < 1:
            raise ConfigurationError(f"Invalid max_token_length: {self.max_token_length}")
        if not 0.0 <= self.phonetic_discount <= 1.0:
            raise ConfigurationError(f"Invalid phonetic_discount: {self.phonetic_discount}")


@dataclass(frozen=True)
class VocabularyConfig:
    """Vocabulary sources and limits.

    Attributes:
        bundled_path: Vocabulary shipped with the application (optional file)
        user_path: User-edited vocabulary file, must exist when set
        words: Inline vocabulary terms from the settings file
        max_word_length: Longest accepted term
        max_words: Largest accepted vocabulary
    """
    bundled_path: Optional[str] = str(CONFIG_DIR / "default_custom_vocab.txt")
    user_path: Optional[str] = None
    words: Tuple[str, ...] = ()
    max_word_length: int = 100
    max_words: int = 10_000

    def __post_init__(self):
        # JSON delivers lists; keep the frozen config hashable
        object.__setattr__(self, "words", tuple(self.words))
        if self.max_word_length < 1 or self.max_words < 1:
            raise ConfigurationError("Vocabulary limits must be positive")


@dataclass(frozen=True)
class NormalizationConfig:
    """Spoken-number normalizers to run after correction."""
    years: bool = True
    measurements: bool = True
    times: bool = True


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration.

    Attributes:
        correction: Vocabulary correction settings
        vocabulary: Vocabulary sources
        normalization: Enabled normalizers
        debug: Debug mode flag
        log_level: Logging verbosity level
    """
    correction: CorrectionConfig = field(default_factory=CorrectionConfig)
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)

    debug: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}")


class ConfigLoader:
    """Centralized configuration loader with validation and hierarchy.

    Implements the configuration loading strategy with proper precedence
    and deep merging of nested configuration dictionaries.
    """

    SETTINGS_FILE = "settings.json"

    def __init__(self, config_dir: Path = CONFIG_DIR):
        self.config_dir = Path(config_dir)

    def load(self, argv: List[str]) -> Tuple[AppConfig, List[str]]:
        """Load configuration with proper hierarchy: defaults → file → env → CLI.

        Args:
            argv: Command-line arguments to parse

        Returns:
            Tuple of (AppConfig instance, unknown CLI arguments)
        """
        config_dict = self._get_defaults()

        self._deep_update(config_dict, self._load_settings_file())
        self._deep_update(config_dict, self._load_env_overrides())

        cli_overrides, unknown_args = self._parse_cli_args(argv)
        self._deep_update(config_dict, cli_overrides)

        return self._build_config(config_dict), unknown_args

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            "correction": {
                "enabled": True,
                "threshold": 0.18,
                "length_window": 5,
                "distance_multiplier": 1.5,
                "tree_threshold": 200,
                "max_token_length": 50,
                "phonetic_discount": 0.3,
            },
            "vocabulary": {
                "bundled_path": str(self.config_dir / "default_custom_vocab.txt"),
                "user_path": None,
                "words": [],
                "max_word_length": 100,
                "max_words": 10_000,
            },
            "normalization": {
                "years": True,
                "measurements": True,
                "times": True,
            },
            "debug": False,
            "log_level": "WARNING",
        }

    def _load_settings_file(self) -> Dict[str, Any]:
        """Load the JSON settings file.

        Returns:
            Parsed settings, or an empty dict when the file is absent

        Raises:
            ConfigurationError: If the file exists but is not a JSON object
        """
        file_path = self.config_dir / self.SETTINGS_FILE
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(f"Failed to load {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{file_path} must contain a JSON object")
        return data

    def _load_env_overrides(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables.

        Supported environment variables:
        - CORRECTION_THRESHOLD: Match threshold (float)
        - CUSTOM_VOCAB_PATH: User vocabulary file
        - NORMALIZE_YEARS / NORMALIZE_MEASUREMENTS / NORMALIZE_TIMES: Toggle normalizers
        - DEBUG: Enable debug mode
        - LOG_LEVEL: Set logging level

        Returns:
            Dictionary with environment-based overrides
        """
        overrides: Dict[str, Any] = {}

        threshold = os.getenv("CORRECTION_THRESHOLD")
        if threshold:
            try:
                overrides.setdefault("correction", {})["threshold"] = float(threshold)
            except ValueError as e:
                raise ConfigurationError(f"Invalid CORRECTION_THRESHOLD: {threshold}") from e

        vocab_path = os.getenv("CUSTOM_VOCAB_PATH")
        if vocab_path:
            overrides.setdefault("vocabulary", {})["user_path"] = vocab_path

        for key in ("years", "measurements", "times"):
            env_name = f"NORMALIZE_{key.upper()}"
            if os.getenv(env_name) is not None:
                overrides.setdefault("normalization", {})[key] = self._env_bool(env_name)

        if self._env_bool("DEBUG"):
            overrides["debug"] = True

        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()

        return overrides

    def _parse_cli_args(self, argv: List[str]) -> Tuple[Dict[str, Any], List[str]]:
        """Parse CLI arguments.

        Args:
            argv: Command-line arguments

        Returns:
            Tuple of (overrides dictionary, unknown arguments)
        """
        parser = argparse.ArgumentParser(
            description="Correct transcripts against a vocabulary and normalize spoken numbers",
            allow_abbrev=False,
        )

        parser.add_argument(
            "--threshold",
            type=float,
            help="Maximum accepted match score (0.0 exact only, 1.0 anything)"
        )
        parser.add_argument(
            "--vocab",
            help="Vocabulary file, one term per line"
        )
        parser.add_argument(
            "--no-correction",
            action="store_true",
            help="Skip vocabulary correction"
        )
        parser.add_argument(
            "--no-years",
            action="store_true",
            help="Skip year normalization"
        )
        parser.add_argument(
            "--no-measurements",
            action="store_true",
            help="Skip measurement normalization"
        )
        parser.add_argument(
            "--no-times",
            action="store_true",
            help="Skip time normalization"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode"
        )
        parser.add_argument(
            "--log-level",
            type=str.upper,
            choices=LOG_LEVELS,
            help="Set logging level"
        )

        known, unknown = parser.parse_known_args(argv)

        overrides: Dict[str, Any] = {}
        if known.threshold is not None:
            overrides.setdefault("correction", {})["threshold"] = known.threshold
        if known.no_correction:
            overrides.setdefault("correction", {})["enabled"] = False
        if known.vocab:
            overrides.setdefault("vocabulary", {})["user_path"] = known.vocab
        for key in ("years", "measurements", "times"):
            if getattr(known, f"no_{key}"):
                overrides.setdefault("normalization", {})[key] = False
        if known.debug:
            overrides["debug"] = True
        if known.log_level:
            overrides["log_level"] = known.log_level

        return overrides, unknown

    def _build_config(self, config_dict: Dict[str, Any]) -> AppConfig:
        """Build and validate the final configuration object.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            correction = CorrectionConfig(**config_dict.get("correction", {}))
            vocabulary = VocabularyConfig(**config_dict.get("vocabulary", {}))
            normalization = NormalizationConfig(**config_dict.get("normalization", {}))
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

        return AppConfig(
            correction=correction,
            vocabulary=vocabulary,
            normalization=normalization,
            debug=config_dict.get("debug", False),
            log_level=str(config_dict.get("log_level", "WARNING")).upper(),
        )

    @staticmethod
    def _env_bool(name: str, default: bool = False) -> bool:
        """Parse boolean from environment variable.

        Returns:
            Boolean value (True for "1", "true", "yes", "y", "on")
        """
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "y", "on"}

    @staticmethod
    def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Recursively update mapping 'target' with 'updates' without clobbering nested dicts."""
        for key, new_val in updates.items():
            if isinstance(new_val, dict) and isinstance(target.get(key), dict):
                ConfigLoader._deep_update(target[key], new_val)  # type: ignore[index]
            else:
                target[key] = new_val


__all__ = [
    "AppConfig",
    "CorrectionConfig",
    "VocabularyConfig",
    "NormalizationConfig",
    "CONFIG_DIR",
    "ConfigLoader",
]
