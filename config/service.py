"""Configuration service facade for simplified configuration access.

Implements the Facade pattern to provide a clean, simple interface
to the layered configuration system, and translates configuration
sections into the objects the corrector package consumes.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from config.config import CONFIG_DIR, AppConfig, ConfigLoader
from corrector.config import MatchingPolicy


class ConfigurationService:
    """Facade for application configuration management.

    Example:
        config_service = ConfigurationService(config)
        threshold = config_service.threshold  # Instead of config.correction.threshold

    Attributes:
        _config: Underlying AppConfig instance
    """

    def __init__(self, config: AppConfig):
        self._config = config

    # Correction shortcuts
    @property
    def correction_enabled(self) -> bool:
        """Get whether vocabulary correction runs."""
        return self._config.correction.enabled

    @property
    def threshold(self) -> float:
        """Get the match threshold."""
        return self._config.correction.threshold

    @property
    def matching_policy(self) -> MatchingPolicy:
        """Get matching heuristics for building a CorrectionEngine."""
        return MatchingPolicy.from_app_config(self._config.correction)

    # Vocabulary sources
    @property
    def bundled_vocab_path(self) -> Optional[str]:
        return self._config.vocabulary.bundled_path

    @property
    def user_vocab_path(self) -> Optional[str]:
        return self._config.vocabulary.user_path

    @property
    def inline_words(self) -> tuple[str, ...]:
        return self._config.vocabulary.words

    @property
    def max_word_length(self) -> int:
        return self._config.vocabulary.max_word_length

    @property
    def max_words(self) -> int:
        return self._config.vocabulary.max_words

    # Normalization toggles
    @property
    def normalize_years(self) -> bool:
        return self._config.normalization.years

    @property
    def normalize_measurements(self) -> bool:
        return self._config.normalization.measurements

    @property
    def normalize_times(self) -> bool:
        return self._config.normalization.times

    # General configuration
    @property
    def debug(self) -> bool:
        """Get debug mode status."""
        return self._config.debug

    @property
    def log_level(self) -> str:
        """Get effective log level (DEBUG whenever debug mode is on)."""
        return "DEBUG" if self._config.debug else self._config.log_level

    @property
    def raw_config(self) -> AppConfig:
        """Get raw configuration object."""
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "correction": {
                "enabled": self.correction_enabled,
                "threshold": self.threshold,
            },
            "vocabulary": {
                "bundled_path": self.bundled_vocab_path,
                "user_path": self.user_vocab_path,
                "inline_words": len(self.inline_words),
            },
            "normalization": {
                "years": self.normalize_years,
                "measurements": self.normalize_measurements,
                "times": self.normalize_times,
            },
            "debug": self.debug,
            "log_level": self.log_level,
        }


class ConfigurationServiceFactory:
    """Factory for creating ConfigurationService instances."""

    @staticmethod
    def create_from_args(
        args: list[str], config_dir: Path = CONFIG_DIR
    ) -> tuple[ConfigurationService, list[str]]:
        """Create configuration service from command-line arguments.

        Returns:
            Tuple of (ConfigurationService, unknown_args)
        """
        loader = ConfigLoader(config_dir)
        config, unknown_args = loader.load(args)
        return ConfigurationService(config), unknown_args

    @staticmethod
    def create_from_config(config: AppConfig) -> ConfigurationService:
        return ConfigurationService(config)

    @staticmethod
    def create_default() -> ConfigurationService:
        """Create configuration service with built-in defaults only."""
        return ConfigurationService(AppConfig())
