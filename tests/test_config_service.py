"""Unit tests for configuration loading and the configuration service."""
import json
from pathlib import Path

import pytest

from config.config import CONFIG_DIR, AppConfig, ConfigLoader, CorrectionConfig, NormalizationConfig, VocabularyConfig
from config.service import ConfigurationService, ConfigurationServiceFactory
from core.exceptions import ConfigurationError
from corrector.config import MatchingPolicy


ENV_VARS = [
    "CORRECTION_THRESHOLD",
    "CUSTOM_VOCAB_PATH",
    "NORMALIZE_YEARS",
    "NORMALIZE_MEASUREMENTS",
    "NORMALIZE_TIMES",
    "DEBUG",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfigurationService:
    """Tests for ConfigurationService facade."""

    @pytest.fixture
    def mock_config(self):
        """Create an AppConfig for testing."""
        return AppConfig(
            correction=CorrectionConfig(
                enabled=True,
                threshold=0.25,
                tree_threshold=50,
            ),
            vocabulary=VocabularyConfig(
                bundled_path="vocab/bundled.txt",
                user_path="vocab/user.txt",
                words=["Kubernetes", "PostgreSQL"],
            ),
            normalization=NormalizationConfig(
                years=True,
                measurements=False,
                times=True,
            ),
            debug=False,
            log_level="INFO",
        )

    def test_correction_properties(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)

        # Assert
        assert service.correction_enabled is True
        assert service.threshold == 0.25

    def test_matching_policy(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)

        # Act
        policy = service.matching_policy

        # Assert
        assert isinstance(policy, MatchingPolicy)
        assert policy.tree_threshold == 50
        assert policy.length_window == 5

    def test_vocabulary_properties(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)

        # Assert
        assert service.bundled_vocab_path == "vocab/bundled.txt"
        assert service.user_vocab_path == "vocab/user.txt"
        assert service.inline_words == ("Kubernetes", "PostgreSQL")
        assert service.max_word_length == 100
        assert service.max_words == 10_000

    def test_normalization_properties(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)

        # Assert
        assert service.normalize_years is True
        assert service.normalize_measurements is False
        assert service.normalize_times is True

    def test_log_level_follows_debug(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)
        debug_service = ConfigurationService(AppConfig(debug=True, log_level="ERROR"))

        # Assert
        assert service.log_level == "INFO"
        assert debug_service.log_level == "DEBUG"

    def test_raw_config_property(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)

        # Assert
        assert service.raw_config is mock_config

    def test_to_dict(self, mock_config):
        # Arrange
        service = ConfigurationService(mock_config)

        # Act
        result = service.to_dict()

        # Assert
        assert result["correction"]["threshold"] == 0.25
        assert result["vocabulary"]["inline_words"] == 2
        assert result["normalization"]["measurements"] is False
        assert result["log_level"] == "INFO"


class TestConfigurationServiceFactory:
    """Tests for ConfigurationServiceFactory."""

    def test_create_from_config(self):
        # Arrange
        config = AppConfig()

        # Act
        service = ConfigurationServiceFactory.create_from_config(config)

        # Assert
        assert isinstance(service, ConfigurationService)
        assert service.raw_config is config

    def test_create_default(self):
        # Act
        service = ConfigurationServiceFactory.create_default()

        # Assert
        assert service.threshold == 0.18
        assert service.log_level == "WARNING"

    def test_create_from_args(self, tmp_path):
        # Act
        service, unknown = ConfigurationServiceFactory.create_from_args(
            ["--threshold", "0.3", "hello", "world"], config_dir=tmp_path
        )

        # Assert
        assert service.threshold == 0.3
        assert unknown == ["hello", "world"]


class TestConfigLoader:
    """Tests for layered configuration loading."""

    def test_defaults(self, tmp_path):
        config, unknown = ConfigLoader(tmp_path).load([])

        assert config.correction.threshold == 0.18
        assert config.correction.tree_threshold == 200
        assert config.vocabulary.bundled_path == str(tmp_path / "default_custom_vocab.txt")
        assert config.vocabulary.user_path is None
        assert config.normalization == NormalizationConfig()
        assert config.log_level == "WARNING"
        assert unknown == []

    def test_default_bundled_vocabulary_lives_in_config_package(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config, _ = ConfigLoader().load([])

        bundled = Path(config.vocabulary.bundled_path)
        assert bundled.is_absolute()
        assert bundled.is_file()
        assert bundled.parent == CONFIG_DIR
        assert VocabularyConfig().bundled_path == str(bundled)

    def test_settings_file_overrides_defaults(self, tmp_path):
        settings = {
            "correction": {"threshold": 0.4},
            "vocabulary": {"words": ["Lipitor"]},
            "normalization": {"times": False},
        }
        (tmp_path / "settings.json").write_text(json.dumps(settings), encoding="utf-8")

        config, _ = ConfigLoader(tmp_path).load([])

        assert config.correction.threshold == 0.4
        assert config.correction.length_window == 5
        assert config.vocabulary.words == ("Lipitor",)
        assert config.normalization.times is False
        assert config.normalization.years is True

    def test_env_overrides_settings_file(self, tmp_path, monkeypatch):
        (tmp_path / "settings.json").write_text('{"correction": {"threshold": 0.4}}', encoding="utf-8")
        monkeypatch.setenv("CORRECTION_THRESHOLD", "0.1")
        monkeypatch.setenv("CUSTOM_VOCAB_PATH", "/tmp/words.txt")
        monkeypatch.setenv("NORMALIZE_YEARS", "false")
        monkeypatch.setenv("LOG_LEVEL", "info")

        config, _ = ConfigLoader(tmp_path).load([])

        assert config.correction.threshold == 0.1
        assert config.vocabulary.user_path == "/tmp/words.txt"
        assert config.normalization.years is False
        assert config.log_level == "INFO"

    def test_cli_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CORRECTION_THRESHOLD", "0.1")

        config, _ = ConfigLoader(tmp_path).load(
            ["--threshold", "0.5", "--vocab", "mine.txt", "--no-measurements", "--no-correction", "--log-level", "debug"]
        )

        assert config.correction.threshold == 0.5
        assert config.correction.enabled is False
        assert config.vocabulary.user_path == "mine.txt"
        assert config.normalization.measurements is False
        assert config.log_level == "DEBUG"

    def test_debug_flag(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        config, _ = ConfigLoader(tmp_path).load([])
        assert config.debug is True

    def test_unknown_args_are_returned(self, tmp_path):
        _, unknown = ConfigLoader(tmp_path).load(["--input", "notes.txt", "--debug"])
        assert unknown == ["--input", "notes.txt"]

    def test_invalid_json_raises(self, tmp_path):
        (tmp_path / "settings.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load([])

    def test_non_object_settings_raise(self, tmp_path):
        (tmp_path / "settings.json").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load([])

    def test_unknown_settings_key_raises(self, tmp_path):
        (tmp_path / "settings.json").write_text('{"correction": {"bogus": 1}}', encoding="utf-8")
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load([])

    def test_invalid_threshold_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load(["--threshold", "1.5"])

    def test_invalid_env_threshold_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CORRECTION_THRESHOLD", "high")
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path).load([])

    def test_invalid_log_level_raises(self):
        with pytest.raises(ConfigurationError):
            AppConfig(log_level="LOUD")


def test_config_module_exports():
    import config.config as config_module

    assert set(config_module.__all__) == {
        "AppConfig", "CorrectionConfig", "VocabularyConfig", "NormalizationConfig", "CONFIG_DIR", "ConfigLoader",
    }
    for name in config_module.__all__:
        assert hasattr(config_module, name)
