"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from langsift.core.interfaces import ConfigurationError
from langsift.models.config import (
    MODELS_DIR_ENV_VAR,
    DetectionConfig,
    LangSiftConfig,
    ModelsConfig,
    user_models_dir,
)
from langsift.models.language import NgramOrder


class TestDetectionConfig:
    """Tests for scoring settings."""

    def test_defaults(self):
        config = DetectionConfig()

        assert config.minimum_relative_distance == 0.0
        assert config.active_orders() == list(NgramOrder)
        assert config.weights()[NgramOrder.FIVEGRAM] == 5.0

    def test_low_accuracy_mode_uses_trigrams(self):
        assert DetectionConfig(low_accuracy_mode=True).active_orders() == [NgramOrder.TRIGRAM]

    def test_orders_are_sorted_and_deduplicated(self):
        assert DetectionConfig(orders=[3, 1, 3]).orders == [1, 3]

    @pytest.mark.parametrize("data", [
        {"minimum_relative_distance": 1.0},
        {"minimum_relative_distance": -0.1},
        {"smoothing_constant": 0.0},
        {"orders": []},
        {"orders": [6]},
        {"order_weights": {1: -1.0}},
        {"orders": [1, 2], "order_weights": {1: 1.0}},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ConfigurationError):
            LangSiftConfig.from_dict({"detection": data})


class TestModelsConfig:
    """Tests for models directory resolution."""

    def test_configured_dir_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv(MODELS_DIR_ENV_VAR, str(tmp_path / "env"))

        assert ModelsConfig(models_dir=str(tmp_path)).resolve_models_dir() == tmp_path

    def test_environment_variable(self, tmp_path, monkeypatch):
        monkeypatch.setenv(MODELS_DIR_ENV_VAR, str(tmp_path))

        assert ModelsConfig().resolve_models_dir() == tmp_path

    def test_packaged_dir_when_present(self, tmp_path, monkeypatch):
        monkeypatch.delenv(MODELS_DIR_ENV_VAR, raising=False)
        monkeypatch.setattr("langsift.models.config.PACKAGED_MODELS_DIR", tmp_path)

        assert ModelsConfig().resolve_models_dir() == tmp_path

    def test_user_data_dir_is_last_resort(self, tmp_path, monkeypatch):
        monkeypatch.delenv(MODELS_DIR_ENV_VAR, raising=False)
        monkeypatch.setattr("langsift.models.config.PACKAGED_MODELS_DIR", tmp_path / "absent")

        resolved = ModelsConfig().resolve_models_dir()

        assert resolved == user_models_dir()
        assert resolved.name == "language-models"

    def test_unknown_source_type(self):
        with pytest.raises(ConfigurationError):
            LangSiftConfig.from_dict({"models": {"source_type": "s3"}})


class TestLangSiftConfigFiles:
    """Tests for TOML persistence and discovery."""

    def test_round_trip(self, tmp_path):
        config = LangSiftConfig()
        config.detection.minimum_relative_distance = 0.25
        config.detection.order_weights = {1: 0.5, 2: 1.0, 3: 2.0, 4: 3.0, 5: 4.0}
        config.models.models_dir = str(tmp_path / "models")
        config.logging.level = "DEBUG"
        path = tmp_path / "nested" / "langsift.toml"

        config.to_file(path)
        loaded = LangSiftConfig.from_file(path)

        assert loaded == config
        assert loaded.detection.weights()[NgramOrder.UNIGRAM] == 0.5

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "langsift.toml"
        path.write_text('[detection]\nlow_accuracy_mode = true\n', encoding="utf-8")

        config = LangSiftConfig.from_file(path)

        assert config.detection.low_accuracy_mode
        assert config.preprocessing.max_text_length == 10000

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[detection\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            LangSiftConfig.from_file(path)

    def test_non_numeric_weight_key(self, tmp_path):
        path = tmp_path / "weights.toml"
        path.write_text('[detection.order_weights]\ntri = 3.0\n', encoding="utf-8")

        with pytest.raises(ConfigurationError, match="order number"):
            LangSiftConfig.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            LangSiftConfig.from_file(tmp_path / "absent.toml")

    def test_discover_defaults_without_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("langsift.models.config.DEFAULT_CONFIG_PATHS", [Path("langsift.toml")])

        assert LangSiftConfig.discover() == LangSiftConfig()

    def test_discover_finds_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("langsift.models.config.DEFAULT_CONFIG_PATHS", [Path("langsift.toml")])
        Path("langsift.toml").write_text("[logging]\nlevel = 'info'\n", encoding="utf-8")

        assert LangSiftConfig.discover().logging.level == "INFO"

    def test_discover_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            LangSiftConfig.discover(tmp_path / "absent.toml")
