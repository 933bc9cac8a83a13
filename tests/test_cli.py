"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from langsift.cli.main import app
from langsift.core.detection.detector import LanguageDetector

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("langsift.models.config.DEFAULT_CONFIG_PATHS", [tmp_path / "langsift.toml"])


class TestDetectCommand:
    """Tests for ``langsift detect``."""

    def test_detects_language(self, models_dir):
        result = runner.invoke(app, ["detect", "Gallia est omnis divisa in partes tres", "-m", str(models_dir)])

        assert result.exit_code == 0
        assert "LATIN" in result.output

    def test_confidence_table(self, models_dir):
        result = runner.invoke(
            app, ["detect", "the children are playing", "-m", str(models_dir), "--languages", "en,de", "--confidence"]
        )

        assert result.exit_code == 0
        assert "ENGLISH" in result.output
        assert "GERMAN" in result.output
        assert "FRENCH" not in result.output

    def test_confidence_table_evaluates_text_once(self, models_dir, monkeypatch):
        evaluate = LanguageDetector._evaluate
        calls = []

        def counting_evaluate(detector, text):
            calls.append(text)
            return evaluate(detector, text)

        monkeypatch.setattr(LanguageDetector, "_evaluate", counting_evaluate)

        result = runner.invoke(app, ["detect", "cogito ergo sum", "-m", str(models_dir), "--confidence"])

        assert result.exit_code == 0
        assert calls == ["cogito ergo sum"]

    def test_unknown_text(self, models_dir):
        result = runner.invoke(app, ["detect", "12345", "-m", str(models_dir)])

        assert result.exit_code == 0
        assert "could not be determined" in result.output

    def test_exclude_and_spoken(self, models_dir):
        result = runner.invoke(
            app, ["detect", "Gallia est omnis divisa", "-m", str(models_dir), "--spoken", "-x", "pt", "--confidence"]
        )

        assert result.exit_code == 0
        assert "LATIN" not in result.output
        assert "PORTUGUESE" not in result.output

    def test_single_language_is_rejected(self, models_dir):
        result = runner.invoke(app, ["detect", "hallo", "-m", str(models_dir), "--languages", "de"])

        assert result.exit_code == 1
        assert "at least 2 languages" in result.output

    def test_unknown_code_is_rejected(self, models_dir):
        result = runner.invoke(app, ["detect", "hallo", "-m", str(models_dir), "--exclude", "xx"])

        assert result.exit_code == 1

    def test_languages_conflicts_with_exclude(self, models_dir):
        result = runner.invoke(app, ["detect", "hallo", "-m", str(models_dir), "-l", "de,en", "-x", "fr"])

        assert result.exit_code == 1

    def test_missing_models(self, tmp_path):
        result = runner.invoke(app, ["detect", "hello world", "-m", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "ENGLISH" in result.output


class TestOtherCommands:
    """Tests for ``languages``, ``config`` and ``validate``."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "LangSift version" in result.output

    def test_languages(self):
        result = runner.invoke(app, ["languages"])

        assert result.exit_code == 0
        for name in ("ENGLISH", "FRENCH", "GERMAN", "ITALIAN", "LATIN", "PORTUGUESE", "SPANISH"):
            assert name in result.output
        assert "UNKNOWN" not in result.output

    def test_config_init_and_show(self, tmp_path):
        init = runner.invoke(app, ["config", "--init"])
        show = runner.invoke(app, ["config", "--show"])

        assert init.exit_code == 0
        assert (tmp_path / "langsift.toml").exists()
        assert show.exit_code == 0
        assert "Smoothing Constant" in show.output

    def test_config_without_action(self):
        assert runner.invoke(app, ["config"]).exit_code == 1

    def test_validate(self, tmp_path):
        good = tmp_path / "good.toml"
        good.write_text("[detection]\nminimum_relative_distance = 0.2\n", encoding="utf-8")
        bad = tmp_path / "bad.toml"
        bad.write_text("[detection]\nminimum_relative_distance = 2.0\n", encoding="utf-8")

        assert runner.invoke(app, ["validate", str(good)]).exit_code == 0
        assert runner.invoke(app, ["validate", str(bad)]).exit_code == 1
        assert runner.invoke(app, ["validate", str(tmp_path / "absent.toml")]).exit_code == 1

    def test_detect_uses_config_file(self, tmp_path, models_dir):
        config_file = tmp_path / "custom.toml"
        config_file.write_text(f"[models]\nmodels_dir = '{models_dir.as_posix()}'\n", encoding="utf-8")

        result = runner.invoke(app, ["detect", "Cogito, ergo sum", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "LATIN" in result.output
