"""
Tests for cvmatch.utils.config
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cvmatch.utils.config import (
    AppSettings,
    ExtractionSettings,
    LoggingSettings,
    ParsingSettings,
    get_settings,
    reload_settings,
)


class TestExtractionSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENABLE_OCR", raising=False)
        settings = ExtractionSettings()
        assert settings.enable_optical_recognition is False
        assert settings.minimum_text_yield == 400
        assert settings.good_enough_confidence == 0.7
        assert settings.good_enough_length == 500
        assert settings.timeout_ms is None

    @pytest.mark.parametrize("variable", ["ENABLE_OCR", "EXTRACTION_ENABLE_OPTICAL_RECOGNITION"])
    def test_optical_recognition_from_env(self, monkeypatch, variable):
        monkeypatch.setenv(variable, "true")
        assert ExtractionSettings().enable_optical_recognition is True

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ExtractionSettings(timeout_ms=0)


class TestParsingSettings:
    def test_defaults(self):
        settings = ParsingSettings()
        assert settings.minimum_text_yield == 300
        assert settings.header_region_chars == 500
        assert settings.header_region_lines == 15

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PARSING_MINIMUM_TEXT_YIELD", "150")
        assert ParsingSettings().minimum_text_yield == 150


class TestLoggingSettings:
    def test_log_file_relative_to_working_directory(self, monkeypatch):
        monkeypatch.delenv("LOG_FILE_PATH", raising=False)
        file_path = LoggingSettings().file_path
        assert file_path == Path("logs") / "cvmatch.log"
        assert not file_path.is_absolute()

    def test_file_path_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "app.log"))
        assert LoggingSettings().file_path == tmp_path / "app.log"


class TestAppSettings:
    def test_testing_environment(self):
        assert AppSettings().environment == "testing"

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_reload(self, monkeypatch):
        original = get_settings()
        monkeypatch.setenv("UPLOAD_MAX_FILE_SIZE_BYTES", "2048")
        try:
            reloaded = reload_settings()
            assert reloaded is not original
            assert reloaded.upload.max_file_size_bytes == 2048
        finally:
            monkeypatch.delenv("UPLOAD_MAX_FILE_SIZE_BYTES")
            reload_settings()
