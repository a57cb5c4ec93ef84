"""Unit tests for environment configuration."""

import pytest
from pydantic import ValidationError

from asic_manifest.shared.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        """Test defaults when nothing is configured."""
        monkeypatch.delenv("ASIC_EXPECTED_MIMETYPE", raising=False)
        monkeypatch.delenv("ASIC_STRICT", raising=False)
        monkeypatch.delenv("ASIC_OUTPUT_INDENT", raising=False)

        settings = get_settings()

        assert settings.expected_mimetype is None
        assert settings.strict is False
        assert settings.output_indent == "  "

    def test_loaded_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test values are read from environment variables."""
        monkeypatch.setenv("ASIC_EXPECTED_MIMETYPE", "application/vnd.etsi.asic-s+zip")
        monkeypatch.setenv("ASIC_STRICT", "true")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        settings = get_settings()

        assert settings.expected_mimetype == "application/vnd.etsi.asic-s+zip"
        assert settings.strict is True
        assert settings.log_level == "WARNING"

    def test_empty_expected_mimetype_is_unset(self, monkeypatch: pytest.MonkeyPatch):
        """Test an empty value means no expectation."""
        monkeypatch.setenv("ASIC_EXPECTED_MIMETYPE", "")

        assert get_settings().expected_mimetype is None

    def test_settings_are_cached(self):
        """Test the same instance is returned until the cache is cleared."""
        assert get_settings() is get_settings()

    @pytest.mark.parametrize("indent", ["x", "         ", " \t"])
    def test_invalid_indent_rejected(self, indent: str):
        """Test only short whitespace indents are accepted."""
        with pytest.raises(ValidationError):
            Settings(output_indent=indent)

    @pytest.mark.parametrize("indent", ["", "\t", "    "])
    def test_valid_indent(self, indent: str):
        """Test spaces and a single tab are accepted."""
        assert Settings(output_indent=indent).output_indent == indent

    def test_invalid_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch):
        """Test unknown log levels fail fast."""
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")

        with pytest.raises(ValidationError):
            get_settings()
