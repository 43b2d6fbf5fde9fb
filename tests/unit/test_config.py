"""
Unit tests for configuration.
"""

from pathlib import Path

import pytest

from course_admin.utils.config import Config, SecureString, reveal


class TestSecureString:
    def test_hidden_in_str_and_repr(self):
        password = SecureString("secret123")

        assert str(password) == "********"
        assert "secret123" not in repr(password)
        assert password.get_value() == "secret123"

    def test_reveal(self):
        assert reveal(SecureString("a")) == "a"
        assert reveal("b") == "b"
        assert reveal(None) == ""

    def test_truthiness(self):
        assert SecureString("a")
        assert not SecureString("")


class TestConfig:
    """Test cases for Config."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "COURSE_API_URL", "COURSE_API_SUFFIX", "COURSE_API_TIMEOUT",
            "COURSE_SESSION_FILE", "COURSE_SUCCESS_MESSAGE_SECONDS",
            "COURSE_ADMIN_EMAIL", "COURSE_ADMIN_PASSWORD", "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        cfg = Config()

        assert cfg.api_url == "http://localhost:8000"
        assert cfg.api_suffix == ""
        assert cfg.api_timeout == 30.0
        assert cfg.session_file == Path("output/session.json")
        assert cfg.success_message_seconds == 3.0
        assert cfg.admin_password is None
        assert cfg.validate()

    def test_password_wrapped(self, monkeypatch):
        monkeypatch.setenv("COURSE_ADMIN_PASSWORD", "s3cret")

        assert Config().admin_password == SecureString("s3cret")

    @pytest.mark.parametrize("url", ["localhost:8000", "ftp://example.com", "http://"])
    def test_invalid_url(self, monkeypatch, url):
        monkeypatch.setenv("COURSE_API_URL", url)

        with pytest.raises(ValueError):
            Config()

    def test_validate_collects_all_problems(self, monkeypatch):
        monkeypatch.setenv("COURSE_ADMIN_EMAIL", "nobody")
        monkeypatch.setenv("COURSE_API_SUFFIX", "php")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValueError) as exc_info:
            Config().validate()

        message = str(exc_info.value)
        assert "COURSE_ADMIN_EMAIL" in message
        assert "COURSE_API_SUFFIX" in message
        assert "LOG_LEVEL" in message
