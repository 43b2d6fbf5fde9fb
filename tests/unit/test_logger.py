"""
Unit tests for logging utilities.
"""

import logging

import pytest

from course_admin.utils.logger import SensitiveDataFilter, mask_email, mask_token, setup_logger


def make_record(msg, *args):
    return logging.LogRecord("course_admin", logging.INFO, __file__, 1, msg, args, None)


class TestMasking:
    """Test cases for masking helpers."""

    @pytest.mark.parametrize("email,expected", [
        ("user@example.com", "u***@example.com"),
        ("invalid", "***"),
        ("", "***"),
    ])
    def test_mask_email(self, email, expected):
        assert mask_email(email) == expected

    def test_mask_token(self):
        assert mask_token("abcdef123456") == "****3456"
        assert mask_token("abc") == "****"
        assert mask_token(None) == "<none>"


class TestSensitiveDataFilter:
    """Test cases for SensitiveDataFilter."""

    @pytest.fixture
    def log_filter(self):
        return SensitiveDataFilter()

    def test_masks_password(self, log_filter):
        record = make_record("login with password=hunter2")

        assert log_filter.filter(record)
        assert "hunter2" not in record.getMessage()

    def test_masks_bearer_token(self, log_filter):
        record = make_record("Authorization: Bearer %s", "abc.def.ghi")

        log_filter.filter(record)

        assert record.getMessage() == "Authorization: Bearer ********"

    def test_masks_token_field(self, log_filter):
        record = make_record('payload {"token": "tok123"}')

        log_filter.filter(record)

        assert "tok123" not in record.getMessage()

    def test_leaves_plain_messages(self, log_filter):
        record = make_record("Loaded %d courses", 3)

        log_filter.filter(record)

        assert record.getMessage() == "Loaded 3 courses"


class TestSetupLogger:
    def test_handlers_have_filter(self, tmp_path):
        log_file = tmp_path / "logs" / "admin.log"
        logger = setup_logger("course_admin_test_setup", logging.DEBUG, str(log_file))

        try:
            assert len(logger.handlers) == 2
            assert all(
                any(isinstance(f, SensitiveDataFilter) for f in handler.filters)
                for handler in logger.handlers
            )
            assert log_file.parent.exists()
            assert setup_logger("course_admin_test_setup") is logger
            assert len(logger.handlers) == 2
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
