"""Tests for logger setup and masking."""

import logging
import logging.handlers

from src.core.logger import SensitiveDataFilter, setup_logger


def _record(msg, args=None):
    return logging.LogRecord("reddilist", logging.INFO, __file__, 1, msg, args, None)


class TestSensitiveDataFilter:
    def test_masks_urls(self):
        record = _record("GET https://oauth.reddit.com/user/alice.json?limit=100")
        SensitiveDataFilter().filter(record)
        assert record.msg == "GET [URL_MASKED]"

    def test_masks_bearer_token(self):
        record = _record("Authorization: bearer abc.def-123")
        SensitiveDataFilter().filter(record)
        assert "abc.def-123" not in record.msg
        assert "[TOKEN_MASKED]" in record.msg


    def test_masks_formatting_args(self):
        record = _record("GET %s with %s", ("https://oauth.reddit.com/user/alice.json", "bearer secret"))
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "GET [URL_MASKED] with bearer [TOKEN_MASKED]"


class TestSetupLogger:
    def test_creates_handlers_once(self, tmp_dir):
        logger = logging.getLogger("reddilist")
        saved = list(logger.handlers)
        logger.handlers.clear()
        try:
            first = setup_logger("DEBUG", log_dir=tmp_dir / "logs")
            second = setup_logger("DEBUG", log_dir=tmp_dir / "logs")
            assert first is second
            assert len(first.handlers) == 2
            assert (tmp_dir / "logs").is_dir()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved

    def test_console_only_and_quiets_urllib3(self, tmp_dir):
        logger = logging.getLogger("reddilist")
        saved = list(logger.handlers)
        logger.handlers.clear()
        try:
            result = setup_logger("DEBUG", log_dir=None)
            assert len(result.handlers) == 1
            assert not isinstance(result.handlers[0], logging.handlers.RotatingFileHandler)
            assert logging.getLogger("urllib3").level == logging.WARNING
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved
