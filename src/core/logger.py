"""Logging setup for ReddiList with token and URL masking."""

import logging
import logging.handlers
import re
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

# urllib3 logs every request line (path and query) at DEBUG
NOISY_LOGGERS = ("urllib3", "urllib3.connectionpool")


class SensitiveDataFilter(logging.Filter):
    """Mask OAuth bearer tokens and full URLs before a record is emitted.

    The message is rendered with its args first so that values passed as
    %-style arguments are masked too.
    """

    URL_PATTERN = re.compile(r'https?://[^\s]+')
    TOKEN_PATTERN = re.compile(r'(?i)\bbearer\s+[^\s"\']+')

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        message = self.TOKEN_PATTERN.sub('bearer [TOKEN_MASKED]', message)
        record.msg = self.URL_PATTERN.sub('[URL_MASKED]', message)
        record.args = None
        return True


def setup_logger(
    log_level: str = "INFO",
    mask_logs: bool = True,
    log_dir: Path | None = LOG_DIR,
) -> logging.Logger:
    """Set up the "reddilist" logger. Call once at startup.

    Logs go to stderr, so listing output on stdout stays clean. When log_dir
    is given a rotating reddilist.log is written there as well. If the
    logger already has handlers it is returned unchanged.
    """
    logger = logging.getLogger("reddilist")

    if logger.handlers:
        return logger

    logger.setLevel(log_level)
    logger.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_dir / "reddilist.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        ))

    sensitive_filter = SensitiveDataFilter() if mask_logs else None
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        if sensitive_filter:
            handler.addFilter(sensitive_filter)
        logger.addHandler(handler)

    # Request lines would bypass the filter above, so keep them out
    if mask_logs:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger("reddilist")
