"""Logging setup for the domain finder, with API-key masking."""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

LOGGER_NAME = "domain_finder"
REDACTED = "***"


def redact_secrets(text: str, secrets: Iterable[str]) -> str:
    """Replace every non-empty secret in text with ***."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


class SecretRedactingFilter(logging.Filter):
    """Masks registered secrets (e.g. the Gemini key embedded in request URLs) in log records."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self._secrets: set[str] = {s for s in secrets if s}

    def add_secret(self, secret: str) -> None:
        if secret:
            self._secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = redact_secrets(message, self._secrets)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


_redaction_filter = SecretRedactingFilter()
logging.getLogger(LOGGER_NAME).addFilter(_redaction_filter)


def register_secret(secret: str) -> None:
    """Mask secret in everything the application logger writes from now on."""
    _redaction_filter.add_secret(secret)


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    secrets: Iterable[str] = (),
) -> logging.Logger:
    """
    Configure and return a logger.

    Args:
        name: Logger name.
        level: Logging level.
        log_file: Optional path to log file. If None, logs to stderr only.
        secrets: Values (API keys) to mask in every record.

    Returns:
        Configured logger.
    """
    for secret in secrets:
        register_secret(secret)

    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level)
    log.addFilter(_redaction_filter)
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the application logger. Use after setup_logger has been called."""
    return logging.getLogger(name)
