"""Centralized logging configuration for Marquee.

All entry points (CLI, server) should call configure_logging() early.

Logging Levels:
- DEBUG: Raw protocol traffic, connection teardown details
- INFO: Connection lifecycle, showtime creation/deletion, handled commands
- WARNING: Unauthorized attempts, dropped connections
- ERROR: Storage failures and unexpected handler errors
"""

import logging
import os
import re
from dataclasses import dataclass, field

# Patterns for secrets that can show up in IRC traffic or config dumps
DEFAULT_REDACT_PATTERNS: list[str] = [
    # NickServ identification: "IDENTIFY <password>" or "IDENTIFY <account> <password>"
    r"\bIDENTIFY\s+(?:\S+\s+)?(\S+)",
    # Server password during registration
    r"^PASS\s+(\S+)",
    # ENV-style assignments: NICKSERV_PASSWORD=secret
    r"\b[A-Z0-9_]+(?:PASSWORD|PASSWD|TOKEN|SECRET)\s*[=:]\s*([^\s\"']+)",
]


@dataclass
class SecretRedactor:
    """Redacts sensitive information from log messages."""

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE | re.MULTILINE)
                for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        """Replace captured secret values with a mask."""
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        full = match.group(0)
        token = match.group(1) if match.lastindex else full
        if token == "***":
            return full
        start, end = match.span(1) if match.lastindex else match.span()
        offset = match.start()
        return full[: start - offset] + "***" + full[end - offset :]


class RedactingFilter(logging.Filter):
    """Logging filter that masks secrets in the rendered message."""

    def __init__(self, redactor: SecretRedactor | None = None) -> None:
        super().__init__()
        self._redactor = redactor or SecretRedactor()

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self._redactor.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - marquee.providers.irc -> providers
    - marquee.showtimes.store -> showtimes
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "marquee":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "uvicorn.access",  # Request logging (health probes)
    "sqlalchemy.engine",
    "aiosqlite",
]


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure logging for Marquee.

    Call this once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses MARQUEE_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output (server mode).
    """
    if level is None:
        level = os.environ.get("MARQUEE_LOG_LEVEL", "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = "INFO"

    log_level = getattr(logging, level)

    if use_rich:
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    handler.addFilter(RedactingFilter())

    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    # Route uvicorn through our handler
    for logger_name in ("uvicorn", "uvicorn.error"):
        uv_logger = logging.getLogger(logger_name)
        uv_logger.handlers = [handler]
        uv_logger.propagate = False
