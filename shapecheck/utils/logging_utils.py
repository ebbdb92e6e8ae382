import logging
import sys
from typing import Optional

REPORT_FORMAT = "shapecheck: %(levelname)s: %(message)s"
VERBOSE_FORMAT = "shapecheck: %(levelname)s [%(name)s:%(lineno)d]: %(message)s"


def resolve_level(name: Optional[str], default: int) -> int:
    """Turn a level name such as ``"debug"`` into a logging level.

    Unknown or empty names fall back to ``default``.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def configure_cli_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    machine_report: bool = False,
) -> None:
    """Configure root logging for the command line tool.

    Human reports share stdout with records below ``stderr_level``; the rest
    go to stderr. A machine-readable report (json, github-actions) owns
    stdout, so every record goes to stderr instead.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    formatter = logging.Formatter(VERBOSE_FORMAT if level <= logging.DEBUG else REPORT_FORMAT)

    if machine_report:
        stderr_level = logging.DEBUG
    stderr_level = max(stderr_level, logging.DEBUG)

    if stderr_level > logging.DEBUG:
        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.setLevel(logging.DEBUG)
        stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
        stdout_handler.setFormatter(formatter)
        root.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)
    root.addHandler(stderr_handler)
