from __future__ import annotations
# -*- coding: utf-8 -*-

"""
diagnostics.py – Severity-classified messages for the user.

Components never print. They receive a DiagnosticSink and classify each
message (error, warning, success, info, verbose, suggestion). Suppression and
formatting belong to the sink:

- LoggingDiagnostics routes messages through the stdlib `logging` module;
  configure_console_logging() installs the console handlers and applies the
  quiet/verbose threshold.
- DiagnosticCollector keeps everything in memory (tests, embedding).
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Protocol

SUCCESS = 25
SUGGESTION = 35
VERBOSE = logging.DEBUG

logging.addLevelName(SUCCESS, "SUCCESS")
logging.addLevelName(SUGGESTION, "SUGGESTION")

SEVERITIES = ("error", "warning", "success", "info", "verbose", "suggestion")

LOGGER_NAME = "coalesce"

_ANSI = {
    logging.ERROR: "\033[31m",
    logging.WARNING: "\033[33m",
    SUCCESS: "\033[32m",
    VERBOSE: "\033[90m",
}
_ANSI_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticsConfig:
    quiet: bool = False
    verbose: bool = False
    no_color: bool = False

    @property
    def conflicting(self) -> bool:
        return self.quiet and self.verbose

    @property
    def threshold(self) -> int:
        # quiet wins over verbose
        if self.quiet:
            return logging.WARNING
        if self.verbose:
            return VERBOSE
        return logging.INFO


class DiagnosticSink(Protocol):
    def error(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def verbose(self, message: str) -> None:
        ...

    def suggestion(self, message: str) -> None:
        ...


class DiagnosticItem(NamedTuple):
    severity: str
    message: str


class DiagnosticCollector:
    """Records every message; no suppression, no formatting."""

    def __init__(self) -> None:
        self._items: List[DiagnosticItem] = []

    @property
    def items(self) -> List[DiagnosticItem]:
        return list(self._items)

    def messages(self, severity: Optional[str] = None) -> List[str]:
        return [it.message for it in self._items if severity is None or it.severity == severity]

    def has(self, severity: str) -> bool:
        return any(it.severity == severity for it in self._items)

    def _add(self, severity: str, message: str) -> None:
        self._items.append(DiagnosticItem(severity, message))

    def error(self, message: str) -> None:
        self._add("error", message)

    def warning(self, message: str) -> None:
        self._add("warning", message)

    def success(self, message: str) -> None:
        self._add("success", message)

    def info(self, message: str) -> None:
        self._add("info", message)

    def verbose(self, message: str) -> None:
        self._add("verbose", message)

    def suggestion(self, message: str) -> None:
        self._add("suggestion", message)


class LoggingDiagnostics:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def success(self, message: str) -> None:
        self.logger.log(SUCCESS, message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def verbose(self, message: str) -> None:
        self.logger.log(VERBOSE, message)

    def suggestion(self, message: str) -> None:
        self.logger.log(SUGGESTION, message)


class ConsoleFormatter(logging.Formatter):
    """'ERROR: ' / 'WARNING: ' prefixes, ANSI colors when enabled."""

    def __init__(self, color: bool = False):
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno == logging.ERROR:
            text = f"ERROR: {text}"
        elif record.levelno == logging.WARNING:
            text = f"WARNING: {text}"
        code = _ANSI.get(record.levelno)
        if self.color and code:
            text = f"{code}{text}{_ANSI_RESET}"
        return text


class _BelowLevel(logging.Filter):
    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def _wants_color(stream, config: DiagnosticsConfig) -> bool:
    if config.no_color or os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


def configure_console_logging(config: DiagnosticsConfig) -> logging.Logger:
    """
    Install stdout/stderr handlers on the 'coalesce' logger.
    Errors go to stderr, everything else to stdout. Calling it again replaces
    the handlers installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        if getattr(h, "_coalesce_console", False):
            logger.removeHandler(h)

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowLevel(logging.ERROR))
    out.setFormatter(ConsoleFormatter(color=_wants_color(sys.stdout, config)))

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.ERROR)
    err.setFormatter(ConsoleFormatter(color=_wants_color(sys.stderr, config)))

    for h in (out, err):
        h._coalesce_console = True  # type: ignore[attr-defined]
        logger.addHandler(h)

    logger.setLevel(config.threshold)
    logger.propagate = False
    return logger


def create_console_diagnostics(config: DiagnosticsConfig) -> LoggingDiagnostics:
    diagnostics = LoggingDiagnostics(configure_console_logging(config))
    if config.conflicting:
        diagnostics.warning(
            "Both --quiet and --verbose flags were specified. "
            "--quiet takes precedence and verbose logs will be suppressed."
        )
    return diagnostics
