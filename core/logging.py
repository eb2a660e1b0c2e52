"""
Logging Module - Centralized logging configuration
=================================================

Every module logs through ``get_logger``, which places it under the
``eliza`` logger tree and stamps each record with the current
conversation context (the turn number while a line is being answered).

Handlers installed by ``setup_logging``:
- stderr console, colored by level, so log lines never interleave with
  the conversation printed on stdout
- ``eliza.log`` in the log directory, plain text or one JSON object per line
- ``errors.log`` in the log directory, JSON, errors only
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, TextIO
import json
import threading


ROOT_LOGGER_NAME = "eliza"

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s%(context_suffix)s"

_local = threading.local()


def _current_context() -> Dict[str, Any]:
    return dict(getattr(_local, "context", {}))


def _context_suffix(record: logging.LogRecord) -> str:
    context = getattr(record, "context", None)
    if not context:
        return ""
    return " | " + " ".join(f"{key}={value}" for key, value in context.items())


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    The conversation context is written under ``context`` so a log
    consumer can group records by turn.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class PlainFormatter(logging.Formatter):
    """Text formatter for the log file; appends context as ``key=value``."""

    def __init__(self):
        super().__init__(PLAIN_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        record.context_suffix = _context_suffix(record)
        return super().format(record)


class ConsoleFormatter(logging.Formatter):
    """
    Short colored lines for the terminal.

    Colors are only emitted when ``use_color`` is set, which
    ``setup_logging`` does for interactive streams.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"[{record.levelname}]"
        if self.use_color:
            color = self.LEVEL_COLORS.get(record.levelno, "")
            level = f"{color}{level}{self.RESET}"

        line = f"{level} {record.name} | {record.getMessage()}{_context_suffix(record)}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that attaches the conversation context to every record.

    Fixed ``extra`` values given to ``get_logger`` are merged in first;
    the per-thread context set with ``set_log_context`` wins on clashes.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        context = dict(self.extra)
        context.update(_current_context())

        extra = kwargs.setdefault("extra", {})
        if context:
            extra["context"] = context
        return msg, kwargs


_configured = False


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_dir: Optional[str] = None,
    log_level: str = "WARNING",
    json_format: bool = False,
    console_output: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Set up logging configuration for the application.

    Only the first call has an effect.

    Args:
        log_dir: Directory for ``eliza.log`` and ``errors.log`` (optional)
        log_level: Minimum log level to capture
        json_format: Write ``eliza.log`` as JSON lines instead of text
        console_output: Also log to ``stream``
        stream: Console stream, stderr by default

    Example:
        setup_logging(log_dir="~/.local/share/eliza/logs", json_format=True)
    """
    global _configured

    if _configured:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    root_logger.handlers.clear()

    if console_output:
        stream = stream or sys.stderr
        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(
            ConsoleFormatter(use_color=getattr(stream, "isatty", lambda: False)())
        )
        root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir).expanduser()
        log_path.mkdir(parents=True, exist_ok=True)

        main_formatter = JSONFormatter() if json_format else PlainFormatter()
        root_logger.addHandler(
            _file_handler(log_path / "eliza.log", logging.DEBUG, main_formatter)
        )
        root_logger.addHandler(
            _file_handler(log_path / "errors.log", logging.ERROR, JSONFormatter())
        )

    _configured = True


def get_logger(name: str, **extra) -> LoggerAdapter:
    """
    Get a logger for a module.

    Args:
        name: Logger name, placed under the ``eliza`` logger tree
        **extra: Context included in every record from this logger

    Example:
        logger = get_logger("rules.engine")
        logger.debug("Rule selected: greeting")
    """
    prefix = f"{ROOT_LOGGER_NAME}."
    full_name = name if name.startswith(prefix) else prefix + name
    return LoggerAdapter(logging.getLogger(full_name), extra)


def set_log_context(**kwargs) -> None:
    """
    Add values to the current thread's logging context.

    Example:
        set_log_context(turn=3)
        logger.info("Answering")  # record.context == {"turn": 3}
    """
    context = _current_context()
    context.update(kwargs)
    _local.context = context


def clear_log_context() -> None:
    """Clear the current thread's logging context."""
    _local.context = {}
