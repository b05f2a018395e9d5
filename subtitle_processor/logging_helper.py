"""Package logger: progress to stdout, problems to stderr, plus a TRACE level
for dumping whole subtitle blocks."""
import logging
import sys
from typing import Optional

LOGGER_NAME = "subtitle_processor"
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

_LEVELS = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class _UpToLevel(logging.Filter):
    """Pass records at or below a level; keeps stdout free of warnings."""

    def __init__(self, ceiling: int) -> None:
        super().__init__()
        self.ceiling = ceiling

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.ceiling


def _stream_handler(stream, *, floor: int = logging.NOTSET, ceiling: Optional[int] = None) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    handler.setLevel(floor)
    if ceiling is not None:
        handler.addFilter(_UpToLevel(ceiling))
    return handler


def _subtitle_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(_stream_handler(sys.stdout, ceiling=logging.INFO))
        logger.addHandler(_stream_handler(sys.stderr, floor=logging.WARNING))
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


_LOGGER = _subtitle_logger()


def set_log_level(level: str) -> None:
    """Apply a config/CLI level name; anything unrecognized means INFO."""
    _LOGGER.setLevel(_LEVELS.get(str(level or "").strip().lower(), logging.INFO))


def log_trace(message: str) -> None:
    _LOGGER.log(TRACE_LEVEL, message)


def log_debug(message: str) -> None:
    _LOGGER.debug(message)


def log_info(message: str) -> None:
    _LOGGER.info(message)


def log_warn(message: str) -> None:
    _LOGGER.warning(message)


def log_error(message: str) -> None:
    _LOGGER.error(message)


def log_trace_block(title: str, body: str) -> None:
    """Dump a multi-line block (input file, translated block) at TRACE level."""
    if not _LOGGER.isEnabledFor(TRACE_LEVEL):
        return
    lines = (body or "").splitlines() or [""]
    _LOGGER.log(TRACE_LEVEL, "%s BEGIN (%d lines)", title, len(lines))
    for line in lines:
        _LOGGER.log(TRACE_LEVEL, "| %s", line)
    _LOGGER.log(TRACE_LEVEL, "%s END", title)
