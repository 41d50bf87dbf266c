"""
utils/logger.py — Project-wide logging configuration
=====================================================
A single `get_logger(name)` factory so every component (sampler,
estimator, adjuster, session, routes) logs with the same colour-coded
console format.
"""

import logging
import sys

from config import LOG_LEVEL

_COLOURS = {
    logging.DEBUG:    "\033[36m",   # cyan
    logging.INFO:     "\033[32m",   # green
    logging.WARNING:  "\033[33m",   # yellow
    logging.ERROR:    "\033[31m",   # red
    logging.CRITICAL: "\033[35m",   # magenta
}
_RESET = "\033[0m"

_BASE_FMT = "%(asctime)s  %(levelname)s  %(name)-18s  %(message)s"
_DATE_FMT = "%H:%M:%S"


class _ColourFormatter(logging.Formatter):
    """Wrap the level tag in its ANSI colour without touching the record."""

    def format(self, record: logging.LogRecord) -> str:
        colour = _COLOURS.get(record.levelno, _RESET)
        plain = record.levelname
        record.levelname = f"{colour}{plain:<8}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


# Loggers already handed out, so repeated calls never stack handlers
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str, level: int = LOG_LEVEL) -> logging.Logger:
    """
    Return (or create) a named logger.

    Parameters
    ----------
    name  : str   Component name shown in log lines, e.g. "imaging.sampler".
    level : int   Minimum severity (default `config.LOG_LEVEL`).
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_ColourFormatter(fmt=_BASE_FMT, datefmt=_DATE_FMT))
    logger.addHandler(handler)

    _loggers[name] = logger
    return logger


def set_level(level: int) -> None:
    """Change the threshold of every logger created so far (used by the CLI)."""
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
