"""
Centralized logging configuration for the animated number application.

Uses rotating file handler with logs stored in logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_VERBOSE: bool = False
# Base directory for logs. Defaults to the project root; setup_logging()
# may point it somewhere else.
_BASE_DIR: Path = Path(__file__).parent.parent.parent
_LOG_DIR: Optional[Path] = None

_env_verbose = os.getenv("ANIMATED_NUMBER_VERBOSE")
if _env_verbose is not None:
    _VERBOSE = str(_env_verbose).strip().lower() in ("1", "true", "on", "yes")

LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'
LOG_FILE_NAME = "animated_number.log"


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    ANIM_COLOR = '\033[38;5;135m'   # Purple for [ANIM] step tracing
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        color = None
        if record.levelno < logging.WARNING and '[ANIM]' in str(record.msg):
            color = self.ANIM_COLOR
        elif record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    if _LOG_DIR is not None:
        return _LOG_DIR
    return _BASE_DIR / "logs"


def setup_logging(debug: bool = False, verbose: bool = False,
                  log_dir: Optional[Path] = None) -> Path:
    """
    Configure application logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, per-step animation tracing is logged as well.
            Verbose mode also implies debug-level logging.
        log_dir: Directory for log files; defaults to ``logs/`` next to
            the project root.

    Returns:
        Path of the active log file
    """
    global _VERBOSE, _LOG_DIR

    debug_enabled = debug or verbose

    if log_dir is not None:
        _LOG_DIR = Path(log_dir)
    target_dir = get_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    log_file = target_dir / LOG_FILE_NAME

    level = logging.DEBUG if debug_enabled else logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace handlers from a previous setup_logging() call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_animated_number_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler._animated_number_handler = True
    root_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        console_handler._animated_number_handler = True
        root_logger.addHandler(console_handler)

    _VERBOSE = bool(verbose)

    root_logger.info(
        "Animated number logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""

    return _VERBOSE
