"""
Migration Logger - Unified logging for the migration commands
==============================================================
Replaces the per-script colored print helpers.

Every module uses get_logger() which:
- Prints to stdout with a colored icon per level (info, success, warn, error)
- Also writes to a rotating file ({log_dir}/{name}-{project}.log) when a log
  directory is configured (MF_LOG_DIR or logging.log_dir in the config file)
- File format: [TIMESTAMP] [NAME] [LEVEL] message

Usage:
    from migration_factory.log import get_logger

    logger = get_logger("react18")
    logger.info("Updated react → ^18.3.1")
    logger.success("package.json updated.")
    logger.warn("Could not check peerDependencies for foo")
    logger.error("npm install failed.")
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_RESET = "\033[0m"
_LEVEL_STYLE = {
    logging.DEBUG: ("\033[2m", "·"),
    logging.INFO: ("\033[34m", "ℹ️ "),
    SUCCESS: ("\033[32m", "✅ "),
    logging.WARNING: ("\033[33m", "⚠️ "),
    logging.ERROR: ("\033[31m", "❌ "),
}

_loggers = {}
_log_dir = None
_color = not os.environ.get("NO_COLOR")
_console_level = logging.INFO


class ConsoleFormatter(logging.Formatter):
    """Icon + ANSI color per level, no timestamp (operator-facing)."""

    def format(self, record: logging.LogRecord) -> str:
        code, icon = _LEVEL_STYLE.get(record.levelno, ("", ""))
        text = f"{icon} {record.getMessage()}" if icon else record.getMessage()
        if _color and code:
            return f"{code}{text}{_RESET}"
        return text


def configure(log_dir=None, color: bool = None):
    """Set process-wide logging options. Loggers created earlier get the file handler too."""
    global _log_dir, _color
    if color is not None:
        _color = color
    if log_dir is not None:
        _log_dir = Path(log_dir).expanduser()
        for logger in _loggers.values():
            logger.attach_file_handler()


def set_console_level(level: int):
    """Console threshold for every migration logger, current and future."""
    global _console_level
    _console_level = level
    for logger in _loggers.values():
        logger.set_console_level(level)


class StdoutHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout is at emit time."""

    def emit(self, record):
        self.stream = sys.stdout
        super().emit(record)


class MigrationLogger:
    """Logger with a success level."""

    def __init__(self, name: str, project: str = None):
        self.name = name
        suffix = f"-{project}" if project else ""
        self.logger_name = f"{name}{suffix}"

        self._logger = logging.getLogger(f"migration.{self.logger_name}")
        self._logger.setLevel(logging.DEBUG)

        # Avoid duplicate handlers on repeated get_logger() calls
        if not self._logger.handlers:
            sh = StdoutHandler(sys.stdout)
            sh.setLevel(_console_level)
            sh.setFormatter(ConsoleFormatter())
            self._logger.addHandler(sh)
        self.attach_file_handler()

    def attach_file_handler(self):
        """Add the rotating file handler for the configured log dir, once per file."""
        if _log_dir is None:
            return
        path = _log_dir / f"{self.logger_name}.log"
        for handler in self._logger.handlers:
            if isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(path):
                return
        _log_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        self._logger.addHandler(fh)

    def set_console_level(self, level: int):
        for handler in self._logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(level)

    def info(self, msg: str):
        self._logger.info(msg)

    def success(self, msg: str):
        self._logger.log(SUCCESS, msg)

    def warn(self, msg: str):
        self._logger.warning(msg)

    def error(self, msg: str):
        self._logger.error(msg)

    def debug(self, msg: str):
        self._logger.debug(msg)


def get_logger(name: str, project: str = None) -> MigrationLogger:
    """
    Get or create a MigrationLogger.

    Args:
        name: Module name (e.g., "react18", "node22", "gate")
        project: Project directory name. Appended to the log filename.

    Returns:
        MigrationLogger instance (cached per name+project)
    """
    key = f"{name}-{project}" if project else name
    if key not in _loggers:
        _loggers[key] = MigrationLogger(name, project)
    return _loggers[key]
