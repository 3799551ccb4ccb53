"""
Application logger with RFC 5424 syslog severity levels.

A single ``pngminify`` logger is shared by the verifier, the batch runner and
the command-line host. Console output carries bare messages; the optional
log file adds timestamps and ``module:function:line`` locations.
"""

import logging
import sys
import threading
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# ============================================================================
# RFC 5424 Syslog Severity Levels
# ============================================================================

# RFC 5424: 0=Emergency, 1=Alert, 2=Critical, 3=Error, 4=Warning, 5=Notice, 6=Informational, 7=Debug
EMERGENCY = 70
ALERT = 60
NOTICE = 25

logging.addLevelName(EMERGENCY, "EMERGENCY")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(NOTICE, "NOTICE")

LOGGER_NAME = "pngminify"


# ============================================================================
# Formatters
# ============================================================================


class DetailedFormatter(logging.Formatter):
    """Formatter with location tracking (module:function:line)."""

    def format(self, record: logging.LogRecord) -> str:
        record.location = f"{record.module}:{record.funcName}:{record.lineno}"
        return super().format(record)


# ============================================================================
# Singleton Logger
# ============================================================================


class PngMinifyLogger:
    """
    Thread-safe singleton logger.

    Features:
    - RFC 5424 syslog severity levels
    - Console output (INFO+) and optional file output (configured level)
    - Optional size- or time-based log rotation
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        self._console_handler: Optional[logging.Handler] = None
        self._file_handler: Optional[logging.Handler] = None
        self._log_dir: Optional[Path] = None

        self._cleanup_handlers()

    def configure(
        self,
        log_level: str = "INFO",
        log_dir: str = "logs",
        enable_console: bool = True,
        enable_file: bool = True,
        rotation_enabled: bool = False,
        rotation_type: str = "size",
        max_bytes: int = 10485760,  # 10 MB
        backup_count: int = 5,
        when: str = "midnight",
    ) -> None:
        """
        Configure the logger with specified settings.

        Args:
            log_level: Logging level for the log file (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files
            enable_console: Enable console output
            enable_file: Enable file output
            rotation_enabled: Enable log rotation
            rotation_type: Type of rotation ("size" or "time")
            max_bytes: Max bytes for size-based rotation
            backup_count: Number of backup files to keep
            when: When to rotate for time-based rotation (e.g., "midnight", "H")
        """
        if rotation_enabled and rotation_type not in ("size", "time"):
            raise ValueError(f"Invalid rotation_type: {rotation_type}. Must be 'size' or 'time'.")

        self._cleanup_handlers()
        self._console_handler = None
        self._file_handler = None
        self._log_dir = None

        level = getattr(logging, log_level.upper(), logging.INFO)
        # The console always shows INFO+; log_level only narrows the file
        self._logger.setLevel(min(level, logging.INFO) if enable_console else level)

        if enable_console:
            self._console_handler = logging.StreamHandler(sys.stdout)
            self._console_handler.setLevel(logging.INFO)
            self._console_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
            self._logger.addHandler(self._console_handler)

        if enable_file:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self._log_dir = log_path
            log_file = log_path / f"pngminify_{datetime.now().strftime('%Y%m%d')}.log"

            if not rotation_enabled:
                self._file_handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)
            elif rotation_type == "size":
                self._file_handler = RotatingFileHandler(
                    log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8", delay=True
                )
            else:
                self._file_handler = TimedRotatingFileHandler(
                    log_file, when=when, backupCount=backup_count, encoding="utf-8", delay=True
                )

            self._file_handler.setLevel(level)
            self._file_handler.setFormatter(
                DetailedFormatter(
                    fmt="%(asctime)s [%(levelname)s] [%(location)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
                )
            )
            self._logger.addHandler(self._file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance."""
        return self._logger

    def _cleanup_handlers(self) -> None:
        """Close and remove all handlers from the logger."""
        for handler in list(self._logger.handlers):
            try:
                handler.close()
            except OSError:
                pass
            self._logger.removeHandler(handler)

    # Convenience methods for RFC 5424 severity levels

    def emergency(self, msg: str, *args, **kwargs) -> None:
        self._logger.log(EMERGENCY, msg, *args, **kwargs)

    def alert(self, msg: str, *args, **kwargs) -> None:
        self._logger.log(ALERT, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def notice(self, msg: str, *args, **kwargs) -> None:
        """Log notice message (severity 5 - normal but significant condition)."""
        self._logger.log(NOTICE, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)


def get_logger() -> PngMinifyLogger:
    """Get the global PngMinifyLogger instance."""
    return PngMinifyLogger()
