"""
Logging utility for the plugin update checker.

Provides a centralized way to configure and obtain loggers.
"""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

# --- Global Log Settings (Defaults, can be overridden by Config) ---
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "plugin_update_check.log"
DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(levelname)-8s - [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_FILE_SIZE_MB = 5
LOG_BACKUP_COUNT = 3

_logging_configured = False


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = DEFAULT_LOG_FILE,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    max_bytes: int = MAX_LOG_FILE_SIZE_MB * 1024 * 1024,
    backup_count: int = LOG_BACKUP_COUNT,
    log_to_console: bool = True,
):
    """
    Configures root logging with a rotating file handler and optional console handler.
    Call once at application startup; later calls replace the handlers.
    """
    global _logging_configured

    log_level_upper = level.upper()
    numeric_level = getattr(logging, log_level_upper, logging.INFO)
    formatter = logging.Formatter(log_format, date_format)
    root_logger = logging.getLogger()

    if (
        _logging_configured
        and root_logger.level == numeric_level
        and len(root_logger.handlers) > 0
    ):
        logging.getLogger(__name__).debug(
            "Logging setup skipped, seems already configured."
        )
        return

    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    if log_file:
        log_file_path = Path(log_file)
        try:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(
                f"ERROR: Failed to set up file logging for {log_file_path}: {e}",
                file=sys.stderr,
            )
            log_to_console = True

    if log_to_console:
        # stderr keeps CLI output on stdout clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    noisy_libraries = {
        "urllib3.connectionpool": logging.WARNING,
        "requests": logging.WARNING,
    }
    for lib_name, lib_level in noisy_libraries.items():
        logging.getLogger(lib_name).setLevel(lib_level)

    _logging_configured = True
    logging.getLogger(__name__).debug(
        f"Logging initialized at level {log_level_upper} "
        f"(Python {sys.version.split()[0]}, {sys.platform})"
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Returns a logger instance with the specified name.
    If name is None, returns the root logger. Handlers are only installed
    by setup_logging.
    """
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Returns the absolute path to the currently configured log file, if any."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None
