"""
Utility modules and helper functions.
"""

from .logging import get_log_file_path, get_logger, setup_logging
from .settings import SettingsManager
from .validators import URLValidator

__all__ = ["get_logger", "get_log_file_path", "setup_logging", "SettingsManager", "URLValidator"]
