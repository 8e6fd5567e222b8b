import urllib.parse
from typing import Any, List, Optional, Tuple

from .logging import get_logger


class BaseValidator:
    """Base validator class."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def validate(self, value: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate a value.

        Returns:
            Tuple of (is_valid, error_message)
        """
        raise NotImplementedError


class URLValidator(BaseValidator):
    """Validate plugin source URLs."""

    def __init__(self, allowed_schemes: List[str] = None):
        super().__init__()
        self.allowed_schemes = allowed_schemes or ['http', 'https']

    def validate(self, value: Any) -> Tuple[bool, Optional[str]]:
        """Validate URL."""
        if not isinstance(value, str):
            return False, "URL must be a string"

        if not value.strip():
            return False, "URL cannot be empty"

        try:
            parsed = urllib.parse.urlparse(value)
        except ValueError as e:
            return False, f"Invalid URL format: {e}"

        if not parsed.scheme:
            return False, "URL must include a scheme (http/https)"

        if parsed.scheme not in self.allowed_schemes:
            return False, f"URL scheme must be one of: {', '.join(self.allowed_schemes)}"

        if not parsed.netloc:
            return False, "URL must include a domain"

        return True, None
