"""
Settings and configuration for the product showcase.
Handles environment variables with sensible defaults.
"""
import os
from dataclasses import dataclass
from typing import Optional


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """
    Application settings with environment variable support.

    Environment variables (with defaults):
    - CATALOG_PATH: Path to the catalog JSON file
    - CONTACT_EMAIL: Recipient override (None = use the catalog's address)
    - MESSAGE_MAX_LENGTH: Maximum characters allowed in the message field
    - SANITIZE_INPUT: Strip HTML tags from form input before composing mail
    """

    CATALOG_PATH: str = "config/catalog.json"
    CONTACT_EMAIL: Optional[str] = None
    MESSAGE_MAX_LENGTH: int = 1000
    SANITIZE_INPUT: bool = False

    def __post_init__(self):
        """Override defaults with environment variables if present."""
        if "CATALOG_PATH" in os.environ:
            self.CATALOG_PATH = os.environ["CATALOG_PATH"]

        if os.environ.get("CONTACT_EMAIL"):
            self.CONTACT_EMAIL = os.environ["CONTACT_EMAIL"]

        if "MESSAGE_MAX_LENGTH" in os.environ:
            self.MESSAGE_MAX_LENGTH = int(os.environ["MESSAGE_MAX_LENGTH"])

        if "SANITIZE_INPUT" in os.environ:
            self.SANITIZE_INPUT = _parse_bool(os.environ["SANITIZE_INPUT"])


# Global cache for settings instance
_settings_cache: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns the same Settings instance on subsequent calls.

    Returns:
        Settings instance with current configuration
    """
    global _settings_cache

    if _settings_cache is None:
        _settings_cache = Settings()

    return _settings_cache
