"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_settings,
    SettingsValidationError,
    SETTINGS_KEY_THRESHOLD,
)

__all__ = [
    "validate_settings",
    "SettingsValidationError",
    "SETTINGS_KEY_THRESHOLD",
]
