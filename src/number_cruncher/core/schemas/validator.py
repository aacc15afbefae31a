"""
Schema Validation Utilities

Validates the settings payload read from the host's configuration file
against ``settings.schema.json``.

The host writes a small JSON object; only ``PointThreshold`` is read.
Unknown keys are left alone so other settings can share the file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


SETTINGS_KEY_THRESHOLD = "PointThreshold"


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class SettingsValidationError(Exception):
    """Raised when a settings payload fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_settings(data: Any) -> None:
    """
    Validate a settings payload against the settings schema.

    Args:
        data: Decoded JSON payload

    Raises:
        SettingsValidationError: If the payload is not an object or a
            known key has the wrong type
    """
    schema = _load_schema("settings")
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        raise SettingsValidationError(
            f"Schema validation failed: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )
