"""JSON Schema validation for decoded asset manifests.

This module loads the formal JSON Schemas shipped in schemas/ and checks
decoded manifest data against them before it is turned into records.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

# asset_variant_resolver/core/validator.py -> asset_variant_resolver/schemas/
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"
LEGACY_MANIFEST_SCHEMA = "legacy_manifest.schema.json"
VARIANT_ENTRY_SCHEMA = "variant_entry.schema.json"


@lru_cache(maxsize=None)
def load_schema(filename: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas directory.

    Args:
        filename: Schema file name within schemas/

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMA_DIR / filename
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_legacy_manifest(data: Any) -> None:
    """Validate decoded legacy manifest JSON.

    Raises:
        ValidationError: If the data is not an object of string arrays
    """
    jsonschema.validate(instance=data, schema=load_schema(LEGACY_MANIFEST_SCHEMA))


def validate_variant_entry(entry: Any) -> None:
    """Validate one decoded binary manifest variant entry.

    Raises:
        ValidationError: If 'asset' or 'dpr' is missing or mistyped
    """
    jsonschema.validate(instance=entry, schema=load_schema(VARIANT_ENTRY_SCHEMA))


def describe_validation_error(error: ValidationError) -> str:
    """Build a readable one-line description of a schema violation."""
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    return f"Validation error at {error_path}: {error.message}"


def validate_legacy_manifest_with_error_details(data: Any) -> tuple[bool, str | None]:
    """Validate legacy manifest data and return detailed error information.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_legacy_manifest(data)
        return True, None
    except ValidationError as e:
        return False, describe_validation_error(e)


def validate_variant_entry_with_error_details(entry: Any) -> tuple[bool, str | None]:
    """Validate a variant entry and return detailed error information.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_variant_entry(entry)
        return True, None
    except ValidationError as e:
        error_msg = describe_validation_error(e)
        if e.instance is not None:
            error_msg += f"\nInvalid value: {e.instance!r}"
        return False, error_msg
