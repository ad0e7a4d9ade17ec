"""Core records, errors and schema validation.

This package contains the data types, exception hierarchy and
JSON Schema checks that are shared by the manifest parsers,
the resolver and the stores.
"""

from .errors import (
    AssetResolutionError,
    EmptyManifestError,
    MalformedBinaryError,
    MalformedJsonError,
    MalformedVariantError,
    ManifestParseError,
    StoreLoadError,
)
from .types import AssetKey, BinaryVariantEntry, LegacyManifestData, VariantRecord
from .validator import (
    validate_legacy_manifest,
    validate_legacy_manifest_with_error_details,
    validate_variant_entry,
    validate_variant_entry_with_error_details,
)

__all__ = [
    "AssetKey",
    "AssetResolutionError",
    "BinaryVariantEntry",
    "EmptyManifestError",
    "LegacyManifestData",
    "MalformedBinaryError",
    "MalformedJsonError",
    "MalformedVariantError",
    "ManifestParseError",
    "StoreLoadError",
    "VariantRecord",
    "validate_legacy_manifest",
    "validate_legacy_manifest_with_error_details",
    "validate_variant_entry",
    "validate_variant_entry_with_error_details",
]
