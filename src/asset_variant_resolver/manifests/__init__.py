"""Asset manifest decoders.

This package contains the shared manifest interface and one
implementation per supported encoding.
"""

from .base import AssetManifest
from .binary import BinaryAssetManifest
from .legacy import LegacyAssetManifest, infer_density
from .parser import (
    ASSET_MANIFEST_FILENAME,
    LEGACY_ASSET_MANIFEST_FILENAME,
    ManifestEncoding,
    parse_asset_manifest,
    parse_binary_manifest,
    parse_legacy_manifest,
    parse_manifest,
)

__all__ = [
    "ASSET_MANIFEST_FILENAME",
    "LEGACY_ASSET_MANIFEST_FILENAME",
    "AssetManifest",
    "BinaryAssetManifest",
    "LegacyAssetManifest",
    "ManifestEncoding",
    "infer_density",
    "parse_asset_manifest",
    "parse_binary_manifest",
    "parse_legacy_manifest",
    "parse_manifest",
]
