"""Manifest encoding selection and parsing.

This module names the two supported manifest encodings and provides
the single entry point that turns raw manifest bytes into an
AssetManifest.
"""

from enum import Enum

from .base import AssetManifest
from .binary import BinaryAssetManifest
from .legacy import LegacyAssetManifest

ASSET_MANIFEST_FILENAME = "AssetManifest.bin"
LEGACY_ASSET_MANIFEST_FILENAME = "AssetManifest.json"


class ManifestEncoding(Enum):
    """Supported manifest encodings, valued by their well-known file name."""

    BINARY = ASSET_MANIFEST_FILENAME
    LEGACY_JSON = LEGACY_ASSET_MANIFEST_FILENAME

    @property
    def filename(self) -> str:
        return self.value


def parse_binary_manifest(raw: bytes) -> AssetManifest:
    """Parser for the binary encoding, usable with AssetStore.load_structured_data."""
    return BinaryAssetManifest.from_message(raw)


def parse_legacy_manifest(raw: bytes) -> AssetManifest:
    """Parser for the legacy JSON encoding, usable with AssetStore.load_structured_data."""
    return LegacyAssetManifest.from_bytes(raw)


_PARSERS = {
    ManifestEncoding.BINARY: parse_binary_manifest,
    ManifestEncoding.LEGACY_JSON: parse_legacy_manifest,
}


def parse_manifest(raw: bytes | None, encoding: ManifestEncoding) -> AssetManifest:
    """Parse raw manifest bytes in the given encoding.

    Args:
        raw: Manifest file content
        encoding: Which encoding the bytes use

    Returns:
        A manifest answering get_variants(key) lookups

    Raises:
        EmptyManifestError: Binary manifest decoded to no value
        MalformedBinaryError: Binary manifest is corrupt or not a map
        MalformedJsonError: Legacy manifest is not valid JSON of the right shape
    """
    return _PARSERS[encoding](raw)  # type: ignore[arg-type]


def parse_asset_manifest(raw: bytes) -> AssetManifest:
    """Decode a binary asset manifest directly.

    Mainly useful in tests that want to check a generated manifest.
    """
    return BinaryAssetManifest.from_message(raw)
