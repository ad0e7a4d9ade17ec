"""Binary asset manifest (AssetManifest.bin).

The binary manifest is a standard codec message whose top-level value
maps each main asset key to a list of variant maps:

    {"icons/heart.png": [{"asset": "icons/heart.png", "dpr": 1.0},
                         {"asset": "icons/2.0x/heart.png", "dpr": 2.0}]}

New fields may be added to the variant maps later (locale, theme, ...);
unknown fields are ignored.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..codec import CorruptMessageError, StandardMessageCodec
from ..core.errors import EmptyManifestError, MalformedBinaryError, MalformedVariantError
from ..core.types import VariantRecord
from ..core.validator import validate_variant_entry_with_error_details
from .base import AssetManifest

logger = logging.getLogger(__name__)

_codec = StandardMessageCodec()


def variant_from_entry(key: str, entry: Any) -> VariantRecord:
    """Build a VariantRecord from one decoded variant map.

    Raises:
        MalformedVariantError: If 'asset' or 'dpr' is missing or mistyped
    """
    is_valid, error_msg = validate_variant_entry_with_error_details(entry)
    if not is_valid:
        raise MalformedVariantError(f"Malformed variant for '{key}': {error_msg}")
    return VariantRecord(path=entry["asset"], density=float(entry["dpr"]))


class BinaryAssetManifest(AssetManifest):
    """Asset manifest backed by decoded binary manifest data.

    Variant lists are converted to records the first time a key is
    looked up and memoized, so large manifests don't pay for keys that
    are never queried. Two lookups racing on the same key simply both
    compute the list; the last one stored wins and both are equal.

    Example:
        >>> manifest = BinaryAssetManifest.from_message(raw_bytes)
        >>> manifest.get_variants('icons/heart.png')
        [VariantRecord(path='icons/heart.png', density=1.0), ...]
    """

    def __init__(self, data: Mapping[Any, Any]):
        """Initialize from the decoded top-level mapping.

        Args:
            data: Decoded manifest content, key -> list of variant maps
        """
        self._data = data
        self._typed_data: dict[str, list[VariantRecord]] = {}

    @classmethod
    def from_message(cls, message: bytes | None) -> "BinaryAssetManifest":
        """Decode a binary manifest message.

        Raises:
            EmptyManifestError: If the message decodes to no value
            MalformedBinaryError: If the message is corrupt or not a mapping
        """
        try:
            data = _codec.decode_message(message)
        except CorruptMessageError as e:
            raise MalformedBinaryError(f"Corrupt binary asset manifest: {e}") from e

        if data is None:
            raise EmptyManifestError("Binary asset manifest is empty")
        if not isinstance(data, Mapping):
            raise MalformedBinaryError(
                f"Binary asset manifest must be a map, got {type(data).__name__}"
            )
        return cls(data)

    def get_variants(self, key: str) -> list[VariantRecord]:
        cached = self._typed_data.get(key)
        if cached is not None:
            return cached

        entries = self._data.get(key)
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise MalformedVariantError(
                f"Variants for '{key}' must be a list, got {type(entries).__name__}"
            )

        variants = [variant_from_entry(key, entry) for entry in entries]
        self._typed_data[key] = variants
        logger.debug("Materialized %d variants for %s", len(variants), key)
        return variants

    def keys(self) -> list[str]:
        """List the main asset keys present in the manifest."""
        return [key for key in self._data.keys() if isinstance(key, str)]
