"""Base interface for decoded asset manifests.

This module defines the single lookup capability shared by every
manifest encoding: mapping a main asset key to its variant records.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.types import VariantRecord


class AssetManifest(ABC):
    """Abstract base class for decoded asset manifests.

    Implementations wrap one manifest encoding and expose its
    content as VariantRecord lists. A manifest is read-only once
    built, so it can be shared between resolutions.
    """

    @abstractmethod
    def get_variants(self, key: str) -> list["VariantRecord"]:
        """Return the variants listed for a main asset key.

        Args:
            key: The main asset key (e.g. 'icons/heart.png')

        Returns:
            Variant records in manifest order. An empty list if the
            manifest has no entry for the key.

        Raises:
            MalformedVariantError: If an entry for the key cannot be decoded
        """
        pass
