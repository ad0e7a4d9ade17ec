"""Type definitions for asset variant manifests and resolution results.

This module defines the records that flow between the manifest parsers,
the variant resolver and the request sequencer, plus TypedDict classes
that mirror the JSON schemas in schemas/.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypedDict

if TYPE_CHECKING:
    from ..stores.base import AssetStore


class BinaryVariantEntry(TypedDict):
    """One variant entry of the binary manifest, as decoded."""

    asset: str  # Store name to load the variant bytes from
    dpr: float  # Device pixel ratio the variant was authored for


# Legacy manifest shape: main asset key -> variant paths (main asset included)
LegacyManifestData = dict[str, list[str]]


@dataclass(frozen=True)
class VariantRecord:
    """A candidate asset path and the density it was authored for.

    Attributes:
        path: Name to load the asset bytes from
        density: Nominal device pixel ratio (1.0 is the main asset)
    """

    path: str
    density: float

    def __post_init__(self) -> None:
        if not self.density > 0:
            raise ValueError(
                f"Variant density must be positive, got {self.density!r} for {self.path!r}"
            )


@dataclass(frozen=True)
class AssetKey:
    """Identity of a resolved asset instance.

    Two resolutions that produce equal keys load the same bytes from the
    same store and render them at the same scale, so downstream caches
    can treat them as interchangeable.

    Attributes:
        store: The store the chosen variant is loaded from
        name: Path of the chosen variant within the store
        scale: Density of the chosen variant, used as the image scale
    """

    store: "AssetStore"
    name: str
    scale: float

    def as_tuple(self) -> tuple[Any, str, float]:
        """Return the key as a plain (store, name, scale) tuple."""
        return (self.store, self.name, self.scale)
