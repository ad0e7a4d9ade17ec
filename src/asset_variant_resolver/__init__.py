"""Asset Variant Resolver.

This package picks, for a logical asset name and a target display
density, the best-matching density variant listed in an asset
manifest. Manifests are read from pluggable asset stores in a binary
encoding, with a legacy JSON encoding as fallback.
"""

# Core library interface
from .asset_image import AssetImage, ImageConfiguration
from .registry import StoreRegistry
from .resolution import PendingResolution, ReadyResolution, Resolution
from .resolver import LOW_DENSITY_LIMIT, NATURAL_RESOLUTION, VariantResolver
from .sequencer import ResolutionRequestSequencer, SequencerState
from .stores.base import AssetStore

# Core records and errors
from .core import (
    AssetKey,
    AssetResolutionError,
    EmptyManifestError,
    MalformedBinaryError,
    MalformedJsonError,
    MalformedVariantError,
    ManifestParseError,
    StoreLoadError,
    VariantRecord,
)

# Manifests
from .manifests import (
    AssetManifest,
    BinaryAssetManifest,
    LegacyAssetManifest,
    ManifestEncoding,
    infer_density,
    parse_asset_manifest,
    parse_manifest,
)

__version__ = "0.1.0"

# Auto-discover and register all platforms
StoreRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "AssetImage",
    "ImageConfiguration",
    "ResolutionRequestSequencer",
    "SequencerState",
    "VariantResolver",
    "StoreRegistry",
    "AssetStore",
    "Resolution",
    "ReadyResolution",
    "PendingResolution",
    "LOW_DENSITY_LIMIT",
    "NATURAL_RESOLUTION",
    # Records and errors
    "AssetKey",
    "VariantRecord",
    "AssetResolutionError",
    "EmptyManifestError",
    "MalformedBinaryError",
    "MalformedJsonError",
    "MalformedVariantError",
    "ManifestParseError",
    "StoreLoadError",
    # Manifests
    "AssetManifest",
    "BinaryAssetManifest",
    "LegacyAssetManifest",
    "ManifestEncoding",
    "infer_density",
    "parse_asset_manifest",
    "parse_manifest",
]
