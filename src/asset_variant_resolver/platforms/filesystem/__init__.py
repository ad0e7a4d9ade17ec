"""Filesystem platform for the resolution pipeline.

This platform serves assets from a local directory and can
generate the asset manifests for that directory.
"""

from pathlib import Path

from .builder import (
    build_binary_manifest,
    build_legacy_manifest,
    scan_variants,
    write_manifests,
)
from .store import DirectoryAssetStore, validate_path_safety

# Auto-register with the registry
from ...registry import StoreRegistry


def _create_filesystem_store(path: Path, **kwargs) -> DirectoryAssetStore:
    """Factory function for creating filesystem stores.

    Args:
        path: Root directory of the assets
        **kwargs: Additional parameters (unused for filesystem)

    Returns:
        DirectoryAssetStore instance
    """
    return DirectoryAssetStore(Path(path))


# Auto-register at module import
StoreRegistry.register_factory("filesystem", _create_filesystem_store)

__all__ = [
    "DirectoryAssetStore",
    "build_binary_manifest",
    "build_legacy_manifest",
    "scan_variants",
    "validate_path_safety",
    "write_manifests",
]
