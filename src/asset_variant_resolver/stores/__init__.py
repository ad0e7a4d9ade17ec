"""Asset stores for the resolution pipeline.

This package contains the base interface for byte stores.
Platform-specific implementations live in the platforms/ directory.
"""

from .base import AssetStore, LoadResult

__all__ = ["AssetStore", "LoadResult"]
