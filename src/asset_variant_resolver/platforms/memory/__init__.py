"""Memory platform for the resolution pipeline.

This platform serves asset bytes from an in-memory mapping,
either synchronously or asynchronously.
"""

from collections.abc import Mapping

from .store import MemoryAssetStore

# Auto-register with the registry
from ...registry import StoreRegistry


def _create_memory_store(
    assets: Mapping[str, bytes] | None = None,
    asynchronous: bool = False,
    latency: float = 0.0,
    **kwargs,
) -> MemoryAssetStore:
    """Factory function for creating memory stores.

    Args:
        assets: Initial content, name -> bytes
        asynchronous: Answer loads through a coroutine
        latency: Seconds each asynchronous load waits
        **kwargs: Additional parameters (unused for memory)

    Returns:
        MemoryAssetStore instance
    """
    return MemoryAssetStore(assets, asynchronous=asynchronous, latency=latency)


# Auto-register at module import
StoreRegistry.register_factory("memory", _create_memory_store)

__all__ = ["MemoryAssetStore"]
