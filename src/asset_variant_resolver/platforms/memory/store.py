"""In-memory asset store.

This module provides an AssetStore that serves bytes from a mapping.
It can answer synchronously or through a coroutine, which makes it
useful for embedding prebuilt manifests and for exercising the
asynchronous resolution path.
"""

import asyncio
from collections.abc import Mapping

from ...core.errors import StoreLoadError
from ...stores.base import AssetStore, LoadResult


class MemoryAssetStore(AssetStore):
    """Asset store backed by a name -> bytes mapping.

    Example:
        >>> store = MemoryAssetStore({'AssetManifest.json': b'{}'})
        >>> store.load('AssetManifest.json')
        b'{}'
    """

    def __init__(
        self,
        assets: Mapping[str, bytes] | None = None,
        asynchronous: bool = False,
        latency: float = 0.0,
    ):
        """Initialize memory store.

        Args:
            assets: Initial content, name -> bytes
            asynchronous: Answer loads through a coroutine instead of directly
            latency: Seconds each asynchronous load waits before answering
        """
        super().__init__()
        self.assets: dict[str, bytes] = dict(assets or {})
        self.asynchronous = asynchronous
        self.latency = latency
        self.load_count = 0

    def put(self, name: str, data: bytes) -> None:
        """Store bytes under a name, dropping anything parsed from the old bytes."""
        self.assets[name] = data
        self.evict(name)

    def load(self, name: str) -> LoadResult:
        self.load_count += 1
        if self.asynchronous:
            return self._load_later(name)
        return self._lookup(name)

    def _lookup(self, name: str) -> bytes:
        try:
            return self.assets[name]
        except KeyError:
            raise StoreLoadError(name) from None

    async def _load_later(self, name: str) -> bytes:
        await asyncio.sleep(self.latency)
        return self._lookup(name)

    def __repr__(self) -> str:
        mode = "async" if self.asynchronous else "sync"
        return f"MemoryAssetStore({len(self.assets)} assets, {mode})"
