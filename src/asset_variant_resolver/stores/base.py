"""Base abstractions for asset stores.

This module defines the byte-store interface the resolver fetches
manifests and images through. A store may answer synchronously with
bytes, or hand back an awaitable when the bytes need I/O.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

LoadResult = bytes | Awaitable[bytes]


class AssetStore(ABC):
    """Abstract base class for all asset stores.

    Implementations provide platform-specific logic for fetching
    named bytes, while adhering to this common interface.

    Structured data parsed from a store (such as a manifest) is
    memoized per instance, so repeated resolutions against the same
    store parse each manifest once. Failures are never cached.
    """

    def __init__(self) -> None:
        self._structured_cache: dict[tuple[str, Callable[[bytes], Any]], Any] = {}

    @abstractmethod
    def load(self, name: str) -> LoadResult:
        """Fetch the bytes stored under a name.

        Args:
            name: Store-relative name (e.g. 'AssetManifest.bin')

        Returns:
            The bytes, or an awaitable producing them

        Raises:
            StoreLoadError: If the name cannot be served. Asynchronous
                implementations may raise from the awaitable instead.
        """
        pass

    def load_structured_data(
        self, name: str, parser: Callable[[bytes], T]
    ) -> T | Awaitable[T]:
        """Fetch bytes and run a parser over them, memoizing the result.

        Completes synchronously when the store answered synchronously,
        otherwise returns an awaitable.

        Args:
            name: Store-relative name to load
            parser: Callable turning the raw bytes into a value

        Raises:
            Exception: Whatever load() or parser raise on the synchronous path
        """
        cache_key = (name, parser)
        if cache_key in self._structured_cache:
            return self._structured_cache[cache_key]  # type: ignore[no-any-return]

        data = self.load(name)
        if inspect.isawaitable(data):
            return self._load_structured_later(cache_key, data, parser)

        result = parser(data)
        self._structured_cache[cache_key] = result
        logger.debug("Parsed and cached %s from %s", name, self)
        return result

    async def _load_structured_later(
        self,
        cache_key: tuple[str, Callable[[bytes], Any]],
        pending: Awaitable[bytes],
        parser: Callable[[bytes], T],
    ) -> T:
        result = parser(await pending)
        self._structured_cache[cache_key] = result
        logger.debug("Parsed and cached %s from %s", cache_key[0], self)
        return result

    def evict(self, name: str) -> None:
        """Drop memoized structured data parsed from a name."""
        for cache_key in [k for k in self._structured_cache if k[0] == name]:
            del self._structured_cache[cache_key]

    def clear(self) -> None:
        """Drop all memoized structured data."""
        self._structured_cache.clear()
