"""Resolution request sequencing.

This module drives a single resolution from a logical asset key to a
concrete AssetKey: it acquires the asset manifest from a store (binary
encoding first, legacy JSON as a fallback), then asks the
VariantResolver for the best variant.

Stores may answer synchronously (e.g. a local directory) or through an
awaitable. When every step answers synchronously the whole resolution
finishes inside the resolve() call, so an image can be shown in the
same frame it was requested in. Otherwise the result is delivered
later, exactly once, through a PendingResolution.
"""

import inspect
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import Enum

from .core.errors import AssetResolutionError
from .core.types import AssetKey
from .manifests.base import AssetManifest
from .manifests.parser import (
    ASSET_MANIFEST_FILENAME,
    LEGACY_ASSET_MANIFEST_FILENAME,
    parse_binary_manifest,
    parse_legacy_manifest,
)
from .resolution import PendingResolution, ReadyResolution, Resolution
from .resolver import VariantResolver
from .stores.base import AssetStore

logger = logging.getLogger(__name__)

ManifestResult = AssetManifest | Awaitable[AssetManifest]


class SequencerState(Enum):
    """Steps a resolution request moves through."""

    START = "start"
    TRY_MODERN = "try_modern"
    TRY_LEGACY = "try_legacy"
    RESOLVE = "resolve"
    DONE = "done"
    ERROR = "error"


@dataclass
class ResolutionRequest:
    """Bookkeeping for one resolve() call.

    Attributes:
        key: Logical asset key being resolved
        target_density: Device pixel ratio to resolve for, if known
        history: States entered so far, in order
        attempted: Manifest names whose acquisition failed
        errors: The failure for each entry in attempted
    """

    key: str
    target_density: float | None
    history: list[SequencerState] = field(default_factory=lambda: [SequencerState.START])
    attempted: list[str] = field(default_factory=list)
    errors: list[BaseException] = field(default_factory=list)

    @property
    def state(self) -> SequencerState:
        return self.history[-1]

    def transition(self, state: SequencerState) -> None:
        logger.debug("%s: %s -> %s", self.key, self.state.name, state.name)
        self.history.append(state)

    def record_failure(self, name: str, error: BaseException) -> None:
        self.attempted.append(name)
        self.errors.append(error)

    def failure(self) -> AssetResolutionError:
        return AssetResolutionError(self.key, self.attempted, self.errors)


class ResolutionRequestSequencer:
    """Resolves logical asset keys against one store.

    Example:
        >>> sequencer = ResolutionRequestSequencer(DirectoryAssetStore(Path('build/assets')))
        >>> resolution = sequencer.resolve('icons/heart.png', 2.0)
        >>> if resolution.done:
        ...     key = resolution.result()
        ...     print(key.name, key.scale)
        icons/2.0x/heart.png 2.0
    """

    def __init__(
        self,
        store: AssetStore,
        resolver: VariantResolver | None = None,
        manifest_name: str = ASSET_MANIFEST_FILENAME,
        legacy_manifest_name: str = LEGACY_ASSET_MANIFEST_FILENAME,
    ):
        """Initialize the sequencer.

        Args:
            store: Store to load manifests from
            resolver: Variant selection policy (defaults to VariantResolver())
            manifest_name: Name of the binary manifest within the store
            legacy_manifest_name: Name of the legacy JSON manifest within the store
        """
        self.store = store
        self.resolver = resolver or VariantResolver()
        self.manifest_name = manifest_name
        self.legacy_manifest_name = legacy_manifest_name

    def resolve(self, key: str, target_density: float | None = None) -> Resolution[AssetKey]:
        """Resolve a logical asset key to the best variant for a density.

        Args:
            key: Main asset key (e.g. 'icons/heart.png')
            target_density: Device pixel ratio of the screen; None picks the main asset

        Returns:
            ReadyResolution if everything completed inside this call,
            otherwise a PendingResolution completing on the running loop

        Raises:
            AssetResolutionError: If both manifests failed synchronously
            RuntimeError: If the store answered asynchronously outside an event loop
        """
        request = ResolutionRequest(key, target_density)
        manifest = self._acquire(request)
        if inspect.isawaitable(manifest):
            return PendingResolution(self._finish_later(request, manifest))
        return ReadyResolution(self._resolve(request, manifest))

    def _acquire(self, request: ResolutionRequest) -> ManifestResult:
        request.transition(SequencerState.TRY_MODERN)

        # Stores can fail synchronously as well as through the awaitable,
        # so both paths fall back to the legacy manifest.
        try:
            manifest = self._try_modern(request)
        except Exception as error:
            self._modern_failed(request, error)
            return self._try_legacy(request)

        if inspect.isawaitable(manifest):
            return self._await_modern(request, manifest)
        return manifest

    def _try_modern(self, request: ResolutionRequest) -> ManifestResult:
        manifest = self.store.load_structured_data(self.manifest_name, parse_binary_manifest)
        if inspect.isawaitable(manifest):
            return manifest
        # Decode the requested entry now so a malformed one still falls back
        manifest.get_variants(request.key)
        return manifest

    async def _await_modern(
        self, request: ResolutionRequest, pending: Awaitable[AssetManifest]
    ) -> AssetManifest:
        try:
            manifest = await pending
            manifest.get_variants(request.key)
            return manifest
        except Exception as error:
            self._modern_failed(request, error)

        legacy = self._try_legacy(request)
        if inspect.isawaitable(legacy):
            return await legacy
        return legacy

    def _modern_failed(self, request: ResolutionRequest, error: Exception) -> None:
        request.record_failure(self.manifest_name, error)
        logger.warning(
            "Could not use %s for '%s' (%s: %s); falling back to %s",
            self.manifest_name,
            request.key,
            type(error).__name__,
            error,
            self.legacy_manifest_name,
        )
        request.transition(SequencerState.TRY_LEGACY)

    def _try_legacy(self, request: ResolutionRequest) -> ManifestResult:
        try:
            manifest = self.store.load_structured_data(
                self.legacy_manifest_name, parse_legacy_manifest
            )
        except Exception as error:
            raise self._failed(request, error) from error

        if inspect.isawaitable(manifest):
            return self._await_legacy(request, manifest)
        return manifest

    async def _await_legacy(
        self, request: ResolutionRequest, pending: Awaitable[AssetManifest]
    ) -> AssetManifest:
        try:
            return await pending
        except Exception as error:
            raise self._failed(request, error) from error

    def _failed(self, request: ResolutionRequest, error: Exception) -> AssetResolutionError:
        request.record_failure(self.legacy_manifest_name, error)
        request.transition(SequencerState.ERROR)
        return request.failure()

    async def _finish_later(
        self, request: ResolutionRequest, pending: Awaitable[AssetManifest]
    ) -> AssetKey:
        return self._resolve(request, await pending)

    def _resolve(self, request: ResolutionRequest, manifest: AssetManifest) -> AssetKey:
        request.transition(SequencerState.RESOLVE)
        candidates = manifest.get_variants(request.key)
        chosen = self.resolver.choose_variant(request.key, candidates, request.target_density)
        request.transition(SequencerState.DONE)
        return AssetKey(store=self.store, name=chosen.path, scale=chosen.density)
