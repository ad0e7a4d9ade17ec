"""Asset images: a logical asset name bound to the store it comes from.

Given a main asset and its density variants, AssetImage chooses the most
appropriate variant for the device pixel ratio in an ImageConfiguration.

Assets that belong to a package are addressed by prefixing
'packages/<package>/' to the asset name, so

    AssetImage('icons/heart.png', package='my_icons')

resolves the key 'packages/my_icons/icons/heart.png'.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from .core.types import AssetKey
from .registry import StoreRegistry
from .resolution import Resolution
from .resolver import VariantResolver
from .sequencer import ResolutionRequestSequencer
from .stores.base import AssetStore


@dataclass(frozen=True)
class ImageConfiguration:
    """Layout parameters an asset is resolved for.

    Attributes:
        device_pixel_ratio: Physical pixels per logical pixel, or None if unknown
        store: Store to use when the image doesn't name one
    """

    device_pixel_ratio: float | None = None
    store: AssetStore | None = None

    def copy_with(self, **changes: Any) -> "ImageConfiguration":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True, eq=False)
class AssetImage:
    """A logical asset to be resolved to its best variant.

    Attributes:
        asset_name: Name of the main asset (e.g. 'icons/heart.png')
        store: Store to load from; falls back to the configuration's store,
            then to StoreRegistry's default store
        package: Package the asset belongs to, if any
    """

    asset_name: str
    store: AssetStore | None = None
    package: str | None = None
    resolver: VariantResolver = field(default_factory=VariantResolver, repr=False)

    @property
    def key_name(self) -> str:
        """Manifest key for this asset."""
        if self.package is None:
            return self.asset_name
        return f"packages/{self.package}/{self.asset_name}"

    def choose_store(self, configuration: ImageConfiguration) -> AssetStore:
        """Pick the store this image loads from.

        Raises:
            ValueError: If no store is available anywhere
        """
        store = self.store if self.store is not None else configuration.store
        if store is None:
            store = StoreRegistry.default_store()
        if store is None:
            raise ValueError(
                f"No asset store for '{self.key_name}': set one on the image, "
                "the configuration, or StoreRegistry.set_default_store()"
            )
        return store

    def obtain_key(self, configuration: ImageConfiguration) -> Resolution[AssetKey]:
        """Resolve this image to the variant that best fits a configuration.

        Completes inside the call whenever the store answers synchronously.

        Raises:
            ValueError: If no store is available
            AssetResolutionError: If no manifest could be read synchronously
        """
        sequencer = ResolutionRequestSequencer(self.choose_store(configuration), self.resolver)
        return sequencer.resolve(self.key_name, configuration.device_pixel_ratio)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return other.key_name == self.key_name and other.store == self.store  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((self.key_name, self.store))

    def __repr__(self) -> str:
        return f'{type(self).__name__}(store: {self.store!r}, name: "{self.key_name}")'
