"""Store registry for factory-based sequencer creation.

This module provides a central registry for asset store factories,
enabling platform-agnostic store creation and automatic
platform discovery.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .sequencer import ResolutionRequestSequencer
    from .stores.base import AssetStore

logger = logging.getLogger(__name__)


class StoreRegistry:
    """Central registry for asset store factories.

    This class manages factory functions that create store instances.
    Platforms register themselves when imported, and the registry
    can automatically discover all available platforms.

    It also holds the default store used by AssetImage when neither
    the image nor its configuration names one.
    """

    _factories: dict[str, Callable[..., "AssetStore"]] = {}
    _default_store: "AssetStore | None" = None

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "AssetStore"]) -> None:
        """Register a factory function for creating stores.

        Args:
            name: Name of the store platform (e.g., 'filesystem', 'memory')
            factory: Callable that creates an AssetStore instance

        Example:
            >>> def create_dir_store(path: Path) -> DirectoryAssetStore:
            ...     return DirectoryAssetStore(path)
            >>> StoreRegistry.register_factory('filesystem', create_dir_store)
        """
        cls._factories[name] = factory

    @classmethod
    def create_store(cls, store_name: str, **kwargs) -> "AssetStore":
        """Create a store from a registered platform.

        Args:
            store_name: Name of the registered platform
            **kwargs: Arguments passed to the store factory

        Raises:
            ValueError: If store_name is not registered
        """
        if store_name not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ValueError(f"Unknown store: '{store_name}'. Available stores: {available}")

        return cls._factories[store_name](**kwargs)

    @classmethod
    def create_sequencer(cls, store_name: str, **kwargs) -> "ResolutionRequestSequencer":
        """Create a sequencer over a store from a registered platform.

        Args:
            store_name: Name of the registered platform
            **kwargs: Arguments passed to the store factory.
                     'resolver', 'manifest_name' and 'legacy_manifest_name'
                     are extracted and passed to the sequencer.

        Returns:
            ResolutionRequestSequencer configured with the requested store

        Raises:
            ValueError: If store_name is not registered

        Example:
            >>> sequencer = StoreRegistry.create_sequencer(
            ...     'filesystem',
            ...     path=Path('/assets'),
            ... )
        """
        # Import here to avoid circular dependency
        from .sequencer import ResolutionRequestSequencer

        sequencer_options = {
            option: kwargs.pop(option)
            for option in ("resolver", "manifest_name", "legacy_manifest_name")
            if option in kwargs
        }
        store = cls.create_store(store_name, **kwargs)
        return ResolutionRequestSequencer(store, **sequencer_options)

    @classmethod
    def list_stores(cls) -> list[str]:
        """List all registered store platform names.

        Example:
            >>> StoreRegistry.list_stores()
            ['filesystem', 'memory']
        """
        return list(cls._factories.keys())

    @classmethod
    def set_default_store(cls, store: "AssetStore | None") -> None:
        """Set (or with None, clear) the store used when no other is given."""
        cls._default_store = store

    @classmethod
    def default_store(cls) -> "AssetStore | None":
        return cls._default_store

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        This method iterates through the platforms/ directory and
        attempts to import each platform module. Platforms with
        missing dependencies are skipped.

        Platforms automatically register themselves when imported
        via their __init__.py files.
        """
        platforms_dir = Path(__file__).parent / "platforms"

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / "__init__.py").exists():
                continue

            platform_name = platform_path.name

            try:
                # This triggers auto-registration via the platform's __init__.py
                importlib.import_module(
                    f".platforms.{platform_name}", package="asset_variant_resolver"
                )
            except ImportError as e:
                logger.debug("Skipping platform %s: %s", platform_name, e)
