"""Filesystem asset store.

This module provides an AssetStore implementation that serves
files from a local asset directory.
"""

import logging
from pathlib import Path

from ...core.errors import StoreLoadError
from ...stores.base import AssetStore

logger = logging.getLogger(__name__)


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    This prevents path traversal attacks.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


class DirectoryAssetStore(AssetStore):
    """Asset store for a local directory.

    Names are '/'-separated paths relative to the root, the same form
    manifest keys use. Loads complete synchronously.

    Example:
        >>> store = DirectoryAssetStore(Path('/path/to/assets'))
        >>> manifest_bytes = store.load('AssetManifest.bin')
    """

    def __init__(self, root: Path):
        """Initialize filesystem store.

        Args:
            root: Directory the asset names are relative to

        Raises:
            ValueError: If root doesn't exist or isn't a directory
        """
        super().__init__()
        self.root = Path(root).resolve()

        if not self.root.exists():
            raise ValueError(f"Path does not exist: {self.root}")

        if not self.root.is_dir():
            raise ValueError(f"Path is not a directory: {self.root}")

    def path_for(self, name: str) -> Path:
        """Map a store name to a file path under the root.

        Raises:
            StoreLoadError: If the name escapes the root directory
        """
        path = self.root.joinpath(*name.split("/"))
        try:
            validate_path_safety(path, self.root)
        except ValueError as e:
            raise StoreLoadError(name, str(e)) from e
        return path

    def load(self, name: str) -> bytes:
        path = self.path_for(name)
        if not path.is_file():
            raise StoreLoadError(name, f"no file at {path}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise StoreLoadError(name, str(e)) from e

    def __repr__(self) -> str:
        return f"DirectoryAssetStore({str(self.root)!r})"
