"""Tests for the filesystem platform and the store registry."""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from asset_variant_resolver.codec import StandardMessageCodec
from asset_variant_resolver.core.errors import StoreLoadError
from asset_variant_resolver.core.types import VariantRecord
from asset_variant_resolver.platforms.filesystem import (
    DirectoryAssetStore,
    build_legacy_manifest,
    scan_variants,
    validate_path_safety,
    write_manifests,
)
from asset_variant_resolver.platforms.memory import MemoryAssetStore
from asset_variant_resolver.registry import StoreRegistry
from asset_variant_resolver.sequencer import ResolutionRequestSequencer


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Asset directory with a main asset, two variants and some noise."""
    files = [
        "icons/heart.png",
        "icons/2.0x/heart.png",
        "icons/3x/heart.png",
        "icons/star.png",
        "icons/1.5x/ghost.png",
        "logo.png",
        "2x/logo.png",
        ".hidden/secret.png",
        "icons/.DS_Store",
    ]
    for name in files:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(name.encode())
    return tmp_path


class TestValidatePathSafety:
    """Test path traversal prevention."""

    def test_allows_paths_within_base(self) -> None:
        """Test that paths within base directory are allowed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            # Should not raise
            validate_path_safety(base / "icons" / "2.0x" / "heart.png", base)

    def test_rejects_path_traversal(self) -> None:
        """Test that path traversal attempts are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            dangerous_path = base / ".." / ".." / "etc" / "passwd"

            with pytest.raises(ValueError, match="escapes base directory"):
                validate_path_safety(dangerous_path, base)

    def test_allows_symlinks_within_base(self) -> None:
        """Test that symlinks within base directory are allowed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            target = base / "target.png"
            link = base / "link.png"
            target.touch()
            link.symlink_to(target)

            # Should not raise since link resolves within base
            validate_path_safety(link, base)


class TestDirectoryAssetStore:
    """Test loading bytes from a directory."""

    def test_loads_relative_names(self, asset_dir) -> None:
        """Test that '/'-separated names map to files under the root."""
        store = DirectoryAssetStore(asset_dir)
        assert store.load("icons/2.0x/heart.png") == b"icons/2.0x/heart.png"

    def test_missing_file(self, asset_dir) -> None:
        """Test that a missing name is StoreLoadError."""
        store = DirectoryAssetStore(asset_dir)
        with pytest.raises(StoreLoadError) as excinfo:
            store.load("AssetManifest.bin")
        assert excinfo.value.name == "AssetManifest.bin"

    def test_directory_is_not_loadable(self, asset_dir) -> None:
        """Test that a directory name is StoreLoadError."""
        with pytest.raises(StoreLoadError):
            DirectoryAssetStore(asset_dir).load("icons")

    def test_traversal_is_store_load_error(self, asset_dir) -> None:
        """Test that names escaping the root cannot be loaded."""
        with pytest.raises(StoreLoadError, match="escapes base directory"):
            DirectoryAssetStore(asset_dir / "icons").load("../logo.png")

    def test_rejects_missing_root(self, tmp_path) -> None:
        """Test that the root must exist."""
        with pytest.raises(ValueError, match="does not exist"):
            DirectoryAssetStore(tmp_path / "nope")

    def test_rejects_file_root(self, asset_dir) -> None:
        """Test that the root must be a directory."""
        with pytest.raises(ValueError, match="not a directory"):
            DirectoryAssetStore(asset_dir / "logo.png")


class TestScanVariants:
    """Test grouping of a directory into manifest entries."""

    def test_groups_variants_under_main_assets(self, asset_dir) -> None:
        """Test that density directories become variants of their sibling asset."""
        entries = scan_variants(asset_dir)

        assert list(entries) == ["icons/heart.png", "icons/star.png", "logo.png"]
        assert entries["icons/heart.png"] == [
            VariantRecord("icons/heart.png", 1.0),
            VariantRecord("icons/2.0x/heart.png", 2.0),
            VariantRecord("icons/3x/heart.png", 3.0),
        ]
        assert entries["icons/star.png"] == [VariantRecord("icons/star.png", 1.0)]
        assert entries["logo.png"] == [
            VariantRecord("logo.png", 1.0),
            VariantRecord("2x/logo.png", 2.0),
        ]

    def test_orphan_variants_are_skipped(self, asset_dir, caplog) -> None:
        """Test that a variant without a main asset is reported and dropped."""
        with caplog.at_level(logging.WARNING):
            entries = scan_variants(asset_dir)

        assert "icons/ghost.png" not in entries
        assert "icons/1.5x/ghost.png" in caplog.text

    def test_loose_density_names_are_main_assets(self, tmp_path) -> None:
        """Test that "2.x" and "foo2x" directories are not grouped as variants."""
        for name in ["icons/heart.png", "icons/2.x/heart.png", "icons/foo2x/heart.png"]:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"png")

        entries = scan_variants(tmp_path)

        assert entries["icons/heart.png"] == [VariantRecord("icons/heart.png", 1.0)]
        assert entries["icons/2.x/heart.png"] == [VariantRecord("icons/2.x/heart.png", 1.0)]
        assert entries["icons/foo2x/heart.png"] == [VariantRecord("icons/foo2x/heart.png", 1.0)]

    def test_loose_density_names_resolve_at_one(self, tmp_path) -> None:
        """Test that the legacy manifest keeps such assets at 1.0."""
        path = tmp_path / "icons" / "2.x" / "heart.png"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"png")
        write_manifests(tmp_path)
        (tmp_path / "AssetManifest.bin").unlink()

        sequencer = ResolutionRequestSequencer(DirectoryAssetStore(tmp_path))
        key = sequencer.resolve("icons/2.x/heart.png", 2.0).result()
        assert (key.name, key.scale) == ("icons/2.x/heart.png", 1.0)

    def test_existing_manifests_are_not_assets(self, asset_dir) -> None:
        """Test that rescanning after a build yields the same entries."""
        before = scan_variants(asset_dir)
        write_manifests(asset_dir)
        assert scan_variants(asset_dir) == before


class TestWriteManifests:
    """Test manifest generation."""

    def test_writes_both_encodings(self, asset_dir) -> None:
        """Test that both manifests describe the same variants."""
        binary_path, legacy_path = write_manifests(asset_dir)

        binary = StandardMessageCodec().decode_message(binary_path.read_bytes())
        legacy = json.loads(legacy_path.read_text(encoding="utf-8"))

        assert binary["icons/heart.png"] == [
            {"asset": "icons/heart.png", "dpr": 1.0},
            {"asset": "icons/2.0x/heart.png", "dpr": 2.0},
            {"asset": "icons/3x/heart.png", "dpr": 3.0},
        ]
        assert legacy["icons/heart.png"] == [
            "icons/heart.png",
            "icons/2.0x/heart.png",
            "icons/3x/heart.png",
        ]
        assert set(binary) == set(legacy)

    def test_legacy_manifest_text(self) -> None:
        """Test the JSON rendering of manifest entries."""
        text = build_legacy_manifest({"a.png": [VariantRecord("a.png", 1.0)]})
        assert json.loads(text) == {"a.png": ["a.png"]}

    @pytest.mark.parametrize("manifest_name", ["AssetManifest.bin", "AssetManifest.json"])
    def test_generated_manifests_resolve(self, asset_dir, manifest_name) -> None:
        """Test that either generated manifest alone is enough to resolve."""
        write_manifests(asset_dir)
        other = {"AssetManifest.bin", "AssetManifest.json"} - {manifest_name}
        (asset_dir / other.pop()).unlink()

        sequencer = ResolutionRequestSequencer(DirectoryAssetStore(asset_dir))
        key = sequencer.resolve("icons/heart.png", 2.6).result()
        assert (key.name, key.scale) == ("icons/3x/heart.png", 3.0)


class TestStoreRegistry:
    """Test the platform registry."""

    def test_builtin_platforms_registered(self) -> None:
        """Test that discovery registered the bundled platforms."""
        assert {"filesystem", "memory"} <= set(StoreRegistry.list_stores())

    def test_create_store(self, asset_dir) -> None:
        """Test creating stores by platform name."""
        store = StoreRegistry.create_store("filesystem", path=asset_dir)
        assert isinstance(store, DirectoryAssetStore)
        assert isinstance(StoreRegistry.create_store("memory"), MemoryAssetStore)

    def test_unknown_store(self) -> None:
        """Test that an unregistered platform is rejected."""
        with pytest.raises(ValueError, match="Unknown store: 'ftp'"):
            StoreRegistry.create_store("ftp")

    def test_create_sequencer_passes_sequencer_options(self) -> None:
        """Test that sequencer options aren't forwarded to the store factory."""
        sequencer = StoreRegistry.create_sequencer(
            "memory",
            assets={"m.json": b'{"a.png": ["a.png", "2x/a.png"]}'},
            manifest_name="m.bin",
            legacy_manifest_name="m.json",
        )
        assert sequencer.manifest_name == "m.bin"
        assert sequencer.resolve("a.png", 2.0).result().name == "2x/a.png"

    def test_register_factory(self) -> None:
        """Test that custom platforms can be registered."""
        store = MemoryAssetStore()
        StoreRegistry.register_factory("fixed", lambda **kwargs: store)
        try:
            assert StoreRegistry.create_store("fixed") is store
        finally:
            del StoreRegistry._factories["fixed"]
