"""Asset manifest generation from a directory tree.

This module scans an asset directory, groups density variants with
their main asset, and writes the binary and legacy manifests that the
resolver reads.

Variants live in a "<N>x" directory next to their main asset:

    icons/heart.png          main asset (1.0)
    icons/2.0x/heart.png     variant for 2.0
    icons/3x/heart.png       variant for 3.0

The builder only treats a directory named exactly "<N>x" or "<N>.<M>x" as
a density directory. Density inference for legacy manifests is looser
(it also reads "2.x" or "icons2x"), but that never changes what a built
manifest means: anything the builder does not group is written as its own
main asset, and a main asset always resolves at 1.0.
"""

import json
import logging
import os
import re
from pathlib import Path, PurePosixPath

from ...codec import StandardMessageCodec
from ...core.types import VariantRecord
from ...manifests.parser import ASSET_MANIFEST_FILENAME, LEGACY_ASSET_MANIFEST_FILENAME
from .store import validate_path_safety

logger = logging.getLogger(__name__)

# A whole directory name that marks a density variant
VARIANT_DIRECTORY_PATTERN = re.compile(r"^(\d+(\.\d+)?)x$")

MANIFEST_FILENAMES = {ASSET_MANIFEST_FILENAME, LEGACY_ASSET_MANIFEST_FILENAME}

ManifestEntries = dict[str, list[VariantRecord]]


def variant_density(relative_path: PurePosixPath) -> float | None:
    """Return the density of a variant path, or None for a main asset.

    Example:
        "icons/2.0x/heart.png" -> 2.0
        "icons/heart.png" -> None
    """
    if len(relative_path.parts) < 2:
        return None
    match = VARIANT_DIRECTORY_PATTERN.match(relative_path.parent.name)
    if match is None:
        return None
    density = float(match.group(1))
    return density if density > 0 else None


def list_asset_files(root_path: Path) -> list[PurePosixPath]:
    """Recursively list asset files under a directory.

    Hidden files and existing manifests are skipped. Paths are relative
    to the root and '/'-separated.
    """
    files: list[PurePosixPath] = []
    root_path_resolved = root_path.resolve()

    for dirpath, dirnames, filenames in os.walk(root_path_resolved):
        # Skip hidden directories
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))

        for filename in sorted(filenames):
            if filename.startswith(".") or filename in MANIFEST_FILENAMES:
                continue

            file_path = Path(dirpath) / filename
            try:
                validate_path_safety(file_path, root_path_resolved)
            except ValueError as e:
                logger.warning("Skipping %s: %s", file_path, e)
                continue

            relative_path = file_path.relative_to(root_path_resolved)
            files.append(PurePosixPath(relative_path.as_posix()))

    return files


def scan_variants(root_path: Path) -> ManifestEntries:
    """Scan a directory and group variants under their main assets.

    Args:
        root_path: Asset directory to scan

    Returns:
        Main asset key -> records, the main asset (1.0) first and the
        variants after it by ascending density. Keys are sorted.
    """
    main_assets: set[str] = set()
    variants: dict[str, list[VariantRecord]] = {}

    for relative_path in list_asset_files(root_path):
        density = variant_density(relative_path)
        if density is None:
            main_assets.add(str(relative_path))
            continue

        main_key = str(relative_path.parent.parent / relative_path.name)
        variants.setdefault(main_key, []).append(
            VariantRecord(path=str(relative_path), density=density)
        )

    for orphan in sorted(set(variants) - main_assets):
        for record in variants[orphan]:
            logger.warning("Skipping variant %s: no main asset %s", record.path, orphan)

    entries: ManifestEntries = {}
    for key in sorted(main_assets):
        records = [VariantRecord(path=key, density=1.0)]
        records.extend(sorted(variants.get(key, []), key=lambda record: record.density))
        entries[key] = records
    return entries


def build_binary_manifest(entries: ManifestEntries) -> bytes:
    """Encode manifest entries as an AssetManifest.bin message."""
    codec = StandardMessageCodec()
    return codec.encode_message(
        {
            key: [{"asset": record.path, "dpr": float(record.density)} for record in records]
            for key, records in entries.items()
        }
    )


def build_legacy_manifest(entries: ManifestEntries) -> str:
    """Encode manifest entries as AssetManifest.json text."""
    return json.dumps(
        {key: [record.path for record in records] for key, records in entries.items()},
        indent=2,
    )


def write_manifests(root_path: Path) -> tuple[Path, Path]:
    """Scan a directory and write both manifests into it.

    Returns:
        Paths of the written (binary, legacy) manifests
    """
    entries = scan_variants(root_path)
    variant_count = sum(len(records) - 1 for records in entries.values())
    logger.info("Found %d assets with %d variants in %s", len(entries), variant_count, root_path)

    binary_path = root_path / ASSET_MANIFEST_FILENAME
    legacy_path = root_path / LEGACY_ASSET_MANIFEST_FILENAME
    binary_path.write_bytes(build_binary_manifest(entries))
    legacy_path.write_text(build_legacy_manifest(entries) + "\n", encoding="utf-8")
    return binary_path, legacy_path
