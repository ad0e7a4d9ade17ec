"""Command-line interface for the asset variant resolver.

This module provides the CLI entry point for resolving asset keys
against an asset directory and for generating that directory's
asset manifests.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .asset_image import AssetImage, ImageConfiguration
from .core.errors import AssetResolutionError
from .platforms.filesystem import build_legacy_manifest, scan_variants, write_manifests
from .registry import StoreRegistry


def resolve_asset(
    root_path: Path,
    name: str,
    device_pixel_ratio: float | None = None,
    package: str | None = None,
) -> dict[str, object]:
    """Resolve an asset in a directory to its best variant.

    Args:
        root_path: Asset directory containing the manifests
        name: Main asset name
        device_pixel_ratio: Target density; None picks the main asset
        package: Package the asset belongs to, if any

    Returns:
        Dictionary with the chosen variant 'name' and its 'scale'

    Raises:
        AssetResolutionError: If neither manifest can be read
    """
    store = StoreRegistry.create_store("filesystem", path=root_path.resolve())
    image = AssetImage(name, store=store, package=package)

    print(f"Resolving {image.key_name} in {store.root}", file=sys.stderr)
    key = image.obtain_key(ImageConfiguration(device_pixel_ratio=device_pixel_ratio)).result()

    return {"name": key.name, "scale": key.scale}


def run_resolve(args: argparse.Namespace) -> None:
    if args.dpr is not None and args.dpr <= 0:
        print(f"Error: --dpr must be positive, got {args.dpr}", file=sys.stderr)
        sys.exit(1)

    try:
        result = resolve_asset(
            root_path=Path(args.root),
            name=args.name,
            device_pixel_ratio=args.dpr,
            package=args.package,
        )
    except AssetResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    json.dump(result, sys.stdout)
    print()


def run_build_manifest(args: argparse.Namespace) -> None:
    root_path = Path(args.root)

    if args.stdout:
        print(f"Scanning directory: {root_path.resolve()}", file=sys.stderr)
        print(build_legacy_manifest(scan_variants(root_path)))
        return

    binary_path, legacy_path = write_manifests(root_path)
    print(f"Wrote {binary_path}", file=sys.stderr)
    print(f"Wrote {legacy_path}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the resolver CLI."""
    parser = argparse.ArgumentParser(
        description="Resolve density variants of assets and build asset manifests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate AssetManifest.bin and AssetManifest.json for a directory
  avr build-manifest --root build/assets

  # Pick the variant of an icon for a 2.5x screen
  avr resolve --root build/assets --name icons/heart.png --dpr 2.5

  # Asset shipped by a package
  avr resolve --root build/assets --name icons/heart.png --package my_icons --dpr 3
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Log resolution steps to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an asset to its best variant")
    resolve_parser.add_argument("--root", required=True, help="Asset directory with the manifests")
    resolve_parser.add_argument("--name", required=True, help="Main asset name, e.g. icons/heart.png")
    resolve_parser.add_argument("--package", help="Package the asset belongs to")
    resolve_parser.add_argument("--dpr", type=float, help="Target device pixel ratio")

    build_parser = subparsers.add_parser("build-manifest", help="Generate asset manifests for a directory")
    build_parser.add_argument("--root", required=True, help="Asset directory to scan")
    build_parser.add_argument(
        "--stdout", action="store_true", help="Print the legacy JSON manifest instead of writing files"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Validate path exists
    root = Path(args.root)
    if not root.exists():
        print(f"Error: Path does not exist: {root}", file=sys.stderr)
        sys.exit(1)

    if not root.is_dir():
        print(f"Error: Path is not a directory: {root}", file=sys.stderr)
        sys.exit(1)

    if args.command == "resolve":
        run_resolve(args)
    elif args.command == "build-manifest":
        run_build_manifest(args)


if __name__ == "__main__":
    main()
