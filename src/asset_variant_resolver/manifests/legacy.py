"""Legacy asset manifest (AssetManifest.json).

The legacy manifest is a JSON object mapping each main asset key to
the list of its variant paths, with the main asset itself included:

    {"icons/heart.png": ["icons/heart.png", "icons/2.0x/heart.png"]}

It carries no densities, so each variant's density is inferred from
the name of the directory that directly contains it.
"""

import json
import logging
import re
from urllib.parse import unquote, urlsplit

from ..core.errors import MalformedJsonError
from ..core.types import VariantRecord
from ..core.validator import validate_legacy_manifest_with_error_details
from .base import AssetManifest

logger = logging.getLogger(__name__)

# Main assets are authored for a device pixel ratio of 1.0
NATURAL_RESOLUTION = 1.0

# Density suffix of a variant directory, e.g. "2.0x" or "3x"
EXTRACT_RATIO_PATTERN = re.compile(r"/?(\d+(\.\d*)?)x$")


def path_segments(path: str) -> list[str]:
    """Split an asset path into its decoded URI path segments.

    Example:
        "assets/icons/2.0x/heart.png" -> ["assets", "icons", "2.0x", "heart.png"]
    """
    uri_path = urlsplit(path).path
    if not uri_path:
        return []
    segments = uri_path.split("/")
    # An absolute path has no segment before its leading slash
    if uri_path.startswith("/"):
        segments = segments[1:]
    return [unquote(segment) for segment in segments]


def infer_density(main_asset: str, variant: str) -> float:
    """Infer a variant's density from its containing directory.

    Only the immediate parent directory is inspected; deeper nesting
    such as "a/2.0x/x/y.png" is not treated as a density directory.

    Args:
        main_asset: Key of the main asset the variant belongs to
        variant: Path of the variant

    Returns:
        1.0 for the main asset itself or a directory without a density
        suffix, otherwise the number in the "<N>x" directory name.

    Example:
        >>> infer_density("assets/icons/heart.png", "assets/icons/2.0x/heart.png")
        2.0
    """
    # The legacy manifest lists the main asset among its own variants
    if main_asset == variant:
        return NATURAL_RESOLUTION

    segments = path_segments(variant)
    directory_name = segments[-2] if len(segments) > 1 else ""

    match = EXTRACT_RATIO_PATTERN.search(directory_name)
    if match is None:
        return NATURAL_RESOLUTION

    density = float(match.group(1))
    if density <= 0:
        logger.warning(
            "Ignoring non-positive density directory '%s' for %s", directory_name, variant
        )
        return NATURAL_RESOLUTION
    return density


def adapt_variant_list(main_asset: str, variants: list[str]) -> list[VariantRecord]:
    """Turn a legacy list of variant paths into records with densities."""
    return [
        VariantRecord(path=variant, density=infer_density(main_asset, variant))
        for variant in variants
    ]


class LegacyAssetManifest(AssetManifest):
    """Asset manifest backed by the legacy JSON encoding.

    The whole manifest is adapted eagerly when parsed, since the
    JSON decode already touches every entry.
    """

    def __init__(self, manifest: dict[str, list[VariantRecord]]):
        self.manifest = manifest

    @classmethod
    def from_json_string(cls, json_string: str | None) -> "LegacyAssetManifest":
        """Parse legacy manifest JSON text.

        Args:
            json_string: Manifest text. None yields an empty manifest.

        Raises:
            MalformedJsonError: If the text is not JSON or has the wrong shape
        """
        if json_string is None:
            return cls(manifest={})

        try:
            parsed_json = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise MalformedJsonError(f"Legacy asset manifest is not valid JSON: {e}") from e

        is_valid, error_msg = validate_legacy_manifest_with_error_details(parsed_json)
        if not is_valid:
            raise MalformedJsonError(f"Legacy asset manifest has the wrong shape. {error_msg}")

        return cls(
            manifest={
                asset: adapt_variant_list(asset, variants)
                for asset, variants in parsed_json.items()
            }
        )

    @classmethod
    def from_bytes(cls, data: bytes | None) -> "LegacyAssetManifest":
        """Parse legacy manifest bytes as UTF-8 JSON.

        Raises:
            MalformedJsonError: If the bytes are not UTF-8 or not a valid manifest
        """
        if data is None:
            return cls.from_json_string(None)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedJsonError(f"Legacy asset manifest is not UTF-8: {e}") from e
        return cls.from_json_string(text)

    def get_variants(self, key: str) -> list[VariantRecord]:
        return self.manifest.get(key, [])

    def keys(self) -> list[str]:
        """List the main asset keys present in the manifest."""
        return list(self.manifest.keys())
