"""Shared fixtures for resolver tests."""

import json

import pytest

from asset_variant_resolver.codec import StandardMessageCodec
from asset_variant_resolver.platforms.memory import MemoryAssetStore
from asset_variant_resolver.registry import StoreRegistry

HEART = "assets/icons/heart.png"


def binary_manifest(entries: dict[str, list[tuple[str, float]]]) -> bytes:
    """Encode {key: [(path, dpr), ...]} as an AssetManifest.bin message."""
    return StandardMessageCodec().encode_message(
        {key: [{"asset": path, "dpr": dpr} for path, dpr in variants] for key, variants in entries.items()}
    )


def legacy_manifest(entries: dict[str, list[str]]) -> bytes:
    """Encode {key: [path, ...]} as AssetManifest.json bytes."""
    return json.dumps(entries).encode("utf-8")


@pytest.fixture
def heart_binary() -> bytes:
    """Binary manifest with heart.png at 1.0, 2.0 and 4.0."""
    return binary_manifest(
        {
            HEART: [
                (HEART, 1.0),
                ("assets/icons/2.0x/heart.png", 2.0),
                ("assets/icons/4.0x/heart.png", 4.0),
            ]
        }
    )


@pytest.fixture
def heart_legacy() -> bytes:
    """Legacy manifest with heart.png at 1.0, 2.0 and 4.0."""
    return legacy_manifest(
        {HEART: [HEART, "assets/icons/2.0x/heart.png", "assets/icons/4.0x/heart.png"]}
    )


@pytest.fixture
def sync_store(heart_binary, heart_legacy) -> MemoryAssetStore:
    """Synchronous store holding both manifests."""
    return MemoryAssetStore(
        {"AssetManifest.bin": heart_binary, "AssetManifest.json": heart_legacy}
    )


@pytest.fixture(autouse=True)
def reset_default_store():
    """Keep the registry's default store from leaking between tests."""
    yield
    StoreRegistry.set_default_store(None)
