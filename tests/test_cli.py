"""Tests for the avr command-line interface."""

import json
from pathlib import Path

import pytest

from asset_variant_resolver.cli import main, resolve_asset
from asset_variant_resolver.core.errors import AssetResolutionError


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Asset directory with heart.png at 1x, 2x and 4x."""
    for name in ["icons/heart.png", "icons/2.0x/heart.png", "icons/4.0x/heart.png"]:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"png")
    return tmp_path


class TestBuildManifest:
    """Test the build-manifest command."""

    def test_writes_manifests(self, asset_dir, capsys) -> None:
        """Test that both manifest files are written into the directory."""
        main(["build-manifest", "--root", str(asset_dir)])

        assert (asset_dir / "AssetManifest.bin").is_file()
        assert (asset_dir / "AssetManifest.json").is_file()
        assert "Wrote" in capsys.readouterr().err

    def test_stdout_only(self, asset_dir, capsys) -> None:
        """Test that --stdout prints JSON and writes nothing."""
        main(["build-manifest", "--root", str(asset_dir), "--stdout"])

        manifest = json.loads(capsys.readouterr().out)
        assert manifest == {
            "icons/heart.png": [
                "icons/heart.png",
                "icons/2.0x/heart.png",
                "icons/4.0x/heart.png",
            ]
        }
        assert not (asset_dir / "AssetManifest.json").exists()


class TestResolve:
    """Test the resolve command."""

    @pytest.mark.parametrize(
        "dpr, expected",
        [("1.25", "icons/2.0x/heart.png"), ("2.25", "icons/2.0x/heart.png"), ("3.25", "icons/4.0x/heart.png")],
    )
    def test_prints_chosen_variant(self, asset_dir, capsys, dpr, expected) -> None:
        """Test that the chosen variant is printed as JSON."""
        main(["build-manifest", "--root", str(asset_dir)])
        capsys.readouterr()

        main(["resolve", "--root", str(asset_dir), "--name", "icons/heart.png", "--dpr", dpr])

        result = json.loads(capsys.readouterr().out)
        assert result["name"] == expected

    def test_without_dpr(self, asset_dir, capsys) -> None:
        """Test that omitting --dpr picks the main asset."""
        main(["build-manifest", "--root", str(asset_dir)])
        main(["resolve", "--root", str(asset_dir), "--name", "icons/heart.png"])

        out = capsys.readouterr().out
        assert json.loads(out) == {"name": "icons/heart.png", "scale": 1.0}

    def test_missing_manifests_exit_with_error(self, asset_dir, capsys) -> None:
        """Test that an unresolvable asset exits with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            main(["resolve", "--root", str(asset_dir), "--name", "icons/heart.png", "--dpr", "2"])

        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "Error: Unable to resolve asset 'icons/heart.png'" in err

    def test_rejects_non_positive_dpr(self, asset_dir, capsys) -> None:
        """Test that --dpr must be positive."""
        with pytest.raises(SystemExit) as excinfo:
            main(["resolve", "--root", str(asset_dir), "--name", "icons/heart.png", "--dpr", "0"])

        assert excinfo.value.code == 1
        assert "--dpr must be positive" in capsys.readouterr().err

    def test_rejects_missing_root(self, tmp_path, capsys) -> None:
        """Test that a missing root directory is reported."""
        with pytest.raises(SystemExit) as excinfo:
            main(["resolve", "--root", str(tmp_path / "nope"), "--name", "a.png"])

        assert excinfo.value.code == 1
        assert "Path does not exist" in capsys.readouterr().err

    def test_resolve_asset_raises(self, asset_dir) -> None:
        """Test that the library helper raises instead of exiting."""
        with pytest.raises(AssetResolutionError):
            resolve_asset(asset_dir, "icons/heart.png", 2.0)

    def test_resolve_asset_with_package(self, tmp_path) -> None:
        """Test resolving an asset shipped by a package."""
        for name in ["packages/kit/a.png", "packages/kit/3x/a.png"]:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"png")
        main(["build-manifest", "--root", str(tmp_path)])

        result = resolve_asset(tmp_path, "a.png", 2.5, package="kit")
        assert result == {"name": "packages/kit/3x/a.png", "scale": 3.0}
