"""Verify package imports work correctly."""


def test_import_kvline() -> None:
    """Test that kvline can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import kvline

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert kvline.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from kvline import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api() -> None:
    import kvline

    for name in kvline.__all__:
        assert hasattr(kvline, name), name


def test_main_module_importable() -> None:
    from kvline.cli import main

    assert callable(main)
