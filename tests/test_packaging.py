"""Tests for project metadata in pyproject.toml."""

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent


class TestProjectMetadata:
    """Tests for the [project] table."""

    def test_readme_is_project_readme(self):
        """Test that the package long description is the project README."""
        tomllib = pytest.importorskip("tomllib")

        with open(ROOT / "pyproject.toml", "rb") as f:
            project = tomllib.load(f)["project"]

        assert project["readme"] == "README.md"
        assert (ROOT / project["readme"]).is_file()

    def test_version_matches_package(self):
        """Test that the declared version is the importable one."""
        tomllib = pytest.importorskip("tomllib")

        import termray

        with open(ROOT / "pyproject.toml", "rb") as f:
            project = tomllib.load(f)["project"]

        assert project["version"] == termray.__version__
