"""Tests for trill.templating.loader — directory checks and include collection."""

from pathlib import Path

import pytest

from trill.errors import ConfigurationError
from trill.templating.loader import collect_includes, include_names, verify_directory


class TestVerifyDirectory:
    def test_existing_directory(self, tmp_path: Path) -> None:
        assert verify_directory(tmp_path)

    def test_existing_directory_as_string_with_slash(self, tmp_path: Path) -> None:
        assert verify_directory(f"{tmp_path}/")

    def test_nonexistent(self, tmp_path: Path) -> None:
        assert not verify_directory(tmp_path / "notexist")

    def test_regular_file(self, tmp_path: Path) -> None:
        f = tmp_path / "index.html"
        f.write_text("x")
        assert not verify_directory(f)


class TestCollectIncludes:
    def test_walks_recursively(self, includes: Path) -> None:
        files = collect_includes(includes)
        assert files == (includes / "base.html", includes / "partials" / "nav.html")

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert collect_includes(tmp_path) == ()

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="no such directory"):
            collect_includes(tmp_path / "missing")

    def test_not_a_directory(self, tmp_path: Path) -> None:
        f = tmp_path / "file.html"
        f.write_text("x")
        with pytest.raises(ConfigurationError, match="not a directory"):
            collect_includes(f)

    def test_names_are_relative_posix(self, includes: Path) -> None:
        names = include_names(includes, collect_includes(includes))
        assert names == ("base.html", "partials/nav.html")
