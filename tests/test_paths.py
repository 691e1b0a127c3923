"""Tests for trill._internal.paths — request path normalization."""

import pytest

from trill._internal.paths import (
    enclosing_dirs,
    is_directory,
    request_path,
    sanitize_path,
    split_dir,
)


class TestSanitizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", "/"),
            ("/a/b", "/a/b"),
            ("/a/b/", "/a/b"),
            ("/a/../", "/"),
            ("/a/../../b", "/b"),
        ],
    )
    def test_cleaning(self, raw: str, expected: str) -> None:
        assert sanitize_path(raw) == expected

    def test_leading_separator_enforced(self) -> None:
        assert sanitize_path("a/b") == "/a/b"

    def test_double_leading_slash_collapsed(self) -> None:
        assert sanitize_path("//etc/passwd") == "/etc/passwd"

    def test_dot_segments(self) -> None:
        assert sanitize_path("/./a/./b") == "/a/b"

    def test_traversal_cannot_escape_root(self) -> None:
        assert sanitize_path("/../../../etc/passwd") == "/etc/passwd"


class TestRequestPath:
    def test_root_maps_to_index(self) -> None:
        assert request_path("/", "index.html") == "/index.html"

    def test_empty_maps_to_index(self) -> None:
        assert request_path("", "index.html") == "/index.html"

    def test_traversal_to_root_maps_to_index(self) -> None:
        assert request_path("/a/..", "index.html") == "/index.html"

    def test_directory_form_maps_to_its_index(self) -> None:
        assert request_path("/docs/", "index.html") == "/docs/index.html"

    def test_file_unchanged(self) -> None:
        assert request_path("/docs/a.html", "index.html") == "/docs/a.html"

    def test_custom_index(self) -> None:
        assert request_path("/", "home.tmpl") == "/home.tmpl"


class TestSplitDir:
    def test_file(self) -> None:
        assert split_dir("/docs/a.html") == ("/docs/", "a.html")

    def test_root_file(self) -> None:
        assert split_dir("/a.html") == ("/", "a.html")

    def test_directory(self) -> None:
        assert split_dir("/docs/") == ("/docs/", "")


class TestEnclosingDirs:
    def test_longest_first(self) -> None:
        assert list(enclosing_dirs("/a/b/c.html")) == ["/a/b/", "/a/", "/"]

    def test_root_file(self) -> None:
        assert list(enclosing_dirs("/c.html")) == ["/"]

    def test_relative_path_has_no_dirs(self) -> None:
        assert list(enclosing_dirs("c.html")) == []


def test_is_directory() -> None:
    assert is_directory("/docs/")
    assert not is_directory("/docs")
