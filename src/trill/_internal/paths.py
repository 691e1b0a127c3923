"""Request path helpers.

All paths handled here are URL paths using ``/`` as the separator,
never filesystem paths.
"""

import posixpath
from collections.abc import Iterator

SEP = "/"


def sanitize_path(path: str) -> str:
    """Normalize a request path into a clean absolute path.

    An empty path becomes the root, a leading separator is enforced and
    ``.``/``..`` segments are collapsed lexically, so no result can climb
    above the root::

        ""            -> "/"
        "/a/b/"       -> "/a/b"
        "/a/../../b"  -> "/b"
    """
    if not path:
        return SEP
    if not path.startswith(SEP):
        path = SEP + path
    cleaned = posixpath.normpath(path)
    # POSIX keeps exactly two leading slashes; URL paths never do.
    return SEP + cleaned.lstrip(SEP)


def request_path(path: str, index: str) -> str:
    """Map a raw request path to the template path it should render.

    The root, and any path in directory form, is served from *index*.
    """
    cleaned = sanitize_path(path)
    if cleaned == SEP:
        return SEP + index
    if path.endswith(SEP):
        return f"{cleaned}{SEP}{index}"
    return cleaned


def split_dir(pattern: str) -> tuple[str, str]:
    """Split a pattern into its owning directory and final component.

    The directory keeps its trailing separator::

        "/docs/a.html" -> ("/docs/", "a.html")
        "/docs/"       -> ("/docs/", "")
    """
    head, _, tail = pattern.rpartition(SEP)
    return head + SEP, tail


def is_directory(pattern: str) -> bool:
    """Whether *pattern* is in directory form (ends in the separator)."""
    return pattern.endswith(SEP)


def enclosing_dirs(path: str) -> Iterator[str]:
    """Yield every directory enclosing a file path, longest first.

    Segments are dropped one at a time::

        list(enclosing_dirs("/a/b/c.html")) == ["/a/b/", "/a/", "/"]
    """
    segments = path.split(SEP)[:-1]
    while segments:
        yield SEP.join(segments) + SEP
        segments.pop()
