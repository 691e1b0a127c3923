"""Data source protocol and the JSON side-file source.

A *data source* maps a request path to the values bound into the page
rendered for it. The template server never inspects the shape of the
data; it forwards the path and hands the result to the renderer.

Sources are called once per served request, from many threads at once,
and must be safe for that. Returning ``None`` (or an empty mapping) is
valid and renders the page with nothing bound.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from trill._internal.rwlock import ReadWriteLock
from trill._internal.types import Data

logger = logging.getLogger("trill.sources")

DATA_SUFFIX = ".data"


@runtime_checkable
class DataSource(Protocol):
    """Anything that can produce page data for a request path."""

    def produce(self, path: str) -> Data | None: ...


class JSONDataSource:
    """Serve page data from JSON side files next to the documents.

    The data for request path ``/blog/post.html`` is read from
    ``<data_root>/blog/post.html.data``, which must hold a JSON object.
    Parsed files are cached for the lifetime of the source; a file that
    is missing or malformed yields no data and is retried next time.

    Usage::

        server = TemplateServer(config, source=JSONDataSource("public"))
    """

    __slots__ = ("_cache", "_lock", "_root")

    def __init__(self, data_root: str | Path) -> None:
        self._root = Path(data_root).resolve()
        self._lock = ReadWriteLock()
        self._cache: dict[Path, Data] = {}

    @property
    def root(self) -> Path:
        return self._root

    def data_file(self, path: str) -> Path:
        """Return the side file that holds data for *path*."""
        return self._root / (path.lstrip("/") + DATA_SUFFIX)

    def produce(self, path: str) -> Data | None:
        state, remark = "failed", "unspecified reason"
        try:
            file_path = self.data_file(path)

            with self._lock.read():
                cached = self._cache.get(file_path)
            if cached is not None:
                state, remark = "success", "cache hit"
                return cached

            try:
                resolved = file_path.resolve()
            except (OSError, ValueError):
                remark = "invalid data path"
                return None
            if not resolved.is_relative_to(self._root):
                remark = "outside data root"
                return None

            try:
                raw = file_path.read_text(encoding="utf-8")
            except FileNotFoundError:
                remark = "no associated data"
                return None
            except (OSError, ValueError):
                remark = "error reading data"
                return None

            try:
                data = json.loads(raw)
            except json.JSONDecodeError as exc:
                remark = f"malformed data file: {exc}"
                return None
            if not isinstance(data, dict):
                remark = f"malformed data file: expected an object, got {type(data).__name__}"
                return None

            with self._lock.write():
                data = self._cache.setdefault(file_path, data)

            state, remark = "success", "loaded datafile"
            return data
        finally:
            logger.info("data: request for path %r %s: %s", path, state, remark)
