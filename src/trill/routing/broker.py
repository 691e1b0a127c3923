"""Hierarchical pattern broker.

Maps request paths to registered data entries, in the manner of a
standard HTTP mux but with directory/file backtracking. Patterns come in
two forms:

- **Directory** (``/docs/``): serves the directory itself and its index
  file, and acts as the catch-all for files beneath it that have no
  entry of their own.
- **File** (``/docs/special.html``): serves exactly that path.

Registrations are bucketed by owning directory::

    {"/docs/": {"/docs/": dir_entry,
                "/docs/index.html": dir_entry,
                "/docs/special.html": file_entry}}

Thread safety:
    Registration takes the write side of a ``ReadWriteLock`` and
    resolution the read side. Entries are never invoked while the lock
    is held.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from trill._internal.paths import SEP, enclosing_dirs, is_directory, split_dir
from trill._internal.rwlock import ReadWriteLock
from trill._internal.types import Data, DataFunc
from trill.errors import RegistrationError
from trill.routing.entry import (
    EMPTY_ENTRY,
    ConstantEntry,
    DelegateEntry,
    Entry,
    EntryKind,
    FunctionEntry,
)
from trill.sources import DataSource

logger = logging.getLogger("trill.broker")

DEFAULT_INDEX = "index.html"


def build_entry(kind: EntryKind, handler: Any) -> Entry:
    """Wrap *handler* in the entry type for *kind*, checking its capability."""
    if kind is EntryKind.EMPTY:
        return EMPTY_ENTRY
    if handler is None:
        msg = f"{kind.value} entry needs a handler, got None"
        raise RegistrationError(msg)
    if kind is EntryKind.CONSTANT:
        if not isinstance(handler, Mapping):
            msg = f"constant entry needs a mapping, got {type(handler).__name__}"
            raise RegistrationError(msg)
        return ConstantEntry(handler)
    if kind is EntryKind.FUNCTION:
        if not callable(handler):
            msg = f"function entry needs a callable, got {type(handler).__name__}"
            raise RegistrationError(msg)
        return FunctionEntry(handler)
    if not isinstance(handler, DataSource):
        msg = f"delegate entry needs a data source with produce(), got {type(handler).__name__}"
        raise RegistrationError(msg)
    return DelegateEntry(handler)


class Broker:
    """Route registry that resolves a request path to its data entry.

    Usage::

        broker = Broker()
        broker.handle_data("/docs/", {"title": "Docs"})

        @broker.data("/docs/special.html")
        def special(path: str) -> dict[str, object]:
            return {"title": "Special"}

        entry, found = broker.resolve("/docs/other.html")

    A ``Broker`` is itself a data source, so it can serve as the default
    source of a ``TemplateServer`` or be delegated to from another broker.
    """

    __slots__ = ("_count", "_index", "_lock", "_reg")

    def __init__(self, *, index: str = DEFAULT_INDEX) -> None:
        if not index or SEP in index:
            msg = f"index file must be a bare filename, got {index!r}"
            raise RegistrationError(msg)
        self._index = index
        self._lock = ReadWriteLock()
        # directory -> (full path -> entry); the root bucket always exists
        self._reg: dict[str, dict[str, Entry]] = {SEP: {}}
        self._count = 0

    @property
    def index(self) -> str:
        return self._index

    @property
    def patterns(self) -> list[str]:
        """All registered keys, including seeded index keys, sorted."""
        with self._lock.read():
            return sorted(key for bucket in self._reg.values() for key in bucket)

    def __len__(self) -> int:
        """Number of successful registrations."""
        return self._count

    # -- Registration --

    def register(self, pattern: str, kind: EntryKind, handler: Any = None) -> Entry:
        """Register *handler* as a *kind* entry for *pattern*.

        Raises ``RegistrationError`` for an empty or relative pattern, a
        missing or unsuitable handler, a duplicate pattern, or a file
        pattern naming the index file. Nothing is changed when registration fails.
        """
        if not pattern:
            msg = "empty pattern"
            raise RegistrationError(msg)
        if not pattern.startswith(SEP):
            msg = f"pattern must start with {SEP!r}, got {pattern!r}"
            raise RegistrationError(msg)
        entry = build_entry(kind, handler)

        with self._lock.write():
            if is_directory(pattern):
                self._register_directory(pattern, entry)
            else:
                self._register_file(pattern, entry)
            self._count += 1

        logger.debug("registered %s entry for %r", kind.value, pattern)
        return entry

    def _register_directory(self, pattern: str, entry: Entry) -> None:
        index_key = pattern + self._index
        bucket = self._reg.get(pattern)
        if bucket is not None and pattern in bucket:
            msg = f"attempted to re-register directory {pattern!r}"
            raise RegistrationError(msg)

        bucket = self._reg.setdefault(pattern, {})
        bucket[pattern] = entry
        bucket.setdefault(index_key, entry)

    def _register_file(self, pattern: str, entry: Entry) -> None:
        directory, name = split_dir(pattern)
        if name == self._index:
            msg = (
                f"attempted to register the index file {pattern!r}; "
                f"register the directory {directory!r} instead"
            )
            raise RegistrationError(msg)

        bucket = self._reg.get(directory)
        if bucket is not None and pattern in bucket:
            msg = f"attempted to re-register file {pattern!r}"
            raise RegistrationError(msg)

        self._reg.setdefault(directory, {})[pattern] = entry

    def handle(self, pattern: str, source: DataSource) -> None:
        """Delegate data requests for *pattern* to another data source.

        The path is passed to *source* unchanged.
        """
        self.register(pattern, EntryKind.DELEGATE, source)

    def handle_func(self, pattern: str, func: DataFunc) -> None:
        """Call *func* with the request path to produce data for *pattern*."""
        self.register(pattern, EntryKind.FUNCTION, func)

    def handle_data(self, pattern: str, value: Mapping[str, Any]) -> None:
        """Bind the constant map *value* to *pattern*.

        The map is read concurrently and must not be changed afterwards;
        a dict literal is the simplest way to guarantee that.
        """
        self.register(pattern, EntryKind.CONSTANT, value)

    def handle_empty(self, pattern: str) -> None:
        """Claim *pattern* with an entry that yields no data."""
        self.register(pattern, EntryKind.EMPTY)

    def data(self, pattern: str) -> Callable[[DataFunc], DataFunc]:
        """Register a data function via decorator."""

        def decorator(func: DataFunc) -> DataFunc:
            self.handle_func(pattern, func)
            return func

        return decorator

    # -- Resolution --

    def resolve(self, path: str) -> tuple[Entry, bool]:
        """Find the most specific entry for *path*.

        Directory paths match their own entry, then their index entry.
        File paths walk up their enclosing directories, longest first;
        the first directory with a bucket decides: an exact entry for
        the full path wins, otherwise the directory's own entry is used.
        The walk never continues past that first bucket.

        Returns ``(entry, True)`` on a match, ``(EMPTY_ENTRY, False)``
        otherwise.
        """
        if not path:
            return EMPTY_ENTRY, False
        with self._lock.read():
            entry = self._lookup(path)
        if entry is None:
            return EMPTY_ENTRY, False
        return entry, True

    def _lookup(self, path: str) -> Entry | None:
        """Resolve under the read lock. Returns None on a miss."""
        if is_directory(path):
            return self._lookup_directory(path)

        for directory in enclosing_dirs(path):
            bucket = self._reg.get(directory)
            if bucket is None:
                continue
            entry = bucket.get(path)
            if entry is not None:
                return entry
            return self._lookup_directory(directory)
        return None

    def _lookup_directory(self, directory: str) -> Entry | None:
        bucket = self._reg.get(directory)
        if bucket is None:
            return None
        entry = bucket.get(directory)
        if entry is not None:
            return entry
        return bucket.get(directory + self._index)

    def produce(self, path: str) -> Data | None:
        """Produce data for *path* from its resolved entry, if any."""
        entry, found = self.resolve(path)
        if not found:
            return None
        return entry.produce(path)
