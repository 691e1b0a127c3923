"""Registered broker entries.

An entry is what a pattern maps to: a way of producing the data bound
to a page. Entries are frozen and shared between request threads, so
producing data never mutates them.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from trill._internal.types import Data, DataFunc
from trill.errors import DataError
from trill.sources import DataSource

logger = logging.getLogger("trill.broker")


class EntryKind(Enum):
    """How an entry produces data."""

    EMPTY = "empty"
    CONSTANT = "constant"
    FUNCTION = "function"
    DELEGATE = "delegate"


@dataclass(frozen=True, slots=True)
class EmptyEntry:
    """Yields no data. Pages render with nothing bound."""

    kind = EntryKind.EMPTY

    def produce(self, path: str) -> Data | None:  # noqa: ARG002
        return None


@dataclass(frozen=True, slots=True)
class ConstantEntry:
    """Returns the same externally owned map on every request.

    The map is read concurrently and must not be changed after
    registration; a read-only view is handed to the renderer.
    """

    value: Mapping[str, object]
    kind = EntryKind.CONSTANT

    def produce(self, path: str) -> Data | None:  # noqa: ARG002
        return MappingProxyType(self.value)


@dataclass(frozen=True, slots=True)
class FunctionEntry:
    """Calls a function with the request path on every request.

    A ``DataError`` from the function becomes ``{"error": message}``
    rather than failing the request.
    """

    func: DataFunc
    kind = EntryKind.FUNCTION

    def produce(self, path: str) -> Data | None:
        try:
            return self.func(path)
        except DataError as exc:
            logger.debug("data function for %r failed: %s", path, exc)
            return {"error": str(exc)}


@dataclass(frozen=True, slots=True)
class DelegateEntry:
    """Forwards the request path, unchanged, to another data source."""

    source: DataSource
    kind = EntryKind.DELEGATE

    def produce(self, path: str) -> Data | None:
        return self.source.produce(path)


type Entry = EmptyEntry | ConstantEntry | FunctionEntry | DelegateEntry

EMPTY_ENTRY = EmptyEntry()
