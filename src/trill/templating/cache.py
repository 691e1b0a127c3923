"""Lazily filled cache of compiled page templates.

Each request path is compiled at most once for the lifetime of the
cache and then served from memory::

    Unparsed -> Compiling -> Compiled        (terminal)
    Unparsed -> Compiling -> CompileFailed   (nothing cached; next request retries)

Thread safety:
    The path -> template map is guarded by a ``ReadWriteLock``: lookups
    take the read side, inserting a finished template takes the write
    side. Compilation itself runs outside both.

    Concurrent misses for one path are coalesced into a single flight:
    the first thread compiles, the others wait on its ``Future`` and
    receive the same template (or the same failure). A thread that
    misses just after a flight lands finds the template on its re-check
    and never compiles again.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future

from jinja2 import Template

from trill._internal.rwlock import ReadWriteLock
from trill.errors import NotFound
from trill.server.terminal_errors import format_compile_error

logger = logging.getLogger("trill.templating")

type Compiler = Callable[[str], Template]


class TemplateCache:
    """Compile-once cache keyed by normalized request path.

    Usage::

        cache = TemplateCache(lambda path: compile_page(env, root, path))
        template = cache.get_or_compile("/index.html")

    Entries are never evicted or invalidated.
    """

    __slots__ = ("_compiler", "_flight_lock", "_flights", "_lock", "_templates")

    def __init__(self, compiler: Compiler) -> None:
        self._compiler = compiler
        self._lock = ReadWriteLock()
        self._templates: dict[str, Template] = {}
        self._flight_lock = threading.Lock()
        self._flights: dict[str, Future[Template]] = {}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._templates)

    def __contains__(self, path: object) -> bool:
        with self._lock.read():
            return path in self._templates

    def get(self, path: str) -> Template | None:
        """Return the cached template for *path*, or None."""
        with self._lock.read():
            return self._templates.get(path)

    def get_or_compile(self, path: str) -> Template:
        """Return the template for *path*, compiling it on first use.

        Raises:
            NotFound: If compilation fails. Nothing is cached, so the
                next call compiles again.
        """
        template = self.get(path)
        if template is not None:
            return template

        with self._flight_lock:
            flight = self._flights.get(path)
            leader = flight is None
            if leader:
                flight = Future()
                self._flights[path] = flight

        if not leader:
            logger.debug("waiting on in-flight compile of %r", path)
            return flight.result()

        try:
            template = self._compile(path)
        except BaseException as exc:
            flight.set_exception(exc)
            raise
        else:
            flight.set_result(template)
            return template
        finally:
            with self._flight_lock:
                del self._flights[path]

    def _compile(self, path: str) -> Template:
        # A flight that landed between our miss and our claim already
        # stored its template.
        template = self.get(path)
        if template is not None:
            return template

        logger.debug("compiling %r", path)
        try:
            compiled = self._compiler(path)
        except NotFound as exc:
            logger.warning("compile failed for %r\n%s", path, format_compile_error(exc))
            raise

        with self._lock.write():
            # First stored template wins; a late racer adopts it.
            template = self._templates.setdefault(path, compiled)

        logger.info("compiled %r", path)
        return template
