"""Template server — renders request paths through cached templates.

The only component that touches raw ASGI directly. Each request is
normalized to a template path, compiled on first use, bound to data from
the configured source and rendered into a response.
"""

import logging
from pathlib import Path

import anyio
from jinja2 import Environment, Template

from trill._internal.asgi import Receive, Scope, Send
from trill._internal.paths import request_path
from trill.config import ServerConfig
from trill.errors import ConfigurationError, NotFound
from trill.http.response import Response
from trill.routing.broker import Broker
from trill.server.errors import not_found_response, render_error_response
from trill.server.sender import send_response
from trill.sources import DataSource
from trill.templating.cache import TemplateCache
from trill.templating.integration import compile_page, create_environment
from trill.templating.loader import collect_includes, include_names, verify_directory

logger = logging.getLogger("trill.server")


class TemplateServer:
    """ASGI application serving a directory of templates.

    Analogous to a static file server, except every file is passed
    through the template engine first. Templates are read from disk on
    first request and the compiled result is cached per path.

    Usage::

        server = TemplateServer(ServerConfig(root="public", include_dir="templates"))
        server.broker.handle_data("/", {"title": "Home"})

        uvicorn.run(server)

    Without an explicit *source*, a fresh empty ``Broker`` is created and
    exposed as ``server.broker``.

    Thread safety:
        ``serve()`` may run on many threads at once. The template cache
        and the broker carry their own locks; the server itself holds no
        mutable state after construction.
    """

    __slots__ = ("_cache", "_config", "_env", "_includes", "_root", "_source")

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        source: DataSource | None = None,
        env: Environment | None = None,
    ) -> None:
        self._config: ServerConfig = config or ServerConfig()

        if not verify_directory(self._config.root):
            msg = f"document root is not a directory: {str(self._config.root)!r}"
            raise ConfigurationError(msg)
        self._root = Path(self._config.root).resolve()

        self._includes: tuple[str, ...] = ()
        if self._config.include_dir is not None:
            files = collect_includes(self._config.include_dir)
            self._includes = include_names(self._config.include_dir, files)
            logger.info(
                "loaded %d include(s) from %s", len(self._includes), self._config.include_dir
            )

        self._source: DataSource = source if source is not None else Broker(
            index=self._config.index_file
        )
        self._env: Environment = env or create_environment(self._config)
        self._cache = TemplateCache(self._compile)

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def root(self) -> Path:
        return self._root

    @property
    def includes(self) -> tuple[str, ...]:
        """Names of the include fragments compiled with every page."""
        return self._includes

    @property
    def source(self) -> DataSource:
        return self._source

    @property
    def broker(self) -> Broker:
        """The default broker. Only available when no source was given."""
        if not isinstance(self._source, Broker):
            msg = (
                "This server was given a custom data source. "
                "Register data on that source instead of server.broker."
            )
            raise RuntimeError(msg)
        return self._source

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    def _compile(self, path: str) -> Template:
        return compile_page(self._env, self._root, path, self._includes)

    # -- Serving --

    def serve(self, path: str) -> Response:
        """Render the page for a raw request *path*.

        Blocking: compiles on a cache miss and calls the data source.
        Never raises for domain failures; they become 404 / 500 responses.
        """
        page = request_path(path, self._config.index_file)

        try:
            template = self._cache.get_or_compile(page)
        except NotFound as exc:
            return not_found_response(exc, page)
        except Exception as exc:
            return render_error_response(exc, page)

        try:
            data = self._source.produce(page)
            body = template.render(data or {})
        except Exception as exc:
            return render_error_response(exc, page)

        return Response(body=body)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan messages and serves every HTTP request on a
        worker thread, so slow compiles and data sources never block the
        event loop.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        response = await anyio.to_thread.run_sync(self.serve, scope["path"])
        logger.debug("%d %s %s", response.status, scope.get("method", "GET"), scope["path"])
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol. The server needs no setup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
