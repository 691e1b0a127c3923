"""Trill — a template hypertext preprocessor.

Serves a directory of jinja templates as HTML pages, binding each request
path to data from a pluggable data source. Templates are compiled once,
on first request, and cached for the life of the server.

Basic usage::

    from trill import ServerConfig, TemplateServer

    server = TemplateServer(ServerConfig(root="public", include_dir="templates"))
    server.broker.handle_data("/", {"title": "Home"})

    @server.broker.data("/blog/")
    def blog(path: str) -> dict[str, object]:
        return {"title": path}

Run it under any ASGI server, or with ``trill serve public --include templates``.
"""

__version__ = "0.1.0"
__all__ = [
    "Broker",
    "ConfigurationError",
    "DataError",
    "DataSource",
    "EntryKind",
    "HTTPError",
    "JSONDataSource",
    "NotFound",
    "RegistrationError",
    "Response",
    "ServerConfig",
    "TemplateServer",
    "TrillError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trill`` fast while providing a clean top-level API.
    """
    if name == "TemplateServer":
        from trill.server.handler import TemplateServer

        return TemplateServer

    if name == "ServerConfig":
        from trill.config import ServerConfig

        return ServerConfig

    if name == "Broker":
        from trill.routing.broker import Broker

        return Broker

    if name == "EntryKind":
        from trill.routing.entry import EntryKind

        return EntryKind

    if name in ("DataSource", "JSONDataSource"):
        from trill import sources as _sources

        return getattr(_sources, name)

    if name == "Response":
        from trill.http.response import Response

        return Response

    if name in (
        "ConfigurationError",
        "DataError",
        "HTTPError",
        "NotFound",
        "RegistrationError",
        "TrillError",
    ):
        from trill import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
