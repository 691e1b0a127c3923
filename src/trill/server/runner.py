"""Server runner — serves a TemplateServer with uvicorn.

Plain HTTP by default; HTTPS when the config carries both a certificate
and a key file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trill.server.handler import TemplateServer


def run_server(
    server: TemplateServer,
    *,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Start uvicorn for *server* and block until it exits.

    Args:
        server: The template server to serve.
        host: Override ``config.host``.
        port: Override ``config.port``.
    """
    import uvicorn

    config = server.config
    options: dict[str, object] = {}
    if config.tls:
        options["ssl_certfile"] = config.ssl_certfile
        options["ssl_keyfile"] = config.ssl_keyfile

    uvicorn.run(
        server,
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level,
        lifespan="on",
        **options,
    )
