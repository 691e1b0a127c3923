"""``trill serve`` — serve a document root with JSON side-file data."""

import argparse
import logging
import sys

from trill.config import ServerConfig
from trill.errors import ConfigurationError

logger = logging.getLogger("trill.server")


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Build a ServerConfig from parsed ``trill serve`` arguments."""
    overrides: dict[str, object] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    return ServerConfig(
        root=args.root,
        include_dir=args.include,
        data_dir=args.data or args.root,
        index_file=args.index,
        log_level=args.log_level,
        ssl_certfile=args.cert,
        ssl_keyfile=args.key,
        **overrides,
    )


def serve(args: argparse.Namespace) -> None:
    """Construct the template server and run it until interrupted."""
    from trill.server.handler import TemplateServer
    from trill.server.runner import run_server
    from trill.sources import JSONDataSource
    from trill.templating.loader import verify_directory

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = config_from_args(args)
    logger.info("template engine starting")
    try:
        data_dir = config.data_dir or config.root
        if not verify_directory(data_dir):
            msg = f"data root is not a directory: {str(data_dir)!r}"
            raise ConfigurationError(msg)
        server = TemplateServer(config, source=JSONDataSource(data_dir))
    except ConfigurationError as exc:
        print(f"Error: template engine: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logger.info("server starting on %s:%d", config.host, config.port)
    run_server(server)
    logger.info("server terminating gracefully")
