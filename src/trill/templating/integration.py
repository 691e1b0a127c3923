"""Jinja environment setup and page compilation.

The environment is created once per server and is immutable for its
lifetime. Its loader only reaches the include root: page templates are
compiled straight from the document root by ``compile_page`` and cached
by ``TemplateCache``, never by jinja itself.
"""

from pathlib import Path

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    Undefined,
)

from trill.config import ServerConfig
from trill.errors import NotFound


def create_environment(config: ServerConfig) -> Environment:
    """Create a jinja Environment from server configuration.

    Include fragments are loaded by name relative to
    ``config.include_dir`` (``{% include "nav.html" %}``,
    ``{% extends "base.html" %}``). Without an include root, templates
    can only reference themselves.
    """
    loader: BaseLoader | None = None
    if config.include_dir is not None:
        loader = FileSystemLoader(str(config.include_dir))

    return Environment(
        loader=loader,
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        undefined=StrictUndefined if config.strict_undefined else Undefined,
        # Fragments are read-only after startup
        auto_reload=False,
        cache_size=-1,
    )


def compile_page(
    env: Environment,
    root: Path,
    path: str,
    includes: tuple[str, ...] = (),
) -> Template:
    """Compile the page at *path* together with the include set.

    Every include fragment is compiled first, so a broken fragment fails
    every page, as does a missing or malformed page file.

    Raises:
        NotFound: If the page is missing, escapes *root*, or any part of
            the compilation unit fails to parse.
    """
    try:
        file_path = (root / path.lstrip("/")).resolve()
    except (OSError, ValueError) as exc:
        raise NotFound(f"{path!r}: {exc}") from exc
    if not file_path.is_relative_to(root):
        raise NotFound(f"{path!r} resolves outside the document root")

    try:
        for name in includes:
            env.get_template(name)
        source = file_path.read_text(encoding="utf-8")
        code = env.compile(source, name=path, filename=str(file_path))
    except (OSError, ValueError) as exc:
        raise NotFound(f"{path!r}: {exc}") from exc
    except TemplateError as exc:
        raise NotFound(f"{path!r}: {exc}") from exc

    return env.template_class.from_code(env, code, env.make_globals(None))
