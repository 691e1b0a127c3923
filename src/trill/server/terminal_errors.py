"""Terminal error formatting for the template server.

Produces compact, human-readable log output for template failures
instead of raw tracebacks. Jinja syntax errors come out like::

    -- Template Error -----------------------------------------------
    TemplateSyntaxError: unexpected '}' in /docs/index.html:12

       |
    >12 | <h1>{{ title }}}</h1>
       |

      Path: /docs/index.html
    -----------------------------------------------------------------

Other errors are reduced to their type, message and innermost frame.
"""

from __future__ import annotations

import logging
import traceback as _traceback

from jinja2 import TemplateError, TemplateSyntaxError

logger = logging.getLogger("trill.server")

# Width of the terminal error banner
_BANNER_WIDTH = 65


def _is_template_error(exc: BaseException) -> bool:
    """Check if an exception originates from the jinja template engine."""
    return isinstance(exc, TemplateError)


def _source_excerpt(exc: TemplateSyntaxError) -> list[str]:
    """The offending line of a syntax error, when jinja captured it."""
    if not exc.source or not exc.lineno:
        return []
    lines = exc.source.splitlines()
    if exc.lineno > len(lines):
        return []
    gutter = " " * (len(str(exc.lineno)) + 1)
    return [
        f"{gutter}|",
        f">{exc.lineno} | {lines[exc.lineno - 1]}",
        f"{gutter}|",
    ]


def format_template_error(exc: BaseException, path: str | None = None) -> str:
    """Format a jinja template error for terminal display.

    Args:
        exc: A jinja ``TemplateError``.
        path: The request path that triggered the error (optional).

    Returns:
        Formatted multi-line string for terminal output.
    """
    parts: list[str] = [f"-- Template Error {'-' * (_BANNER_WIDTH - 18)}"]

    if isinstance(exc, TemplateSyntaxError):
        where = exc.name or exc.filename or "<template>"
        parts.append(f"{type(exc).__name__}: {exc.message} in {where}:{exc.lineno}")
        excerpt = _source_excerpt(exc)
        if excerpt:
            parts.append("")
            parts.extend(excerpt)
    else:
        parts.append(f"{type(exc).__name__}: {exc}")

    if path is not None:
        parts.append("")
        parts.append(f"  Path: {path}")

    parts.append("-" * _BANNER_WIDTH)
    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One-line error summary with the innermost frame."""
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    last = frames[-1] if frames else None
    location = f" at {last.filename}:{last.lineno}" if last else ""
    return f"{type(exc).__name__}{location}: {exc}"


def format_compile_error(exc: BaseException) -> str:
    """Format a compile failure, unwrapping the underlying template error."""
    cause = exc.__cause__
    if cause is not None and _is_template_error(cause):
        return format_template_error(cause)
    if cause is not None:
        return f"{type(cause).__name__}: {cause}"
    return str(exc)


def log_error(exc: BaseException, path: str | None = None) -> None:
    """Log a render failure with formatting suited to its kind."""
    prefix = f"500 {path}" if path is not None else "Render error"
    if _is_template_error(exc):
        logger.error("%s\n%s", prefix, format_template_error(exc, path))
    else:
        logger.error("%s\n%s", prefix, format_minimal_error(exc))
