"""Plain-text error responses for failed page requests.

Only domain outcomes reach the client: a page that cannot be compiled
is a 404, a page that cannot be rendered is a 500 carrying the error
message. Both are well-formed responses; nothing else escapes.
"""

import logging

from trill.errors import HTTPError
from trill.http.response import TEXT_PLAIN, Response
from trill.server.terminal_errors import log_error

logger = logging.getLogger("trill.server")


def not_found_response(exc: HTTPError, path: str) -> Response:
    """Map a compile failure to a 404 response."""
    logger.debug("%d %s: %s", exc.status, path, exc.detail)
    return Response(body="404 not found\n", status=404, content_type=TEXT_PLAIN)


def render_error_response(exc: Exception, path: str) -> Response:
    """Map a render failure to a 500 response including its message."""
    log_error(exc, path)
    return Response(
        body=f"500 internal error\n\t{exc}",
        status=500,
        content_type=TEXT_PLAIN,
    )
