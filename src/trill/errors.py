"""Trill exception hierarchy.

Shared across the broker, the template cache and the ASGI handler so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class TrillError(Exception):
    """Base for all trill-specific errors."""


class ConfigurationError(TrillError):
    """Raised when server configuration is invalid.

    Raised from ``TemplateServer.__init__``; a server is never created
    from an invalid document or include root.
    """


class RegistrationError(ConfigurationError):
    """Raised when a broker pattern cannot be registered.

    Covers empty patterns, missing handlers, duplicates and attempts to
    register the index file directly. These are programmer errors and
    surface at registration time, never at request time.
    """


class DataError(TrillError):
    """Raised by a data function that cannot produce data for a path.

    The broker converts it into a one-field ``{"error": ...}`` payload
    instead of failing the request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(TrillError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no template could be compiled for the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
