"""Async test client for trill servers.

Uses the same Response type as production. Requests go through the
ASGI interface directly, no HTTP involved.
"""

from typing import Any

from trill.http.response import TEXT_HTML, Response
from trill.server.handler import TemplateServer


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for trill servers.

    Usage::

        async with TestClient(server) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __slots__ = ("server",)

    def __init__(self, server: TemplateServer) -> None:
        self.server = server

    async def __aenter__(self) -> "TestClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, path: str) -> Response:
        """Send a GET request for *path* (a query string is split off)."""
        path_part, _, query_string = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "GET",
            "path": path_part,
            "query_string": query_string.encode("latin-1"),
            "headers": [],
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        status = 200
        content_type = TEXT_HTML
        body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status, content_type
            if message["type"] == "http.response.start":
                status = message["status"]
                headers = dict(message.get("headers", []))
                content_type = headers.get(b"content-type", b"").decode("latin-1")
            elif message["type"] == "http.response.body":
                body_parts.append(message.get("body", b""))

        await self.server(scope, receive, send)
        return Response(body=b"".join(body_parts), status=status, content_type=content_type)
