"""HTTP response value produced for every served page."""

from dataclasses import dataclass

TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An immutable HTTP response: a rendered page or a plain-text error."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = TEXT_HTML

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
