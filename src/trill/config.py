"""Server configuration.

ServerConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Template server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(root="public", include_dir="templates", port=3000)
    """

    # Documents
    root: str | Path = "."
    include_dir: str | Path | None = None
    data_dir: str | Path | None = None
    index_file: str = "index.html"

    # Templates
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    strict_undefined: bool = True  # Missing data fields fail the render (500)

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    # TLS (optional)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    @property
    def tls(self) -> bool:
        """Whether both halves of a TLS key pair are configured."""
        return bool(self.ssl_certfile and self.ssl_keyfile)
