"""Shared fixtures: a document root and an include root on disk."""

from pathlib import Path

import pytest

from trill.config import ServerConfig


@pytest.fixture
def docroot(tmp_path: Path) -> Path:
    """A small document root with pages at several depths."""
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>Home</h1>")
    (root / "hello.html").write_text("<p>hello {{ name }}</p>")
    (root / "literal.html").write_text("should be returned")
    (root / "broken.html").write_text("{% if %}")
    (root / "missing_field.html").write_text("{{ absent }}")

    docs = root / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>{{ title }}</h1>")
    (docs / "special.html").write_text("<h2>{{ title }}</h2>")
    (docs / "other.html").write_text("<h3>{{ title }}</h3>")
    return root


@pytest.fixture
def includes(tmp_path: Path) -> Path:
    """An include root with a base layout and a nested partial."""
    root = tmp_path / "templates"
    (root / "partials").mkdir(parents=True)
    (root / "base.html").write_text(
        "<html><title>{% block title %}{% endblock %}</title>"
        "<body>{% block body %}{% endblock %}</body></html>"
    )
    (root / "partials" / "nav.html").write_text("<nav>{{ site }}</nav>")
    return root


@pytest.fixture
def config(docroot: Path) -> ServerConfig:
    return ServerConfig(root=docroot)
