"""Tests for trill.sources — data source protocol and JSON side files."""

import json
import logging
from pathlib import Path

import pytest

from trill.config import ServerConfig
from trill.routing.broker import Broker
from trill.server.handler import TemplateServer
from trill.sources import DataSource, JSONDataSource


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    (root / "blog").mkdir(parents=True)
    (root / "index.html.data").write_text(json.dumps({"title": "Home"}))
    (root / "blog" / "post.html.data").write_text(
        json.dumps({"title": "Post", "tags": ["a", "b"]})
    )
    (root / "bad.html.data").write_text("{not json")
    (root / "list.html.data").write_text("[1, 2, 3]")
    return root


class TestProtocol:
    def test_broker_is_a_data_source(self) -> None:
        assert isinstance(Broker(), DataSource)

    def test_json_source_is_a_data_source(self, tmp_path: Path) -> None:
        assert isinstance(JSONDataSource(tmp_path), DataSource)

    def test_plain_object_is_not(self) -> None:
        assert not isinstance(object(), DataSource)


class TestJSONDataSource:
    def test_data_file_location(self, data_root: Path) -> None:
        source = JSONDataSource(data_root)
        assert source.data_file("/blog/post.html") == data_root.resolve() / "blog" / "post.html.data"

    def test_loads_object(self, data_root: Path) -> None:
        source = JSONDataSource(data_root)
        assert source.produce("/blog/post.html") == {"title": "Post", "tags": ["a", "b"]}

    def test_cached_after_first_load(self, data_root: Path) -> None:
        source = JSONDataSource(data_root)
        first = source.produce("/index.html")
        (data_root / "index.html.data").write_text(json.dumps({"title": "Changed"}))
        assert source.produce("/index.html") is first

    def test_missing_file(self, data_root: Path) -> None:
        assert JSONDataSource(data_root).produce("/nope.html") is None

    def test_malformed_file(self, data_root: Path) -> None:
        assert JSONDataSource(data_root).produce("/bad.html") is None

    def test_non_object_json(self, data_root: Path) -> None:
        assert JSONDataSource(data_root).produce("/list.html") is None

    def test_missing_file_retried(self, data_root: Path) -> None:
        source = JSONDataSource(data_root)
        assert source.produce("/late.html") is None
        (data_root / "late.html.data").write_text(json.dumps({"ok": True}))
        assert source.produce("/late.html") == {"ok": True}

    def test_outside_root(self, data_root: Path, tmp_path: Path) -> None:
        (tmp_path / "secret.data").write_text(json.dumps({"secret": True}))
        assert JSONDataSource(data_root).produce("/../secret") is None

    def test_null_byte_in_path(self, data_root: Path) -> None:
        assert JSONDataSource(data_root).produce("/a\x00b.html") is None

    def test_logs_each_request(
        self, data_root: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        source = JSONDataSource(data_root)
        with caplog.at_level(logging.INFO, logger="trill.sources"):
            source.produce("/index.html")
            source.produce("/index.html")
            source.produce("/nope.html")

        messages = [r.getMessage() for r in caplog.records]
        assert "loaded datafile" in messages[0]
        assert "cache hit" in messages[1]
        assert "no associated data" in messages[2]

    def test_serves_pages(self, docroot: Path, data_root: Path) -> None:
        server = TemplateServer(ServerConfig(root=docroot), source=JSONDataSource(data_root))
        response = server.serve("/")
        assert response.status == 200
        assert response.text == "<h1>Home</h1>"
