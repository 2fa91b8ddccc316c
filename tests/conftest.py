"""Pytest configuration and shared fixtures.

No sys.path hacks - tests import from the installed bumpgate package.
Nothing here needs Java or network access: the diff engine is replaced by
builders.FakeDiffEngine and remote fetches go through httpx.MockTransport.
"""

from typing import Dict

import httpx
import pytest

from builders import write_jar


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep BUMPGATE_* variables from the developer's shell out of the tests."""
    for name in ("BUMPGATE_JAVA", "BUMPGATE_JAPICMP_JAR", "BUMPGATE_HTTP_TIMEOUT_SECONDS",
                 "BUMPGATE_USER_AGENT", "BUMPGATE_STAGING_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def jars(tmp_path):
    """Two distinct jars plus a byte-identical copy of the first."""
    old = write_jar(tmp_path / "lib-1.0.0.jar", {"com/example/api/Widget.class": b"\xca\xfe\xba\xbe v1"})
    new = write_jar(tmp_path / "lib-new.jar", {"com/example/api/Widget.class": b"\xca\xfe\xba\xbe v2"})
    copy = tmp_path / "lib-copy.jar"
    copy.write_bytes(old.read_bytes())
    return {"old": old, "new": new, "copy": copy}


@pytest.fixture
def reports(tmp_path):
    return {"text": tmp_path / "out" / "report.txt", "html": tmp_path / "out" / "report.html"}


class RecordingClient(httpx.Client):
    """httpx.Client that remembers every requested URL."""

    def __init__(self, routes: Dict[str, tuple]):
        self.requested = []
        super().__init__(transport=httpx.MockTransport(self._handle))
        self._routes = routes

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requested.append(str(request.url))
        status, body = self._routes.get(str(request.url), (404, b""))
        return httpx.Response(status, content=body)


@pytest.fixture
def mock_client():
    """Build a client serving ``routes`` (url -> (status, body)); unknown URLs are 404."""
    clients = []

    def _build(routes: Dict[str, tuple]) -> RecordingClient:
        client = RecordingClient(routes)
        clients.append(client)
        return client

    yield _build
    for client in clients:
        client.close()
