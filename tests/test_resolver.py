"""Tests for artifact location resolution."""

import pytest

from bumpgate.codes import ErrorCode
from bumpgate.config import BumpGateSettings
from bumpgate._internal.io.resolver import (
    ArtifactFetchError,
    ArtifactMissingError,
    ArtifactResolver,
    UnsupportedLocationError,
    is_remote_location,
)


REMOTE = "https://repo.example.com/maven2/com/example/lib/1.0.0/lib-1.0.0.aar"


def _resolver(tmp_path, client=None):
    return ArtifactResolver(settings=BumpGateSettings(staging_dir=tmp_path / "staging"), client=client)


class TestLocal:
    def test_bare_path_is_used_in_place(self, tmp_path, jars):
        assert _resolver(tmp_path).resolve(str(jars["old"])) == jars["old"]

    def test_relative_path_is_made_absolute(self, tmp_path, jars, monkeypatch):
        monkeypatch.chdir(tmp_path)
        resolved = _resolver(tmp_path).resolve(jars["old"].name)
        assert resolved.is_absolute()
        assert resolved == jars["old"]

    def test_file_uri_is_used_in_place(self, tmp_path, jars):
        assert _resolver(tmp_path).resolve(jars["old"].as_uri()) == jars["old"]

    def test_missing_path_is_fatal(self, tmp_path):
        with pytest.raises(ArtifactMissingError) as excinfo:
            _resolver(tmp_path).resolve(str(tmp_path / "nonexistent"))
        assert excinfo.value.code == ErrorCode.ARTIFACT_MISSING
        assert isinstance(excinfo.value, OSError)

    def test_missing_path_with_ignore_missing_signals_absence(self, tmp_path):
        assert _resolver(tmp_path).resolve(str(tmp_path / "nonexistent"), ignore_missing=True) is None

    def test_directory_is_not_an_artifact(self, tmp_path):
        with pytest.raises(ArtifactMissingError):
            _resolver(tmp_path).resolve(str(tmp_path))


class TestRemote:
    def test_content_is_fetched_into_temporary_file(self, tmp_path, mock_client):
        client = mock_client({REMOTE: (200, b"aar bytes")})
        path = _resolver(tmp_path, client).resolve(REMOTE)

        assert path.read_bytes() == b"aar bytes"
        assert path.parent == tmp_path / "staging"
        assert path.suffix == ".aar"
        assert client.requested == [REMOTE]

    def test_each_fetch_gets_a_fresh_file(self, tmp_path, mock_client):
        client = mock_client({REMOTE: (200, b"aar bytes")})
        resolver = _resolver(tmp_path, client)
        assert resolver.resolve(REMOTE) != resolver.resolve(REMOTE)

    @pytest.mark.parametrize("status", [404, 410])
    def test_not_found_is_missing(self, tmp_path, mock_client, status):
        client = mock_client({REMOTE: (status, b"")})
        with pytest.raises(ArtifactMissingError, match=f"HTTP {status}"):
            _resolver(tmp_path, client).resolve(REMOTE)
        assert list((tmp_path / "staging").iterdir()) == []

    def test_not_found_with_ignore_missing_is_fetched_once(self, tmp_path, mock_client):
        client = mock_client({})
        assert _resolver(tmp_path, client).resolve(REMOTE, ignore_missing=True) is None
        assert client.requested == [REMOTE]

    def test_server_error_is_fatal_even_with_ignore_missing(self, tmp_path, mock_client):
        client = mock_client({REMOTE: (503, b"")})
        with pytest.raises(ArtifactFetchError) as excinfo:
            _resolver(tmp_path, client).resolve(REMOTE, ignore_missing=True)
        assert not isinstance(excinfo.value, ArtifactMissingError)
        assert excinfo.value.code == ErrorCode.FETCH_FAILED
        assert list((tmp_path / "staging").iterdir()) == []

    def test_unsupported_scheme(self, tmp_path):
        with pytest.raises(UnsupportedLocationError) as excinfo:
            _resolver(tmp_path).resolve("ftp://repo.example.com/lib.jar", ignore_missing=True)
        assert excinfo.value.code == ErrorCode.UNSUPPORTED_LOCATION


@pytest.mark.parametrize(
    "location, remote",
    [
        ("lib.jar", False),
        ("/abs/lib.jar", False),
        ("file:///abs/lib.jar", False),
        ("http://repo.example.com/lib.jar", True),
        ("HTTPS://repo.example.com/lib.jar", True),
    ],
)
def test_is_remote_location(location, remote):
    assert is_remote_location(location) is remote
