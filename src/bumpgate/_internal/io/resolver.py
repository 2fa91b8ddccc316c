"""Resolve artifact locations to local files.

Bare paths and ``file:`` URIs are used in place. ``http:``/``https:``
locations are streamed into a fresh temporary file.
"""

from __future__ import annotations

import os
import posixpath
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import httpx

from bumpgate.codes import ErrorCode
from bumpgate.config import BumpGateSettings


_REMOTE_SCHEMES = ("http", "https")
_MISSING_STATUSES = (404, 410)


class ArtifactFetchError(OSError):
    """Raised when an artifact cannot be fetched."""
    code = ErrorCode.FETCH_FAILED

    def __init__(self, location: str, message: str):
        self.location = location
        super().__init__(message)


class ArtifactMissingError(ArtifactFetchError):
    """Raised when the artifact does not exist at its location."""
    code = ErrorCode.ARTIFACT_MISSING


class UnsupportedLocationError(ArtifactFetchError):
    code = ErrorCode.UNSUPPORTED_LOCATION


def _is_local(location: str) -> bool:
    parsed = urlparse(location)
    # "C:\\libs\\a.jar" parses with scheme "c"
    return parsed.scheme == "" or (len(parsed.scheme) == 1 and os.name == "nt")


def _file_uri_path(location: str) -> Path:
    parsed = urlparse(location)
    return Path(url2pathname(unquote(parsed.path)))


def is_remote_location(location: str) -> bool:
    """True when resolving ``location`` downloads a temporary copy."""
    return not _is_local(location) and urlparse(location).scheme.lower() in _REMOTE_SCHEMES


def _remote_suffix(location: str) -> str:
    return posixpath.splitext(urlparse(location).path)[1]


class ArtifactResolver:
    """Turns user supplied locations into local files."""

    def __init__(
        self,
        settings: Optional[BumpGateSettings] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.settings = settings or BumpGateSettings()
        self._client = client

    def resolve(self, location: str, ignore_missing: bool = False) -> Optional[Path]:
        """Resolve ``location`` to a local file.

        Returns ``None`` only when the artifact is missing and
        ``ignore_missing`` is set.

        Raises:
            ArtifactMissingError: The artifact does not exist
            ArtifactFetchError: Any other fetch failure
        """
        try:
            return self._resolve(location)
        except ArtifactMissingError:
            if ignore_missing:
                return None
            raise

    def _resolve(self, location: str) -> Path:
        if _is_local(location):
            return self._local(Path(location), location)

        scheme = urlparse(location).scheme.lower()
        if scheme == "file":
            return self._local(_file_uri_path(location), location)
        if scheme in _REMOTE_SCHEMES:
            return self._fetch(location)
        raise UnsupportedLocationError(
            location, f"Unsupported artifact location scheme '{scheme}': {location}"
        )

    def _local(self, path: Path, location: str) -> Path:
        path = path.absolute()
        if not path.is_file():
            raise ArtifactMissingError(location, f"Artifact not found: {path}")
        return path

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.settings.http_timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent},
        )

    def _fetch(self, location: str) -> Path:
        staging_dir = self.settings.staging_dir
        if staging_dir is not None:
            staging_dir.mkdir(parents=True, exist_ok=True)

        tmp = tempfile.NamedTemporaryFile(
            prefix="bumpgate-",
            suffix=_remote_suffix(location),
            dir=staging_dir,
            delete=False,
        )
        tmp_path = Path(tmp.name)
        client = self._client or self._build_client()
        try:
            with tmp:
                with client.stream("GET", location) as response:
                    if response.status_code in _MISSING_STATUSES:
                        raise ArtifactMissingError(
                            location,
                            f"Artifact not found: {location} (HTTP {response.status_code})",
                        )
                    response.raise_for_status()
                    for chunk in response.iter_bytes():
                        tmp.write(chunk)
        except httpx.HTTPError as e:
            tmp_path.unlink(missing_ok=True)
            raise ArtifactFetchError(location, f"Failed to fetch {location}: {e}") from e
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        finally:
            if self._client is None:
                client.close()
        return tmp_path
