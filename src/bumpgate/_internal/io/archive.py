"""Normalize artifacts into archives the diff engine can read.

Android archives (``.aar``) wrap the compiled classes in an embedded
``classes.jar``. It is extracted beside the original as ``<stem>.jar``.
"""

import os
import shutil
import tempfile
import zipfile
from pathlib import Path

from bumpgate.codes import ErrorCode


ANDROID_SUFFIX = ".aar"
CLASSES_ENTRY = "classes.jar"


class MalformedArchiveError(ValueError):
    """Raised when an archive is not a zip or lacks its classes entry."""
    code = ErrorCode.MALFORMED_ARCHIVE


def is_android_archive(path: Path) -> bool:
    return path.suffix.lower() == ANDROID_SUFFIX


def normalized_path(path: Path) -> Path:
    """Where the extracted classes archive for ``path`` is written."""
    return path.with_suffix(".jar")


def normalize_archive(path: Path) -> Path:
    """Return a path to a plain class archive for ``path``.

    Non-Android archives are returned unchanged.

    Raises:
        MalformedArchiveError: If an Android archive is not a zip or has no classes.jar
    """
    path = Path(path)
    if not is_android_archive(path):
        return path

    target = normalized_path(path)
    try:
        with zipfile.ZipFile(path) as archive:
            try:
                entry = archive.getinfo(CLASSES_ENTRY)
            except KeyError:
                raise MalformedArchiveError(
                    f"Android archive {path} does not contain {CLASSES_ENTRY}"
                ) from None
            _extract_atomically(archive, entry, target)
    except zipfile.BadZipFile as e:
        raise MalformedArchiveError(f"Android archive {path} is not a zip file: {e}") from e
    return target


def _extract_atomically(archive: zipfile.ZipFile, entry: zipfile.ZipInfo, target: Path) -> None:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out, archive.open(entry) as src:
            shutil.copyfileobj(src, out)
            out.flush()
            os.fsync(out.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
