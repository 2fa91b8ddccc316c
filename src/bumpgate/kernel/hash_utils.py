"""Content hashing for staged artifacts.

Digests cover the full file contents, read in fixed-size chunks, so that
two artifacts compare equal exactly when their bytes are equal.
"""

import hashlib
from pathlib import Path
from typing import Union


_CHUNK_SIZE = 1024 * 1024


def hash_bytes(content: Union[str, bytes]) -> str:
    """Compute SHA256 hash of in-memory content.

    Args:
        content: Content as string (UTF-8 encoded first) or bytes

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return f"sha256:{hashlib.sha256(content).hexdigest()}"


def compute_file_sha256(path: Union[str, Path]) -> str:
    """Compute SHA256 hash of a file's full contents.

    Args:
        path: File to hash

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")

    Raises:
        OSError: If the file cannot be read
    """
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return f"sha256:{digest.hexdigest()}"


def files_identical(a: Union[str, Path], b: Union[str, Path]) -> bool:
    """True when both files have byte-identical contents.

    The same path is trivially identical and is not read twice.
    """
    if Path(a).resolve() == Path(b).resolve():
        return True
    return compute_file_sha256(a) == compute_file_sha256(b)
