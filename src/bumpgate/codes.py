"""Error code constants for bumpgate failures.

Every fatal error raised by bumpgate carries one of these codes so that
callers can branch on the failure kind without parsing messages.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for fatal conditions."""

    # Input errors
    USAGE = "USAGE"
    INVALID_VERSION = "INVALID_VERSION"
    VERSION_NOT_INCREASING = "VERSION_NOT_INCREASING"

    # Resource errors
    ARTIFACT_MISSING = "ARTIFACT_MISSING"
    FETCH_FAILED = "FETCH_FAILED"
    UNSUPPORTED_LOCATION = "UNSUPPORTED_LOCATION"
    MALFORMED_ARCHIVE = "MALFORMED_ARCHIVE"
    DIFF_ENGINE_FAILED = "DIFF_ENGINE_FAILED"
