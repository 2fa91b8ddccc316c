"""Semantic versions and change-type classification.

Two pure functions carry the policy arithmetic:

- ``classify(old, new)``: the bump a user declared between two versions.
- ``required_bump(model)``: the bump the detected API changes demand.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bumpgate.codes import ErrorCode


_VERSION_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?P<qualifier>[-+][0-9A-Za-z.+-]*)?$"
)


class VersionError(ValueError):
    """Raised when a version string cannot be parsed as major.minor.patch."""
    code = ErrorCode.INVALID_VERSION


class VersionOrderError(VersionError):
    """Raised when the new version is lower than the old version."""
    code = ErrorCode.VERSION_NOT_INCREASING

    def __init__(self, old: "SemanticVersion", new: "SemanticVersion"):
        self.old = old
        self.new = new
        super().__init__(
            f"Version {new} is lower than {old}; the new version must not decrease"
        )


class ChangeType(str, Enum):
    """Minimal semantic-version component a change must bump."""

    NONE = "NONE"
    PATCH = "PATCH"
    MINOR = "MINOR"
    MAJOR = "MAJOR"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __str__(self) -> str:
        return self.value


_RANKS = {
    ChangeType.NONE: 0,
    ChangeType.PATCH: 1,
    ChangeType.MINOR: 2,
    ChangeType.MAJOR: 3,
}


def max_change(*changes: ChangeType) -> ChangeType:
    """Return the most severe change type (NONE for no arguments)."""
    return max(changes, key=lambda c: c.rank, default=ChangeType.NONE)


class SemanticVersion(BaseModel):
    """A parsed major.minor.patch version."""
    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    patch: int = Field(..., ge=0)
    qualifier: Optional[str] = None  # "-SNAPSHOT", "+build.7"; display only

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        """Parse ``text``, raising VersionError if it is not major.minor.patch."""
        match = _VERSION_RE.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise VersionError(
                f"Version {text} cannot be parsed as a semantic version"
            )
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            qualifier=match.group("qualifier"),
        )

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        return core + (self.qualifier or "")


def classify(old: SemanticVersion, new: SemanticVersion) -> ChangeType:
    """Classify the declared bump from ``old`` to ``new``.

    Qualifiers are ignored. Equal triples classify as NONE, which fails
    against any required bump; NONE stands in for japicmp's UNCHANGED.
    A decreasing version raises VersionOrderError.
    """
    if new.as_tuple() < old.as_tuple():
        raise VersionOrderError(old, new)
    if new.major > old.major:
        return ChangeType.MAJOR
    if new.minor > old.minor:
        return ChangeType.MINOR
    if new.patch > old.patch:
        return ChangeType.PATCH
    return ChangeType.NONE


def required_bump(model) -> ChangeType:
    """Reduce a ChangeModel to the single bump it requires.

    The result is the most severe record, never lower than PATCH.
    """
    return max_change(ChangeType.PATCH, *(change.severity for change in model.changes))


# Synthetic versions the diff engine would suggest, relative to 0.0.1.
SUGGESTED_VERSIONS = {
    ChangeType.PATCH: SemanticVersion(major=0, minor=0, patch=1),
    ChangeType.MINOR: SemanticVersion(major=0, minor=1, patch=0),
    ChangeType.MAJOR: SemanticVersion(major=1, minor=0, patch=0),
}
