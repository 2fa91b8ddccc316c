"""Exclusion lists: package/class patterns omitted from API comparison.

The file format is one pattern per line. Surrounding whitespace is
stripped, blank lines and lines starting with ``#`` are ignored. Patterns
use the diff engine's own syntax and are forwarded verbatim.
"""

from pathlib import Path
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ExclusionSet(BaseModel):
    """Ordered, duplicate-free exclusion patterns applied as a union."""
    patterns: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, patterns) -> "ExclusionSet":
        unique = dict.fromkeys(p for p in patterns)
        return cls(patterns=tuple(unique))

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)


EMPTY = ExclusionSet()


def parse_exclusions(text: str) -> ExclusionSet:
    """Parse exclusion file contents."""
    patterns = []
    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        patterns.append(trimmed)
    return ExclusionSet.of(patterns)


def load_exclusions(path: Optional[Path]) -> ExclusionSet:
    """Load an exclusion file. ``None`` means no exclusions."""
    if path is None:
        return EMPTY
    return parse_exclusions(Path(path).read_text(encoding="utf-8"))
