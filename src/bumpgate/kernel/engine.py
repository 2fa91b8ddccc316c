"""Diff engine interface.

A diff engine compares two archives the JVM can load and reports API
changes as a ChangeModel. Bytecode analysis lives entirely behind this
interface.
"""

from pathlib import Path
from typing import Protocol

from bumpgate.codes import ErrorCode

from .change_model import ChangeModel
from .exclusions import ExclusionSet


class DiffEngineError(RuntimeError):
    """Raised when the diff engine cannot produce a change model."""
    code = ErrorCode.DIFF_ENGINE_FAILED


class DiffEngine(Protocol):
    def compare(
        self,
        old_archive: Path,
        new_archive: Path,
        exclusions: ExclusionSet,
    ) -> ChangeModel:
        ...
