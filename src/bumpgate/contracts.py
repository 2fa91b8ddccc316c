"""Public request/result models for bumpgate."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from bumpgate.kernel.change_model import ChangeModel
from bumpgate.kernel.policy import Verdict


class CheckRequest(BaseModel):
    """Everything one version compliance check needs."""
    old_location: str  # Local path or URI of the baseline artifact
    old_version: str
    new_jar: Path
    new_version: str
    text_report: Path
    html_report: Path
    exclude_list: Optional[Path] = None
    ignore_missing_old: bool = False


class Artifact(BaseModel):
    """A binary archive under comparison."""
    location: str  # As supplied by the user
    version: str  # As declared by the user
    path: Optional[Path] = None  # Staged local file, set by resolution
    fetched: bool = False  # True when path is a temporary copy of a remote artifact


class SkipReason(str, Enum):
    """Why the API diff was not run."""
    IDENTICAL_CONTENT = "IDENTICAL_CONTENT"
    MISSING_OLD = "MISSING_OLD"

    def describe(self) -> str:
        if self is SkipReason.MISSING_OLD:
            return "old artifact does not exist; the new artifact was compared with itself"
        return "old and new artifacts have identical contents"


class Comparison(BaseModel):
    """The artifacts that were compared and the changes found."""
    old_artifact: Artifact
    new_artifact: Artifact
    change_model: ChangeModel = Field(default_factory=ChangeModel)
    exclusions: List[str] = Field(default_factory=list)
    skipped_reason: Optional[SkipReason] = None


class CheckResult(BaseModel):
    """Result of a version compliance check."""
    comparison: Comparison
    verdict: Verdict
    text_report: Path
    html_report: Path
    notes: List[str] = Field(default_factory=list)  # Diagnostics for the caller to show

    @property
    def passed(self) -> bool:
        return self.verdict.passed

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1
