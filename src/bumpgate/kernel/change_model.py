"""Structured API change model produced by a diff engine."""

from typing import List, Literal

from pydantic import BaseModel, Field

from .versions import ChangeType, SemanticVersion, SUGGESTED_VERSIONS, required_bump


ChangeStatus = Literal["NEW", "REMOVED", "MODIFIED", "UNCHANGED"]


class MemberChange(BaseModel):
    """A change to a method, field, constructor or type relation of a class."""
    kind: str  # "method" | "field" | "constructor" | "superclass" | "interface" | ...
    name: str
    change_status: ChangeStatus
    binary_compatible: bool = True
    source_compatible: bool = True

    @property
    def compatible(self) -> bool:
        return self.binary_compatible and self.source_compatible


class ClassChange(BaseModel):
    """All changes recorded for one class."""
    name: str  # Fully qualified class name
    change_status: ChangeStatus
    binary_compatible: bool = True
    source_compatible: bool = True
    severity: ChangeType = ChangeType.PATCH
    compatibility_changes: List[str] = Field(default_factory=list)  # engine codes, e.g. "METHOD_REMOVED"
    members: List[MemberChange] = Field(default_factory=list)

    @property
    def compatible(self) -> bool:
        return self.binary_compatible and self.source_compatible

    @property
    def package(self) -> str:
        return self.name.rpartition(".")[0]


class ChangeModel(BaseModel):
    """Per-class change records for one archive pair."""
    changes: List[ClassChange] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    def required_bump(self) -> ChangeType:
        return required_bump(self)

    def suggested_version(self) -> SemanticVersion:
        """Synthetic version relative to 0.0.1 reflecting the worst change."""
        return SUGGESTED_VERSIONS[self.required_bump()]

    def incompatible(self) -> List[ClassChange]:
        return [change for change in self.changes if not change.compatible]
