"""Version compliance policy: the pass/fail decision."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .versions import ChangeType, SemanticVersion, classify


class VerdictStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class VerdictReason(str, Enum):
    """Why a verdict was reached."""
    IDENTICAL_CONTENT = "IDENTICAL_CONTENT"  # Byte-identical artifacts, no diff
    PRE_1_0 = "PRE_1_0"  # Both majors are 0, no compatibility guarantee
    COMPLIANT = "COMPLIANT"  # Declared bump covers the required bump
    INSUFFICIENT_BUMP = "INSUFFICIENT_BUMP"  # Required bump exceeds declared bump


class Verdict(BaseModel):
    """Outcome of one version compliance check."""
    status: VerdictStatus
    reason: VerdictReason
    declared: Optional[ChangeType] = None
    required: Optional[ChangeType] = None
    message: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == VerdictStatus.PASS


def mismatch_message(
    old: SemanticVersion,
    new: SemanticVersion,
    declared: ChangeType,
    required: ChangeType,
) -> str:
    return (
        f"The version change between {old} and {new} is {declared}, "
        f"but the changes made to the code require a {required} version change"
    )


def identical_verdict() -> Verdict:
    """Verdict for byte-identical artifacts; declared versions are not examined."""
    return Verdict(status=VerdictStatus.PASS, reason=VerdictReason.IDENTICAL_CONTENT)


def decide(
    old: SemanticVersion,
    new: SemanticVersion,
    required: ChangeType,
) -> Verdict:
    """Compare the declared bump between ``old`` and ``new`` against ``required``.

    Raises:
        VersionOrderError: If ``new`` is lower than ``old``
    """
    declared = classify(old, new)

    if old.major == 0 and new.major == 0:
        return Verdict(
            status=VerdictStatus.PASS,
            reason=VerdictReason.PRE_1_0,
            declared=declared,
            required=required,
        )

    if required.rank > declared.rank:
        return Verdict(
            status=VerdictStatus.FAIL,
            reason=VerdictReason.INSUFFICIENT_BUMP,
            declared=declared,
            required=required,
            message=mismatch_message(old, new, declared, required),
        )

    return Verdict(
        status=VerdictStatus.PASS,
        reason=VerdictReason.COMPLIANT,
        declared=declared,
        required=required,
    )
