"""Plain text report rendering."""

from typing import List

from bumpgate.contracts import Comparison
from bumpgate.kernel.change_model import ClassChange, MemberChange


_MARKERS = {
    "NEW": "+++",
    "REMOVED": "---",
    "MODIFIED": "***",
    "UNCHANGED": "===",
}


def _marker(status: str, compatible: bool) -> str:
    return _MARKERS.get(status, "***") + ("" if compatible else "!")


def _member_line(member: MemberChange) -> str:
    return f"\t{_marker(member.change_status, member.compatible)} {member.change_status} {member.kind.upper()}: {member.name}"


def _class_lines(change: ClassChange) -> List[str]:
    lines = [
        f"{_marker(change.change_status, change.compatible)} {change.change_status} CLASS: "
        f"{change.name} ({change.severity})"
    ]
    for code in change.compatibility_changes:
        lines.append(f"\t(!) {code}")
    lines.extend(_member_line(member) for member in change.members)
    return lines


def render_text_report(comparison: Comparison) -> str:
    lines = [
        f"Old jar:     {comparison.old_artifact.path}",
        f"Old version: {comparison.old_artifact.version}",
        f"New jar:     {comparison.new_artifact.path}",
        f"New version: {comparison.new_artifact.version}",
        "",
    ]

    if comparison.skipped_reason is not None:
        lines.append(f"Comparison skipped: {comparison.skipped_reason.describe()}")
        lines.append("")
    else:
        lines.append(
            f"Comparing source compatibility of {comparison.new_artifact.path} "
            f"against {comparison.old_artifact.path}"
        )
        if comparison.exclusions:
            lines.append(f"Excluded: {', '.join(comparison.exclusions)}")
        if comparison.change_model.is_empty:
            lines.append("No changes.")
        for change in comparison.change_model.changes:
            lines.extend(_class_lines(change))
        lines.append("")

    lines.append(f"Required version change: {comparison.change_model.required_bump()}")
    lines.append(
        "Suggested semantic version increment: "
        f"{comparison.change_model.suggested_version()}"
    )
    return "\n".join(lines) + "\n"
