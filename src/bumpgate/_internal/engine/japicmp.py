"""Diff engine backed by the japicmp command line tool.

japicmp is run as a subprocess and asked for an XML report, which is
parsed into a ChangeModel. Only modified classes are reported, missing
classes on the classpath are ignored, and annotations are not compared.
"""

from __future__ import annotations

import subprocess
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from bumpgate.config import BumpGateSettings
from bumpgate.kernel.change_model import ChangeModel, ClassChange, MemberChange
from bumpgate.kernel.engine import DiffEngineError
from bumpgate.kernel.exclusions import ExclusionSet
from bumpgate.kernel.versions import ChangeType, max_change


_STATUSES = {"NEW", "REMOVED", "MODIFIED", "UNCHANGED"}

# XML tag -> member kind
_MEMBER_TAGS = (
    ("method", "method"),
    ("constructor", "constructor"),
    ("field", "field"),
    ("interface", "interface"),
    ("superclass", "superclass"),
)

_STDERR_TAIL = 2000


def _flag(elem: ET.Element, name: str) -> bool:
    return elem.get(name, "true").strip().lower() != "false"


def _status(elem: ET.Element) -> str:
    status = elem.get("changeStatus", "MODIFIED").strip().upper()
    return status if status in _STATUSES else "MODIFIED"


def _member_name(elem: ET.Element) -> str:
    for attr in ("name", "fullyQualifiedName", "superclassNew", "superclassOld"):
        value = elem.get(attr)
        if value and value != "n.a.":
            return value
    return elem.tag


def _compatibility_codes(elem: ET.Element) -> List[str]:
    codes = []
    for change in elem.findall("./compatibilityChanges/compatibilityChange"):
        code = change.get("type") or (change.text or "").strip()
        if code:
            codes.append(code)
    return codes


def _declared_levels(elem: ET.Element) -> Iterable[ChangeType]:
    for change in elem.iter("compatibilityChange"):
        level = (change.get("semanticVersionLevel") or "").strip().upper()
        if level in ChangeType.__members__:
            yield ChangeType(level)


def _parse_class(elem: ET.Element) -> ClassChange:
    members = []
    for tag, kind in _MEMBER_TAGS:
        for member in elem.iter(tag):
            status = _status(member)
            compatible = _flag(member, "binaryCompatible") and _flag(member, "sourceCompatible")
            if status == "UNCHANGED" and compatible:
                continue
            members.append(MemberChange(
                kind=kind,
                name=_member_name(member),
                change_status=status,
                binary_compatible=_flag(member, "binaryCompatible"),
                source_compatible=_flag(member, "sourceCompatible"),
            ))

    status = _status(elem)
    incompatible = any(
        not _flag(node, "binaryCompatible") or not _flag(node, "sourceCompatible")
        for node in elem.iter()
    )
    changed = status != "UNCHANGED" or bool(members)

    if incompatible:
        severity = ChangeType.MAJOR
    elif changed:
        severity = ChangeType.MINOR
    else:
        severity = ChangeType.PATCH
    severity = max_change(severity, *_declared_levels(elem))

    return ClassChange(
        name=elem.get("fullyQualifiedName", ""),
        change_status=status,
        binary_compatible=_flag(elem, "binaryCompatible"),
        source_compatible=_flag(elem, "sourceCompatible"),
        severity=severity,
        compatibility_changes=_compatibility_codes(elem),
        members=members,
    )


def parse_report(xml_text: str) -> ChangeModel:
    """Parse a japicmp XML report into a ChangeModel.

    Raises:
        DiffEngineError: If the report is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise DiffEngineError(f"Unreadable japicmp XML report: {e}") from e

    changes = [_parse_class(elem) for elem in root.findall("./classes/class")]
    return ChangeModel(changes=sorted(changes, key=lambda c: c.name))


class JapicmpDiffEngine:
    """Runs ``java -jar japicmp.jar`` for each comparison."""

    def __init__(
        self,
        jar: Path,
        java: str = "java",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.jar = Path(jar)
        self.java = java
        self._runner = runner

    @classmethod
    def from_settings(cls, settings: BumpGateSettings) -> "JapicmpDiffEngine":
        if settings.japicmp_jar is None:
            raise DiffEngineError(
                "japicmp jar not configured; pass --japicmpJar or set BUMPGATE_JAPICMP_JAR"
            )
        return cls(jar=settings.japicmp_jar, java=settings.java)

    def build_command(
        self,
        old_archive: Path,
        new_archive: Path,
        exclusions: ExclusionSet,
        xml_path: Path,
    ) -> List[str]:
        command = [
            self.java,
            "-jar",
            str(self.jar),
            "--old",
            str(old_archive),
            "--new",
            str(new_archive),
            "--only-modifications",
            "--ignore-missing-classes",
            "--no-annotations",
            "--xml-file",
            str(xml_path),
        ]
        if exclusions:
            command.extend(["--exclude", ";".join(exclusions), "--exclude-exclusively"])
        return command

    def compare(
        self,
        old_archive: Path,
        new_archive: Path,
        exclusions: Optional[ExclusionSet] = None,
    ) -> ChangeModel:
        exclusions = exclusions or ExclusionSet()
        with tempfile.TemporaryDirectory(prefix="bumpgate-japicmp-") as tmp:
            xml_path = Path(tmp) / "japicmp.xml"
            command = self.build_command(old_archive, new_archive, exclusions, xml_path)
            try:
                completed = self._runner(command, capture_output=True, text=True, check=False)
            except OSError as e:
                raise DiffEngineError(f"Could not run japicmp ({command[0]}): {e}") from e

            if completed.returncode != 0:
                stderr = (completed.stderr or "").strip()[-_STDERR_TAIL:]
                raise DiffEngineError(
                    f"japicmp exited with status {completed.returncode}: {stderr}"
                )
            if not xml_path.is_file():
                raise DiffEngineError("japicmp did not write an XML report")
            return parse_report(xml_path.read_text(encoding="utf-8"))
