"""Public API for bumpgate.

``run_check`` runs one complete version compliance check:

1. parse both declared versions
2. resolve the new and old artifacts (old may be missing if allowed)
3. skip the diff when both artifacts have identical contents
4. reject a decreasing version pair
5. normalize Android archives, load exclusions, run the diff engine
6. write the text and HTML reports
7. decide the verdict
"""

from pathlib import Path
from typing import Optional

import httpx

from bumpgate.config import BumpGateSettings
from bumpgate.contracts import Artifact, CheckRequest, CheckResult, Comparison, SkipReason
from bumpgate.kernel.engine import DiffEngine
from bumpgate.kernel.exclusions import load_exclusions
from bumpgate.kernel.hash_utils import files_identical
from bumpgate.kernel.policy import Verdict, VerdictReason, decide, identical_verdict
from bumpgate.kernel.versions import SemanticVersion, classify
from bumpgate._internal.engine.japicmp import JapicmpDiffEngine
from bumpgate._internal.io.archive import normalize_archive
from bumpgate._internal.io.resolver import ArtifactResolver, is_remote_location
from bumpgate._internal.reporting.writer import write_reports


def build_default_engine(settings: BumpGateSettings) -> DiffEngine:
    """Diff engine used when the caller does not supply one."""
    return JapicmpDiffEngine.from_settings(settings)


def _absolute(path: Optional[Path]) -> Optional[Path]:
    return Path(path).absolute() if path is not None else None


def compare_artifacts(
    request: CheckRequest,
    settings: BumpGateSettings,
    engine: Optional[DiffEngine] = None,
    client: Optional[httpx.Client] = None,
) -> Comparison:
    """Resolve, normalize and diff the two artifacts of ``request``."""
    resolver = ArtifactResolver(settings=settings, client=client)

    new_artifact = Artifact(location=str(request.new_jar), version=request.new_version)
    new_artifact.path = resolver.resolve(str(_absolute(request.new_jar)))

    old_artifact = Artifact(location=request.old_location, version=request.old_version)
    old_path = resolver.resolve(request.old_location, ignore_missing=request.ignore_missing_old)
    if old_path is None:
        # Nothing to compare against: the new artifact stands in for the old one.
        old_artifact = new_artifact.model_copy(update={"location": request.old_location})
        return Comparison(
            old_artifact=old_artifact,
            new_artifact=new_artifact,
            skipped_reason=SkipReason.MISSING_OLD,
        )
    old_artifact.path = old_path
    old_artifact.fetched = is_remote_location(request.old_location)

    if files_identical(old_artifact.path, new_artifact.path):
        return Comparison(
            old_artifact=old_artifact,
            new_artifact=new_artifact,
            skipped_reason=SkipReason.IDENTICAL_CONTENT,
        )

    # Version order is only examined once a diff is actually needed.
    classify(SemanticVersion.parse(old_artifact.version), SemanticVersion.parse(new_artifact.version))

    old_archive = normalize_archive(old_artifact.path)
    new_archive = normalize_archive(new_artifact.path)
    exclusions = load_exclusions(_absolute(request.exclude_list))

    if engine is None:
        engine = build_default_engine(settings)
    change_model = engine.compare(old_archive, new_archive, exclusions)

    return Comparison(
        old_artifact=old_artifact,
        new_artifact=new_artifact,
        change_model=change_model,
        exclusions=list(exclusions),
    )


def evaluate(comparison: Comparison) -> Verdict:
    """Decide the verdict for a finished comparison."""
    if comparison.skipped_reason is not None:
        return identical_verdict()
    return decide(
        SemanticVersion.parse(comparison.old_artifact.version),
        SemanticVersion.parse(comparison.new_artifact.version),
        comparison.change_model.required_bump(),
    )


def run_check(
    request: CheckRequest,
    settings: Optional[BumpGateSettings] = None,
    engine: Optional[DiffEngine] = None,
    client: Optional[httpx.Client] = None,
) -> CheckResult:
    """Run a complete version compliance check.

    Args:
        request: Artifacts, declared versions and report locations
        settings: Environment settings (read from BUMPGATE_* if omitted)
        engine: Diff engine (japicmp from settings if omitted)
        client: HTTP client used for remote artifacts

    Returns:
        CheckResult; ``result.passed`` is False for an insufficient bump

    Raises:
        VersionError: A declared version is unparseable or decreases
        ArtifactFetchError: An artifact cannot be fetched
        MalformedArchiveError: An Android archive has no classes.jar
        DiffEngineError: The diff engine failed
        OSError: An exclusion list cannot be read or a report cannot be written
    """
    settings = settings or BumpGateSettings()

    # Unparseable versions are fatal before any I/O.
    SemanticVersion.parse(request.old_version)
    SemanticVersion.parse(request.new_version)

    text_report = _absolute(request.text_report)
    html_report = _absolute(request.html_report)

    comparison = compare_artifacts(request, settings, engine=engine, client=client)
    write_reports(comparison, text_report, html_report)
    verdict = evaluate(comparison)

    notes = []
    if comparison.skipped_reason is not None:
        notes.append(f"Comparison skipped: {comparison.skipped_reason.describe()}")
    elif verdict.reason == VerdictReason.PRE_1_0:
        notes.append(
            "Both major versions are 0; versions below 1.0.0 carry no compatibility guarantee"
        )
    notes.append(f"Text report written to {text_report}")
    notes.append(f"HTML report written to {html_report}")

    return CheckResult(
        comparison=comparison,
        verdict=verdict,
        text_report=text_report,
        html_report=html_report,
        notes=notes,
    )
