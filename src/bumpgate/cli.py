"""bumpgate CLI: semantic version compliance gate for JVM archives."""

import argparse
import sys
import traceback
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import List, Optional

from bumpgate.codes import ErrorCode


class UsageError(Exception):
    """Raised for malformed command line arguments."""
    code = ErrorCode.USAGE


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def _info(message: str) -> None:
    print(f"INFO: {message}", file=sys.stderr)


def _error(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    try:
        bumpgate_version = get_version("bumpgate")
    except PackageNotFoundError:
        bumpgate_version = "dev"

    parser = _ArgumentParser(
        prog="bumpgate",
        description="Check that a declared version bump covers the API changes between two jar/aar files",
        allow_abbrev=False,
    )
    parser.add_argument("--version", action="version", version=f"bumpgate {bumpgate_version}")
    parser.add_argument(
        "--oldJarUri", "--oldJar",
        dest="old_jar_uri",
        required=True,
        help="The old jar/aar file: a local path, file: URI or http(s) URI"
    )
    parser.add_argument(
        "--oldJarVersion",
        dest="old_jar_version",
        required=True,
        help="The old jar version (major.minor.patch)"
    )
    parser.add_argument(
        "--newJar",
        dest="new_jar",
        type=Path,
        required=True,
        help="The new jar/aar file"
    )
    parser.add_argument(
        "--newJarVersion",
        dest="new_jar_version",
        required=True,
        help="The new jar version (major.minor.patch)"
    )
    parser.add_argument(
        "--textReport",
        dest="text_report",
        type=Path,
        required=True,
        help="The output file for the plain text report"
    )
    parser.add_argument(
        "--htmlReport",
        dest="html_report",
        type=Path,
        required=True,
        help="The output file for the HTML report"
    )
    parser.add_argument(
        "--excludeList",
        dest="exclude_list",
        type=Path,
        default=None,
        help="A file containing a list of package/class exclusions, one per line"
    )
    parser.add_argument(
        "--ignoreMissingOld",
        dest="ignore_missing_old",
        action="store_true",
        help="Pass if the old jar does not exist (for modules with no previous release)"
    )
    parser.add_argument(
        "--japicmpJar",
        dest="japicmp_jar",
        type=Path,
        default=None,
        help="The japicmp jar-with-dependencies (overrides BUMPGATE_JAPICMP_JAR)"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress INFO output."
    )
    return parser


def main_exitless(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the exit code instead of exiting."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        _error(str(e))
        _info("Try --help for usage information")
        return 1
    except SystemExit as e:
        # --help and --version
        return e.code if isinstance(e.code, int) else 0

    # Lazy import: argument errors and --help never load the pipeline
    from bumpgate.api import run_check
    from bumpgate.config import BumpGateSettings
    from bumpgate.contracts import CheckRequest

    try:
        settings = BumpGateSettings()
        if args.japicmp_jar is not None:
            settings = settings.model_copy(update={"japicmp_jar": args.japicmp_jar.absolute()})

        request = CheckRequest(
            old_location=args.old_jar_uri,
            old_version=args.old_jar_version,
            new_jar=args.new_jar,
            new_version=args.new_jar_version,
            text_report=args.text_report,
            html_report=args.html_report,
            exclude_list=args.exclude_list,
            ignore_missing_old=args.ignore_missing_old,
        )
        result = run_check(request, settings=settings)
    except (ValueError, RuntimeError, OSError) as e:
        _error(str(e))
        return 1
    except Exception as e:
        _error(f"Unexpected error: {e}")
        traceback.print_exc()
        return 1

    if not args.quiet:
        for note in result.notes:
            _info(note)

    if not result.passed:
        _error(result.verdict.message)
    sys.stderr.flush()
    return result.exit_code


def main():
    """Main CLI entry point for bumpgate."""
    sys.exit(main_exitless())


if __name__ == "__main__":
    main()
