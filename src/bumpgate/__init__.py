"""bumpgate: semantic version compliance gate for JVM library releases."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("bumpgate")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from bumpgate.api import run_check
from bumpgate.contracts import CheckRequest, CheckResult
from bumpgate.codes import ErrorCode
from bumpgate.kernel.policy import Verdict, VerdictStatus
from bumpgate.kernel.versions import ChangeType, SemanticVersion

__all__ = [
    "__version__",
    "run_check",
    "CheckRequest",
    "CheckResult",
    "ErrorCode",
    "Verdict",
    "VerdictStatus",
    "ChangeType",
    "SemanticVersion",
]
