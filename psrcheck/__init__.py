"""psrcheck - PSR-4 namespace and import consistency checker for PHP projects."""

__version__ = "0.1.0"

from psrcheck.config import CheckConfig, CheckResult, Finding, ValidationReport  # noqa: E402
from psrcheck.pipeline import run_pipeline  # noqa: E402

__all__ = ["CheckConfig", "CheckResult", "Finding", "ValidationReport", "run_pipeline", "__version__"]
