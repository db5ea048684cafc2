"""Phase 3: Namespace location and import validation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from itertools import chain

from psrcheck.config import CheckConfig, FileUnit, Finding, ValidationReport
from psrcheck.index.autoload_map import AutoloadMap
from psrcheck.index.file_index import ProjectFileIndex
from psrcheck.languages import get_analyser
from psrcheck.resolver.paths import validate_location
from psrcheck.resolver.symbols import SymbolClassifier

logger = logging.getLogger(__name__)


def validate_file(
    unit: FileUnit, amap: AutoloadMap, classifier: SymbolClassifier
) -> ValidationReport:
    """Namespace finding first, then one finding per unresolved import, in file order."""
    findings: list[Finding] = []

    location = validate_location(unit.declared_namespace, unit.relative_path, amap)
    if location is not None:
        findings.append(location)

    for imp in unit.imports:
        finding = classifier.check(imp, unit.relative_path)
        if finding is not None:
            findings.append(finding)

    return ValidationReport(findings=tuple(findings))


def run(
    files: Sequence[FileUnit],
    amap: AutoloadMap,
    builtins: Iterable[str] = (),
    known_files: Iterable[str] | None = None,
    extensions: list[str] | None = None,
    jobs: int = 1,
) -> ValidationReport:
    """Validate every file and fold the per-file reports in input order.

    `known_files` lists the project paths imports may resolve to; it
    defaults to the paths of `files`. With ``jobs > 1`` files are checked
    on a thread pool; the merged report is identical to a sequential run.
    """
    if known_files is None:
        known_files = [f.relative_path for f in files]
    classifier = SymbolClassifier(
        amap, ProjectFileIndex(known_files), frozenset(builtins), extensions
    )

    if jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            per_file = list(executor.map(
                lambda unit: validate_file(unit, amap, classifier), files
            ))
    else:
        per_file = [validate_file(unit, amap, classifier) for unit in files]

    return ValidationReport(
        findings=tuple(chain.from_iterable(r.findings for r in per_file))
    )


def resolve_builtins(config: CheckConfig) -> frozenset[str]:
    """Configured built-ins, or the analyser defaults when none are given."""
    if config.builtins is not None:
        return frozenset(config.builtins)
    analyser = get_analyser(".php", config.parser)
    return frozenset(analyser.builtin_types()) if analyser else frozenset()


def run_validation_phase(
    config: CheckConfig,
    amap: AutoloadMap,
    units: list[FileUnit],
    known_files: Iterable[str] | None = None,
) -> ValidationReport:
    report = run(
        units,
        amap,
        builtins=resolve_builtins(config),
        known_files=known_files,
        jobs=config.jobs,
    )
    logger.debug(
        f"Validated {len(units)} files: {report.error_count} errors, "
        f"{report.warning_count} warnings"
    )
    return report
