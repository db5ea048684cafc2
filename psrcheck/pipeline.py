"""Sequential phase orchestrator with timing."""

from __future__ import annotations

import time
from pathlib import Path

from psrcheck.composer.manifest import load_autoload_mapping
from psrcheck.config import CheckConfig, CheckResult
from psrcheck.errors import ProjectRootError
from psrcheck.index.autoload_map import AutoloadMap
from psrcheck.output import build_result
from psrcheck.phases.discovery import run_discovery_phase
from psrcheck.phases.extraction import run_extraction_phase
from psrcheck.phases.validation import run_validation_phase


_PHASE_LABELS = {
    "autoload": "Reading autoload configuration",
    "discovery": "Finding source files",
    "extraction": "Extracting namespaces and imports",
    "validation": "Validating namespaces and imports",
}


def run_pipeline(
    config: CheckConfig,
    progress_callback=None,
) -> CheckResult:
    """Execute the four-phase validation pipeline and return the result.

    Args:
        config: Check configuration.
        progress_callback: Optional callable(phase_name, label) invoked
            when each phase starts. Used by the CLI for Rich progress.

    Raises:
        ProjectRootError: if the project root is not a directory. Raised
            before any phase runs.
    """
    if not Path(config.project_root).is_dir():
        raise ProjectRootError(config.project_root)

    state: dict = {}
    timings: dict[str, float] = {}
    total_start = time.monotonic()

    def _autoload() -> None:
        raw = load_autoload_mapping(
            config.project_root, config.composer_file, config.include_dev
        )
        state["amap"] = AutoloadMap.build(raw)

    def _discovery() -> None:
        state["sources"] = run_discovery_phase(config, state["amap"])

    def _extraction() -> None:
        state["units"] = run_extraction_phase(config, state["sources"])

    def _validation() -> None:
        state["report"] = run_validation_phase(
            config,
            state["amap"],
            state["units"],
            known_files=[s.relative_path for s in state["sources"]],
        )

    phases = [
        ("autoload", _autoload),
        ("discovery", _discovery),
        ("extraction", _extraction),
        ("validation", _validation),
    ]

    for name, phase_fn in phases:
        if progress_callback:
            progress_callback(name, _PHASE_LABELS.get(name, name))
        start = time.monotonic()
        phase_fn()
        timings[name] = time.monotonic() - start

    total_ms = (time.monotonic() - total_start) * 1000

    return build_result(
        config, state["amap"], state["units"], state["report"], timings, total_ms
    )
