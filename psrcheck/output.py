"""Result assembly, JSON serialisation and console report."""

from __future__ import annotations

import json
import subprocess
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from psrcheck import __version__
from psrcheck.config import CheckConfig, CheckResult, FileUnit, ValidationReport
from psrcheck.index.autoload_map import AutoloadMap


def _get_commit_hash(repo_path: str) -> str | None:
    """Try to get the current git commit hash."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=repo_path,
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()[:12]
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return None


def build_result(
    config: CheckConfig,
    amap: AutoloadMap,
    units: list[FileUnit],
    report: ValidationReport,
    timings: dict[str, float],
    total_ms: float,
) -> CheckResult:
    """Build the CheckResult from the validation report."""
    project_path = Path(config.project_root).resolve()

    return CheckResult(
        version="1.0",
        metadata={
            "project_name": project_path.name,
            "project_path": str(project_path),
            "checked_at": datetime.now(timezone.utc).isoformat(),
            "psrcheck_version": __version__,
            "commit_hash": _get_commit_hash(str(project_path)),
            "parser": config.parser.value,
            "autoload": [
                {"prefix": e.prefix, "base_dir": e.base_dir} for e in amap
            ],
            "check_duration_ms": round(total_ms, 1),
            "phase_timings": timings,
        },
        stats={
            "files": len(units),
            "imports": sum(len(u.imports) for u in units),
            "errors": report.error_count,
            "warnings": report.warning_count,
            "passed": report.passed,
        },
        files=[u.relative_path for u in units],
        findings=[
            {
                "file": f.file,
                "category": f.category.value,
                "severity": f.severity.value,
                "message": f.message,
            }
            for f in report.findings
        ],
    )


def write_output(result: CheckResult, output_path: str) -> None:
    """Write the check result to a JSON file."""
    data = asdict(result)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)


def _print_group(console: Console, title: str, style: str, findings: list[dict]) -> None:
    console.print(f"[bold {style}]{title} ({len(findings)}):[/bold {style}]")
    console.print("-" * 40)
    for finding in findings:
        console.print(f"File: {escape(finding['file'])}")
        console.print(f"Type: {finding['category']}")
        console.print(f"Issue: {escape(finding['message'])}")
        console.print()


def render_report(result: CheckResult, console: Console, verbose: bool = False) -> None:
    """Print findings grouped by severity, errors first, then a summary line."""
    if verbose:
        for path in result.files:
            console.print(f"[dim]Checked:[/dim] {escape(path)}")
        console.print()

    errors = [f for f in result.findings if f["severity"] == "error"]
    warnings = [f for f in result.findings if f["severity"] == "warning"]

    console.print("=" * 60)
    console.print("VALIDATION RESULTS")
    console.print("=" * 60)
    console.print()

    if not errors and not warnings:
        console.print("[green]All namespaces and use statements are valid![/green]")

    if errors:
        _print_group(console, "ERRORS", "red", errors)
    if warnings:
        _print_group(console, "WARNINGS", "yellow", warnings)

    console.print(f"Summary: {len(errors)} errors, {len(warnings)} warnings")
