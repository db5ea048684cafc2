"""psrcheck CLI - validate PHP namespaces and use statements against PSR-4 autoloading."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from psrcheck import __version__
from psrcheck.config import CheckConfig, CheckResult, ParserMode
from psrcheck.errors import ProjectRootError
from psrcheck.languages import get_analyser
from psrcheck.output import render_report, write_output
from psrcheck.pipeline import run_pipeline


@click.group()
def cli() -> None:
    """psrcheck - Keep PHP namespaces and imports in line with composer autoloading."""
    pass


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route psrcheck logs through Rich on stderr."""
    logger = logging.getLogger("psrcheck")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    if quiet:
        logger.setLevel(logging.ERROR)
    elif verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


def _collect_builtins(
    parser: ParserMode,
    names: tuple[str, ...],
    builtins_file: str | None,
    no_defaults: bool,
) -> frozenset[str] | None:
    """Merge the default allow-list with names from the command line and a file."""
    if not names and not builtins_file and not no_defaults:
        return None

    builtins: set[str] = set()
    if not no_defaults:
        analyser = get_analyser(".php", parser)
        if analyser:
            builtins.update(analyser.builtin_types())
    builtins.update(n.strip() for n in names if n.strip())
    if builtins_file:
        for line in Path(builtins_file).read_text(encoding="utf-8").splitlines():
            line = line.split("#", 1)[0].strip()
            if line:
                builtins.add(line)
    return frozenset(builtins)


def _run_with_progress(config: CheckConfig, console: Console) -> CheckResult:
    """Run the pipeline with Rich progress display."""
    from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
    from rich.table import Table

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initialising...", total=None)

        def on_phase(name, label):
            progress.update(task, description=label)

        result = run_pipeline(config, progress_callback=on_phase)

    console.print(f"Found {result.stats.get('files', 0)} PHP files")
    console.print()

    timings = result.metadata.get("phase_timings", {})
    if config.verbose and timings:
        timing_table = Table(title="Phase Timings", show_edge=False)
        timing_table.add_column("Phase", style="bold")
        timing_table.add_column("Time (ms)", justify="right")
        for phase, seconds in timings.items():
            timing_table.add_row(phase, f"{seconds * 1000:.1f}")
        console.print(timing_table)

    return result


def _run_quiet(config: CheckConfig) -> CheckResult:
    """Run the pipeline with no output."""
    return run_pipeline(config)


@cli.command("check")
@click.argument("path", type=click.Path())
@click.option("-o", "--output", "output_path", default=None, help="Write the result as JSON to this file")
@click.option(
    "--parser",
    type=click.Choice([m.value for m in ParserMode]),
    default=ParserMode.LINE.value,
    help="Declaration extractor: line-anchored patterns or tree-sitter",
)
@click.option("--composer-file", default="composer.json", help="Manifest file name relative to PATH")
@click.option("--include-dev", is_flag=True, help="Also use autoload-dev PSR-4 prefixes")
@click.option("--exclude", multiple=True, help="Additional directory names to exclude")
@click.option("--builtin", "builtin_names", multiple=True, help="Extra built-in type name")
@click.option(
    "--builtins-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="File with one built-in type name per line",
)
@click.option("--no-default-builtins", is_flag=True, help="Do not use the default PHP built-in list")
@click.option("-j", "--jobs", default=1, type=click.IntRange(min=1), help="Validate files on N threads")
@click.option("--verbose", is_flag=True, help="List checked files, phase timings and debug logs")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def check_cmd(
    path: str,
    output_path: str | None,
    parser: str,
    composer_file: str,
    include_dev: bool,
    exclude: tuple[str, ...],
    builtin_names: tuple[str, ...],
    builtins_file: str | None,
    no_default_builtins: bool,
    jobs: int,
    verbose: bool,
    quiet: bool,
) -> None:
    """Check namespaces and use statements of the PHP project at PATH.

    Exits with 0 when no errors are found and 1 otherwise.
    """
    _configure_logging(verbose, quiet)
    parser_mode = ParserMode(parser)

    config = CheckConfig(
        project_root=path,
        composer_file=composer_file,
        include_dev=include_dev,
        parser=parser_mode,
        exclude_dirs=["vendor", *exclude],
        builtins=_collect_builtins(parser_mode, builtin_names, builtins_file, no_default_builtins),
        jobs=jobs,
        output_path=output_path,
        verbose=verbose,
        quiet=quiet,
    )

    console = Console(soft_wrap=True)
    try:
        if quiet:
            result = _run_quiet(config)
        else:
            result = _run_with_progress(config, console)
    except ProjectRootError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_path:
        write_output(result, output_path)

    if not quiet:
        render_report(result, console, verbose=verbose)
        if output_path:
            console.print(f"[green]Output written to:[/green] {output_path}")

    sys.exit(0 if result.stats["passed"] else 1)


@cli.command("version")
def version_cmd() -> None:
    """Print the psrcheck version."""
    click.echo(__version__)


if __name__ == "__main__":
    cli()
