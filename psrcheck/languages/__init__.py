"""Analyser registry - maps (file extension, parser mode) to declaration analysers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from psrcheck.config import ParserMode

if TYPE_CHECKING:
    from psrcheck.languages.base import SourceAnalyser

_REGISTRY: dict[tuple[str, ParserMode], SourceAnalyser] = {}
_INITIALISED = False


def _init_registry() -> None:
    global _INITIALISED
    if _INITIALISED:
        return

    from psrcheck.languages.php import PhpAnalyser, PhpTreeSitterAnalyser

    analysers: list[SourceAnalyser] = [
        PhpAnalyser(),
        PhpTreeSitterAnalyser(),
    ]

    for analyser in analysers:
        for ext in analyser.extensions:
            _REGISTRY[(ext, analyser.parser_mode)] = analyser

    _INITIALISED = True


def get_analyser(extension: str, mode: ParserMode = ParserMode.LINE) -> SourceAnalyser | None:
    """Get the analyser for a file extension (e.g. '.php') and parser mode."""
    _init_registry()
    return _REGISTRY.get((extension.lower(), ParserMode(mode)))


def supported_extensions() -> set[str]:
    """Return all supported file extensions."""
    _init_registry()
    return {ext for ext, _ in _REGISTRY}
