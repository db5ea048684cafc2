"""Abstract base for declaration analysers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from psrcheck.config import ImportStatement, ParserMode


@runtime_checkable
class SourceAnalyser(Protocol):
    """Protocol that all declaration analysers must implement."""

    extensions: list[str]
    language_name: str
    parser_mode: ParserMode

    def extract_namespace(self, text: str) -> str | None:
        """Return the first top-level namespace declaration, if any."""
        ...

    def extract_imports(self, text: str) -> list[ImportStatement]:
        """Return every top-level import statement in file order."""
        ...

    def builtin_types(self) -> set[str]:
        """Return the default set of platform type names exempt from resolution."""
        ...
