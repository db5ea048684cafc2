"""Core data types and configuration for psrcheck validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    NAMESPACE_LOCATION_MISMATCH = "namespace_location"
    NAMESPACE_NOT_MAPPED = "namespace_not_autoloaded"
    UNRESOLVED_IMPORT = "missing_class"


class ImportKind(str, Enum):
    CLASS = "class"
    FUNCTION = "function"
    CONST = "const"


class ParserMode(str, Enum):
    LINE = "line"
    TREE_SITTER = "tree-sitter"


@dataclass(frozen=True)
class PrefixMapping:
    """A single PSR-4 prefix -> base directory association."""
    prefix: str
    base_dir: str


@dataclass(frozen=True)
class SourceFile:
    """Raw file handed over by discovery: path relative to the project root plus text."""
    relative_path: str
    text: str


@dataclass(frozen=True)
class ImportStatement:
    """A `use` statement extracted from source."""
    fully_qualified_name: str
    local_alias: str
    raw_text: str
    kind: ImportKind = ImportKind.CLASS


@dataclass(frozen=True)
class FileUnit:
    relative_path: str
    declared_namespace: str | None = None
    imports: tuple[ImportStatement, ...] = ()


@dataclass(frozen=True)
class Finding:
    file: str
    category: Category
    severity: Severity
    message: str


@dataclass(frozen=True)
class ValidationReport:
    """Ordered, immutable collection of findings.

    Findings keep discovery order: files in input order, and within a file
    the namespace finding before import findings. Warnings never affect
    ``passed``.
    """
    findings: tuple[Finding, ...] = ()

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    def merge(self, other: ValidationReport) -> ValidationReport:
        return ValidationReport(findings=self.findings + other.findings)


@dataclass
class CheckConfig:
    project_root: str = ""
    composer_file: str = "composer.json"
    include_dev: bool = False
    parser: ParserMode = ParserMode.LINE
    exclude_dirs: list[str] = field(default_factory=lambda: ["vendor"])
    builtins: frozenset[str] | None = None  # None = analyser defaults
    jobs: int = 1
    output_path: str | None = None
    verbose: bool = False
    quiet: bool = False
    max_file_size: int = 1_000_000  # 1MB


@dataclass
class CheckResult:
    version: str = "1.0"
    metadata: dict[str, Any] = field(default_factory=dict)
    stats: dict[str, Any] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)
    findings: list[dict] = field(default_factory=list)
