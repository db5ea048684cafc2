"""Classification of imported symbols."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from psrcheck.config import Category, Finding, ImportKind, ImportStatement, Severity
from psrcheck.index.autoload_map import NS_SEP, AutoloadMap
from psrcheck.index.file_index import ProjectFileIndex
from psrcheck.resolver.paths import candidate_paths


class SymbolClass(str, Enum):
    RESOLVED = "resolved"
    BUILTIN = "builtin"
    EXTERNAL = "external"
    MISSING = "missing"


@dataclass(frozen=True)
class Classification:
    symbol_class: SymbolClass
    path: str | None = None  # resolved file, when RESOLVED


class SymbolClassifier:
    """Decides where an imported name comes from.

    Precedence: a file in the project, then the built-in allow-list, then
    anything outside the declared prefixes (unverifiable vendor code).
    What remains is a project-owned name with no file behind it.
    """

    def __init__(
        self,
        amap: AutoloadMap,
        files: ProjectFileIndex,
        builtins: frozenset[str] | set[str],
        extensions: list[str] | None = None,
    ) -> None:
        self.amap = amap
        self.files = files
        self.builtins = frozenset(builtins)
        self.extensions = extensions or [".php"]

    def classify(self, imp: ImportStatement) -> Classification:
        name = imp.fully_qualified_name.lstrip(NS_SEP)

        # PSR-4 autoloads classes only
        if imp.kind != ImportKind.CLASS:
            return Classification(SymbolClass.EXTERNAL)

        for path in candidate_paths(name, self.amap, self.extensions):
            if path in self.files:
                return Classification(SymbolClass.RESOLVED, path=path)

        if name.rsplit(NS_SEP, 1)[-1] in self.builtins:
            return Classification(SymbolClass.BUILTIN)

        # A bare prefix (`use App;`) is never a class under that prefix
        if not any(e.prefix != name for e in self.amap.matches(name)):
            return Classification(SymbolClass.EXTERNAL)

        return Classification(SymbolClass.MISSING)

    def check(self, imp: ImportStatement, relative_path: str) -> Finding | None:
        """Return an UnresolvedImport finding for a missing project symbol."""
        if self.classify(imp).symbol_class != SymbolClass.MISSING:
            return None
        return Finding(
            file=relative_path,
            category=Category.UNRESOLVED_IMPORT,
            severity=Severity.ERROR,
            message=(
                f"Class '{imp.fully_qualified_name}' not found "
                f"(from use statement: {imp.raw_text})"
            ),
        )
