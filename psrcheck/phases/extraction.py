"""Phase 2: Namespace and import extraction."""

from __future__ import annotations

import logging
import os

from psrcheck.config import CheckConfig, FileUnit, SourceFile
from psrcheck.languages import get_analyser

logger = logging.getLogger(__name__)


def run_extraction_phase(config: CheckConfig, sources: list[SourceFile]) -> list[FileUnit]:
    """Extract the declared namespace and use statements of every source file."""
    units: list[FileUnit] = []

    for source in sources:
        file_path = source.relative_path
        ext = os.path.splitext(file_path)[1].lower()

        analyser = get_analyser(ext, config.parser)
        if analyser is None:
            continue

        try:
            namespace = analyser.extract_namespace(source.text)
            imports = analyser.extract_imports(source.text)
        except Exception as e:
            logger.warning(f"Failed to extract declarations from {file_path}: {e}")
            continue

        units.append(FileUnit(
            relative_path=file_path,
            declared_namespace=namespace,
            imports=tuple(imports),
        ))

    return units
