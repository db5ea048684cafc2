"""Phase 1: Source file discovery under the autoload base directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from psrcheck.config import CheckConfig, SourceFile
from psrcheck.errors import ProjectRootError
from psrcheck.index.autoload_map import AutoloadMap
from psrcheck.languages import supported_extensions

logger = logging.getLogger(__name__)


def _should_ignore(name: str, ignore_set: set[str]) -> bool:
    """Check if a directory name is excluded or hidden."""
    return name in ignore_set or name.startswith(".")


def _has_excluded_segment(rel_path: str, ignore_set: set[str]) -> bool:
    return any(part in ignore_set for part in rel_path.split("/"))


def run_discovery_phase(config: CheckConfig, amap: AutoloadMap) -> list[SourceFile]:
    """Walk every mapped base directory and read each source file once.

    Without any mapping the whole project root is walked, so namespaced
    files can still be reported as unmapped.
    """
    root = Path(config.project_root)
    if not root.is_dir():
        raise ProjectRootError(config.project_root)

    ignore_set = set(config.exclude_dirs)
    extensions = supported_extensions()
    base_dirs = amap.base_dirs() or [""]

    seen: set[str] = set()
    files: list[SourceFile] = []

    for base_dir in base_dirs:
        start = root / base_dir if base_dir else root
        if not start.is_dir():
            logger.warning(f"Autoload directory '{base_dir}' does not exist; skipping")
            continue

        for dirpath, dirnames, filenames in os.walk(start):
            # Filter ignored directories in-place
            dirnames[:] = [
                d for d in sorted(dirnames)
                if not _should_ignore(d, ignore_set)
            ]

            rel_dir = os.path.relpath(dirpath, root)
            if rel_dir == ".":
                rel_dir = ""

            for filename in sorted(filenames):
                # Exact match: autoloading builds lowercase ".php" paths
                ext = os.path.splitext(filename)[1]
                if ext not in extensions:
                    continue

                rel_path = os.path.join(rel_dir, filename) if rel_dir else filename
                # Normalise path separators
                rel_path = rel_path.replace("\\", "/")

                if rel_path in seen:
                    continue
                seen.add(rel_path)

                if _has_excluded_segment(rel_path, ignore_set):
                    logger.debug(f"Skipping excluded path {rel_path}")
                    continue

                full_path = os.path.join(dirpath, filename)
                try:
                    size = os.path.getsize(full_path)
                except OSError:
                    size = 0

                # Skip files over max size
                if size > config.max_file_size:
                    logger.warning(f"Skipping {rel_path}: {size} bytes exceeds size limit")
                    continue

                try:
                    with open(full_path, encoding="utf-8", errors="replace") as f:
                        text = f.read()
                except OSError as e:
                    logger.warning(f"Failed to read {rel_path}: {e}")
                    continue

                files.append(SourceFile(relative_path=rel_path, text=text))

    logger.debug(f"Discovered {len(files)} source files")
    return files
