"""Parse composer.json autoload sections."""

from __future__ import annotations

import json
import logging
import os

logger = logging.getLogger(__name__)


def _psr4_section(manifest: dict, key: str) -> dict[str, list[str]]:
    section = manifest.get(key)
    if not isinstance(section, dict):
        return {}
    psr4 = section.get("psr-4")
    if psr4 is None:
        return {}
    if not isinstance(psr4, dict):
        logger.warning(f"Ignoring malformed {key}.psr-4 section (expected an object)")
        return {}

    mapping: dict[str, list[str]] = {}
    for prefix, dirs in psr4.items():
        if isinstance(dirs, str):
            dirs = [dirs]
        if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
            logger.warning(f"Ignoring malformed {key}.psr-4 entry for '{prefix}'")
            continue
        mapping[prefix] = list(dirs)
    return mapping


def load_autoload_mapping(
    project_root: str,
    filename: str = "composer.json",
    include_dev: bool = False,
) -> dict[str, list[str]]:
    """Return the PSR-4 prefix -> directories mapping declared in composer.json.

    A missing or unreadable manifest yields an empty mapping; validation
    then runs without any declared prefixes. With `include_dev`, entries
    from ``autoload-dev`` are appended after ``autoload``.
    """
    path = os.path.join(project_root, filename)
    if not os.path.isfile(path):
        logger.warning(f"No {filename} found in {project_root}; running without autoload mapping")
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            manifest = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read {path}: {e}")
        return {}

    if not isinstance(manifest, dict):
        logger.warning(f"Ignoring {path}: top-level value is not an object")
        return {}

    mapping = _psr4_section(manifest, "autoload")
    if include_dev:
        for prefix, dirs in _psr4_section(manifest, "autoload-dev").items():
            existing = mapping.setdefault(prefix, [])
            existing.extend(d for d in dirs if d not in existing)

    logger.debug(f"Loaded {len(mapping)} PSR-4 prefixes from {path}")
    return mapping
