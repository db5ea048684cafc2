"""Namespace <-> directory projection under an autoload map."""

from __future__ import annotations

from psrcheck.config import Category, Finding, PrefixMapping, Severity
from psrcheck.errors import NotMapped
from psrcheck.index.autoload_map import NS_SEP, AutoloadMap


def _join(base_dir: str, relative: str) -> str:
    if not base_dir:
        return relative
    if not relative:
        return base_dir
    return f"{base_dir}/{relative}"


def _remainder_path(entry: PrefixMapping, name: str) -> str:
    """Part of `name` after the entry's prefix, as a relative path."""
    name = name.lstrip(NS_SEP)
    remainder = name[len(entry.prefix):] if entry.prefix else name
    return remainder.strip(NS_SEP).replace(NS_SEP, "/")


def _directory_for(entry: PrefixMapping, namespace: str) -> str:
    return _join(entry.base_dir, _remainder_path(entry, namespace))


def expected_directory(namespace: str, amap: AutoloadMap) -> str:
    """Directory a namespace must live in, e.g. App\\Services -> src/Services.

    Raises NotMapped if no prefix covers the namespace.
    """
    entry = amap.lookup(namespace)
    if entry is None:
        raise NotMapped(namespace)
    return _directory_for(entry, namespace)


def candidate_paths(name: str, amap: AutoloadMap, extensions: list[str]) -> list[str]:
    """Every file path a fully-qualified class name could be autoloaded from.

    Paths under the longest prefix come first, then shorter fallbacks.
    """
    paths: list[str] = []
    for entry in amap.matches(name):
        relative = _remainder_path(entry, name)
        if not relative:
            continue
        stem = _join(entry.base_dir, relative)
        for ext in extensions:
            paths.append(stem + ext)
    return paths


def _dir_starts_with(actual: str, expected: str) -> bool:
    if not expected:
        return True
    return actual == expected or actual.startswith(expected + "/")


def validate_location(
    namespace: str | None, relative_path: str, amap: AutoloadMap
) -> Finding | None:
    """Check a declared namespace against the file's location.

    Files without a namespace are always acceptable. Files nested deeper
    than the expected directory are tolerated.
    """
    if not namespace:
        return None

    entries = amap.candidates(namespace)
    if not entries:
        return Finding(
            file=relative_path,
            category=Category.NAMESPACE_NOT_MAPPED,
            severity=Severity.WARNING,
            message=str(NotMapped(namespace)),
        )

    actual_dir = relative_path.replace("\\", "/").rpartition("/")[0]
    expected_dirs = [_directory_for(e, namespace) for e in entries]
    if any(_dir_starts_with(actual_dir, d) for d in expected_dirs):
        return None

    return Finding(
        file=relative_path,
        category=Category.NAMESPACE_LOCATION_MISMATCH,
        severity=Severity.ERROR,
        message=(
            f"Namespace '{namespace}' doesn't match file location. "
            f"Expected in: {expected_dirs[0]}"
        ),
    )
