"""In-memory index of project source files for existence checks."""

from __future__ import annotations

from collections.abc import Iterable


def _normalise(path: str) -> str:
    return path.replace("\\", "/").lstrip("/")


class ProjectFileIndex:
    """Set of relative paths known to exist in the project.

    Built from discovery output so resolution never touches the disk.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self.paths: set[str] = set()
        for path in paths:
            self.add(path)

    def add(self, path: str) -> None:
        self.paths.add(_normalise(path))

    def exists(self, path: str) -> bool:
        return _normalise(path) in self.paths

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __len__(self) -> int:
        return len(self.paths)
