"""PSR-4 prefix -> base directory index with longest-prefix lookup."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from psrcheck.config import PrefixMapping

NS_SEP = "\\"


def normalise_prefix(prefix: str) -> str:
    return prefix.strip().strip(NS_SEP)


def normalise_dir(path: str) -> str:
    """Strip trailing slashes and a leading './'. The project root is ''."""
    path = path.strip().replace("\\", "/").rstrip("/")
    while path.startswith("./"):
        path = path[2:]
    if path == ".":
        return ""
    return path


def is_segment_prefix(prefix: str, name: str) -> bool:
    """True if `prefix` covers `name` on namespace-separator boundaries.

    The empty prefix is composer's fallback and covers everything.
    """
    if not prefix:
        return True
    return name == prefix or name.startswith(prefix + NS_SEP)


class AutoloadMap:
    """Declared prefix -> directory associations.

    Entries are kept sorted by prefix length, longest first; ties keep
    declaration order (sort is stable). A prefix mapped to several
    directories contributes one entry per directory.
    """

    def __init__(self, entries: list[PrefixMapping] | None = None) -> None:
        self.entries: tuple[PrefixMapping, ...] = tuple(
            sorted(entries or [], key=lambda e: len(e.prefix), reverse=True)
        )

    @classmethod
    def build(cls, raw_mapping: Mapping[str, str | list[str]] | None) -> AutoloadMap:
        entries: list[PrefixMapping] = []
        seen: set[tuple[str, str]] = set()
        for prefix, dirs in (raw_mapping or {}).items():
            if isinstance(dirs, str):
                dirs = [dirs]
            norm_prefix = normalise_prefix(prefix)
            for d in dirs:
                key = (norm_prefix, normalise_dir(d))
                if key in seen:
                    continue
                seen.add(key)
                entries.append(PrefixMapping(prefix=key[0], base_dir=key[1]))
        return cls(entries)

    def lookup(self, name: str) -> PrefixMapping | None:
        """Return the entry with the longest prefix covering `name`, or None."""
        name = name.lstrip(NS_SEP)
        for entry in self.entries:
            if is_segment_prefix(entry.prefix, name):
                return entry
        return None

    def matches(self, name: str) -> list[PrefixMapping]:
        """Every entry covering `name`, longest prefix first.

        Class loading falls back to shorter prefixes when the longer ones
        have no file for the name.
        """
        name = name.lstrip(NS_SEP)
        return [e for e in self.entries if is_segment_prefix(e.prefix, name)]

    def candidates(self, name: str) -> list[PrefixMapping]:
        """All entries sharing the winning prefix, in declaration order."""
        best = self.lookup(name)
        if best is None:
            return []
        return [e for e in self.entries if e.prefix == best.prefix]

    def covers(self, name: str) -> bool:
        return self.lookup(name) is not None

    def base_dirs(self) -> list[str]:
        dirs: list[str] = []
        for entry in self.entries:
            if entry.base_dir not in dirs:
                dirs.append(entry.base_dir)
        return dirs

    def __iter__(self) -> Iterator[PrefixMapping]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)
