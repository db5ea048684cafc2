"""Exceptions raised by psrcheck."""

from __future__ import annotations


class PsrCheckError(Exception):
    """Base class for psrcheck errors."""


class ProjectRootError(PsrCheckError):
    """The project root is missing or not a directory. Aborts before validation."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory '{path}' does not exist.")
        self.path = path


class NotMapped(PsrCheckError):
    """No autoload prefix covers a namespace."""

    def __init__(self, namespace: str) -> None:
        super().__init__(f"Namespace '{namespace}' not covered by composer autoload configuration")
        self.namespace = namespace
