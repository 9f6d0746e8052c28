from __future__ import annotations

from typing import Any


class PathcopyError(Exception):
    """Base class for every error raised by pathcopy."""


class InvalidPathSyntax(PathcopyError, ValueError):
    """The property path is malformed; raised before any document access."""


class BadPathNavigation(PathcopyError, LookupError):
    """An intermediate path segment does not exist in the document."""


class UnexpectedNodeType(PathcopyError, TypeError):
    """A leaf value was reached where a container was required."""


class TerminalKindMismatch(PathcopyError, ValueError):
    """The last path segment does not fit the container it addresses."""


class IndexOutOfBounds(PathcopyError, IndexError):
    """The array index of the last path segment is out of range for the mode."""


class UnsupportedValue(PathcopyError, TypeError):
    """A value cannot be materialized into a document."""


class SchemaViolation(PathcopyError, ValueError):
    """The mutated document cannot be reconstructed as the target type."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


__all__ = [
    "BadPathNavigation",
    "IndexOutOfBounds",
    "InvalidPathSyntax",
    "PathcopyError",
    "SchemaViolation",
    "TerminalKindMismatch",
    "UnexpectedNodeType",
    "UnsupportedValue",
]
