"""
pathcopy: copy immutable nested values with one location changed, addressed by
a slash-delimited property path.

This package uses a src-layout. Import the package as `pathcopy`.
"""

from importlib.metadata import version

__version__ = version("pathcopy")

from .config import PATHCOPY_CONFIG, PathcopyConfig
from .core import DeepCopyable, deep_copy, read_path
from .errors import (
    BadPathNavigation,
    IndexOutOfBounds,
    InvalidPathSyntax,
    PathcopyError,
    SchemaViolation,
    TerminalKindMismatch,
    UnexpectedNodeType,
    UnsupportedValue,
)
from .mutation import ArrayModificationMode
from .paths import PathToken, PathTokenKind, parse_path
from .runtime import configure_logging, get_logger
from .serialization import Document, Materializer, infer_type

__all__ = [
    "__version__",
    "PATHCOPY_CONFIG",
    "ArrayModificationMode",
    "BadPathNavigation",
    "DeepCopyable",
    "Document",
    "IndexOutOfBounds",
    "InvalidPathSyntax",
    "Materializer",
    "PathToken",
    "PathTokenKind",
    "PathcopyConfig",
    "PathcopyError",
    "SchemaViolation",
    "TerminalKindMismatch",
    "UnexpectedNodeType",
    "UnsupportedValue",
    "configure_logging",
    "deep_copy",
    "get_logger",
    "infer_type",
    "parse_path",
    "read_path",
]
