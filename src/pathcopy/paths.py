"""Property path tokenizer.

A property path is a ``/``-separated list of segments. All-digit segments are
zero-based array indices; any other ``[A-Za-z0-9_]`` segment is a property
name. There is no escaping, so a property whose name is made only of digits
cannot be addressed.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .errors import InvalidPathSyntax

PATH_SEPARATOR = "/"

_INDEX_RE = re.compile(r"[0-9]+")
_PROPERTY_RE = re.compile(r"[A-Za-z0-9_]+")


class PathTokenKind(enum.Enum):
    PROPERTY = "property"
    ARRAY_INDEX = "array_index"


@dataclass(frozen=True)
class PathToken:
    kind: PathTokenKind
    raw: str

    @property
    def is_index(self) -> bool:
        return self.kind is PathTokenKind.ARRAY_INDEX

    @property
    def index(self) -> int:
        if not self.is_index:
            raise InvalidPathSyntax(
                f"path token {self.raw!r} is a property, not an array index"
            )
        return int(self.raw)

    def __str__(self) -> str:
        return self.raw


def parse_path(path: str) -> tuple[PathToken, ...]:
    segments = path.split(PATH_SEPARATOR)
    if "" in segments:
        raise InvalidPathSyntax(
            f"property_path must not contain empty parts: {path!r}"
        )

    tokens: list[PathToken] = []
    for segment in segments:
        if _INDEX_RE.fullmatch(segment):
            kind = PathTokenKind.ARRAY_INDEX
        elif _PROPERTY_RE.fullmatch(segment):
            kind = PathTokenKind.PROPERTY
        else:
            raise InvalidPathSyntax(
                f"property_path must contain only [A-Za-z0-9] chars: "
                f"bad segment {segment!r} in {path!r}"
            )
        tokens.append(PathToken(kind=kind, raw=segment))
    return tuple(tokens)


def format_path(tokens: tuple[PathToken, ...] | list[PathToken]) -> str:
    return PATH_SEPARATOR.join(token.raw for token in tokens)


__all__ = ["PATH_SEPARATOR", "PathToken", "PathTokenKind", "format_path", "parse_path"]
