"""Walk a materialized document along parsed path tokens."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import BadPathNavigation, UnexpectedNodeType
from .paths import PathToken, format_path
from .serialization import Document


def _describe(node: Document) -> str:
    return f"{type(node).__name__} {node!r}"


def _step(current: Document, token: PathToken, walked: Sequence[PathToken]) -> Document:
    if isinstance(current, list):
        if not token.is_index or token.index >= len(current):
            raise BadPathNavigation(
                f"Bad index in property_path: {token.raw!r} after "
                f"{format_path(walked) or '<root>'!r} (array of length {len(current)})"
            )
        return current[token.index]

    if isinstance(current, dict):
        if token.is_index or token.raw not in current:
            raise BadPathNavigation(
                f"Bad property in property_path: {token.raw!r} after "
                f"{format_path(walked) or '<root>'!r}"
            )
        return current[token.raw]

    raise UnexpectedNodeType(
        f"Unexpected node type at {format_path(walked) or '<root>'!r}: "
        f"{_describe(current)} cannot contain {token.raw!r}"
    )


def resolve(root: Document, tokens: Sequence[PathToken]) -> Document:
    """Return the node addressed by ``tokens``; an empty sequence yields ``root``."""

    current = root
    for position, token in enumerate(tokens):
        current = _step(current, token, tokens[:position])
    return current


def navigate(root: Document, tokens: Sequence[PathToken]) -> Document:
    """Return the parent container of the node addressed by ``tokens``.

    Every token except the last is walked. The result is the same object that
    lives inside ``root``, so mutating it mutates ``root``.
    """

    return resolve(root, tokens[:-1])


__all__ = ["navigate", "resolve"]
