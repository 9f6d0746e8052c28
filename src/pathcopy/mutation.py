from __future__ import annotations

import enum

from .errors import IndexOutOfBounds, TerminalKindMismatch, UnexpectedNodeType
from .paths import PathToken
from .serialization import Document


class ArrayModificationMode(enum.Enum):
    """What to do at the last path segment when it indexes an array.

    Ignored when the last segment names an object property; properties are
    always set.
    """

    REPLACE = "replace"
    INSERT_APPEND = "insert_append"
    REMOVE = "remove"


def _check_array_bounds(index: int, length: int, mode: ArrayModificationMode) -> None:
    if mode is ArrayModificationMode.INSERT_APPEND:
        # index == length appends
        in_bounds = index <= length
    else:
        in_bounds = index < length
    if in_bounds:
        return
    if mode is ArrayModificationMode.REMOVE:
        raise IndexOutOfBounds(
            f"Can't remove element at index {index} from array of length {length}. "
            "Check property_path."
        )
    raise IndexOutOfBounds(
        f"Can't set/add/insert element at index {index} "
        f"(array of length {length}). Check property_path."
    )


def _mutate_array(
    parent: list[Document],
    token: PathToken,
    new_value: Document,
    mode: ArrayModificationMode,
) -> None:
    if not token.is_index:
        raise TerminalKindMismatch(
            f"Bad property_path. Expected array index at the end, got {token.raw!r}."
        )
    index = token.index
    _check_array_bounds(index, len(parent), mode)

    match mode:
        case ArrayModificationMode.REPLACE:
            parent[index] = new_value
        case ArrayModificationMode.INSERT_APPEND:
            parent.insert(index, new_value)
        case ArrayModificationMode.REMOVE:
            del parent[index]


def mutate(
    parent: Document,
    token: PathToken,
    new_value: Document,
    mode: ArrayModificationMode = ArrayModificationMode.REPLACE,
) -> None:
    """Apply one edit to ``parent`` in place at the location named by ``token``."""

    if isinstance(parent, list):
        _mutate_array(parent, token, new_value, mode)
        return

    if isinstance(parent, dict):
        if token.is_index:
            raise TerminalKindMismatch(
                f"Bad property_path. Expected property name at the end, got {token.raw!r}."
            )
        parent[token.raw] = new_value
        return

    raise UnexpectedNodeType(
        f"Unexpected parent node type: {type(parent).__name__}, raw value: {parent!r}"
    )


__all__ = ["ArrayModificationMode", "mutate"]
