from __future__ import annotations

from typing import Any, Self, TypeVar

from .errors import PathcopyError
from .mutation import ArrayModificationMode, mutate
from .navigation import navigate, resolve
from .paths import parse_path
from .runtime import get_logger
from .serialization import Document, Materializer, infer_type

T = TypeVar("T")


def deep_copy(
    source: T,
    property_path: str,
    new_value: Any,
    mode: ArrayModificationMode = ArrayModificationMode.REPLACE,
    *,
    type_: Any = None,
    materializer: Materializer | None = None,
) -> T:
    """Return a copy of ``source`` with one nested location changed.

    Works on pydantic models, dataclasses and built-in collections of them.
    ``source`` itself is never modified, whether the call succeeds or fails.

    Args:
        source: Value to copy.
        property_path: Segments separated by ``/``; all-digit segments index
            arrays, the rest name properties. Examples: ``order/creator/name``,
            ``lines/0/line_id``, ``5/products``.
        new_value: Value to put at ``property_path``. It should have the shape of
            what currently sits there; models, dataclasses and plain
            dicts/lists are all accepted.
        mode: When the last segment is an array index, replace, insert before
            (or append at ``len``) or remove the element there.
        type_: Static type of ``source``. Inferred from the value when omitted;
            pass it for values such as empty lists whose element type cannot be
            inferred.
        materializer: Conversion settings; defaults to ``PATHCOPY_CONFIG``.

    Raises:
        InvalidPathSyntax: ``property_path`` has empty or non-word segments.
        BadPathNavigation: an intermediate segment does not exist.
        UnexpectedNodeType: an intermediate segment points into a leaf value.
        TerminalKindMismatch: the last segment kind does not fit its container.
        IndexOutOfBounds: the last array index is out of range for ``mode``.
        SchemaViolation: the edited value no longer fits the type of ``source``.
        UnsupportedValue: ``source`` or ``new_value`` cannot be materialized.
    """

    tokens = parse_path(property_path)
    if materializer is None:
        materializer = Materializer.from_config()
    target_type = infer_type(source) if type_ is None else type_

    logger = get_logger()
    logger.debug(
        "deep_copy: begin %s path=%r mode=%s",
        type(source).__qualname__,
        property_path,
        mode.name,
    )
    try:
        document = materializer.to_document(source, target_type, mark_classes=True)
        new_value_document = materializer.to_document(new_value, mark_classes=True)
        parent = navigate(document, tokens)
        mutate(parent, tokens[-1], new_value_document, mode)
        result = materializer.from_document(document, target_type)
    except PathcopyError as exc:
        logger.debug(
            "deep_copy: failed %s path=%r (%s: %s)",
            type(source).__qualname__,
            property_path,
            type(exc).__name__,
            exc,
        )
        raise
    logger.debug("deep_copy: ok %s path=%r", type(source).__qualname__, property_path)
    return result


def read_path(
    source: Any,
    property_path: str,
    *,
    type_: Any = None,
    materializer: Materializer | None = None,
) -> Document:
    """Return the materialized document node at ``property_path`` in ``source``."""

    tokens = parse_path(property_path)
    if materializer is None:
        materializer = Materializer.from_config()
    document = materializer.to_document(source, type_)
    return resolve(document, tokens)


class DeepCopyable:
    """Mixin adding a ``deep_copy`` method to pydantic models and dataclasses."""

    def deep_copy(
        self,
        property_path: str,
        new_value: Any,
        mode: ArrayModificationMode = ArrayModificationMode.REPLACE,
    ) -> Self:
        return deep_copy(self, property_path, new_value, mode, type_=type(self))


__all__ = ["DeepCopyable", "deep_copy", "read_path"]
