from __future__ import annotations

import dataclasses
import datetime
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, TypeAlias, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import (
    BaseModel,
    PydanticUndefinedAnnotation,
    PydanticUserError,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticSerializationError

from ..config import PATHCOPY_CONFIG
from ..errors import SchemaViolation, UnsupportedValue
from ..paths import PATH_SEPARATOR

# JSON data model produced by pydantic in "json" mode. Decimal, datetime, date,
# time and timedelta leaves are strings in their exact textual form; datetimes
# in a named zone carry an "[Area/City]" suffix.
Document: TypeAlias = (
    dict[str, "Document"] | list["Document"] | str | int | float | bool | None
)

# Key holding the class that produced an object node. Path segments cannot
# name it, and it is removed before validation.
CLASS_MARKER = "|class"

_TYPE_ADAPTER_CACHE_SIZE = 256

_ZONED_DATETIME_RE = re.compile(
    r"(?P<stamp>\d{4}-\d{2}-\d{2}T[^\[\]]+)\[(?P<zone>[^\[\]]+)\]"
)


def _type_name(type_: Any) -> str:
    if isinstance(type_, type):
        return type_.__qualname__
    return repr(type_)


def _union_of(types: Iterable[Any]) -> Any:
    unique: list[Any] = []
    for tp in types:
        if tp not in unique:
            unique.append(tp)
    if not unique:
        return Any
    if len(unique) == 1:
        return unique[0]
    return Union[tuple(unique)]


def infer_type(value: Any) -> Any:
    """Derive the static type pydantic should use for ``value``.

    Models, dataclasses and scalars map to their own class. Built-in containers
    are parameterized from their contents so that nested models come back as
    models rather than plain dicts.
    """

    match value:
        case None:
            return type(None)
        case tuple() if hasattr(value, "_fields"):
            return type(value)
        case list():
            return list[_union_of(infer_type(item) for item in value)]
        case tuple():
            if not value:
                return tuple[()]
            return tuple[tuple(infer_type(item) for item in value)]
        case set():
            return set[_union_of(infer_type(item) for item in value)]
        case frozenset():
            return frozenset[_union_of(infer_type(item) for item in value)]
        case dict():
            key_type = _union_of(infer_type(key) for key in value)
            value_type = _union_of(infer_type(item) for item in value.values())
            return dict[key_type, value_type]
        case _:
            return type(value)


def _build_type_adapter(type_: Any) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(type_)
    except (PydanticUndefinedAnnotation, PydanticUserError) as exc:
        raise UnsupportedValue(
            f"cannot build a schema for {_type_name(type_)}: {exc}"
        ) from exc


@lru_cache(maxsize=_TYPE_ADAPTER_CACHE_SIZE)
def _cached_type_adapter(type_: Any) -> TypeAdapter[Any]:
    return _build_type_adapter(type_)


def type_adapter(type_: Any) -> TypeAdapter[Any]:
    try:
        hash(type_)
    except TypeError:
        return _build_type_adapter(type_)
    return _cached_type_adapter(type_)


def _structured_fields(value: Any, by_alias: bool) -> list[tuple[str, Any]] | None:
    """Return ``(document key, field value)`` pairs for models and dataclasses."""

    if isinstance(value, BaseModel):
        items: list[tuple[str, Any]] = []
        for name, field in type(value).model_fields.items():
            key = name
            if by_alias:
                key = field.serialization_alias or field.alias or name
            items.append((key, getattr(value, name)))
        items.extend((value.model_extra or {}).items())
        return items
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    return None


def _child_pairs(
    value: Any, document: Document, by_alias: bool
) -> Iterator[tuple[str | int, Any]]:
    """Pair each child of ``document`` with the value it was dumped from."""

    if isinstance(document, dict):
        fields = _structured_fields(value, by_alias)
        if fields is None and isinstance(value, Mapping):
            fields = [
                (key if isinstance(key, str) else str(key), item)
                for key, item in value.items()
            ]
        for key, item in fields or ():
            if key in document:
                yield key, item
    elif (
        isinstance(document, list)
        and isinstance(value, (list, tuple))
        and len(value) == len(document)
    ):
        yield from enumerate(value)


def _annotate(
    value: Any, document: Document, by_alias: bool, mark_classes: bool
) -> Document:
    if (
        isinstance(value, datetime.datetime)
        and isinstance(value.tzinfo, ZoneInfo)
        and value.tzinfo.key
        and isinstance(document, str)
    ):
        return f"{document}[{value.tzinfo.key}]"

    if (
        mark_classes
        and isinstance(document, dict)
        and _structured_fields(value, by_alias) is not None
    ):
        document[CLASS_MARKER] = type(value)
    for key, item in list(_child_pairs(value, document, by_alias)):
        document[key] = _annotate(item, document[key], by_alias, mark_classes)
    return document


def _revive_zoned_datetime(text: str) -> str | datetime.datetime:
    match = _ZONED_DATETIME_RE.fullmatch(text)
    if match is None:
        return text
    try:
        zone = ZoneInfo(match["zone"])
        stamp = datetime.datetime.fromisoformat(match["stamp"])
    except (ValueError, ZoneInfoNotFoundError):
        return text
    if stamp.tzinfo is None:
        return stamp.replace(tzinfo=zone)
    return stamp.astimezone(zone)


def _validation_input(document: Document) -> Any:
    """Drop class markers and turn zoned datetime strings back into datetimes."""

    if isinstance(document, dict):
        return {
            key: _validation_input(item)
            for key, item in document.items()
            if key != CLASS_MARKER
        }
    if isinstance(document, list):
        return [_validation_input(item) for item in document]
    if isinstance(document, str):
        return _revive_zoned_datetime(document)
    return document


def _find_unknown_field(
    submitted: Any, echo: Document, location: tuple[str, ...]
) -> tuple[str, ...] | None:
    """Return the location of the first object key that ``echo`` dropped."""

    if isinstance(submitted, dict) and isinstance(echo, dict):
        for key, value in submitted.items():
            if key not in echo:
                return (*location, key)
            found = _find_unknown_field(value, echo[key], (*location, key))
            if found is not None:
                return found
    elif (
        isinstance(submitted, list)
        and isinstance(echo, list)
        and len(submitted) == len(echo)
    ):
        for index, (item, echoed) in enumerate(zip(submitted, echo)):
            found = _find_unknown_field(item, echoed, (*location, str(index)))
            if found is not None:
                return found
    return None


def _find_class_change(
    result: Any, document: Document, by_alias: bool, location: tuple[str, ...]
) -> tuple[tuple[str, ...], type, type] | None:
    """Return the first marked object node that was rebuilt as another class."""

    if isinstance(document, dict):
        expected = document.get(CLASS_MARKER)
        if expected is not None and type(result) is not expected:
            return location, expected, type(result)
    for key, item in _child_pairs(result, document, by_alias):
        found = _find_class_change(
            item, document[key], by_alias, (*location, str(key))
        )
        if found is not None:
            return found
    return None


def _format_location(location: tuple[str, ...]) -> str:
    return repr(PATH_SEPARATOR.join(location)) if location else "<root>"


@dataclass(frozen=True)
class Materializer:
    """Converts typed values to documents and back using pydantic.

    Attributes:
        by_alias: Dump and address model fields by their aliases. When off,
            field names are used both ways.
        forbid_unknown_fields: Reject documents carrying object keys that the
            target type would silently drop.
    """

    by_alias: bool = True
    forbid_unknown_fields: bool = True

    @classmethod
    def from_config(cls) -> "Materializer":
        return cls(
            by_alias=PATHCOPY_CONFIG.by_alias,
            forbid_unknown_fields=PATHCOPY_CONFIG.forbid_unknown_fields,
        )

    def to_document(
        self, value: Any, type_: Any = None, *, mark_classes: bool = False
    ) -> Document:
        """Dump ``value`` to a fresh document.

        With ``mark_classes`` every object node dumped from a model or dataclass
        records its class under ``CLASS_MARKER``; ``from_document`` then checks
        that the same class is rebuilt there.
        """

        if type_ is None:
            type_ = infer_type(value)
        adapter = type_adapter(type_)
        try:
            document = adapter.dump_python(value, mode="json", by_alias=self.by_alias)
        except PydanticSerializationError as exc:
            raise UnsupportedValue(
                f"cannot materialize {type(value).__qualname__} value: {exc}"
            ) from exc
        return _annotate(value, document, self.by_alias, mark_classes)

    def from_document(self, document: Document, type_: Any) -> Any:
        adapter = type_adapter(type_)
        submitted = _validation_input(document)
        try:
            # field names must be accepted whenever dumping did not use aliases
            result = adapter.validate_python(
                submitted,
                by_alias=self.by_alias,
                by_name=None if self.by_alias else True,
            )
        except ValidationError as exc:
            raise SchemaViolation(
                f"cannot reconstruct {_type_name(type_)}: {exc}",
                errors=exc.errors(include_url=False),
            ) from exc

        if self.forbid_unknown_fields:
            echo = adapter.dump_python(result, mode="json", by_alias=self.by_alias)
            location = _find_unknown_field(submitted, echo, ())
            if location is not None:
                raise SchemaViolation(
                    f'Unrecognized field "{location[-1]}" at '
                    f"{_format_location(location)} for {_type_name(type_)}"
                )

        change = _find_class_change(result, document, self.by_alias, ())
        if change is not None:
            location, expected, actual = change
            raise SchemaViolation(
                f"value at {_format_location(location)} was a {_type_name(expected)} "
                f"but reconstructs as {_type_name(actual)} for {_type_name(type_)}; "
                "pass type_ with a discriminated union to keep it"
            )
        return result


__all__ = ["CLASS_MARKER", "Document", "Materializer", "infer_type", "type_adapter"]
