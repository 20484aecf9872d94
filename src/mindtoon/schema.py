"""Record field schemas.

A record is any value whose type has a `RecordSchema`: an ordered list of
serializable fields plus an optional display label. Schemas are derived once
per type from dataclass fields or named tuple `_fields`, or registered
explicitly with `register_record` for other classes.

Field options mirror the usual serialization-annotation conventions:

    @dataclass
    class User:
        id: int
        full_name: str = toon_field(name="name")
        email: str = toon_field(default="", omitempty=True)
        password: str = toon_field(default="", skip=True)
        _cache: dict = field(default_factory=dict)  # private, never emitted
"""

from __future__ import annotations

import dataclasses
import logging
import weakref
from collections.abc import Callable, Iterator, Mapping, Sized
from dataclasses import dataclass
from functools import cached_property, lru_cache
from typing import Any, Final, TypeVar, overload

from mindtoon.errors import ToonSchemaError
from mindtoon.escape import needs_quoting

logger = logging.getLogger(__name__)

METADATA_KEY: Final = "toon"
DEFAULT_LABEL: Final = "name"

_T = TypeVar("_T", bound=type)


class _Auto:
    def __repr__(self) -> str:
        return "AUTO"


AUTO: Final = _Auto()


@dataclass(frozen=True)
class FieldSpec:
    """One serializable field of a record type.

    Attributes:
        name: Serialization name used as the key / column name.
        attr: Attribute read from the instance.
        omitempty: Skip the field when its value is empty.
        accessor: Optional callable used instead of `getattr(obj, attr)`.
    """

    name: str
    attr: str
    omitempty: bool = False
    accessor: Callable[[Any], Any] | None = None

    def get(self, obj: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(obj)
        return getattr(obj, self.attr, None)


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field list and display label for one record type."""

    type_name: str
    fields: tuple[FieldSpec, ...]
    label: str | None = None

    @cached_property
    def _by_name(self) -> dict[str, FieldSpec]:
        return {f.name: f for f in self.fields}

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    def field(self, name: str) -> FieldSpec | None:
        """Look up a field by serialization name."""
        return self._by_name.get(name)

    def label_of(self, obj: Any) -> str | None:
        """Return the record's display label, or None if it has no string label."""
        if self.label is None:
            return None
        value = getattr(obj, self.label, None)
        return value if isinstance(value, str) else None

    def emitted(self, obj: Any) -> Iterator[tuple[FieldSpec, Any]]:
        """Yield (field, value) pairs that survive the omitempty policy."""
        for spec in self.fields:
            value = spec.get(obj)
            if spec.omitempty and is_zero(value):
                continue
            yield spec, value


def toon_field(
    *,
    name: str | None = None,
    omitempty: bool = False,
    skip: bool = False,
    **kwargs: Any,
) -> Any:
    """`dataclasses.field` with TOON serialization options.

    Args:
        name: Serialization name (defaults to the attribute name).
        omitempty: Omit the field when its value is empty.
        skip: Never serialize the field.
        **kwargs: Passed through to `dataclasses.field`.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = {"name": name, "omitempty": omitempty, "skip": skip}
    return dataclasses.field(metadata=metadata, **kwargs)


def is_zero(value: Any) -> bool:
    """Return True if value is the empty/zero value for its type.

    A record that is present is never empty, whatever its fields hold; only
    a missing one (None or a dead reference) is.
    """
    if isinstance(value, weakref.ref):
        value = value()
    if value is None:
        return True
    if isinstance(value, (str, bool, int, float)):
        return not value
    if schema_for(type(value)) is not None:
        return False
    if isinstance(value, Sized):
        return len(value) == 0
    return False


_registry: dict[type, RecordSchema] = {}


def _is_namedtuple(tp: type) -> bool:
    return issubclass(tp, tuple) and isinstance(getattr(tp, "_fields", None), tuple)


def _dataclass_fields(tp: type) -> tuple[list[FieldSpec], set[str]]:
    specs: list[FieldSpec] = []
    declared: set[str] = set()
    for f in dataclasses.fields(tp):
        declared.add(f.name)
        if f.name.startswith("_"):
            continue
        opts: Mapping[str, Any] = f.metadata.get(METADATA_KEY) or {}
        if opts.get("skip"):
            continue
        specs.append(
            FieldSpec(
                name=opts.get("name") or f.name,
                attr=f.name,
                omitempty=bool(opts.get("omitempty")),
            )
        )
    return specs, declared


def _explicit_fields(fields: list[FieldSpec | str]) -> tuple[list[FieldSpec], set[str]]:
    specs = [FieldSpec(name=f, attr=f) if isinstance(f, str) else f for f in fields]
    return specs, {s.attr for s in specs}


def _build(tp: type, fields: list[FieldSpec | str] | None, label: str | None | _Auto) -> RecordSchema:
    if fields is not None:
        specs, declared = _explicit_fields(fields)
    elif dataclasses.is_dataclass(tp):
        specs, declared = _dataclass_fields(tp)
    elif _is_namedtuple(tp):
        specs, declared = _explicit_fields(list(tp._fields))  # type: ignore[attr-defined]
    else:
        raise ToonSchemaError(f"{tp.__qualname__} declares no fields; pass fields= explicitly")

    seen: set[str] = set()
    for spec in specs:
        if not spec.name or needs_quoting(spec.name):
            raise ToonSchemaError(f"{tp.__qualname__}: invalid serialization name {spec.name!r}")
        if spec.name in seen:
            raise ToonSchemaError(f"{tp.__qualname__}: duplicate serialization name {spec.name!r}")
        seen.add(spec.name)

    if isinstance(label, _Auto):
        label = DEFAULT_LABEL if DEFAULT_LABEL in declared else None
    elif label is not None and label not in declared:
        raise ToonSchemaError(f"{tp.__qualname__}: label {label!r} is not a declared field")

    return RecordSchema(type_name=tp.__qualname__, fields=tuple(specs), label=label)


@lru_cache(maxsize=None)
def schema_for(tp: type) -> RecordSchema | None:
    """Return the record schema for a type, or None if it is not a record type."""
    for base in tp.__mro__:
        if base in _registry:
            return _registry[base]
    if not (dataclasses.is_dataclass(tp) or _is_namedtuple(tp)):
        return None
    try:
        schema = _build(tp, None, AUTO)
    except ToonSchemaError:
        logger.debug("Type %s has no usable field schema; treating as opaque", tp.__qualname__)
        return None
    logger.debug("Derived schema for %s: %s", schema.type_name, schema.names)
    return schema


@overload
def register_record(
    cls: _T, /, fields: list[FieldSpec | str] | None = None, *, label: str | None | _Auto = AUTO
) -> _T: ...


@overload
def register_record(
    cls: None = None, /, fields: list[FieldSpec | str] | None = None, *, label: str | None | _Auto = AUTO
) -> Callable[[_T], _T]: ...


def register_record(
    cls: Any = None,
    /,
    fields: list[FieldSpec | str] | None = None,
    *,
    label: str | None | _Auto = AUTO,
) -> Any:
    """Register (or override) the record schema for a class.

    Usable directly or as a decorator:

        register_record(Point, ["x", "y"])

        @register_record(label="title")
        @dataclass
        class Book: ...

    Args:
        cls: Class to register.
        fields: Attribute names or `FieldSpec`s in output order. Defaults to
            the dataclass / named tuple fields.
        label: Attribute used as the display label in table cells. Defaults
            to "name" when the type declares it; None disables the label.

    Raises:
        ToonSchemaError: If the class has no derivable fields, a
            serialization name is empty, duplicated or contains a structural
            character, or the label is not a declared field.
    """

    def wrap(tp: _T) -> _T:
        if not isinstance(tp, type):
            raise ToonSchemaError(f"register_record expects a class, got {tp!r}")
        schema = _build(tp, fields, label)
        _registry[tp] = schema
        schema_for.cache_clear()
        logger.debug("Registered schema for %s: %s (label=%s)", schema.type_name, schema.names, schema.label)
        return tp

    if cls is None:
        return wrap
    return wrap(cls)
