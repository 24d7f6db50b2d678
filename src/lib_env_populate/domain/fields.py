"""Field descriptors derived from dataclass targets.

Purpose
-------
Translate a dataclass type into the minimal per-field metadata the populator
needs: the field name, its :class:`FieldKind`, and the optional declared
default string.

Contents
--------
* :class:`FieldKind` – closed set of kinds the populator knows how to coerce.
* ``Int8`` … ``Float64`` – ``Annotated`` aliases declaring width-specific kinds.
* :func:`setting` – builds a dataclass field carrying a declared default.
* :class:`FieldDescriptor` / :func:`describe_fields` – reflection over a type.

System Role
-----------
This module is pure: it reads type annotations and dataclass metadata, never
values. The application layer maps each :class:`FieldKind` to a parser.
"""

from __future__ import annotations

import dataclasses
import enum
import sys
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated, Any, Final, get_args, get_origin, get_type_hints

DEFAULT_TAG: Final[str] = "default"
"""Dataclass metadata key holding the declared default raw string."""


class FieldKind(enum.Enum):
    """Kinds of fields the populator can assign.

    ``OTHER`` covers every annotation outside the table; such fields are left
    untouched.
    """

    STRING = "string"
    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DURATION = "duration"
    OTHER = "other"


Int8 = Annotated[int, FieldKind.INT8]
Int16 = Annotated[int, FieldKind.INT16]
Int32 = Annotated[int, FieldKind.INT32]
Int64 = Annotated[int, FieldKind.INT64]
UInt8 = Annotated[int, FieldKind.UINT8]
UInt16 = Annotated[int, FieldKind.UINT16]
UInt32 = Annotated[int, FieldKind.UINT32]
UInt64 = Annotated[int, FieldKind.UINT64]
Float32 = Annotated[float, FieldKind.FLOAT32]
Float64 = Annotated[float, FieldKind.FLOAT64]

_PLAIN_KINDS: Final[dict[Any, FieldKind]] = {
    str: FieldKind.STRING,
    bool: FieldKind.BOOL,
    int: FieldKind.INT64,
    float: FieldKind.FLOAT64,
    timedelta: FieldKind.DURATION,
}


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Per-field metadata consumed by the populator.

    Attributes
    ----------
    name:
        Attribute name as declared on the dataclass.
    kind:
        Coercion kind resolved from the annotation.
    default:
        Declared default raw string, or ``None`` when no default is declared.
    settable:
        ``False`` for private (underscore-prefixed) fields.
    """

    name: str
    kind: FieldKind
    default: str | None
    settable: bool


def setting(default: str, *, value: Any) -> Any:
    """Return a dataclass field declaring *default* as its fallback raw string.

    Why
    ----
    Dataclass metadata is the declarative place to attach per-field information
    without changing the attribute type.

    Parameters
    ----------
    default:
        Raw string used when the source has no value for the field's key. It is
        coerced exactly like a source value.
    value:
        Initial attribute value of a freshly constructed instance, normally
        the zero value of the field type (``0``, ``""``, ``False``,
        ``timedelta(0)``).

    Examples
    --------
    >>> @dataclass
    ... class Demo:
    ...     port: Int32 = setting("8080", value=0)
    >>> describe_fields(Demo)[0].default
    '8080'
    >>> Demo().port
    0
    """

    return dataclasses.field(default=value, metadata={DEFAULT_TAG: default})


def kind_of(annotation: Any) -> FieldKind:
    """Map a resolved type annotation to its :class:`FieldKind`.

    Examples
    --------
    >>> kind_of(str), kind_of(UInt16), kind_of(list[int])
    (<FieldKind.STRING: 'string'>, <FieldKind.UINT16: 'uint16'>, <FieldKind.OTHER: 'other'>)
    """

    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        for extra in extras:
            if isinstance(extra, FieldKind):
                return extra
        return kind_of(base)
    try:
        return _PLAIN_KINDS.get(annotation, FieldKind.OTHER)
    except TypeError:
        return FieldKind.OTHER


def describe_fields(target_type: type) -> list[FieldDescriptor]:
    """Return descriptors for every dataclass field of *target_type* in declaration order.

    Parameters
    ----------
    target_type:
        A dataclass type. String annotations (``from __future__ import
        annotations``) are resolved through :func:`typing.get_type_hints`.

    Annotations that cannot be resolved (names imported only under
    ``TYPE_CHECKING``, classes local to a function) yield
    :attr:`FieldKind.OTHER` for that field alone.

    Examples
    --------
    >>> @dataclass
    ... class Demo:
    ...     name: str = ""
    ...     _secret: str = ""
    >>> [(d.name, d.kind.value, d.settable) for d in describe_fields(Demo)]
    [('name', 'string', True), ('_secret', 'string', False)]
    """

    hints = _type_hints(target_type)
    descriptors: list[FieldDescriptor] = []
    for field in dataclasses.fields(target_type):
        default = field.metadata.get(DEFAULT_TAG)
        descriptors.append(
            FieldDescriptor(
                name=field.name,
                kind=kind_of(hints.get(field.name, field.type)),
                default=None if default is None else str(default),
                settable=not field.name.startswith("_"),
            )
        )
    return descriptors


def _type_hints(target_type: type) -> dict[str, Any]:
    """Resolve all annotations at once, falling back to one field at a time."""

    try:
        return get_type_hints(target_type, include_extras=True)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return {field.name: _resolve_annotation(target_type, field) for field in dataclasses.fields(target_type)}


def _resolve_annotation(target_type: type, field: dataclasses.Field[Any]) -> Any:
    """Evaluate a single string annotation in its declaring class's module, ``Any`` if unresolvable."""

    if not isinstance(field.type, str):
        return field.type
    owner = next(
        (base for base in target_type.__mro__ if field.name in base.__dict__.get("__annotations__", {})),
        target_type,
    )
    module = sys.modules.get(owner.__module__)
    namespace = dict(vars(module)) if module is not None else {}
    try:
        return eval(field.type, namespace, dict(vars(owner)))  # noqa: S307 - same evaluation get_type_hints performs
    except (NameError, AttributeError, SyntaxError, TypeError):
        return Any
