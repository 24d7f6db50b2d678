"""Field-population algorithm.

Purpose
-------
Fill the public fields of a mutable dataclass instance from a :class:`Source`,
deriving one key per field through a :class:`Formatter` and coercing each raw
string through a closed dispatch table keyed by :class:`FieldKind`.

Contents
--------
* :data:`COERCERS` – read-only mapping ``FieldKind -> parser``.
* :func:`populate_fields` – validates the target and assigns every field.
* :func:`resolve_raw` – key derivation plus default fallback for one field.
* Parser helpers (``_parse_bool``, ``_signed``, ``_unsigned``, ...).

System Role
-----------
The composition root (:mod:`lib_env_populate.core`) supplies the active source
and formatter; this module never reads process-wide state. Parse failures are
absorbed per field so one malformed value never aborts the whole record.
"""

from __future__ import annotations

import dataclasses
import re
import struct
from types import MappingProxyType
from typing import Any, Callable, Final, Mapping

from ..domain.durations import parse_duration
from ..domain.errors import CoercionError, InvalidArgument
from ..domain.fields import FieldDescriptor, FieldKind, describe_fields
from ..observability import log_debug, log_info, make_event
from .ports import Formatter, Source

_SIGNED_DIGITS: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_TRUE: Final[frozenset[str]] = frozenset({"1", "t", "true"})
_FALSE: Final[frozenset[str]] = frozenset({"0", "f", "false"})


def _parse_string(raw: str) -> str:
    return raw


def _parse_bool(raw: str) -> bool:
    """Parse ``1/t/true`` and ``0/f/false`` case-insensitively.

    Examples
    --------
    >>> _parse_bool("T"), _parse_bool("False")
    (True, False)
    """

    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise CoercionError(f"invalid boolean {raw!r}")


def _to_int(raw: str) -> int:
    # int() refuses very long digit strings with a plain ValueError.
    try:
        return int(raw)
    except ValueError as exc:
        raise CoercionError(f"integer {raw[:32]!r}... out of range") from exc


def _signed(bits: int) -> Callable[[str], int]:
    """Build a base-10 parser for a signed integer of *bits* width."""

    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def parse(raw: str) -> int:
        if not _SIGNED_DIGITS.fullmatch(raw):
            raise CoercionError(f"invalid integer {raw!r}")
        value = _to_int(raw)
        if not low <= value <= high:
            raise CoercionError(f"integer {raw!r} out of range for int{bits}")
        return value

    return parse


def _unsigned(bits: int) -> Callable[[str], int]:
    """Build a base-10 parser for an unsigned integer of *bits* width.

    Examples
    --------
    >>> _unsigned(8)("255")
    255
    >>> _unsigned(8)("256")
    Traceback (most recent call last):
    ...
    lib_env_populate.domain.errors.CoercionError: integer '256' out of range for uint8
    """

    high = (1 << bits) - 1

    def parse(raw: str) -> int:
        if not _UNSIGNED_DIGITS.fullmatch(raw):
            raise CoercionError(f"invalid unsigned integer {raw!r}")
        value = _to_int(raw)
        if value > high:
            raise CoercionError(f"integer {raw!r} out of range for uint{bits}")
        return value

    return parse


def _parse_float64(raw: str) -> float:
    # float() tolerates surrounding whitespace and digit separators; the grammar does not.
    if raw != raw.strip() or "_" in raw:
        raise CoercionError(f"invalid float {raw!r}")
    try:
        return float(raw)
    except ValueError as exc:
        raise CoercionError(f"invalid float {raw!r}") from exc


def _parse_float32(raw: str) -> float:
    """Parse *raw* and round it to single precision.

    Examples
    --------
    >>> _parse_float32("0.1")
    0.10000000149011612
    """

    value = _parse_float64(raw)
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError as exc:
        raise CoercionError(f"float {raw!r} out of range for float32") from exc


def _parse_duration(raw: str) -> Any:
    return parse_duration(raw)


COERCERS: Final[Mapping[FieldKind, Callable[[str], Any]]] = MappingProxyType(
    {
        FieldKind.STRING: _parse_string,
        FieldKind.BOOL: _parse_bool,
        FieldKind.INT8: _signed(8),
        FieldKind.INT16: _signed(16),
        FieldKind.INT32: _signed(32),
        FieldKind.INT64: _signed(64),
        FieldKind.UINT8: _unsigned(8),
        FieldKind.UINT16: _unsigned(16),
        FieldKind.UINT32: _unsigned(32),
        FieldKind.UINT64: _unsigned(64),
        FieldKind.FLOAT32: _parse_float32,
        FieldKind.FLOAT64: _parse_float64,
        FieldKind.DURATION: _parse_duration,
    }
)
"""Closed dispatch table. Kinds missing here (``OTHER``) are never assigned."""


def populate_fields(target: Any, source: Source, formatter: Formatter) -> None:
    """Assign every settable field of *target* from *source*.

    Why
    ----
    Keeps the algorithm independent from process-wide state so callers can run
    it with any source/formatter pair.

    Parameters
    ----------
    target:
        Mutable dataclass instance. Classes, frozen dataclasses and
        non-dataclass values raise :class:`InvalidArgument` before any mutation.
    source / formatter:
        Capabilities used for every field of this call.

    Side Effects
    ------------
    Mutates *target* in place and emits debug events per field.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from lib_env_populate.adapters.formatters.uppercase import Uppercaser
    >>> from lib_env_populate.adapters.mapping.default import MappingSource
    >>> @dataclass
    ... class Demo:
    ...     host: str = ""
    ...     debug: bool = False
    >>> demo = Demo()
    >>> populate_fields(demo, MappingSource({"HOST": "db", "DEBUG": "t"}), Uppercaser())
    >>> demo
    Demo(host='db', debug=True)
    """

    _require_mutable_dataclass(target)
    populated = 0
    for descriptor in describe_fields(type(target)):
        if not descriptor.settable:
            log_debug("field_skipped", **make_event(descriptor.name, None, {"reason": "private"}))
            continue
        key, raw = resolve_raw(descriptor, source, formatter)
        coerce = COERCERS.get(descriptor.kind)
        if coerce is None:
            log_debug("field_skipped", **make_event(descriptor.name, key, {"reason": "unsupported_kind"}))
            continue
        try:
            value = coerce(raw)
        except CoercionError as exc:
            log_debug(
                "field_coercion_failed",
                **make_event(descriptor.name, key, {"kind": descriptor.kind.value, "error": str(exc)}),
            )
            continue
        setattr(target, descriptor.name, value)
        populated += 1
        log_debug("field_populated", **make_event(descriptor.name, key, {"kind": descriptor.kind.value}))
    log_info("populate_complete", target=type(target).__qualname__, populated=populated)


def resolve_raw(descriptor: FieldDescriptor, source: Source, formatter: Formatter) -> tuple[str, str]:
    """Return ``(key, raw_value)`` for *descriptor*.

    What
    ----
    The source value wins when the key is found, even if it is empty. Otherwise
    the declared default is used, and ``""`` when there is none.

    Examples
    --------
    >>> from lib_env_populate.adapters.formatters.uppercase import Uppercaser
    >>> from lib_env_populate.adapters.mapping.default import MappingSource
    >>> field = FieldDescriptor("port", FieldKind.INT32, "80", True)
    >>> resolve_raw(field, MappingSource({}), Uppercaser(prefix="app"))
    ('APP_PORT', '80')
    >>> resolve_raw(field, MappingSource({"APP_PORT": ""}), Uppercaser(prefix="app"))
    ('APP_PORT', '')
    """

    key = formatter.format(descriptor.name)
    value, found = source.get(key)
    if found:
        return key, value
    if descriptor.default is not None:
        log_debug("field_defaulted", **make_event(descriptor.name, key))
        return key, descriptor.default
    return key, ""


def _require_mutable_dataclass(target: Any) -> None:
    """Raise :class:`InvalidArgument` unless *target* can be populated in place."""

    if isinstance(target, type):
        raise InvalidArgument("populate must only be called with a mutable instance")
    if not dataclasses.is_dataclass(target):
        raise InvalidArgument("populate must only be called with a dataclass instance")
    if type(target).__dataclass_params__.frozen:
        raise InvalidArgument("populate must only be called with a mutable instance")
