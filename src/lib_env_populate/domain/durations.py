"""Human-readable duration grammar.

Purpose
-------
Parse duration strings such as ``"5s"``, ``"2h30m"`` or ``"1.5h"`` into
:class:`datetime.timedelta` values for fields declared with that type.

Contents
--------
* :data:`UNIT_NANOSECONDS` – accepted unit suffixes and their size.
* :func:`parse_duration` – strict parser raising :class:`CoercionError`.

System Role
-----------
Used by the coercion table of the populator for :attr:`FieldKind.DURATION`.
The grammar is a signed sequence of ``<decimal><unit>`` components; a bare
``"0"`` is the only unit-less value accepted. Resolution is one microsecond;
finer components are truncated toward zero.
"""

from __future__ import annotations

import re
from datetime import timedelta
from fractions import Fraction
from typing import Final, Mapping

from .errors import CoercionError

UNIT_NANOSECONDS: Final[Mapping[str, int]] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_MAX_NANOSECONDS: Final[int] = 2**63 - 1
_MAX_WHOLE_DIGITS: Final[int] = 19
_MAX_FRACTION_DIGITS: Final[int] = 30
_COMPONENT: Final[re.Pattern[str]] = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]+)")


def parse_duration(text: str) -> timedelta:
    """Return the :class:`timedelta` described by *text*.

    Parameters
    ----------
    text:
        Duration literal, optionally signed, e.g. ``"-1m30s"``.

    Returns
    -------
    timedelta
        Parsed value truncated to microsecond precision.

    Raises
    ------
    CoercionError
        When *text* is empty, lacks a unit, uses an unknown unit, or exceeds
        the signed 64-bit nanosecond range.

    Examples
    --------
    >>> parse_duration("2h30m")
    datetime.timedelta(seconds=9000)
    >>> parse_duration("1.5s")
    datetime.timedelta(seconds=1, microseconds=500000)
    >>> parse_duration("-300ms")
    datetime.timedelta(days=-1, seconds=86399, microseconds=700000)
    >>> parse_duration("0")
    datetime.timedelta(0)
    """

    body = text
    negative = False
    if body[:1] in ("-", "+"):
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise CoercionError(f"invalid duration {text!r}")

    total = Fraction(0)
    position = 0
    while position < len(body):
        match = _COMPONENT.match(body, position)
        if match is None:
            raise CoercionError(f"invalid duration {text!r}")
        whole, fraction, unit = match.groups()
        if not whole and not fraction:
            raise CoercionError(f"invalid duration {text!r}")
        size = UNIT_NANOSECONDS.get(unit)
        if size is None:
            raise CoercionError(f"unknown unit {unit!r} in duration {text!r}")
        # Anything wider than int64 nanoseconds is out of range; deeper fractions are below resolution.
        whole = whole.lstrip("0")
        if len(whole) > _MAX_WHOLE_DIGITS:
            raise CoercionError(f"duration {text[:32]!r}... out of range")
        fraction = (fraction or "")[:_MAX_FRACTION_DIGITS]
        amount = Fraction(int(whole or "0"))
        if fraction:
            amount += Fraction(int(fraction), 10 ** len(fraction))
        total += amount * size
        position = match.end()

    nanoseconds = int(total)
    if nanoseconds > _MAX_NANOSECONDS + (1 if negative else 0):
        raise CoercionError(f"duration {text!r} out of range")
    microseconds = nanoseconds // 1_000
    return timedelta(microseconds=-microseconds if negative else microseconds)
