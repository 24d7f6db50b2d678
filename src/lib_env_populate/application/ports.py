"""Application-layer ports describing the pluggable capabilities.

Purpose
-------
Define the structural contracts a key/value source and a key formatter must
satisfy so the populator can orchestrate behaviour without depending on
concrete implementations.

Contents
--------
* :class:`Source` – resolves a key into ``(value, found)``.
* :class:`Formatter` – derives a source key from a field name.

System Role
-----------
These protocols enforce Dependency Inversion. Each adapter implements one
protocol; the setters in :mod:`lib_env_populate.core` check conformance at
runtime before accepting a replacement.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Source(Protocol):
    """Resolve configuration keys into raw string values.

    Why
    ----
    The ``found`` flag lets the populator tell an explicitly empty value from
    an absent one. Only absence triggers the declared default.
    """

    def get(self, key: str) -> tuple[str, bool]:
        """Return ``(value, True)`` when *key* exists, otherwise ``("", False)``."""


@runtime_checkable
class Formatter(Protocol):
    """Turn dataclass field names into source key names.

    Implementations must be pure and must not raise.
    """

    def format(self, field_name: str) -> str:
        """Return the source key for *field_name*."""
