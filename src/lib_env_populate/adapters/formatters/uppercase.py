"""Upper-case key formatter.

Purpose
-------
Implement the :class:`lib_env_populate.application.ports.Formatter` protocol
with the conventional environment variable naming scheme: optionally prefix
the field name and upper-case the result.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Uppercaser:
    """Format field names as ``PREFIX_FIELD`` (or ``FIELD`` without a prefix).

    Examples
    --------
    >>> Uppercaser(prefix="app").format("Port")
    'APP_PORT'
    >>> Uppercaser().format("Port")
    'PORT'
    """

    prefix: str = ""

    def format(self, field_name: str) -> str:
        if self.prefix:
            return f"{self.prefix}_{field_name}".upper()
        return field_name.upper()
