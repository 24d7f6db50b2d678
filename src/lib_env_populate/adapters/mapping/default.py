"""In-memory and layered source adapters.

Purpose
-------
Provide :class:`MappingSource` for explicit key/value tables (tests, embedded
defaults, values read elsewhere) and :class:`ChainSource` for precedence-ordered
lookups across several sources.

System Role
-----------
Both satisfy :class:`lib_env_populate.application.ports.Source`. The CLI uses
:class:`ChainSource` to consult the environment before a ``.env`` file.
"""

from __future__ import annotations

from collections.abc import Mapping

from ...application.ports import Source


class MappingSource:
    """Resolve keys against a caller-supplied mapping.

    Examples
    --------
    >>> source = MappingSource({'A': 'hello'})
    >>> source.get('A'), source.get('B')
    (('hello', True), ('', False))
    """

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = values

    def get(self, key: str) -> tuple[str, bool]:
        if key in self._values:
            return self._values[key], True
        return "", False


class ChainSource:
    """Ask several sources in order; the first one that finds the key wins.

    Why
    ----
    Mirrors layered precedence (environment over ``.env`` over built-ins)
    without teaching the populator about layers.

    Examples
    --------
    >>> chain = ChainSource(MappingSource({'A': 'env'}), MappingSource({'A': 'file', 'B': 'file'}))
    >>> chain.get('A'), chain.get('B'), chain.get('C')
    (('env', True), ('file', True), ('', False))
    """

    def __init__(self, *sources: Source) -> None:
        self._sources = tuple(sources)

    def get(self, key: str) -> tuple[str, bool]:
        for source in self._sources:
            value, found = source.get(key)
            if found:
                return value, True
        return "", False
