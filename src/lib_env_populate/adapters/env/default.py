"""Environment variable adapter.

Purpose
-------
Implement the :class:`lib_env_populate.application.ports.Source` protocol on
top of the process environment. This is the source bound to the default
populate context.

Key behaviours
--------------
* Reads only; the environment is never written.
* Absent variables yield ``("", False)`` so declared defaults can apply.
* An explicit ``environ`` mapping may be injected for tests.
"""

from __future__ import annotations

import os
from collections.abc import Mapping


def env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Why
    ----
    Applications usually namespace their variables after their package name;
    the result feeds :class:`lib_env_populate.Uppercaser`.

    Examples
    --------
    >>> env_prefix('billing-service')
    'BILLING_SERVICE'
    """

    return slug.replace("-", "_").upper()


class EnvironSource:
    """Resolve keys against environment variables."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the source with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`, read live on
            every lookup.
        """

        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> tuple[str, bool]:
        """Return ``(value, True)`` when *key* is set, otherwise ``("", False)``.

        Examples
        --------
        >>> source = EnvironSource(environ={'APP_PORT': '8080', 'EMPTY': ''})
        >>> source.get('APP_PORT')
        ('8080', True)
        >>> source.get('EMPTY')
        ('', True)
        >>> source.get('MISSING')
        ('', False)
        """

        value = self._environ.get(key)
        if value is None:
            return "", False
        return value, True

    def __repr__(self) -> str:
        return "EnvironSource()" if self._environ is os.environ else f"EnvironSource(environ=<{len(self._environ)} keys>)"
