"""`.env` file source adapter.

Purpose
-------
Implement the :class:`lib_env_populate.application.ports.Source` protocol over
a single `.env` file so local overrides can be populated without exporting
variables into the process environment.

Contents
--------
* :class:`DotEnvSource` – parses the file once and answers lookups from memory.
* Helper functions (`_parse_dotenv`, `_strip_quotes`) that perform parsing.

System Role
-----------
Typically chained behind :class:`lib_env_populate.EnvironSource` via
:class:`lib_env_populate.ChainSource` so real environment variables win.
"""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class DotEnvSource:
    """Resolve keys against the flat key/value pairs of a dotenv file.

    Why
    ----
    `.env` files supply secrets and developer overrides. Parsing eagerly means
    malformed files fail at construction, not in the middle of a populate call.
    """

    def __init__(self, path: str | Path) -> None:
        """Parse *path* immediately.

        Raises
        ------
        NotFound
            When *path* is not an existing file.
        InvalidFormat
            When a non-comment line lacks ``=`` or has an empty key.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> path = Path(tmp.name) / '.env'
        >>> _ = path.write_text('APP_TOKEN="secret"', encoding='utf-8')
        >>> DotEnvSource(path).get('APP_TOKEN')
        ('secret', True)
        >>> tmp.cleanup()
        """

        self.path = Path(path)
        if not self.path.is_file():
            log_debug("dotenv_not_found", path=str(self.path))
            raise NotFound(f"No dotenv file at {self.path}")
        self._values = _parse_dotenv(self.path)
        log_debug("dotenv_loaded", path=str(self.path), keys=sorted(self._values.keys()))

    def get(self, key: str) -> tuple[str, bool]:
        if key in self._values:
            return self._values[key], True
        return "", False


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse ``path`` into a flat dictionary, raising ``InvalidFormat`` on malformed lines.

    Examples
    --------
    >>> import os
    >>> tmp = Path('example.env')
    >>> body = os.linesep.join(['# comment', 'export FEATURE=true', 'TIMEOUT = 10']) + os.linesep
    >>> _ = tmp.write_text(body, encoding='utf-8')
    >>> _parse_dotenv(tmp)
    {'FEATURE': 'true', 'TIMEOUT': '10'}
    >>> tmp.unlink()
    """

    result: dict[str, str] = {}
    with path.open("r", encoding="utf-8") as handle:
        for line_number, raw_line in enumerate(handle, start=1):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export ") :].lstrip()
            key, sep, value = line.partition("=")
            key = key.strip()
            if not sep or not key:
                log_error("dotenv_invalid_line", path=str(path), line=line_number)
                raise InvalidFormat(f"Malformed line {line_number} in {path}")
            result[key] = _strip_quotes(value.strip())
    return result


def _strip_quotes(value: str) -> str:
    """Trim surrounding quotes and inline comments from ``value``.

    Examples
    --------
    >>> _strip_quotes('"token"')
    'token'
    >>> _strip_quotes("value # comment")
    'value'
    >>> _strip_quotes("'keep # this'")
    'keep # this'
    """

    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    if value.startswith("#"):
        return ""
    if " #" in value:
        return value.split(" #", 1)[0].strip()
    return value
