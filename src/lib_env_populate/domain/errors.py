"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the populator, the sources, and
consuming applications. The hierarchy lives in the domain layer so adapters and
the composition root can depend on it without creating cycles.

Contents
--------
* :class:`PopulateError` – umbrella base class for every library failure.
* :class:`InvalidArgument` – ``populate`` received something it cannot mutate.
* :class:`ProgrammingError` – a setter was handed ``None`` or a non-conforming
  capability.
* :class:`CoercionError` – a raw string does not parse into a field kind.
* :class:`InvalidFormat` – a ``.env`` file contains a malformed line.
* :class:`NotFound` – a ``.env`` file does not exist.

System Role
-----------
Only :class:`InvalidArgument`, :class:`ProgrammingError` and the dotenv errors
ever reach callers. :class:`CoercionError` is raised by individual parsers and
always absorbed by the populator so a single bad value never aborts a record.
"""

from __future__ import annotations


class PopulateError(Exception):
    """Base type for all exceptions emitted by ``lib_env_populate``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidArgument(PopulateError, TypeError):
    """Raised when ``populate`` is called with a target it cannot fill.

    Why
    ----
    The populator mutates records in place. Classes, frozen dataclasses and
    non-dataclass values are recoverable caller mistakes, so they surface as an
    ordinary exception the caller may choose to treat as fatal.
    """


class ProgrammingError(PopulateError, TypeError):
    """Raised when a source or formatter setter is given ``None``.

    Why
    ----
    The active source and formatter must always be callable. Rejecting bad
    replacements at the setter keeps every later ``populate`` call safe.
    """


class CoercionError(PopulateError, ValueError):
    """Signals that a raw value cannot be converted into a field kind.

    Current Usage
    -------------
    Raised by the parsers in :mod:`lib_env_populate.application.populate` and
    :mod:`lib_env_populate.domain.durations`; swallowed per field by
    :func:`lib_env_populate.application.populate.populate_fields`.
    """


class InvalidFormat(PopulateError):
    """Raised when a ``.env`` file cannot be parsed into key/value pairs."""


class NotFound(PopulateError):
    """Represents a missing ``.env`` file handed to :class:`DotEnvSource`."""
