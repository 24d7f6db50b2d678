"""Composition root for ``lib_env_populate``.

Purpose
-------
Bind a :class:`Source` and a :class:`Formatter` together and expose the single
``populate`` entry point. The pair lives in an explicit
:class:`PopulateContext`; a process-wide default context keeps the
``set_source`` / ``set_formatter`` / ``populate`` trio ergonomic.

Contents
--------
* :class:`PopulateContext` – source/formatter pair with fail-fast setters.
* :func:`default_context` – the process-wide context used when none is passed.
* :func:`populate` – fills a dataclass instance from a context.
* :func:`set_source` / :func:`set_formatter` / :func:`get_source` /
  :func:`get_formatter` / :func:`reset_defaults` – default-context helpers.

System Role
-----------
The default context is plain shared state without locking. Code that swaps
sources or formatters from several threads should build one
:class:`PopulateContext` per thread, or hold an external lock around each
setter/``populate`` pair.
"""

from __future__ import annotations

from typing import Any

from .adapters.env.default import EnvironSource
from .adapters.formatters.uppercase import Uppercaser
from .application.populate import populate_fields
from .application.ports import Formatter, Source
from .domain.errors import ProgrammingError
from .observability import log_debug


class PopulateContext:
    """Active source and formatter used by :func:`populate`.

    Why
    ----
    Passing the pair explicitly lets independent configurations coexist (one
    per service, per test, per thread) without touching global state.

    What
    ----
    Defaults to :class:`EnvironSource` and an unprefixed :class:`Uppercaser`.
    Both setters reject ``None`` and objects that do not implement the
    capability by raising :class:`ProgrammingError`, leaving the previous
    binding in place, so :meth:`populate` can always call through.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from lib_env_populate.adapters.mapping.default import MappingSource
    >>> @dataclass
    ... class Demo:
    ...     port: int = 0
    >>> context = PopulateContext(MappingSource({"SVC_PORT": "8080"}), Uppercaser(prefix="svc"))
    >>> demo = Demo()
    >>> context.populate(demo)
    >>> demo.port
    8080
    """

    def __init__(self, source: Source | None = None, formatter: Formatter | None = None) -> None:
        self._source: Source = EnvironSource()
        self._formatter: Formatter = Uppercaser()
        if source is not None:
            self.set_source(source)
        if formatter is not None:
            self.set_formatter(formatter)

    @property
    def source(self) -> Source:
        return self._source

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def set_source(self, source: Source) -> None:
        """Replace the active source; ``None`` raises :class:`ProgrammingError`."""

        if source is None:
            raise ProgrammingError("Attempted to set source to None")
        if not isinstance(source, Source):
            raise ProgrammingError(f"{type(source).__name__} does not implement get(key) -> (value, found)")
        self._source = source
        log_debug("source_replaced", source=type(source).__name__)

    def set_formatter(self, formatter: Formatter) -> None:
        """Replace the active formatter; ``None`` raises :class:`ProgrammingError`."""

        if formatter is None:
            raise ProgrammingError("Attempted to set formatter to None")
        if not isinstance(formatter, Formatter):
            raise ProgrammingError(f"{type(formatter).__name__} does not implement format(field_name) -> str")
        self._formatter = formatter
        log_debug("formatter_replaced", formatter=type(formatter).__name__)

    def populate(self, target: Any) -> None:
        """Fill *target* using this context's source and formatter."""

        populate_fields(target, self._source, self._formatter)

    def __repr__(self) -> str:
        return f"PopulateContext(source={self._source!r}, formatter={self._formatter!r})"


_DEFAULT_CONTEXT = PopulateContext()


def default_context() -> PopulateContext:
    """Return the process-wide context used when ``populate`` gets no context."""

    return _DEFAULT_CONTEXT


def populate(target: Any, *, context: PopulateContext | None = None) -> None:
    """Populate the public fields of the dataclass instance *target*.

    Why
    ----
    This is the library's one-call entry point: construct a zero-valued
    dataclass, hand it over, read the filled fields.

    What
    ----
    For each public field, derives a key with the context's formatter, looks it
    up in the context's source, falls back to the declared default (see
    :func:`lib_env_populate.setting`) when the key is absent, coerces the raw
    string into the field's kind and assigns it. Values that do not parse
    leave the field untouched.

    Parameters
    ----------
    target:
        Mutable dataclass instance, mutated in place.
    context:
        Source/formatter pair to use. Defaults to :func:`default_context`.

    Raises
    ------
    InvalidArgument
        When *target* is a class, a frozen dataclass instance, or not a
        dataclass instance at all. *target* is left untouched.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from lib_env_populate.adapters.mapping.default import MappingSource
    >>> from lib_env_populate.domain.fields import setting
    >>> @dataclass
    ... class Demo:
    ...     a: str = ""
    ...     b: int = setting("7", value=0)
    >>> demo = Demo()
    >>> populate(demo, context=PopulateContext(MappingSource({"A": "hello"})))
    >>> demo
    Demo(a='hello', b=7)
    """

    (context or _DEFAULT_CONTEXT).populate(target)


def set_source(source: Source) -> None:
    """Replace the source of the default context (fail fast on ``None``)."""

    _DEFAULT_CONTEXT.set_source(source)


def set_formatter(formatter: Formatter) -> None:
    """Replace the formatter of the default context (fail fast on ``None``)."""

    _DEFAULT_CONTEXT.set_formatter(formatter)


def get_source() -> Source:
    return _DEFAULT_CONTEXT.source


def get_formatter() -> Formatter:
    return _DEFAULT_CONTEXT.formatter


def reset_defaults() -> None:
    """Restore the default context to the environment source and unprefixed uppercaser."""

    _DEFAULT_CONTEXT.set_source(EnvironSource())
    _DEFAULT_CONTEXT.set_formatter(Uppercaser())


__all__ = [
    "PopulateContext",
    "default_context",
    "populate",
    "set_source",
    "set_formatter",
    "get_source",
    "get_formatter",
    "reset_defaults",
]
