"""End-to-end tests for the process-wide populate context.

These exercise the ergonomic ``set_source`` / ``set_formatter`` / ``populate``
trio, including the fail-fast policy for ``None`` replacements and population
straight from real environment variables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import pytest

import lib_env_populate
from lib_env_populate import (
    EnvironSource,
    Int32,
    MappingSource,
    PopulateContext,
    ProgrammingError,
    Uppercaser,
    get_formatter,
    get_source,
    populate,
    set_formatter,
    set_source,
    setting,
)


@dataclass
class ServiceConfig:
    host: str = setting("localhost", value="")
    port: Int32 = setting("8080", value=0)
    debug: bool = False
    timeout: timedelta = setting("30s", value=timedelta(0))
    _token: str = ""


@dataclass
class EndToEnd:
    a: str = ""
    b: Int32 = setting("7", value=0)


def test_defaults_are_environment_and_plain_uppercaser(clean_defaults) -> None:
    assert isinstance(get_source(), EnvironSource)
    assert get_formatter() == Uppercaser()


def test_set_source_none_fails_fast_and_keeps_binding(clean_defaults) -> None:
    before = get_source()
    with pytest.raises(ProgrammingError, match="source"):
        set_source(None)  # type: ignore[arg-type]
    assert get_source() is before


def test_set_formatter_none_fails_fast_and_keeps_binding(clean_defaults) -> None:
    before = get_formatter()
    with pytest.raises(ProgrammingError, match="formatter"):
        set_formatter(None)  # type: ignore[arg-type]
    assert get_formatter() is before


def test_setters_reject_objects_without_the_capability(clean_defaults) -> None:
    with pytest.raises(ProgrammingError):
        set_source(Uppercaser())  # type: ignore[arg-type]
    with pytest.raises(ProgrammingError):
        set_formatter(MappingSource({}))  # type: ignore[arg-type]


def test_context_constructor_applies_the_same_policy() -> None:
    with pytest.raises(ProgrammingError):
        PopulateContext(source=object())  # type: ignore[arg-type]


def test_set_source_affects_later_populate_calls(clean_defaults) -> None:
    set_source(MappingSource({"A": "hello"}))
    target = EndToEnd()
    populate(target)
    assert target == EndToEnd(a="hello", b=7)

    set_source(MappingSource({"A": "again", "B": "9"}))
    second = EndToEnd()
    populate(second)
    assert second == EndToEnd(a="again", b=9)


def test_set_formatter_affects_later_populate_calls(clean_defaults) -> None:
    set_source(MappingSource({"APP_A": "prefixed", "A": "plain"}))
    set_formatter(Uppercaser(prefix="APP"))
    target = EndToEnd()
    populate(target)
    assert target.a == "prefixed"


def test_explicit_context_ignores_default_bindings(clean_defaults) -> None:
    set_source(MappingSource({"A": "global"}))
    target = EndToEnd()
    populate(target, context=PopulateContext(MappingSource({"A": "local"})))
    assert target.a == "local"


def test_populate_from_process_environment(clean_defaults, monkeypatch) -> None:
    monkeypatch.setenv("SVC_HOST", "db.internal")
    monkeypatch.setenv("SVC_DEBUG", "T")
    monkeypatch.setenv("SVC_TIMEOUT", "2m")
    monkeypatch.setenv("SVC__TOKEN", "leak")
    monkeypatch.delenv("SVC_PORT", raising=False)
    set_formatter(Uppercaser(prefix="svc"))

    config = ServiceConfig()
    populate(config)

    assert config.host == "db.internal"
    assert config.port == 8080
    assert config.debug is True
    assert config.timeout == timedelta(minutes=2)
    assert config._token == ""


def test_reset_defaults_restores_environment(clean_defaults) -> None:
    set_source(MappingSource({}))
    set_formatter(Uppercaser(prefix="X"))
    lib_env_populate.reset_defaults()
    assert isinstance(get_source(), EnvironSource)
    assert get_formatter() == Uppercaser()
