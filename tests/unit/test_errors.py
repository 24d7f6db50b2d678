from __future__ import annotations

from lib_env_populate.domain.errors import (
    CoercionError,
    InvalidArgument,
    InvalidFormat,
    NotFound,
    PopulateError,
    ProgrammingError,
)


def test_error_hierarchy() -> None:
    for cls in (InvalidArgument, ProgrammingError, CoercionError, InvalidFormat, NotFound):
        assert issubclass(cls, PopulateError)
        assert isinstance(cls(""), PopulateError)


def test_builtin_bases_allow_idiomatic_catching() -> None:
    assert issubclass(InvalidArgument, TypeError)
    assert issubclass(ProgrammingError, TypeError)
    assert issubclass(CoercionError, ValueError)
