from __future__ import annotations

import pytest

from lib_env_populate import Uppercaser


@pytest.mark.parametrize(
    ("prefix", "field", "expected"),
    [
        ("APP", "Port", "APP_PORT"),
        ("", "Port", "PORT"),
        ("app", "db_host", "APP_DB_HOST"),
        ("", "already_UPPER", "ALREADY_UPPER"),
    ],
)
def test_uppercaser(prefix: str, field: str, expected: str) -> None:
    assert Uppercaser(prefix=prefix).format(field) == expected


def test_uppercaser_is_immutable() -> None:
    formatter = Uppercaser(prefix="APP")
    with pytest.raises(AttributeError):
        formatter.prefix = "OTHER"  # type: ignore[misc]
