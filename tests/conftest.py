"""Shared fixtures keeping the process-wide populate context isolated per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from lib_env_populate import PopulateContext, default_context, reset_defaults


@pytest.fixture()
def clean_defaults() -> Iterator[PopulateContext]:
    """Start and end with the environment source and plain uppercaser bound globally."""

    reset_defaults()
    yield default_context()
    reset_defaults()
