"""Adapter contract tests for the default ports implementation.

Verify the shipped sources and formatters keep satisfying the application-layer
ports in ``src/lib_env_populate/application/ports.py`` so the setters accept
them.
"""

from __future__ import annotations

from pathlib import Path

from lib_env_populate.adapters.dotenv.default import DotEnvSource
from lib_env_populate.adapters.env.default import EnvironSource
from lib_env_populate.adapters.formatters.uppercase import Uppercaser
from lib_env_populate.adapters.mapping.default import ChainSource, MappingSource
from lib_env_populate.application import ports


def test_sources_satisfy_source_port(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("A=1\n", encoding="utf-8")
    for source in (
        EnvironSource(environ={}),
        MappingSource({}),
        ChainSource(),
        DotEnvSource(env_file),
    ):
        assert isinstance(source, ports.Source)
        value, found = source.get("UNLIKELY_KEY_NAME")
        assert (value, found) == ("", False)


def test_uppercaser_satisfies_formatter_port() -> None:
    formatter = Uppercaser()
    assert isinstance(formatter, ports.Formatter)
    assert not isinstance(formatter, ports.Source)
