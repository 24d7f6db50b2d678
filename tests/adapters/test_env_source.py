"""Environment source tests covering presence signalling and live lookups."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_env_populate.adapters.env.default import EnvironSource, env_prefix


def test_env_prefix() -> None:
    assert env_prefix("billing-service") == "BILLING_SERVICE"


def test_injected_environ_distinguishes_empty_from_absent() -> None:
    source = EnvironSource(environ={"APP_PORT": "8080", "APP_EMPTY": ""})
    assert source.get("APP_PORT") == ("8080", True)
    assert source.get("APP_EMPTY") == ("", True)
    assert source.get("APP_MISSING") == ("", False)


def test_default_reads_process_environment_live(monkeypatch) -> None:
    source = EnvironSource()
    monkeypatch.delenv("LIB_ENV_POPULATE_PROBE", raising=False)
    assert source.get("LIB_ENV_POPULATE_PROBE") == ("", False)
    monkeypatch.setenv("LIB_ENV_POPULATE_PROBE", "seen")
    assert source.get("LIB_ENV_POPULATE_PROBE") == ("seen", True)


KEYS = st.sampled_from(["HOST", "PORT", "DEBUG", "TIMEOUT"])
VALUES = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=8)


@given(st.dictionaries(KEYS, VALUES, max_size=4), KEYS)
def test_lookup_matches_mapping_membership(environ: dict[str, str], key: str) -> None:
    value, found = EnvironSource(environ=environ).get(key)
    assert found is (key in environ)
    assert value == environ.get(key, "")
