# tests/test_env.py
import pytest

from conduit_proxy.core.env import NOT_TEXT, EnvSource, env_var
from conduit_proxy.core.errors import InvalidEnvVar


def test_present_and_absent():
    src = EnvSource({"A": "1"})
    assert src.get("A") == "1"
    assert src.get("B") is None


def test_empty_string_is_present():
    assert EnvSource({"A": ""}).get("A") == ""


def test_bytes_are_decoded():
    assert EnvSource({"A": "tcp://[::1]:1".encode()}).get("A") == "tcp://[::1]:1"


@pytest.mark.parametrize("raw", [b"\xff\xfe", "bad\udcff"])
def test_value_that_is_not_text(raw):
    with pytest.raises(InvalidEnvVar) as exc:
        EnvSource({"A": raw}).get("A")
    assert exc.value.name == "A"
    assert exc.value.value == NOT_TEXT


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("CONDUIT_TEST_VAR", "hello")
    monkeypatch.delenv("CONDUIT_TEST_MISSING", raising=False)
    assert env_var("CONDUIT_TEST_VAR") == "hello"
    assert env_var("CONDUIT_TEST_MISSING") is None
