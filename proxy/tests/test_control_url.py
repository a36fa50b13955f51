# tests/test_control_url.py
import pytest

from conduit_proxy.core.env import EnvSource
from conduit_proxy.core.errors import ControlPlaneConfigError, InvalidEnvVar, UrlError
from conduit_proxy.models.schemas import HostAndPort
from conduit_proxy.services.control_url import control_host_and_port_from_env, parse_control_url

ENV = "CONDUIT_PROXY_CONTROL_URL"
DEFAULT = "tcp://proxy-api.conduit.svc.cluster.local:8086"

# --- helpers ---------------------------------------------------------------

def _kind(text: str) -> UrlError:
    with pytest.raises(ControlPlaneConfigError) as exc:
        parse_control_url(text)
    assert exc.value.value == text
    return exc.value.kind

# --- tests ----------------------------------------------------------------

def test_root_path_is_accepted():
    assert parse_control_url("tcp://proxy-api:8086/") == HostAndPort(host="proxy-api", port=8086)


def test_missing_path_counts_as_root():
    hp = parse_control_url(DEFAULT)
    assert hp.host == "proxy-api.conduit.svc.cluster.local"
    assert hp.port == 8086


def test_host_is_not_forced_to_an_ip():
    assert parse_control_url("tcp://10.0.0.1:8086/").host == "10.0.0.1"
    assert parse_control_url("tcp://control.example:1/").host == "control.example"


def test_ipv6_host_loses_brackets():
    hp = parse_control_url("tcp://[::1]:8086/")
    assert hp.host == "::1"
    assert str(hp) == "[::1]:8086"


def test_non_root_path():
    assert _kind("tcp://host:8086/foo") is UrlError.PATH_NOT_ALLOWED


def test_fragment():
    assert _kind("tcp://host:8086/#frag") is UrlError.FRAGMENT_NOT_ALLOWED


def test_missing_port_has_no_default():
    assert _kind("tcp://host/") is UrlError.MISSING_PORT


def test_unsupported_scheme():
    assert _kind("http://host:8086/") is UrlError.UNSUPPORTED_SCHEME


def test_syntax_error():
    assert _kind("not a url") is UrlError.SYNTAX_ERROR


def test_missing_host_is_reported_before_scheme():
    assert _kind("udp:foo") is UrlError.MISSING_HOST


def test_port_is_checked_before_path():
    assert _kind("tcp://host/foo#frag") is UrlError.MISSING_PORT


def test_path_is_checked_before_fragment():
    assert _kind("tcp://host:8086/foo#frag") is UrlError.PATH_NOT_ALLOWED


def test_from_env_uses_default_when_unset():
    hp = control_host_and_port_from_env(ENV, DEFAULT, EnvSource({}))
    assert hp == HostAndPort(host="proxy-api.conduit.svc.cluster.local", port=8086)


def test_from_env_prefers_the_variable():
    hp = control_host_and_port_from_env(ENV, DEFAULT, EnvSource({ENV: "tcp://cp.local:9000/"}))
    assert hp == HostAndPort(host="cp.local", port=9000)


def test_from_env_validates_the_default_too():
    with pytest.raises(ControlPlaneConfigError) as exc:
        control_host_and_port_from_env(ENV, "tcp://cp.local/", EnvSource({}))
    assert exc.value.kind is UrlError.MISSING_PORT


def test_from_env_rejects_non_text():
    with pytest.raises(InvalidEnvVar):
        control_host_and_port_from_env(ENV, DEFAULT, EnvSource({ENV: b"\xff"}))
