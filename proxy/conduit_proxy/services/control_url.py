"""Validation of the control-plane URL.

The control plane is addressed as ``tcp://<host>:<port>/``. Unlike listener
addresses the host may be a DNS name, but the URL must not carry a path other
than ``/`` or a fragment. Checks run in a fixed order and the first failure
is reported together with the raw URL.

A URL with an authority but no path at all (``tcp://host:8086``) counts as
the root path and is accepted; the default control URL has that form. Any
other non-``/`` path, ``//`` included, is rejected.
"""
from __future__ import annotations

from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from conduit_proxy.core.env import EnvSource, env_var
from conduit_proxy.core.errors import ControlPlaneConfigError, UrlError
from conduit_proxy.models.schemas import HostAndPort

_url_adapter = TypeAdapter(AnyUrl)


def parse_control_url(text: str) -> HostAndPort:
    """Validate ``text`` and return the control plane's host and port."""
    try:
        url = _url_adapter.validate_python(text)
    except ValidationError as e:
        raise ControlPlaneConfigError(text, UrlError.SYNTAX_ERROR) from e

    # host is checked before the scheme
    if not url.host:
        raise ControlPlaneConfigError(text, UrlError.MISSING_HOST)
    if url.scheme != "tcp":
        raise ControlPlaneConfigError(text, UrlError.UNSUPPORTED_SCHEME)
    if url.port is None:
        raise ControlPlaneConfigError(text, UrlError.MISSING_PORT)
    # an authority with no path at all ("tcp://h:1") is the root path
    if (url.path or "/") != "/":
        raise ControlPlaneConfigError(text, UrlError.PATH_NOT_ALLOWED)
    if url.fragment is not None:
        raise ControlPlaneConfigError(text, UrlError.FRAGMENT_NOT_ALLOWED)

    return HostAndPort(host=url.host.strip("[]"), port=url.port)


def control_host_and_port_from_env(
    name: str, default: str, source: Optional[EnvSource] = None
) -> HostAndPort:
    """Read the control-plane URL from ``name``, falling back to ``default``."""
    text = env_var(name, source)
    if text is None:
        text = default
    return parse_control_url(text)
