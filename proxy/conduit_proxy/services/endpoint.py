"""Parsing of listener and forward addresses.

Addresses are written as ``tcp://<ip>:<port>``. The host must be a literal
IPv4 or IPv6 address (IPv6 in brackets) since nothing here resolves names,
and the port must be given explicitly: there is no sensible default port for
an arbitrary internal endpoint. Any path or fragment is ignored.
"""
from __future__ import annotations

from ipaddress import ip_address

from pydantic import AnyUrl, TypeAdapter, ValidationError

from conduit_proxy.core.errors import InvalidAddr
from conduit_proxy.models.schemas import Endpoint

_url_adapter = TypeAdapter(AnyUrl)


def parse_endpoint(text: str) -> Endpoint:
    """Parse ``text`` into an Endpoint, raising ``InvalidAddr`` on any problem."""
    try:
        url = _url_adapter.validate_python(text)
    except ValidationError as e:
        raise InvalidAddr(text) from e

    if url.scheme != "tcp" or not url.host or url.port is None:
        raise InvalidAddr(text)

    try:
        ip = ip_address(url.host.strip("[]"))
    except ValueError as e:
        raise InvalidAddr(text) from e
    return Endpoint(ip=ip, port=url.port)
