"""Pydantic models for the network addresses the proxy is configured with."""
from __future__ import annotations

from ipaddress import IPv6Address

from pydantic import BaseModel, Field, IPvAnyAddress


class Endpoint(BaseModel):
    """A resolved network endpoint: a literal IP address plus a port."""

    model_config = {"frozen": True}

    ip: IPvAnyAddress
    port: int = Field(ge=0, le=65535)

    def socket_address(self) -> tuple[str, int]:
        """Return the ``(host, port)`` pair accepted by ``socket.bind``."""
        return str(self.ip), self.port

    def __str__(self) -> str:
        if isinstance(self.ip, IPv6Address):
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"


class HostAndPort(BaseModel):
    """Control-plane address; the host may be a name resolved later."""

    model_config = {"frozen": True}

    host: str = Field(min_length=1)
    port: int = Field(ge=0, le=65535)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"
