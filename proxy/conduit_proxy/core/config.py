"""Configuration for the Conduit proxy.

Provides strongly-typed settings using Pydantic and a loader that reads them
from environment variables, substituting defaults for anything unset. The
loader is fail-fast: the first invalid setting aborts the load with a
``ConfigError`` and nothing is returned.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel, Field

from conduit_proxy.core.env import EnvSource, env_var
from conduit_proxy.core.errors import ConfigError, InvalidEnvVar, NotANumber
from conduit_proxy.metrics.prometheus import record_failed, record_loaded
from conduit_proxy.models.schemas import Endpoint, HostAndPort
from conduit_proxy.services.control_url import control_host_and_port_from_env
from conduit_proxy.services.endpoint import parse_endpoint

log = logging.getLogger("Conduit-Proxy.Config")

T = TypeVar("T")

# Environment variables read when loading the configuration
ENV_EVENT_BUFFER_CAPACITY = "CONDUIT_PROXY_EVENT_BUFFER_CAPACITY"
ENV_METRICS_FLUSH_INTERVAL_SECS = "CONDUIT_PROXY_METRICS_FLUSH_INTERVAL_SECS"
ENV_PRIVATE_LISTENER = "CONDUIT_PROXY_PRIVATE_LISTENER"
ENV_PRIVATE_FORWARD = "CONDUIT_PROXY_PRIVATE_FORWARD"
ENV_PUBLIC_LISTENER = "CONDUIT_PROXY_PUBLIC_LISTENER"
ENV_CONTROL_LISTENER = "CONDUIT_PROXY_CONTROL_LISTENER"
ENV_PRIVATE_CONNECT_TIMEOUT = "CONDUIT_PROXY_PRIVATE_CONNECT_TIMEOUT"
ENV_PUBLIC_CONNECT_TIMEOUT = "CONDUIT_PROXY_PUBLIC_CONNECT_TIMEOUT"
ENV_CONTROL_URL = "CONDUIT_PROXY_CONTROL_URL"
ENV_RESOLV_CONF = "CONDUIT_RESOLV_CONF"

# Identity of the running proxy; read verbatim by other components
ENV_NODE_NAME = "CONDUIT_PROXY_NODE_NAME"
ENV_POD_NAME = "CONDUIT_PROXY_POD_NAME"
ENV_POD_NAMESPACE = "CONDUIT_PROXY_POD_NAMESPACE"

DEFAULT_EVENT_BUFFER_CAPACITY = 10_000
DEFAULT_METRICS_FLUSH_INTERVAL_SECS = 10
DEFAULT_PRIVATE_LISTENER = "tcp://127.0.0.1:4140"
DEFAULT_PUBLIC_LISTENER = "tcp://0.0.0.0:4143"
DEFAULT_CONTROL_LISTENER = "tcp://0.0.0.0:4190"
DEFAULT_CONTROL_URL = "tcp://proxy-api.conduit.svc.cluster.local:8086"
DEFAULT_RESOLV_CONF = "/etc/resolv.conf"


class Listener(BaseModel):
    """Where a listener should bind."""

    model_config = {"frozen": True}

    addr: Endpoint


class Config(BaseModel):
    """All configuration settings for the proxy process."""

    model_config = {"frozen": True}

    # Connections initiated on the host
    private_listener: Listener
    # Connections initiated by external sources
    public_listener: Listener
    # Connections initiated by the control plane
    control_listener: Listener
    # Where to forward externally received connections
    private_forward: Optional[Endpoint] = None
    public_connect_timeout: Optional[timedelta] = None
    private_connect_timeout: Optional[timedelta] = None
    resolv_conf_path: Path
    control_host_and_port: HostAndPort
    event_buffer_capacity: int = Field(gt=0)
    metrics_flush_interval: timedelta

    @classmethod
    def load_from_env(cls, source: Optional[EnvSource] = None) -> "Config":
        """Load a Config from environment variables."""
        return load_config(source)


def _parse_decimal(raw: str) -> int:
    # plain ASCII digits only: no sign, whitespace or "_" separators
    if not (raw.isascii() and raw.isdigit()):
        raise NotANumber(raw)
    return int(raw)


def parse_positive_int(raw: str) -> int:
    value = _parse_decimal(raw)
    if value == 0:
        raise ValueError("must be greater than zero")
    return value


def _duration(**kwargs: int) -> timedelta:
    try:
        return timedelta(**kwargs)
    except OverflowError as e:
        raise ValueError(f"duration out of range: {kwargs}") from e


def parse_millis(raw: str) -> timedelta:
    return _duration(milliseconds=_parse_decimal(raw))


def parse_secs(raw: str) -> timedelta:
    return _duration(seconds=parse_positive_int(raw))


def env_var_parse(
    name: str, parse: Callable[[str], T], source: Optional[EnvSource] = None
) -> Optional[T]:
    """
    Read ``name`` and run it through ``parse``.

    Returns None when the variable is unset. Any failure of ``parse`` is
    reported as ``InvalidEnvVar`` carrying the variable name and raw text.
    """
    raw = env_var(name, source)
    if raw is None:
        return None
    try:
        return parse(raw)
    except (ValueError, ConfigError) as e:
        raise InvalidEnvVar(name, raw) from e


def _with_default(value: Optional[T], default: Callable[[], T], name: str) -> T:
    if value is None:
        log.debug("%s not set, using default", name)
        return default()
    return value


def _load(source: EnvSource) -> Config:
    event_buffer_capacity = _with_default(
        env_var_parse(ENV_EVENT_BUFFER_CAPACITY, parse_positive_int, source),
        lambda: DEFAULT_EVENT_BUFFER_CAPACITY,
        ENV_EVENT_BUFFER_CAPACITY,
    )
    metrics_flush_interval = _with_default(
        env_var_parse(ENV_METRICS_FLUSH_INTERVAL_SECS, parse_secs, source),
        lambda: timedelta(seconds=DEFAULT_METRICS_FLUSH_INTERVAL_SECS),
        ENV_METRICS_FLUSH_INTERVAL_SECS,
    )

    def listener(name: str, default: str) -> Listener:
        addr = _with_default(
            env_var_parse(name, parse_endpoint, source),
            lambda: parse_endpoint(default),
            name,
        )
        return Listener(addr=addr)

    private_listener = listener(ENV_PRIVATE_LISTENER, DEFAULT_PRIVATE_LISTENER)
    public_listener = listener(ENV_PUBLIC_LISTENER, DEFAULT_PUBLIC_LISTENER)
    control_listener = listener(ENV_CONTROL_LISTENER, DEFAULT_CONTROL_LISTENER)
    private_forward = env_var_parse(ENV_PRIVATE_FORWARD, parse_endpoint, source)
    public_connect_timeout = env_var_parse(ENV_PUBLIC_CONNECT_TIMEOUT, parse_millis, source)
    private_connect_timeout = env_var_parse(ENV_PRIVATE_CONNECT_TIMEOUT, parse_millis, source)
    resolv_conf = _with_default(
        env_var(ENV_RESOLV_CONF, source), lambda: DEFAULT_RESOLV_CONF, ENV_RESOLV_CONF
    )
    control_host_and_port = control_host_and_port_from_env(
        ENV_CONTROL_URL, DEFAULT_CONTROL_URL, source
    )

    return Config(
        private_listener=private_listener,
        public_listener=public_listener,
        control_listener=control_listener,
        private_forward=private_forward,
        public_connect_timeout=public_connect_timeout,
        private_connect_timeout=private_connect_timeout,
        resolv_conf_path=Path(resolv_conf),
        control_host_and_port=control_host_and_port,
        event_buffer_capacity=event_buffer_capacity,
        metrics_flush_interval=metrics_flush_interval,
    )


def load_config(source: Optional[EnvSource] = None) -> Config:
    """Load the proxy configuration from ``source`` (the process environment by default)."""
    try:
        config = _load(source or EnvSource())
    except ConfigError as e:
        record_failed(e)
        log.warning("Invalid configuration: %s", e)
        raise
    record_loaded(config)
    log.info(
        "Loaded configuration: private=%s public=%s control=%s control_plane=%s",
        config.private_listener.addr,
        config.public_listener.addr,
        config.control_listener.addr,
        config.control_host_and_port,
    )
    return config
