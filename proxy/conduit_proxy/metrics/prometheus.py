from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, Info

if TYPE_CHECKING:
    from conduit_proxy.core.config import Config

# Standalone registry so loading config never touches the global default one
registry = CollectorRegistry()
CONFIG_LOADS = Counter(
    "proxy_config_loads_total", "Configuration load attempts", ["result"], registry=registry
)
CONFIG_INFO = Info("proxy_config", "Currently loaded proxy configuration", registry=registry)


def record_loaded(config: "Config") -> None:
    """Count a successful load and publish the settings it produced."""
    CONFIG_LOADS.labels(result="ok").inc()
    CONFIG_INFO.info({
        "private_listener": str(config.private_listener.addr),
        "public_listener": str(config.public_listener.addr),
        "control_listener": str(config.control_listener.addr),
        "private_forward": str(config.private_forward) if config.private_forward else "",
        "control_plane": str(config.control_host_and_port),
        "event_buffer_capacity": str(config.event_buffer_capacity),
        "metrics_flush_interval_secs": str(int(config.metrics_flush_interval.total_seconds())),
    })


def record_failed(error: Exception) -> None:
    """Count a failed load, labelled with the error type."""
    CONFIG_LOADS.labels(result=type(error).__name__).inc()
