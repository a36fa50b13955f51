"""Errors raised while loading the proxy configuration.

Every failure surfaces as a ``ConfigError`` subclass so the caller can abort
startup with a precise message. Control-plane URL problems carry a
``UrlError`` describing which rule the URL broke.
"""
from __future__ import annotations

from enum import Enum


class UrlError(str, Enum):
    """Reason a control-plane URL was rejected."""
    SYNTAX_ERROR = "syntax_error"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    MISSING_HOST = "missing_host"
    MISSING_PORT = "missing_port"  # no default port is ever applied
    PATH_NOT_ALLOWED = "path_not_allowed"
    FRAGMENT_NOT_ALLOWED = "fragment_not_allowed"


class ConfigError(Exception):
    """Base class for configuration loading failures."""


class InvalidAddr(ConfigError):
    """An endpoint string is not of the form ``tcp://<ip>:<port>``."""

    def __init__(self, value: str):
        super().__init__(f"invalid address: {value!r}")
        self.value = value


class ControlPlaneConfigError(ConfigError):
    """The control-plane URL broke one of the rules in ``UrlError``."""

    def __init__(self, value: str, kind: UrlError):
        super().__init__(f"invalid control plane URL {value!r}: {kind.value}")
        self.value = value
        self.kind = kind


class NotANumber(ConfigError):
    """A numeric setting got text that is not a plain decimal number."""

    def __init__(self, value: str):
        super().__init__(f"not a number: {value!r}")
        self.value = value


class InvalidEnvVar(ConfigError):
    """An environment variable could not be read or parsed."""

    def __init__(self, name: str, value: str):
        super().__init__(f"invalid environment variable {name}={value!r}")
        self.name = name
        self.value = value
