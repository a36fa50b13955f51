"""Lookup of process-scoped environment variables."""
from __future__ import annotations

import os
from typing import Mapping, Optional, Union

from conduit_proxy.core.errors import InvalidEnvVar

NOT_TEXT = "<not text>"


class EnvSource:
    """
    Read-only view over environment variables.

    Distinguishes a missing variable (``None``) from one whose raw value is
    not valid text, which raises ``InvalidEnvVar`` instead of looking absent.
    Values may be ``str`` (as in ``os.environ``) or raw ``bytes``.
    """

    def __init__(self, environ: Optional[Mapping[str, Union[str, bytes]]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> Optional[str]:
        """Return the value of ``name``, or ``None`` when it is unset."""
        raw = self._environ.get(name)
        if raw is None:
            return None
        try:
            if isinstance(raw, bytes):
                return raw.decode("utf-8")
            # undecodable bytes show up in os.environ as lone surrogates
            raw.encode("utf-8")
        except UnicodeError as e:
            raise InvalidEnvVar(name, NOT_TEXT) from e
        return raw


def env_var(name: str, source: Optional[EnvSource] = None) -> Optional[str]:
    """Look up ``name`` in ``source`` (the process environment by default)."""
    return (source or EnvSource()).get(name)
