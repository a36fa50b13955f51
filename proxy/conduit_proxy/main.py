"""Startup entry point for the Conduit proxy configuration.

Loads and validates the configuration before anything else runs. On success
the validated settings are printed as JSON; on failure the error is logged
and a non-zero exit code returned so process startup is aborted.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from conduit_proxy.core.config import load_config
from conduit_proxy.core.env import EnvSource
from conduit_proxy.core.errors import ConfigError
from conduit_proxy.core.logging import setup_logging

log = logging.getLogger("Conduit-Proxy")

EXIT_INVALID_CONFIG = 2


def main(source: Optional[EnvSource] = None) -> int:
    setup_logging()
    try:
        config = load_config(source)
    except ConfigError as e:
        log.error("Refusing to start: %s", e)
        return EXIT_INVALID_CONFIG
    print(config.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
