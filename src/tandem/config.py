"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. The execution mode is an explicit value; reading
it from the environment is opt-in through ``AppConfig.from_env()``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from tandem.errors import ConfigurationError
from tandem.middleware.cors import CORSConfig

# Set by the Lambda runtime in every function container
SERVERLESS_MARKER = "AWS_LAMBDA_FUNCTION_NAME"
DEFAULT_PORT = "8080"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_LOG_FORMAT = "text"


class Mode(StrEnum):
    """Execution mode, fixed for the lifetime of an App."""

    LOCAL = "local"
    SERVERLESS = "serverless"


def detect_mode(environ: Mapping[str, str] | None = None) -> Mode:
    """Return ``Mode.SERVERLESS`` when the serverless marker is set and non-empty."""
    env = os.environ if environ is None else environ
    if env.get(SERVERLESS_MARKER, ""):
        return Mode.SERVERLESS
    return Mode.LOCAL


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        msg = f"PORT must be an integer, got {value!r}"
        raise ConfigurationError(msg) from None
    if not 0 < port < 65536:
        msg = f"PORT must be between 1 and 65535, got {port}"
        raise ConfigurationError(msg)
    return port


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(mode=Mode.SERVERLESS, log_format="json")
    """

    # Execution
    mode: Mode = Mode.LOCAL

    # Local listener
    host: str = DEFAULT_HOST
    port: int = int(DEFAULT_PORT)

    # CORS (shared by the preflight responder and the local middleware)
    cors: CORSConfig = field(default_factory=CORSConfig)

    # Logging
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT  # "text" or "json"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> AppConfig:
        """Build a config from environment variables.

        Reads:

        - ``AWS_LAMBDA_FUNCTION_NAME``: non-empty selects serverless mode
        - ``PORT``: local listener port (default ``8080``)
        - ``HOST``: local bind address
        - ``TANDEM_LOG_LEVEL`` / ``TANDEM_LOG_FORMAT``

        Keyword *overrides* win over anything read from the environment.
        """
        env = os.environ if environ is None else environ
        config = cls(
            mode=detect_mode(env),
            host=env.get("HOST") or DEFAULT_HOST,
            port=_parse_port(env.get("PORT") or DEFAULT_PORT),
            log_level=env.get("TANDEM_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
            log_format=env.get("TANDEM_LOG_FORMAT") or DEFAULT_LOG_FORMAT,
        )
        if overrides:
            config = replace(config, **overrides)
        return config
