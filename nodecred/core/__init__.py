"""nodecred.core

Core primitives: config, errors, logging, time.

Nothing in here knows what a credential is.
"""

from .config import Config, CredentialsConfig, LoggingConfig
from .exceptions import (
    AuthenticationError,
    ConfigError,
    CredentialError,
    DecodingError,
    InternalError,
    InvalidInputError,
    NodecredError,
)
from .time import unix_seconds, utc_now

__all__ = [
    "AuthenticationError",
    "Config",
    "ConfigError",
    "CredentialError",
    "CredentialsConfig",
    "DecodingError",
    "InternalError",
    "InvalidInputError",
    "LoggingConfig",
    "NodecredError",
    "unix_seconds",
    "utc_now",
]
