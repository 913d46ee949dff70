"""nodecred.core.exceptions

Errors are part of the interface.

A forged credential and a broken serializer must never look the same to a caller.
"""

from __future__ import annotations


class NodecredError(Exception):
    """Base exception for nodecred."""


class ConfigError(NodecredError):
    """Configuration is missing, invalid, or inconsistent."""


class CredentialError(NodecredError):
    """Credential issuance, encoding, or verification failed."""


class InvalidInputError(CredentialError):
    """Issuance input rejected before any MAC work."""


class DecodingError(CredentialError):
    """Malformed base64, hex, JSON, or binary payload."""


class AuthenticationError(CredentialError):
    """The credential MAC does not match."""


class InternalError(CredentialError):
    """Serialization or MAC context failure. Not a verdict on the credential."""
