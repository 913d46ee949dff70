"""nodecred.security.credentials

The credential model.

A Credential says who (node_id), what kind (operator_type) and when (timestamp).
An AuthenticatedCredential owns one Credential and the MAC that vouches for it.
Both are immutable; issuing and verifying never edit a value in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from nodecred.core.time import from_unix_seconds

NODE_ID_LENGTH = 20


class OperatorType(IntEnum):
    """Role of the node operator. Values are part of the wire format."""

    SOLO = 0
    ROCKETPOOL = 1


@dataclass(frozen=True, slots=True)
class Credential:
    node_id: bytes
    operator_type: OperatorType
    timestamp: int  # unix seconds, signed 64-bit

    def __post_init__(self) -> None:
        # Accept bytearray/memoryview but always hold immutable bytes.
        object.__setattr__(self, "node_id", bytes(self.node_id))
        object.__setattr__(self, "operator_type", OperatorType(self.operator_type))

    @property
    def issued_at(self) -> datetime:
        return from_unix_seconds(self.timestamp)


@dataclass(frozen=True, slots=True)
class AuthenticatedCredential:
    credential: Credential
    mac: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "mac", bytes(self.mac))

    @property
    def node_id(self) -> bytes:
        return self.credential.node_id
