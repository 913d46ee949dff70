"""nodecred.security.manager

Issues and verifies authenticated credentials.

The MAC is HMAC-SHA256(key, serialize_credential(credential)). Only the inner
credential is authenticated; the outer envelope's `mac` field never is.

One manager is safe to share across threads. The key is fixed for its lifetime.
"""

from __future__ import annotations

import hmac
import logging
from datetime import datetime

from cryptography.exceptions import AlreadyFinalized, UnsupportedAlgorithm

from nodecred.core.config import Config
from nodecred.core.exceptions import AuthenticationError, InternalError, InvalidInputError
from nodecred.core.time import in_int64_range, unix_seconds
from nodecred.security.credentials import NODE_ID_LENGTH, AuthenticatedCredential, Credential, OperatorType
from nodecred.security.mac_pool import MacContextPool
from nodecred.security.wire import serialize_credential

logger = logging.getLogger(__name__)


class CredentialManager:
    """Creates and verifies credentials under one secret key."""

    def __init__(self, key: bytes, *, pool_size: int = 32):
        if not isinstance(key, (bytes, bytearray)):
            raise InvalidInputError("secret key must be bytes")
        if not key:
            raise InvalidInputError("secret key must not be empty")

        self._pool = MacContextPool(bytes(key), max_idle=pool_size)
        logger.debug("credential_manager_ready", extra={"pool_size": pool_size})

    @classmethod
    def from_config(cls, config: Config) -> CredentialManager:
        return cls(config.credentials.key_bytes(), pool_size=config.credentials.pool_size)

    @property
    def pool(self) -> MacContextPool:
        return self._pool

    def _authenticate(self, credential: Credential) -> bytes:
        message = serialize_credential(credential)
        try:
            return self._pool.digest(message)
        except (AlreadyFinalized, UnsupportedAlgorithm) as e:
            raise InternalError("Couldn't compute MAC with pooled context") from e

    def create(
        self,
        timestamp: datetime | int,
        node_id: bytes,
        operator_type: OperatorType | int,
    ) -> AuthenticatedCredential:
        """Build a credential for `node_id` and attach its MAC.

        Raises:
            InvalidInputError: node_id is not exactly 20 bytes, the operator type
                is unknown, or the timestamp does not fit a signed 64-bit int.
            InternalError: serialization or MAC computation failed.
        """

        if not isinstance(node_id, (bytes, bytearray, memoryview)):
            raise InvalidInputError(f"nodeID must be bytes, got {type(node_id).__name__}")
        if len(node_id) != NODE_ID_LENGTH:
            raise InvalidInputError(f"invalid nodeID length. Expected {NODE_ID_LENGTH}, got {len(node_id)}")

        try:
            op = OperatorType(operator_type)
        except ValueError as e:
            raise InvalidInputError(f"unknown operator type: {operator_type!r}") from e

        try:
            ts = unix_seconds(timestamp)
        except (TypeError, OverflowError, OSError, ValueError) as e:
            raise InvalidInputError(f"invalid timestamp: {timestamp!r}") from e
        if not in_int64_range(ts):
            raise InvalidInputError(f"timestamp out of int64 range: {ts}")

        credential = Credential(node_id=node_id, operator_type=op, timestamp=ts)
        return AuthenticatedCredential(credential=credential, mac=self._authenticate(credential))

    def verify(self, authenticated: AuthenticatedCredential) -> None:
        """Raise unless `authenticated.mac` was issued under this manager's key.

        The comparison is constant time. A mismatch says nothing about where
        the bytes differ.

        Raises:
            AuthenticationError: MAC mismatch.
            InternalError: the MAC could not be recomputed.
        """

        try:
            expected = self._authenticate(authenticated.credential)
        except InternalError as e:
            raise InternalError("Error while re-creating the MAC") from e

        if not hmac.compare_digest(expected, authenticated.mac):
            logger.debug("credential_mac_mismatch", extra={"node_id": authenticated.credential.node_id.hex()})
            raise AuthenticationError("credential MAC mismatch")

    def is_valid(self, authenticated: AuthenticatedCredential) -> bool:
        try:
            self.verify(authenticated)
        except AuthenticationError:
            return False
        return True
