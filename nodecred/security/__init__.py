"""nodecred.security

Credential model, encodings, and the manager that signs and checks them.

Authenticated, not encrypted: anyone can read a credential, only the key holder
can mint one.
"""

from nodecred.security.codec import (
    CredentialDocument,
    decode_json,
    decode_token_pair,
    encode_json,
    encode_password,
    encode_token_pair,
    encode_username,
)
from nodecred.security.credentials import NODE_ID_LENGTH, AuthenticatedCredential, Credential, OperatorType
from nodecred.security.mac_pool import MacContextPool
from nodecred.security.manager import CredentialManager
from nodecred.security.wire import decode_binary, encode_binary, serialize_credential

__all__ = [
    "NODE_ID_LENGTH",
    "AuthenticatedCredential",
    "Credential",
    "CredentialDocument",
    "CredentialManager",
    "MacContextPool",
    "OperatorType",
    "decode_binary",
    "decode_json",
    "decode_token_pair",
    "encode_binary",
    "encode_json",
    "encode_password",
    "encode_token_pair",
    "encode_username",
    "serialize_credential",
]
