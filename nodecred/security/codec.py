"""nodecred.security.codec

Text encodings of an AuthenticatedCredential.

Token pair (basic-auth shaped):
  username = base64url(node_id)
  password = base64url(binary credential with node_id blanked)

The node id already travels as the username, so the password omits it. The MAC
inside the password was computed over the *full* credential at issuance; blanking
happens only here, on the way out, and decode merges the node id back in.

JSON document:
  {"node_id": "0x<hex>", "timestamp": <int>, "operator_type": <int>, "mac": "<base64url>"}
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import replace

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nodecred.core.exceptions import DecodingError
from nodecred.core.time import INT64_MAX, INT64_MIN
from nodecred.security.credentials import AuthenticatedCredential, Credential, OperatorType
from nodecred.security.wire import decode_binary, encode_binary


# ---------------------------------------------------------------------------
# base64url / hex helpers
# ---------------------------------------------------------------------------

def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Strict padded base64url decode.

    Rejects the standard-alphabet characters ``+`` and ``/`` as well as anything
    else outside the URL-safe alphabet.
    """

    try:
        raw = text.encode("ascii")
    except (AttributeError, UnicodeEncodeError) as e:
        raise DecodingError("Malformed base64url input") from e
    if b"+" in raw or b"/" in raw:
        raise DecodingError("Malformed base64url input")
    try:
        return base64.b64decode(raw, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecodingError("Malformed base64url input") from e


def hex_encode(data: bytes) -> str:
    return "0x" + data.hex()


_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")


def hex_decode(text: str) -> bytes:
    """Even-length hex with an optional ``0x`` prefix. Whitespace is rejected."""

    if not isinstance(text, str):
        raise DecodingError("Malformed hex input")
    digits = text.removeprefix("0x")
    if _HEX.fullmatch(digits) is None:
        raise DecodingError("Malformed hex input")
    return bytes.fromhex(digits)


# ---------------------------------------------------------------------------
# Token pair
# ---------------------------------------------------------------------------

def encode_username(authenticated: AuthenticatedCredential) -> str:
    return b64url_encode(authenticated.credential.node_id)


def encode_password(authenticated: AuthenticatedCredential) -> str:
    stripped = replace(authenticated, credential=replace(authenticated.credential, node_id=b""))
    return b64url_encode(encode_binary(stripped))


def encode_token_pair(authenticated: AuthenticatedCredential) -> tuple[str, str]:
    """Return ``(username, password)``."""

    return encode_username(authenticated), encode_password(authenticated)


def decode_token_pair(username: str, password: str) -> AuthenticatedCredential:
    node_id = b64url_decode(username)
    partial = decode_binary(b64url_decode(password))
    return replace(partial, credential=replace(partial.credential, node_id=node_id))


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

class CredentialDocument(BaseModel):
    """Human-inspectable credential. Key order in the output follows field order."""

    model_config = ConfigDict(frozen=True, strict=True)

    node_id: str
    timestamp: int = Field(ge=INT64_MIN, le=INT64_MAX)
    operator_type: OperatorType
    mac: str


def to_document(authenticated: AuthenticatedCredential) -> CredentialDocument:
    cred = authenticated.credential
    return CredentialDocument(
        node_id=hex_encode(cred.node_id),
        timestamp=cred.timestamp,
        operator_type=cred.operator_type,
        mac=b64url_encode(authenticated.mac),
    )


def from_document(doc: CredentialDocument) -> AuthenticatedCredential:
    return AuthenticatedCredential(
        credential=Credential(
            node_id=hex_decode(doc.node_id),
            operator_type=doc.operator_type,
            timestamp=doc.timestamp,
        ),
        mac=b64url_decode(doc.mac),
    )


def encode_json(authenticated: AuthenticatedCredential) -> str:
    return to_document(authenticated).model_dump_json()


def decode_json(data: str | bytes) -> AuthenticatedCredential:
    try:
        doc = CredentialDocument.model_validate_json(data)
    except ValidationError as e:
        raise DecodingError(f"Malformed credential document: {e.error_count()} error(s)") from e
    return from_document(doc)
