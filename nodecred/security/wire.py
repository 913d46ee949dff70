"""nodecred.security.wire

Canonical binary form of credentials.

The schema is proto3 and must stay byte-compatible with every other issuer and
verifier in the network:

    enum OperatorType { OT_SOLO = 0; OT_ROCKETPOOL = 1; }
    message Credential {
        bytes node_id = 1;
        int64 timestamp = 2;
        OperatorType operator_type = 3;
    }
    message AuthenticatedCredential {
        Credential credential = 1;
        bytes mac = 2;
    }

Descriptors are built at import time, so there is no generated module to keep
in sync. New fields get new numbers; existing numbers never change meaning.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError, EncodeError, Message

from nodecred.core.exceptions import DecodingError, InternalError
from nodecred.security.credentials import AuthenticatedCredential, Credential, OperatorType

_PACKAGE = "nodecred.v1"
_F = descriptor_pb2.FieldDescriptorProto


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    fd = descriptor_pb2.FileDescriptorProto(
        name="nodecred/v1/credentials.proto",
        package=_PACKAGE,
        syntax="proto3",
    )

    enum = fd.enum_type.add(name="OperatorType")
    enum.value.add(name="OT_SOLO", number=int(OperatorType.SOLO))
    enum.value.add(name="OT_ROCKETPOOL", number=int(OperatorType.ROCKETPOOL))

    cred = fd.message_type.add(name="Credential")
    cred.field.add(name="node_id", number=1, type=_F.TYPE_BYTES, label=_F.LABEL_OPTIONAL)
    cred.field.add(name="timestamp", number=2, type=_F.TYPE_INT64, label=_F.LABEL_OPTIONAL)
    cred.field.add(
        name="operator_type",
        number=3,
        type=_F.TYPE_ENUM,
        type_name=f".{_PACKAGE}.OperatorType",
        label=_F.LABEL_OPTIONAL,
    )

    auth = fd.message_type.add(name="AuthenticatedCredential")
    auth.field.add(
        name="credential",
        number=1,
        type=_F.TYPE_MESSAGE,
        type_name=f".{_PACKAGE}.Credential",
        label=_F.LABEL_OPTIONAL,
    )
    auth.field.add(name="mac", number=2, type=_F.TYPE_BYTES, label=_F.LABEL_OPTIONAL)
    return fd


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_file_descriptor().SerializeToString())

CredentialMessage = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_PACKAGE}.Credential"))
AuthenticatedCredentialMessage = message_factory.GetMessageClass(
    _POOL.FindMessageTypeByName(f"{_PACKAGE}.AuthenticatedCredential")
)


# ---------------------------------------------------------------------------
# Model <-> message
# ---------------------------------------------------------------------------

def credential_to_message(credential: Credential) -> Message:
    try:
        return CredentialMessage(
            node_id=credential.node_id,
            timestamp=credential.timestamp,
            operator_type=int(credential.operator_type),
        )
    except (TypeError, ValueError) as e:
        raise InternalError("Error building credential message") from e


def credential_from_message(msg: Message) -> Credential:
    try:
        operator_type = OperatorType(msg.operator_type)
    except ValueError as e:
        raise DecodingError(f"Unknown operator type: {msg.operator_type}") from e
    return Credential(node_id=msg.node_id, operator_type=operator_type, timestamp=msg.timestamp)


def to_message(authenticated: AuthenticatedCredential) -> Message:
    msg = AuthenticatedCredentialMessage(mac=authenticated.mac)
    msg.credential.CopyFrom(credential_to_message(authenticated.credential))
    msg.credential.SetInParent()  # present even when every inner field is zero
    return msg


def from_message(msg: Message) -> AuthenticatedCredential:
    return AuthenticatedCredential(credential=credential_from_message(msg.credential), mac=msg.mac)


# ---------------------------------------------------------------------------
# Bytes
# ---------------------------------------------------------------------------

def _serialize(msg: Message) -> bytes:
    try:
        return msg.SerializeToString(deterministic=True)
    except EncodeError as e:
        raise InternalError(f"Error serializing {msg.DESCRIPTOR.name}") from e


def serialize_credential(credential: Credential) -> bytes:
    """Canonical bytes of the inner credential. This is the MAC input."""

    return _serialize(credential_to_message(credential))


def encode_binary(authenticated: AuthenticatedCredential) -> bytes:
    """Full credential (inner message + MAC) as one binary blob."""

    return _serialize(to_message(authenticated))


def decode_binary(data: bytes) -> AuthenticatedCredential:
    msg = AuthenticatedCredentialMessage()
    try:
        msg.ParseFromString(bytes(data))
    except (DecodeError, TypeError) as e:
        raise DecodingError("Malformed binary credential") from e
    return from_message(msg)
