"""
Protocol buffer codec for the state records this client reads.

The message classes are built at import time from descriptors, so no
generated ``_pb2`` modules need to be shipped. Only the fields the client
reads are declared; unknown fields are kept by the protobuf runtime.
"""
from typing import Tuple

from google.protobuf import any_pb2, descriptor_pb2, descriptor_pool, message_factory


_FIELD = descriptor_pb2.FieldDescriptorProto

_pool = descriptor_pool.DescriptorPool()


def _field(name: str, number: int, field_type: int, label: int = _FIELD.LABEL_OPTIONAL,
           type_name: str = "") -> descriptor_pb2.FieldDescriptorProto:
    field = _FIELD(name=name, number=number, type=field_type, label=label)
    if type_name:
        field.type_name = type_name
    return field


def _add_file(name: str, package: str, messages, dependencies=()) -> None:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=name, package=package, syntax="proto3", dependency=list(dependencies)
    )
    for message_name, fields in messages:
        message = file_proto.message_type.add(name=message_name)
        message.field.extend(fields)
    _pool.Add(file_proto)


_add_file("cosmos/cosmos.proto", "cosmos", [
    ("Coin", [
        _field("denom", 1, _FIELD.TYPE_STRING),
        _field("amount", 2, _FIELD.TYPE_STRING),
    ]),
])
_add_file("cosmos/auth/auth.proto", "cosmos.auth", [
    ("BaseAccount", [
        _field("address", 1, _FIELD.TYPE_BYTES),
        # google.protobuf.Any on the wire; kept opaque
        _field("pub_key", 2, _FIELD.TYPE_BYTES),
        _field("account_number", 3, _FIELD.TYPE_UINT64),
        _field("sequence", 4, _FIELD.TYPE_UINT64),
    ]),
])
_add_file("cosmos/bank/query.proto", "cosmos.bank", [
    ("QueryAllBalancesRequest", [
        _field("address", 1, _FIELD.TYPE_BYTES),
    ]),
    ("QueryAllBalancesResponse", [
        _field("balances", 1, _FIELD.TYPE_MESSAGE, _FIELD.LABEL_REPEATED, ".cosmos.Coin"),
    ]),
], dependencies=["cosmos/cosmos.proto"])


def _message_class(full_name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(full_name))


Coin = _message_class("cosmos.Coin")
BaseAccount = _message_class("cosmos.auth.BaseAccount")
QueryAllBalancesRequest = _message_class("cosmos.bank.QueryAllBalancesRequest")
QueryAllBalancesResponse = _message_class("cosmos.bank.QueryAllBalancesResponse")

BASE_ACCOUNT_TYPE_URL = "/cosmos.auth.BaseAccount"


def decode_any(data: bytes) -> Tuple[str, bytes]:
    """
    Split a serialized ``google.protobuf.Any`` into its type URL and value.

    Raises:
        google.protobuf.message.DecodeError: If the bytes are not a valid Any
    """
    wrapped = any_pb2.Any.FromString(data)
    return wrapped.type_url, wrapped.value


def encode_any(type_url: str, value: bytes) -> bytes:
    return any_pb2.Any(type_url=type_url, value=value).SerializeToString()
