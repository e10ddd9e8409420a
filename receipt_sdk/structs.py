"""
Fixed-layout views over the staking program's account data.

Accounts are Anchor accounts: an 8 byte discriminator (the first 8 bytes of
sha256("account:<Name>")) followed by the Borsh encoding of the fields.
Every field of these accounts is fixed size, so each one lives at a fixed offset.
"""
from hashlib import sha256
import re

from solders.pubkey import Pubkey

from receipt_sdk.constants import MAX_REWARD_POOLS, PUBKEY_BYTE_LENGTH
from receipt_sdk.exceptions import AccountDecodeError


DISCRIMINATOR_LENGTH = 8

INT_TYPES = {
    "u8": (1, False),
    "u16": (2, False),
    "u32": (4, False),
    "u64": (8, False),
    "i64": (8, True),
    "u128": (16, False),
}

STRUCTS = {
    "RewardPool": {
        "account": False,
        "fields": [
            ("reward_vault", "pubkey"),
            ("rewards_per_effective_stake", "u128"),
            ("last_amount", "u64"),
            ("padding0", "bytes[8]"),
        ],
    },
    "StakePool": {
        "account": True,
        "fields": [
            ("authority", "pubkey"),
            ("total_weighted_stake", "u128"),
            ("vault", "pubkey"),
            ("mint", "pubkey"),
            ("stake_mint", "pubkey"),
            ("reward_pools", f"RewardPool[{MAX_REWARD_POOLS}]"),
            ("base_weight", "u64"),
            ("max_weight", "u64"),
            ("min_duration", "u64"),
            ("max_duration", "u64"),
            ("nonce", "u8"),
            ("bump_seed", "u8"),
            ("padding0", "bytes[6]"),
            ("reserved0", "bytes[8]"),
        ],
    },
    "StakeDepositReceipt": {
        "account": True,
        "fields": [
            ("owner", "pubkey"),
            ("payer", "pubkey"),
            ("stake_pool", "pubkey"),
            ("lockup_duration", "u64"),
            ("deposit_timestamp", "i64"),
            ("deposit_amount", "u64"),
            ("effective_stake", "u128"),
            ("claimed_amounts", f"u128[{MAX_REWARD_POOLS}]"),
        ],
    },
}

ARRAY_TYPE_PATTERN = re.compile(r"^(\w+)\[(\d+)\]$")


def get_account_discriminator(name: str) -> bytes:
    return sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_LENGTH]


class Field():
    def __init__(self, name, type_name, offset):
        self.name = name
        self.type_name = type_name
        self.offset = offset
        self.length = None
        self.element_type = None

        match = ARRAY_TYPE_PATTERN.match(type_name)
        if match and match.group(1) == "bytes":
            self.kind = "bytes"
            self.size = int(match.group(2))
        elif match:
            self.kind = "array"
            self.length = int(match.group(2))
            self.element_type = match.group(1)
            self.size = get_type_size(self.element_type) * self.length
        else:
            self.kind = "scalar"
            self.size = get_type_size(type_name)

    def read(self, data):
        raw = bytes(data[self.offset:self.offset + self.size])
        if self.kind == "bytes":
            return raw
        if self.kind == "array":
            element_size = self.size // self.length
            return [
                decode_value(self.element_type, raw[i * element_size:(i + 1) * element_size])
                for i in range(self.length)
            ]
        return decode_value(self.type_name, raw)

    def write(self, data, value):
        if self.kind == "bytes":
            raw = bytes(value)
            if len(raw) != self.size:
                raise ValueError(f"{self.name} must be {self.size} bytes")
        elif self.kind == "array":
            if len(value) != self.length:
                raise ValueError(f"{self.name} must have {self.length} elements")
            raw = b"".join(encode_value(self.element_type, v) for v in value)
        else:
            raw = encode_value(self.type_name, value)
        data[self.offset:self.offset + self.size] = raw


class Struct():
    struct_name = None
    fields = {}
    size = 0
    discriminator = b""

    def __init__(self, data=None):
        if data is None:
            data = self.discriminator + bytes(self.size - len(self.discriminator))
        object.__setattr__(self, "_data", bytearray(data))

    @classmethod
    def from_account_data(cls, data):
        """
        Parse raw account data, checking the discriminator and the length.
        Anchor accounts may be allocated with trailing space, so longer data is accepted.
        """
        if data is None:
            raise AccountDecodeError(f"No data to decode as {cls.struct_name}")
        data = bytes(data)
        if len(data) < cls.size:
            raise AccountDecodeError(f"{cls.struct_name} needs {cls.size} bytes, got {len(data)}")
        if cls.discriminator and data[:DISCRIMINATOR_LENGTH] != cls.discriminator:
            raise AccountDecodeError(f"Account discriminator does not match {cls.struct_name}")
        return cls(data[:cls.size])

    def __getattr__(self, name):
        fields = type(self).fields
        if name in fields:
            return fields[name].read(self._data)
        raise AttributeError(f"{type(self).__name__} has no field {name}")

    def __setattr__(self, name, value):
        fields = type(self).fields
        if name in fields:
            fields[name].write(self._data, value)
        else:
            raise AttributeError(f"{type(self).__name__} has no field {name}")

    def __bytes__(self):
        return bytes(self._data)

    def __eq__(self, other):
        return type(self) is type(other) and self._data == other._data

    def __repr__(self):
        values = ", ".join(f"{name}={getattr(self, name)!r}" for name in type(self).fields)
        return f"{type(self).__name__}({values})"

    def to_dict(self):
        result = {}
        for name in type(self).fields:
            value = getattr(self, name)
            if isinstance(value, list):
                value = [v.to_dict() if isinstance(v, Struct) else v for v in value]
            result[name] = value
        return result


_struct_classes = {}


def get_struct(name):
    if name in _struct_classes:
        return _struct_classes[name]

    if name not in STRUCTS:
        raise KeyError(f"Unknown struct {name}")

    definition = STRUCTS[name]
    discriminator = get_account_discriminator(name) if definition["account"] else b""

    fields = {}
    offset = len(discriminator)
    for field_name, type_name in definition["fields"]:
        field = Field(field_name, type_name, offset)
        fields[field_name] = field
        offset += field.size

    struct_class = type(name, (Struct,), {
        "struct_name": name,
        "fields": fields,
        "size": offset,
        "discriminator": discriminator,
    })
    _struct_classes[name] = struct_class
    return struct_class


def get_type_size(type_name):
    if type_name in INT_TYPES:
        return INT_TYPES[type_name][0]
    if type_name == "pubkey":
        return PUBKEY_BYTE_LENGTH
    return get_struct(type_name).size


def decode_value(type_name, raw):
    if type_name in INT_TYPES:
        return int.from_bytes(raw, "little", signed=INT_TYPES[type_name][1])
    if type_name == "pubkey":
        return Pubkey.from_bytes(raw)
    return get_struct(type_name)(raw)


def encode_value(type_name, value):
    if type_name in INT_TYPES:
        size, signed = INT_TYPES[type_name]
        return int(value).to_bytes(size, "little", signed=signed)
    if type_name == "pubkey":
        raw = bytes(value)
        if len(raw) != PUBKEY_BYTE_LENGTH:
            raise ValueError(f"Pubkey must be {PUBKEY_BYTE_LENGTH} bytes")
        return raw
    return bytes(value)


RewardPool = get_struct("RewardPool")
StakePool = get_struct("StakePool")
StakeDepositReceipt = get_struct("StakeDepositReceipt")
