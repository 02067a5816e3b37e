"""Identifiers, blocks and collections of the Flow chain."""

from __future__ import annotations

import hashlib
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone

from flowsdk import rlp

__all__ = [
    "IDENTIFIER_LENGTH",
    "EMPTY_ID",
    "Identifier",
    "BlockHeader",
    "BlockPayload",
    "BlockSeal",
    "Block",
    "CollectionGuarantee",
    "Collection",
    "hex_to_id",
    "bytes_to_id",
    "hash_to_id",
]

IDENTIFIER_LENGTH = 32

_ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class Identifier:
    """A 32-byte identifier of a Flow entity."""

    value: bytes = bytes(IDENTIFIER_LENGTH)

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)):
            raise TypeError("identifier value must be bytes")
        if len(self.value) != IDENTIFIER_LENGTH:
            raise ValueError(f"identifier must be exactly {IDENTIFIER_LENGTH} bytes")
        object.__setattr__(self, "value", bytes(self.value))

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Identifier('{self.hex()}')"

    def hex(self) -> str:
        """Return the lower-case hex form without a prefix."""
        return self.value.hex()


EMPTY_ID = Identifier()


def bytes_to_id(b: bytes) -> Identifier:
    """Build an identifier from the leading bytes of b, zero-filled on the right."""
    return Identifier(bytes(b)[:IDENTIFIER_LENGTH].ljust(IDENTIFIER_LENGTH, b"\x00"))


def hash_to_id(digest: bytes) -> Identifier:
    """Turn a hash digest into an identifier."""
    return bytes_to_id(digest)


def hex_to_id(h: str) -> Identifier:
    """Convert a hex string to an identifier, keeping the hex pairs before any invalid one."""
    text = h.removeprefix("0x")
    out = bytearray()
    chars = iter(text)
    for high, low in zip(chars, chars):
        if high not in string.hexdigits or low not in string.hexdigits:
            break
        out.append(int(high + low, 16))
    return bytes_to_id(bytes(out))


@dataclass
class BlockHeader:
    """A summary of a full block."""

    id: Identifier = EMPTY_ID
    parent_id: Identifier = EMPTY_ID
    height: int = 0
    timestamp: datetime = _ZERO_TIME


@dataclass
class CollectionGuarantee:
    """An attestation signed by the nodes that have guaranteed a collection."""

    collection_id: Identifier = EMPTY_ID


@dataclass
class BlockSeal:
    """Attestation that the transactions of an earlier block have been verified."""

    block_id: Identifier = EMPTY_ID
    execution_receipt_id: Identifier = EMPTY_ID


@dataclass
class BlockPayload:
    """The collection guarantees and seals of a block."""

    collection_guarantees: list[CollectionGuarantee] = field(default_factory=list)
    seals: list[BlockSeal] = field(default_factory=list)


@dataclass
class Block:
    """A set of state mutations applied to the chain."""

    header: BlockHeader = field(default_factory=BlockHeader)
    payload: BlockPayload = field(default_factory=BlockPayload)

    @property
    def id(self) -> Identifier:
        return self.header.id

    @property
    def parent_id(self) -> Identifier:
        return self.header.parent_id

    @property
    def height(self) -> int:
        return self.header.height

    @property
    def timestamp(self) -> datetime:
        return self.header.timestamp

    @property
    def collection_guarantees(self) -> list[CollectionGuarantee]:
        return self.payload.collection_guarantees

    @property
    def seals(self) -> list[BlockSeal]:
        return self.payload.seals


@dataclass
class Collection:
    """A list of transactions bundled together for inclusion in a block."""

    transaction_ids: list[Identifier] = field(default_factory=list)

    def encode(self) -> bytes:
        """Return the canonical RLP encoding of this collection."""
        return rlp.encode([[bytes(tx_id) for tx_id in self.transaction_ids]])

    def id(self) -> Identifier:
        """Return the SHA3-256 hash of the canonical encoding."""
        return hash_to_id(hashlib.sha3_256(self.encode()).digest())