"""Conversion of Access API models into chain entities."""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Iterable, Mapping

from flowsdk.account import (
    Account,
    AccountKey,
    hash_algorithm_from_string,
    signature_algorithm_from_string,
)
from flowsdk.address import Address, hex_to_address
from flowsdk.entities import (
    Block,
    BlockHeader,
    BlockPayload,
    BlockSeal,
    Collection,
    CollectionGuarantee,
    hex_to_id,
)
from flowsdk.rest import models

__all__ = [
    "to_address",
    "to_keys",
    "to_contracts",
    "to_account",
    "to_block_header",
    "to_collection_guarantees",
    "to_block_seals",
    "to_block_payload",
    "to_block",
    "to_blocks",
    "to_collection",
    "encode_script",
    "to_script",
    "encode_args",
    "to_args",
]

_UINT64_MAX = (1 << 64) - 1
_INT64_MAX = (1 << 63) - 1
_INT64_MIN = -(1 << 63)
_UINT_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def _must_to_uint(value: str) -> int:
    """Parse a decimal unsigned integer; the API validates values, so bad input gives 0."""
    if not _UINT_RE.fullmatch(value):
        return 0
    return min(int(value), _UINT64_MAX)


def _must_to_int(value: str) -> int:
    """Parse a decimal signed integer; bad input gives 0."""
    if not _INT_RE.fullmatch(value):
        return 0
    return max(_INT64_MIN, min(int(value), _INT64_MAX))


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"illegal base64 data: {exc}") from exc


def _decode_public_key(text: str) -> bytes:
    try:
        return bytes.fromhex(text.removeprefix("0x"))
    except ValueError:
        return b""


def to_address(address: str) -> Address:
    """Convert a hex address string to an address."""
    return hex_to_address(address)


def to_keys(keys: Iterable[models.AccountPublicKey]) -> list[AccountKey]:
    """Convert API account keys into account keys."""
    converted = []
    for key in keys:
        sig_algo = signature_algorithm_from_string(
            "" if key.signing_algorithm is None else str(key.signing_algorithm)
        )
        hash_algo = hash_algorithm_from_string(
            "" if key.hashing_algorithm is None else str(key.hashing_algorithm)
        )
        converted.append(
            AccountKey(
                index=_must_to_int(key.index),
                public_key=_decode_public_key(key.public_key),
                sig_algo=sig_algo,
                hash_algo=hash_algo,
                weight=_must_to_int(key.weight),
                sequence_number=_must_to_uint(key.sequence_number),
                revoked=key.revoked,
            )
        )
    return converted


def to_contracts(contracts: Mapping[str, str]) -> dict[str, bytes]:
    """Decode the Base64 code of every contract."""
    return {name: _b64decode(code) for name, code in contracts.items()}


def to_account(account: models.Account) -> Account:
    """Convert an API account into an account."""
    return Account(
        address=to_address(account.address),
        balance=_must_to_uint(account.balance),
        keys=to_keys(account.keys),
        contracts=to_contracts(account.contracts),
    )


def to_block_header(header: models.BlockHeader) -> BlockHeader:
    """Convert an API block header into a block header."""
    return BlockHeader(
        id=hex_to_id(header.id),
        parent_id=hex_to_id(header.parent_id),
        height=_must_to_uint(header.height),
        timestamp=header.timestamp,
    )


def to_collection_guarantees(
    guarantees: Iterable[models.CollectionGuarantee],
) -> list[CollectionGuarantee]:
    """Convert API collection guarantees."""
    return [CollectionGuarantee(collection_id=hex_to_id(g.collection_id)) for g in guarantees]


def to_block_seals(seals: Iterable[models.BlockSeal]) -> list[BlockSeal]:
    """Convert API block seals, checking that every verifier signature is valid Base64."""
    converted = []
    for seal in seals:
        for aggregated in seal.aggregated_approval_signatures:
            for signature in aggregated.verifier_signatures:
                _b64decode(signature)
        converted.append(
            BlockSeal(
                block_id=hex_to_id(seal.block_id),
                execution_receipt_id=hex_to_id(seal.result_id),
            )
        )
    return converted


def to_block_payload(payload: models.BlockPayload) -> BlockPayload:
    """Convert an API block payload."""
    seals = to_block_seals(payload.block_seals)
    return BlockPayload(
        collection_guarantees=to_collection_guarantees(payload.collection_guarantees),
        seals=seals,
    )


def to_block(block: models.Block) -> Block:
    """Convert an API block into a block."""
    if block.header is None:
        raise ValueError("block has no header")
    if block.payload is None:
        raise ValueError("block has no payload")
    payload = to_block_payload(block.payload)
    return Block(header=to_block_header(block.header), payload=payload)


def to_blocks(blocks: Iterable[models.Block]) -> list[Block]:
    """Convert a list of API blocks."""
    return [to_block(block) for block in blocks]


def to_collection(collection: models.Collection) -> Collection:
    """Convert an API collection into a collection of transaction IDs."""
    return Collection(transaction_ids=[hex_to_id(tx.id) for tx in collection.transactions])


def encode_script(script: bytes) -> str:
    """Base64-encode a script."""
    return base64.b64encode(bytes(script)).decode("ascii")


def to_script(script: str) -> bytes:
    """Decode a Base64 script."""
    return _b64decode(script)


def encode_args(args: Iterable[bytes]) -> list[str]:
    """Base64-encode every argument."""
    return [base64.b64encode(bytes(arg)).decode("ascii") for arg in args]


def to_args(arguments: Iterable[str]) -> list[bytes]:
    """Decode every Base64 argument."""
    return [_b64decode(arg) for arg in arguments]