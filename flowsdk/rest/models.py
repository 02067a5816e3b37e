"""Data models of the Flow Access REST API and their JSON mapping."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Any, TypeVar

__all__ = [
    "SigningAlgorithm",
    "HashingAlgorithm",
    "TransactionStatus",
    "TransactionExecution",
    "Links",
    "AccountExpandable",
    "AccountPublicKey",
    "Account",
    "AggregatedSignature",
    "BlockHeader",
    "CollectionGuarantee",
    "BlockSeal",
    "BlockPayload",
    "BlockExpandable",
    "Event",
    "Chunk",
    "ExecutionResult",
    "Block",
    "BlockEvents",
    "ModelError",
    "ProposalKey",
    "ScriptsBody",
    "TransactionSignature",
    "TransactionResult",
    "TransactionExpandable",
    "Transaction",
    "CollectionExpandable",
    "Collection",
    "TransactionsBody",
]


class SigningAlgorithm(StrEnum):
    """Signing algorithms named by the API."""

    BLS_BLS12381 = "BLSBLS12381"
    ECDSA_P256 = "ECDSAP256"
    ECDSA_SECP256K1 = "ECDSASecp256k1"


class HashingAlgorithm(StrEnum):
    """Hashing algorithms named by the API."""

    SHA2_256 = "SHA2_256"
    SHA2_384 = "SHA2_384"
    SHA3_256 = "SHA3_256"
    SHA3_384 = "SHA3_384"
    KMAC128 = "KMAC128"


class TransactionStatus(StrEnum):
    """State of a transaction; only sealed and expired are final."""

    PENDING = "Pending"
    FINALIZED = "Finalized"
    EXECUTED = "Executed"
    SEALED = "Sealed"
    EXPIRED = "Expired"


class TransactionExecution(StrEnum):
    """Whether a transaction's execution succeeded."""

    PENDING = "Pending"
    SUCCESS = "Success"
    FAILURE = "Failure"


ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)

_E = TypeVar("_E", bound=StrEnum)
_M = TypeVar("_M")


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 timestamp")
    base, fraction, offset = match.groups()
    if fraction:
        base += "." + fraction[:6].ljust(6, "0")
    base += "+00:00" if offset == "Z" else offset
    return datetime.fromisoformat(base)


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _object(data: Any, name: str) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"cannot decode {type(data).__name__} into {name}")
    return data


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _integer(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer, got {type(value).__name__}")
    return value


def _boolean(data: dict, key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field {key!r} must be a boolean, got {type(value).__name__}")
    return value


def _strings(data: dict, key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"field {key!r} must be a list of strings")
    return list(value)


def _string_map(data: dict, key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise TypeError(f"field {key!r} must be an object of strings")
    return dict(value)


def _time(data: dict, key: str) -> datetime:
    value = data.get(key)
    if value is None:
        return ZERO_TIME
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a timestamp string")
    return _parse_time(value)


def _enum(data: dict, key: str, enum_cls: type[_E]) -> _E | str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string, got {type(value).__name__}")
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _nested(data: dict, key: str, cls: type[_M]) -> _M | None:
    value = data.get(key)
    return None if value is None else cls.from_dict(value)  # type: ignore[attr-defined]


def _items(data: dict, key: str, cls: type[_M]) -> list[_M]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list")
    return [cls.from_dict(item) for item in value]  # type: ignore[attr-defined]


def _dump(value: Any) -> Any:
    return None if value is None else value.to_dict()


def _enum_value(value: StrEnum | str | None) -> str | None:
    return None if value is None else str(value)


def _omit_empty(out: dict, key: str, value: Any) -> None:
    if value:
        out[key] = value


@dataclass
class Links:
    """Hypermedia links of a resource."""

    self_link: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Links:
        data = _object(data, "Links")
        return cls(self_link=_string(data, "_self"))

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "_self", self.self_link)
        return out


@dataclass
class AccountExpandable:
    """Expandable fields of an account."""

    keys: str = ""
    contracts: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> AccountExpandable:
        data = _object(data, "AccountExpandable")
        return cls(keys=_string(data, "keys"), contracts=_string(data, "contracts"))

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "keys", self.keys)
        _omit_empty(out, "contracts", self.contracts)
        return out


@dataclass
class AccountPublicKey:
    """A public key of an account as the API returns it."""

    index: str = ""
    public_key: str = ""
    signing_algorithm: SigningAlgorithm | str | None = None
    hashing_algorithm: HashingAlgorithm | str | None = None
    sequence_number: str = ""
    weight: str = ""
    revoked: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> AccountPublicKey:
        data = _object(data, "AccountPublicKey")
        return cls(
            index=_string(data, "index"),
            public_key=_string(data, "public_key"),
            signing_algorithm=_enum(data, "signing_algorithm", SigningAlgorithm),
            hashing_algorithm=_enum(data, "hashing_algorithm", HashingAlgorithm),
            sequence_number=_string(data, "sequence_number"),
            weight=_string(data, "weight"),
            revoked=_boolean(data, "revoked"),
        )

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "public_key": self.public_key,
            "signing_algorithm": _enum_value(self.signing_algorithm),
            "hashing_algorithm": _enum_value(self.hashing_algorithm),
            "sequence_number": self.sequence_number,
            "weight": self.weight,
            "revoked": self.revoked,
        }


@dataclass
class Account:
    """An account as the API returns it."""

    address: str = ""
    balance: str = ""
    keys: list[AccountPublicKey] = field(default_factory=list)
    contracts: dict[str, str] = field(default_factory=dict)
    expandable: AccountExpandable | None = None
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Account:
        data = _object(data, "Account")
        return cls(
            address=_string(data, "address"),
            balance=_string(data, "balance"),
            keys=_items(data, "keys", AccountPublicKey),
            contracts=_string_map(data, "contracts"),
            expandable=_nested(data, "_expandable", AccountExpandable),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {"address": self.address, "balance": self.balance}
        _omit_empty(out, "keys", [key.to_dict() for key in self.keys])
        _omit_empty(out, "contracts", dict(self.contracts))
        out["_expandable"] = _dump(self.expandable)
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class AggregatedSignature:
    """Verifier signatures with the IDs of their signers."""

    verifier_signatures: list[str] = field(default_factory=list)
    signer_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AggregatedSignature:
        data = _object(data, "AggregatedSignature")
        return cls(
            verifier_signatures=_strings(data, "verifier_signatures"),
            signer_ids=_strings(data, "signer_ids"),
        )

    def to_dict(self) -> dict:
        return {
            "verifier_signatures": list(self.verifier_signatures),
            "signer_ids": list(self.signer_ids),
        }


@dataclass
class BlockHeader:
    """A block header as the API returns it."""

    id: str = ""
    parent_id: str = ""
    height: str = ""
    timestamp: datetime = ZERO_TIME
    parent_voter_signature: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> BlockHeader:
        data = _object(data, "BlockHeader")
        return cls(
            id=_string(data, "id"),
            parent_id=_string(data, "parent_id"),
            height=_string(data, "height"),
            timestamp=_time(data, "timestamp"),
            parent_voter_signature=_string(data, "parent_voter_signature"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "height": self.height,
            "timestamp": _format_time(self.timestamp),
            "parent_voter_signature": self.parent_voter_signature,
        }


@dataclass
class CollectionGuarantee:
    """A collection guarantee as the API returns it."""

    collection_id: str = ""
    signer_ids: list[str] = field(default_factory=list)
    signature: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> CollectionGuarantee:
        data = _object(data, "CollectionGuarantee")
        return cls(
            collection_id=_string(data, "collection_id"),
            signer_ids=_strings(data, "signer_ids"),
            signature=_string(data, "signature"),
        )

    def to_dict(self) -> dict:
        return {
            "collection_id": self.collection_id,
            "signer_ids": list(self.signer_ids),
            "signature": self.signature,
        }


@dataclass
class BlockSeal:
    """A block seal as the API returns it."""

    block_id: str = ""
    result_id: str = ""
    final_state: str = ""
    aggregated_approval_signatures: list[AggregatedSignature] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> BlockSeal:
        data = _object(data, "BlockSeal")
        return cls(
            block_id=_string(data, "block_id"),
            result_id=_string(data, "result_id"),
            final_state=_string(data, "final_state"),
            aggregated_approval_signatures=_items(
                data, "aggregated_approval_signatures", AggregatedSignature
            ),
        )

    def to_dict(self) -> dict:
        return {
            "block_id": self.block_id,
            "result_id": self.result_id,
            "final_state": self.final_state,
            "aggregated_approval_signatures": [
                sig.to_dict() for sig in self.aggregated_approval_signatures
            ],
        }


@dataclass
class BlockPayload:
    """Collection guarantees and seals of a block."""

    collection_guarantees: list[CollectionGuarantee] = field(default_factory=list)
    block_seals: list[BlockSeal] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> BlockPayload:
        data = _object(data, "BlockPayload")
        return cls(
            collection_guarantees=_items(data, "collection_guarantees", CollectionGuarantee),
            block_seals=_items(data, "block_seals", BlockSeal),
        )

    def to_dict(self) -> dict:
        return {
            "collection_guarantees": [g.to_dict() for g in self.collection_guarantees],
            "block_seals": [s.to_dict() for s in self.block_seals],
        }


@dataclass
class BlockExpandable:
    """Expandable fields of a block."""

    payload: str = ""
    execution_result: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> BlockExpandable:
        data = _object(data, "BlockExpandable")
        return cls(
            payload=_string(data, "payload"),
            execution_result=_string(data, "execution_result"),
        )

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "payload", self.payload)
        _omit_empty(out, "execution_result", self.execution_result)
        return out


@dataclass
class Event:
    """An event as the API returns it; the payload is Base64 encoded."""

    type: str = ""
    transaction_id: str = ""
    transaction_index: str = ""
    event_index: str = ""
    payload: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Event:
        data = _object(data, "Event")
        return cls(
            type=_string(data, "type"),
            transaction_id=_string(data, "transaction_id"),
            transaction_index=_string(data, "transaction_index"),
            event_index=_string(data, "event_index"),
            payload=_string(data, "payload"),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "transaction_id": self.transaction_id,
            "transaction_index": self.transaction_index,
            "event_index": self.event_index,
            "payload": self.payload,
        }


@dataclass
class Chunk:
    """A chunk of an execution result."""

    block_id: str = ""
    collection_index: str = ""
    start_state: str = ""
    end_state: str = ""
    event_collection: str = ""
    index: str = ""
    number_of_transactions: str = ""
    total_computation_used: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Chunk:
        data = _object(data, "Chunk")
        return cls(
            block_id=_string(data, "block_id"),
            collection_index=_string(data, "collection_index"),
            start_state=_string(data, "start_state"),
            end_state=_string(data, "end_state"),
            event_collection=_string(data, "event_collection"),
            index=_string(data, "index"),
            number_of_transactions=_string(data, "number_of_transactions"),
            total_computation_used=_string(data, "total_computation_used"),
        )

    def to_dict(self) -> dict:
        return {
            "block_id": self.block_id,
            "collection_index": self.collection_index,
            "start_state": self.start_state,
            "end_state": self.end_state,
            "event_collection": self.event_collection,
            "index": self.index,
            "number_of_transactions": self.number_of_transactions,
            "total_computation_used": self.total_computation_used,
        }


@dataclass
class ExecutionResult:
    """An execution result as the API returns it."""

    id: str = ""
    block_id: str = ""
    events: list[Event] = field(default_factory=list)
    chunks: list[Chunk] = field(default_factory=list)
    previous_result_id: str = ""
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ExecutionResult:
        data = _object(data, "ExecutionResult")
        return cls(
            id=_string(data, "id"),
            block_id=_string(data, "block_id"),
            events=_items(data, "events", Event),
            chunks=_items(data, "chunks", Chunk),
            previous_result_id=_string(data, "previous_result_id"),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {
            "id": self.id,
            "block_id": self.block_id,
            "events": [e.to_dict() for e in self.events],
        }
        _omit_empty(out, "chunks", [c.to_dict() for c in self.chunks])
        out["previous_result_id"] = self.previous_result_id
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class Block:
    """A block as the API returns it."""

    header: BlockHeader | None = None
    payload: BlockPayload | None = None
    execution_result: ExecutionResult | None = None
    expandable: BlockExpandable | None = None
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Block:
        data = _object(data, "Block")
        return cls(
            header=_nested(data, "header", BlockHeader),
            payload=_nested(data, "payload", BlockPayload),
            execution_result=_nested(data, "execution_result", ExecutionResult),
            expandable=_nested(data, "_expandable", BlockExpandable),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {"header": _dump(self.header)}
        _omit_empty(out, "payload", _dump(self.payload))
        _omit_empty(out, "execution_result", _dump(self.execution_result))
        out["_expandable"] = _dump(self.expandable)
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class BlockEvents:
    """Events that occurred in one block."""

    block_id: str = ""
    block_height: str = ""
    block_timestamp: datetime = ZERO_TIME
    events: list[Event] = field(default_factory=list)
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> BlockEvents:
        data = _object(data, "BlockEvents")
        return cls(
            block_id=_string(data, "block_id"),
            block_height=_string(data, "block_height"),
            block_timestamp=_time(data, "block_timestamp"),
            events=_items(data, "events", Event),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "block_id", self.block_id)
        _omit_empty(out, "block_height", self.block_height)
        out["block_timestamp"] = _format_time(self.block_timestamp)
        _omit_empty(out, "events", [e.to_dict() for e in self.events])
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class ModelError:
    """An error body returned by the API."""

    code: int = 0
    message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ModelError:
        data = _object(data, "ModelError")
        return cls(code=_integer(data, "code"), message=_string(data, "message"))

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "code", self.code)
        _omit_empty(out, "message", self.message)
        return out


@dataclass
class ProposalKey:
    """The proposal key of a transaction."""

    address: str = ""
    key_index: str = ""
    sequence_number: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ProposalKey:
        data = _object(data, "ProposalKey")
        return cls(
            address=_string(data, "address"),
            key_index=_string(data, "key_index"),
            sequence_number=_string(data, "sequence_number"),
        )

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "key_index": self.key_index,
            "sequence_number": self.sequence_number,
        }


@dataclass
class ScriptsBody:
    """Request body for script execution; script and arguments are Base64 encoded."""

    script: str = ""
    arguments: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ScriptsBody:
        data = _object(data, "ScriptsBody")
        return cls(script=_string(data, "script"), arguments=_strings(data, "arguments"))

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "script", self.script)
        _omit_empty(out, "arguments", list(self.arguments))
        return out


@dataclass
class TransactionSignature:
    """A Base64 encoded signature of a transaction."""

    address: str = ""
    key_index: str = ""
    signature: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> TransactionSignature:
        data = _object(data, "TransactionSignature")
        return cls(
            address=_string(data, "address"),
            key_index=_string(data, "key_index"),
            signature=_string(data, "signature"),
        )

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "key_index": self.key_index,
            "signature": self.signature,
        }


@dataclass
class TransactionResult:
    """The result of a transaction as the API returns it."""

    block_id: str = ""
    execution: TransactionExecution | str | None = None
    status: TransactionStatus | str | None = None
    status_code: int = 0
    error_message: str = ""
    computation_used: str = ""
    events: list[Event] = field(default_factory=list)
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> TransactionResult:
        data = _object(data, "TransactionResult")
        return cls(
            block_id=_string(data, "block_id"),
            execution=_enum(data, "execution", TransactionExecution),
            status=_enum(data, "status", TransactionStatus),
            status_code=_integer(data, "status_code"),
            error_message=_string(data, "error_message"),
            computation_used=_string(data, "computation_used"),
            events=_items(data, "events", Event),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {"block_id": self.block_id}
        _omit_empty(out, "execution", _enum_value(self.execution))
        out["status"] = _enum_value(self.status)
        out["status_code"] = self.status_code
        out["error_message"] = self.error_message
        out["computation_used"] = self.computation_used
        out["events"] = [e.to_dict() for e in self.events]
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class TransactionExpandable:
    """Expandable fields of a transaction."""

    result: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> TransactionExpandable:
        data = _object(data, "TransactionExpandable")
        return cls(result=_string(data, "result"))

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "result", self.result)
        return out


@dataclass
class Transaction:
    """A transaction as the API returns it."""

    id: str = ""
    script: str = ""
    arguments: list[str] = field(default_factory=list)
    reference_block_id: str = ""
    gas_limit: str = ""
    payer: str = ""
    proposal_key: ProposalKey | None = None
    authorizers: list[str] = field(default_factory=list)
    payload_signatures: list[TransactionSignature] = field(default_factory=list)
    envelope_signatures: list[TransactionSignature] = field(default_factory=list)
    result: TransactionResult | None = None
    expandable: TransactionExpandable | None = None
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Transaction:
        data = _object(data, "Transaction")
        return cls(
            id=_string(data, "id"),
            script=_string(data, "script"),
            arguments=_strings(data, "arguments"),
            reference_block_id=_string(data, "reference_block_id"),
            gas_limit=_string(data, "gas_limit"),
            payer=_string(data, "payer"),
            proposal_key=_nested(data, "proposal_key", ProposalKey),
            authorizers=_strings(data, "authorizers"),
            payload_signatures=_items(data, "payload_signatures", TransactionSignature),
            envelope_signatures=_items(data, "envelope_signatures", TransactionSignature),
            result=_nested(data, "result", TransactionResult),
            expandable=_nested(data, "_expandable", TransactionExpandable),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {
            "id": self.id,
            "script": self.script,
            "arguments": list(self.arguments),
            "reference_block_id": self.reference_block_id,
            "gas_limit": self.gas_limit,
            "payer": self.payer,
            "proposal_key": _dump(self.proposal_key),
            "authorizers": list(self.authorizers),
            "payload_signatures": [s.to_dict() for s in self.payload_signatures],
            "envelope_signatures": [s.to_dict() for s in self.envelope_signatures],
        }
        _omit_empty(out, "result", _dump(self.result))
        out["_expandable"] = _dump(self.expandable)
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class CollectionExpandable:
    """Expandable fields of a collection."""

    transactions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CollectionExpandable:
        data = _object(data, "CollectionExpandable")
        return cls(transactions=_strings(data, "transactions"))

    def to_dict(self) -> dict:
        out: dict = {}
        _omit_empty(out, "transactions", list(self.transactions))
        return out


@dataclass
class Collection:
    """A collection as the API returns it."""

    id: str = ""
    transactions: list[Transaction] = field(default_factory=list)
    expandable: CollectionExpandable | None = None
    links: Links | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Collection:
        data = _object(data, "Collection")
        return cls(
            id=_string(data, "id"),
            transactions=_items(data, "transactions", Transaction),
            expandable=_nested(data, "_expandable", CollectionExpandable),
            links=_nested(data, "_links", Links),
        )

    def to_dict(self) -> dict:
        out: dict = {"id": self.id}
        _omit_empty(out, "transactions", [tx.to_dict() for tx in self.transactions])
        out["_expandable"] = _dump(self.expandable)
        _omit_empty(out, "_links", _dump(self.links))
        return out


@dataclass
class TransactionsBody:
    """Request body for sending a transaction."""

    script: str = ""
    arguments: list[str] = field(default_factory=list)
    reference_block_id: str = ""
    gas_limit: str = ""
    payer: str = ""
    proposal_key: ProposalKey | None = None
    authorizers: list[str] = field(default_factory=list)
    payload_signatures: list[TransactionSignature] = field(default_factory=list)
    envelope_signatures: list[TransactionSignature] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> TransactionsBody:
        data = _object(data, "TransactionsBody")
        return cls(
            script=_string(data, "script"),
            arguments=_strings(data, "arguments"),
            reference_block_id=_string(data, "reference_block_id"),
            gas_limit=_string(data, "gas_limit"),
            payer=_string(data, "payer"),
            proposal_key=_nested(data, "proposal_key", ProposalKey),
            authorizers=_strings(data, "authorizers"),
            payload_signatures=_items(data, "payload_signatures", TransactionSignature),
            envelope_signatures=_items(data, "envelope_signatures", TransactionSignature),
        )

    def to_dict(self) -> dict:
        return {
            "script": self.script,
            "arguments": list(self.arguments),
            "reference_block_id": self.reference_block_id,
            "gas_limit": self.gas_limit,
            "payer": self.payer,
            "proposal_key": _dump(self.proposal_key),
            "authorizers": list(self.authorizers),
            "payload_signatures": [s.to_dict() for s in self.payload_signatures],
            "envelope_signatures": [s.to_dict() for s in self.envelope_signatures],
        }