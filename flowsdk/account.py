"""Flow accounts and the public keys attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from flowsdk import rlp
from flowsdk.address import EMPTY_ADDRESS, Address

__all__ = [
    "ACCOUNT_KEY_WEIGHT_THRESHOLD",
    "SignatureAlgorithm",
    "HashAlgorithm",
    "InvalidAccountKeyError",
    "AccountKey",
    "Account",
    "signature_algorithm_from_string",
    "hash_algorithm_from_string",
    "decode_account_key",
]

ACCOUNT_KEY_WEIGHT_THRESHOLD = 1000
"""Total key weight required to authorize access to an account."""


class SignatureAlgorithm(IntEnum):
    """Signature algorithms a key can be used with."""

    UNKNOWN = 0
    BLS_BLS12_381 = 1
    ECDSA_P256 = 2
    ECDSA_SECP256K1 = 3

    def __str__(self) -> str:
        return _SIGNATURE_NAMES[self]


class HashAlgorithm(IntEnum):
    """Hash algorithms a key can be used with."""

    UNKNOWN = 0
    SHA2_256 = 1
    SHA2_384 = 2
    SHA3_256 = 3
    SHA3_384 = 4
    KMAC128 = 5
    KECCAK_256 = 6

    def __str__(self) -> str:
        return _HASH_NAMES[self]


_SIGNATURE_NAMES: dict[SignatureAlgorithm, str] = {
    SignatureAlgorithm.UNKNOWN: "UNKNOWN",
    SignatureAlgorithm.BLS_BLS12_381: "BLS_BLS12_381",
    SignatureAlgorithm.ECDSA_P256: "ECDSA_P256",
    SignatureAlgorithm.ECDSA_SECP256K1: "ECDSA_secp256k1",
}

_HASH_NAMES: dict[HashAlgorithm, str] = {
    HashAlgorithm.UNKNOWN: "UNKNOWN",
    HashAlgorithm.SHA2_256: "SHA2_256",
    HashAlgorithm.SHA2_384: "SHA2_384",
    HashAlgorithm.SHA3_256: "SHA3_256",
    HashAlgorithm.SHA3_384: "SHA3_384",
    HashAlgorithm.KMAC128: "KMAC128",
    HashAlgorithm.KECCAK_256: "Keccak_256",
}

_PUBLIC_KEY_SIZES: dict[SignatureAlgorithm, int] = {
    SignatureAlgorithm.BLS_BLS12_381: 96,
    SignatureAlgorithm.ECDSA_P256: 64,
    SignatureAlgorithm.ECDSA_SECP256K1: 64,
}


def _normalize(name: str) -> str:
    return name.replace("_", "").upper()


_SIGNATURE_LOOKUP = {_normalize(n): alg for alg, n in _SIGNATURE_NAMES.items()}
_HASH_LOOKUP = {_normalize(n): alg for alg, n in _HASH_NAMES.items()}


def signature_algorithm_from_string(name: str) -> SignatureAlgorithm:
    """Parse a signature algorithm name; unrecognised names give UNKNOWN."""
    return _SIGNATURE_LOOKUP.get(_normalize(name), SignatureAlgorithm.UNKNOWN)


def hash_algorithm_from_string(name: str) -> HashAlgorithm:
    """Parse a hash algorithm name; unrecognised names give UNKNOWN."""
    return _HASH_LOOKUP.get(_normalize(name), HashAlgorithm.UNKNOWN)


class InvalidAccountKeyError(ValueError):
    """Raised when an account key is invalid or cannot be decoded."""


def _account_compatible_algorithms(sig_algo: SignatureAlgorithm, hash_algo: HashAlgorithm) -> bool:
    return sig_algo in (SignatureAlgorithm.ECDSA_P256, SignatureAlgorithm.ECDSA_SECP256K1) and (
        hash_algo in (HashAlgorithm.SHA2_256, HashAlgorithm.SHA3_256)
    )


@dataclass
class AccountKey:
    """A public key associated with an account."""

    index: int = 0
    public_key: bytes = b""
    sig_algo: SignatureAlgorithm = SignatureAlgorithm.UNKNOWN
    hash_algo: HashAlgorithm = HashAlgorithm.UNKNOWN
    weight: int = 0
    sequence_number: int = 0
    revoked: bool = False

    def encode(self) -> bytes:
        """Return the canonical RLP encoding of this key."""
        if self.weight < 0:
            raise InvalidAccountKeyError(f"invalid key weight: {self.weight}")
        return rlp.encode(
            [bytes(self.public_key), int(self.sig_algo), int(self.hash_algo), self.weight]
        )

    def validate(self) -> None:
        """Raise InvalidAccountKeyError if the algorithm pair or weight is invalid."""
        if not _account_compatible_algorithms(self.sig_algo, self.hash_algo):
            raise InvalidAccountKeyError(
                f"signing algorithm ({self.sig_algo}) and hashing algorithm ({self.hash_algo}) "
                "are not a valid pair for a Flow account key"
            )
        if not 0 <= self.weight <= ACCOUNT_KEY_WEIGHT_THRESHOLD:
            raise InvalidAccountKeyError(f"invalid key weight: {self.weight}")


@dataclass
class Account:
    """An account on the Flow network."""

    address: Address = EMPTY_ADDRESS
    balance: int = 0
    code: bytes = b""
    keys: list[AccountKey] = field(default_factory=list)
    contracts: dict[str, bytes] = field(default_factory=dict)


def _decode_uint(data: bytes) -> int:
    if data[:1] == b"\x00":
        raise InvalidAccountKeyError("non-canonical integer (leading zero bytes)")
    return int.from_bytes(data, "big")


def _decode_public_key(sig_algo: SignatureAlgorithm, data: bytes) -> bytes:
    size = _PUBLIC_KEY_SIZES.get(sig_algo)
    if size is None:
        raise InvalidAccountKeyError(f"the signature scheme {sig_algo} is not supported")
    if len(data) != size:
        raise InvalidAccountKeyError(
            f"input has incorrect {sig_algo} key size, expected {size}, got {len(data)}"
        )
    return data


def decode_account_key(b: bytes) -> AccountKey:
    """Decode the RLP encoding of an account key."""
    try:
        items = rlp.decode(b)
    except rlp.RLPError as exc:
        raise InvalidAccountKeyError(f"invalid account key encoding: {exc}") from exc

    if not isinstance(items, list) or len(items) != 4:
        raise InvalidAccountKeyError("account key encoding must be a list of 4 elements")
    if not all(isinstance(item, bytes) for item in items):
        raise InvalidAccountKeyError("account key fields must not be lists")

    encoded_key, raw_sig, raw_hash, raw_weight = items
    try:
        sig_algo = SignatureAlgorithm(_decode_uint(raw_sig))
        hash_algo = HashAlgorithm(_decode_uint(raw_hash))
    except ValueError as exc:
        raise InvalidAccountKeyError(f"invalid algorithm in account key: {exc}") from exc

    return AccountKey(
        public_key=_decode_public_key(sig_algo, encoded_key),
        sig_algo=sig_algo,
        hash_algo=hash_algo,
        weight=_decode_uint(raw_weight),
    )