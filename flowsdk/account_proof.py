"""Account proof messages for signing."""

from __future__ import annotations

import binascii

from flowsdk import rlp
from flowsdk.address import Address

__all__ = [
    "ACCOUNT_PROOF_NONCE_MIN_LEN_BYTES",
    "InvalidNonceError",
    "InvalidAppIDError",
    "encode_account_proof_message",
]

ACCOUNT_PROOF_NONCE_MIN_LEN_BYTES = 32


class InvalidNonceError(ValueError):
    """Raised when an account proof nonce is invalid."""


class InvalidAppIDError(ValueError):
    """Raised when an account proof app ID is invalid."""


def encode_account_proof_message(address: Address, app_id: str, nonce_hex: str) -> bytes:
    """Encode an account proof message for signing, without the user domain tag."""
    if app_id == "":
        raise InvalidAppIDError("invalid app ID: appID can't be empty")

    try:
        nonce = binascii.unhexlify(nonce_hex.removeprefix("0x"))
    except (binascii.Error, ValueError) as exc:
        raise InvalidNonceError(f"invalid nonce: {exc}") from exc

    if len(nonce) < ACCOUNT_PROOF_NONCE_MIN_LEN_BYTES:
        raise InvalidNonceError(
            f"invalid nonce: nonce must be at least {ACCOUNT_PROOF_NONCE_MIN_LEN_BYTES} bytes"
        )

    try:
        return rlp.encode([app_id, bytes(address), nonce])
    except rlp.RLPError as exc:
        raise ValueError(f"error encoding account proof message: {exc}") from exc