"""Flow account addresses and their deterministic generation."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "ADDRESS_LENGTH",
    "LINEAR_CODE_N",
    "LINEAR_CODE_K",
    "LINEAR_CODE_D",
    "MAX_STATE",
    "ZERO_ADDRESS_STATE",
    "SERVICE_ADDRESS_STATE",
    "GENERATOR_MATRIX_ROWS",
    "PARITY_CHECK_MATRIX_COLUMNS",
    "EMPTY_ADDRESS",
    "ChainID",
    "Address",
    "AddressGenerator",
    "AddressGenerationError",
    "address_from_json",
    "int_to_address",
    "hex_to_address",
    "bytes_to_address",
    "chain_customizer",
    "generate_address",
    "service_address",
    "zero_address",
]

# [64,45,7] linear code: n bits per address, k bits of state, minimum distance d.
LINEAR_CODE_N = 64
LINEAR_CODE_K = 45
LINEAR_CODE_D = 7
MAX_STATE = (1 << LINEAR_CODE_K) - 1

ADDRESS_LENGTH = (LINEAR_CODE_N + 7) >> 3

ZERO_ADDRESS_STATE = 0
SERVICE_ADDRESS_STATE = 1

_UINT64_LIMIT = 1 << 64

INVALID_CODE_TEST_NETWORK = 0x6834BA37B3980209
INVALID_CODE_TRANSIENT_NETWORK = 0x1CB159857AF02018
INVALID_CODE_STAGING_NETWORK = 0x1035CE4EFF92AE01

GENERATOR_MATRIX_ROWS: tuple[int, ...] = (
    0xE467B9DD11FA00DF, 0xF233DCEE88FE0ABE, 0xF919EE77447B7497, 0xFC8CF73BA23A260D,
    0xFE467B9DD11EE2A1, 0xFF233DCEE888D807, 0xFF919EE774476CE6, 0x7FC8CF73BA231D10,
    0x3FE467B9DD11B183, 0x1FF233DCEE8F96D6, 0x8FF919EE774757BA, 0x47FC8CF73BA2B331,
    0x23FE467B9DD27F6C, 0x11FF233DCEEE8E82, 0x88FF919EE775DD8F, 0x447FC8CF73B905E4,
    0xA23FE467B9DE0D83, 0xD11FF233DCE8D5A7, 0xE88FF919EE73C38A, 0x7447FC8CF73F171F,
    0xBA23FE467B9DCB2B, 0xDD11FF233DCB0CB4, 0xEE88FF919EE26C5D, 0x77447FC8CF775DD3,
    0x3BA23FE467B9B5A1, 0x9DD11FF233D9117A, 0xCEE88FF919EFA640, 0xE77447FC8CF3E297,
    0x73BA23FE467FABD2, 0xB9DD11FF233FB16C, 0xDCEE88FF919ADDE7, 0xEE77447FC8CEB196,
    0xF73BA23FE4621CD0, 0x7B9DD11FF2379AC3, 0x3DCEE88FF91DF46C, 0x9EE77447FC88E702,
    0xCF73BA23FE4131B6, 0x67B9DD11FF240F9A, 0x33DCEE88FF90F9E0, 0x19EE77447FCFF4E3,
    0x8CF73BA23FE64091, 0x467B9DD11FF115C7, 0x233DCEE88FFDB735, 0x919EE77447FE2309,
    0xC8CF73BA23FDC736,
)

PARITY_CHECK_MATRIX_COLUMNS: tuple[int, ...] = (
    0x00001, 0x00002, 0x00004, 0x00008,
    0x00010, 0x00020, 0x00040, 0x00080,
    0x00100, 0x00200, 0x00400, 0x00800,
    0x01000, 0x02000, 0x04000, 0x08000,
    0x10000, 0x20000, 0x40000, 0x7328D,
    0x6689A, 0x6112F, 0x6084B, 0x433FD,
    0x42AAB, 0x41951, 0x233CE, 0x22A81,
    0x21948, 0x1EF60, 0x1DECA, 0x1C639,
    0x1BDD8, 0x1A535, 0x194AC, 0x18C46,
    0x1632B, 0x1529B, 0x14A43, 0x13184,
    0x12942, 0x118C1, 0x0F812, 0x0E027,
    0x0D00E, 0x0C83C, 0x0B01D, 0x0A831,
    0x0982B, 0x07034, 0x0682A, 0x05819,
    0x03807, 0x007D2, 0x00727, 0x0068E,
    0x0067C, 0x0059D, 0x004EB, 0x003B4,
    0x0036A, 0x002D9, 0x001C7, 0x0003F,
)


class ChainID(StrEnum):
    """Identifiers of Flow networks."""

    MAINNET = "flow-mainnet"
    TESTNET = "flow-testnet"
    STAGINGNET = "flow-stagingnet"
    EMULATOR = "flow-emulator"
    LOCALNET = "flow-localnet"
    BENCHNET = "flow-benchnet"
    BFT_TESTNET = "flow-bft-testnet"


_CHAIN_CODEWORDS: dict[ChainID, int] = {
    ChainID.MAINNET: 0,
    ChainID.TESTNET: INVALID_CODE_TEST_NETWORK,
    ChainID.STAGINGNET: INVALID_CODE_STAGING_NETWORK,
    ChainID.EMULATOR: INVALID_CODE_TRANSIENT_NETWORK,
    ChainID.LOCALNET: INVALID_CODE_TRANSIENT_NETWORK,
    ChainID.BENCHNET: INVALID_CODE_TRANSIENT_NETWORK,
    ChainID.BFT_TESTNET: INVALID_CODE_TRANSIENT_NETWORK,
}


class AddressGenerationError(OverflowError):
    """Raised when the addressing state runs past its maximum."""


def chain_customizer(chain: ChainID | str) -> int:
    """Return the constant code word that customizes addresses for a chain."""
    try:
        return _CHAIN_CODEWORDS[ChainID(chain)]
    except (ValueError, KeyError):
        raise ValueError(
            f"chain ID [{chain}] is invalid or does not support linear code address generation"
        ) from None


@dataclass(frozen=True, slots=True)
class Address:
    """The 8-byte address of a Flow account."""

    value: bytes = bytes(ADDRESS_LENGTH)

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)):
            raise TypeError("address value must be bytes")
        if len(self.value) != ADDRESS_LENGTH:
            raise ValueError(f"address must be exactly {ADDRESS_LENGTH} bytes")
        object.__setattr__(self, "value", bytes(self.value))

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Address('{self.hex()}')"

    def hex(self) -> str:
        """Return the lower-case hex form without a prefix."""
        return self.value.hex()

    def to_int(self) -> int:
        """Return the address as a big-endian unsigned integer."""
        return int.from_bytes(self.value, "big")

    def is_valid(self, chain: ChainID | str) -> bool:
        """Tell whether the address is a well-formed account address on the chain."""
        code_word = self.to_int() ^ chain_customizer(chain)
        if code_word == 0:
            return False
        parity = 0
        for column in PARITY_CHECK_MATRIX_COLUMNS:
            if code_word & 1:
                parity ^= column
            code_word >>= 1
        return parity == 0

    def to_json(self) -> str:
        """Return the address as a JSON string literal."""
        return f'"{self.hex()}"'


EMPTY_ADDRESS = Address()


def _decode_hex_prefix(text: str) -> bytes:
    """Decode hex pairs up to the first invalid one."""
    out = bytearray()
    chars = iter(text)
    for high, low in zip(chars, chars):
        if high not in string.hexdigits or low not in string.hexdigits:
            break
        out.append(int(high + low, 16))
    return bytes(out)


def bytes_to_address(b: bytes) -> Address:
    """Build an address, cropping from the left or zero-padding at the front."""
    b = bytes(b)[-ADDRESS_LENGTH:]
    return Address(b.rjust(ADDRESS_LENGTH, b"\x00"))


def hex_to_address(h: str) -> Address:
    """Convert a hex string, optionally prefixed with 0x, to an address."""
    trimmed = h.removeprefix("0x")
    if len(trimmed) % 2 == 1:
        trimmed = "0" + trimmed
    return bytes_to_address(_decode_hex_prefix(trimmed))


def address_from_json(data: str | bytes) -> Address:
    """Parse an address from its JSON string form."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    return hex_to_address(data.strip('"'))


def int_to_address(value: int) -> Address:
    """Return the address whose big-endian value is the given 64-bit integer."""
    if not 0 <= value < _UINT64_LIMIT:
        raise ValueError(f"address value out of range: {value}")
    return Address(value.to_bytes(ADDRESS_LENGTH, "big"))


def generate_address(chain: ChainID | str, state: int) -> Address:
    """Return the account address for an addressing state on a chain."""
    index = state
    address = 0
    for row in GENERATOR_MATRIX_ROWS:
        if index & 1:
            address ^= row
        index >>= 1
    address ^= chain_customizer(chain)
    return int_to_address(address)


def service_address(chain: ChainID | str) -> Address:
    """Return the first generated account address of a chain."""
    return generate_address(chain, SERVICE_ADDRESS_STATE)


def zero_address(chain: ChainID | str) -> Address:
    """Return the address no one owns on a chain."""
    return generate_address(chain, ZERO_ADDRESS_STATE)


class AddressGenerator:
    """Generates Flow addresses deterministically from an increasing state."""

    def __init__(self, chain: ChainID | str, state: int = ZERO_ADDRESS_STATE) -> None:
        if state < 0:
            raise ValueError("addressing state must not be negative")
        self.chain = chain
        self.state = state

    def address(self) -> Address:
        """Return the address at the current state."""
        return generate_address(self.chain, self.state)

    def next_address(self) -> Address:
        """Advance the state and return the address there."""
        self.next()
        return generate_address(self.chain, self.state)

    def next(self) -> AddressGenerator:
        """Advance the addressing state by one."""
        if self.state > MAX_STATE:
            raise AddressGenerationError(
                f"addressing state must be less than or equal to {MAX_STATE}"
            )
        self.state += 1
        return self

    def set_index(self, i: int) -> AddressGenerator:
        """Move the addressing state to the given index."""
        if i < 0:
            raise ValueError("addressing index must not be negative")
        self.state = i
        return self