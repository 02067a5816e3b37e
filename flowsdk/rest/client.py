"""Clients for the Flow Access REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flowsdk.account import Account
from flowsdk.address import Address
from flowsdk.entities import Block, BlockHeader, Collection, Identifier
from flowsdk.rest.convert import to_account, to_block, to_blocks, to_collection
from flowsdk.rest.handler import HTTPError, HTTPHandler

__all__ = [
    "EMULATOR_HOST",
    "TESTNET_HOST",
    "MAINNET_HOST",
    "CANARYNET_HOST",
    "FINAL",
    "SEALED",
    "HeightQuery",
    "BaseClient",
    "Client",
    "new_base_client",
    "new_client",
]

EMULATOR_HOST = "http://127.0.0.1:8888/v1"
TESTNET_HOST = "https://rest-testnet.onflow.org/v1/"
MAINNET_HOST = "https://rest-mainnet.onflow.org/v1/"
CANARYNET_HOST = "https://rest-canary.onflow.org/v1/"

_UINT64_MAX = (1 << 64) - 1

FINAL = _UINT64_MAX - 1
"""Special height pointing to the latest finalized block."""

SEALED = _UINT64_MAX - 2
"""Special height pointing to the latest sealed block."""

_SPECIAL_HEIGHTS = {FINAL: "final", SEALED: "sealed"}

_FAILURES = (HTTPError, ValueError, TypeError, LookupError, OSError)


@dataclass
class HeightQuery:
    """Heights to query: either a list of heights or a start and end range."""

    heights: list[int] = field(default_factory=list)
    start: int = 0
    end: int = 0

    def heights_string(self) -> str:
        """Return the heights joined by commas, with special heights named."""
        return ",".join(_SPECIAL_HEIGHTS.get(h, str(h)) for h in self.heights)

    def start_string(self) -> str:
        """Return the start height, or an empty string when no range is set."""
        if self.start == 0 and self.end == 0:
            return ""
        return str(self.start)

    def end_string(self) -> str:
        """Return the end height, or an empty string when it is zero."""
        return "" if self.end == 0 else str(self.end)

    def range_defined(self) -> bool:
        """Return True when a start or end height is set."""
        return self.end != 0 or self.start != 0

    def validate_range(self) -> None:
        """Raise ValueError when the range is set and start exceeds end."""
        if self.range_defined() and self.start > self.end:
            raise ValueError(
                f"start height ({self.start}) must be smaller than end height ({self.end})"
            )

    def heights_defined(self) -> bool:
        """Return True when at least one height is given."""
        return len(self.heights) > 0

    def single_height_defined(self) -> bool:
        """Return True when exactly one height is given."""
        return len(self.heights) == 1


class BaseClient:
    """Client with the HTTP-specific API of the Access node."""

    def __init__(self, handler: Any) -> None:
        self.handler = handler

    def ping(self) -> None:
        """Check the Access API is reachable by fetching the latest sealed block."""
        try:
            self.handler.get_blocks_by_heights(_SPECIAL_HEIGHTS[SEALED], "", "")
        except _FAILURES as exc:
            raise ConnectionError(f"ping error: {exc}") from exc

    def get_block_by_id(self, block_id: Identifier, *args: Any) -> Block:
        """Fetch a block by its ID."""
        return to_block(self.handler.get_block_by_id(block_id.hex(), *args))

    def get_blocks_by_heights(self, height_query: HeightQuery, *args: Any) -> list[Block]:
        """Fetch blocks by a list of heights or a height range."""
        if not height_query.heights_defined() and not height_query.range_defined():
            raise ValueError("must either provide heights or start and end height range")
        height_query.validate_range()
        blocks = self.handler.get_blocks_by_heights(
            height_query.heights_string(),
            height_query.start_string(),
            height_query.end_string(),
            *args,
        )
        return to_blocks(blocks)

    def get_collection(self, collection_id: Identifier, *args: Any) -> Collection:
        """Fetch a collection by its ID."""
        return to_collection(self.handler.get_collection(collection_id.hex(), *args))

    def get_account_at_block_height(
        self, address: Address, block_query: HeightQuery, *args: Any
    ) -> Account:
        """Fetch an account at the single height of the query."""
        if not block_query.single_height_defined():
            raise ValueError("can only provide one block height at a time")
        account = self.handler.get_account(address.hex(), block_query.heights_string(), *args)
        return to_account(account)

    def get_latest_protocol_state_snapshot(self) -> bytes:
        """Protocol state snapshots are not offered by the HTTP API."""
        raise RuntimeError(
            "get latest protocol snapshot is currently not supported for HTTP API"
        )


def new_base_client(host: str) -> BaseClient:
    """Create a base client talking to the given host."""
    return BaseClient(HTTPHandler(host, False))


class Client:
    """Network-agnostic client of the common Access API methods."""

    def __init__(self, base_client: BaseClient) -> None:
        self.base_client = base_client

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def ping(self) -> None:
        """Check the Access API is reachable."""
        self.base_client.ping()

    def get_block_by_id(self, block_id: Identifier) -> Block:
        """Fetch a block by its ID."""
        return self.base_client.get_block_by_id(block_id)

    def get_latest_block_header(self, is_sealed: bool) -> BlockHeader:
        """Fetch the header of the latest sealed or finalized block."""
        return self.get_latest_block(is_sealed).header

    def get_block_header_by_id(self, block_id: Identifier) -> BlockHeader:
        """Fetch the header of a block by its ID."""
        return self.get_block_by_id(block_id).header

    def get_block_header_by_height(self, height: int) -> BlockHeader:
        """Fetch the header of a block by its height."""
        return self.get_block_by_height(height).header

    def _single_block(self, height: int) -> Block:
        blocks = self.base_client.get_blocks_by_heights(HeightQuery(heights=[height]))
        if not blocks:
            raise LookupError("no block returned")
        return blocks[0]

    def get_latest_block(self, is_sealed: bool) -> Block:
        """Fetch the latest sealed or finalized block."""
        return self._single_block(SEALED if is_sealed else FINAL)

    def get_block_by_height(self, height: int) -> Block:
        """Fetch a block by its height."""
        return self._single_block(height)

    def get_collection(self, collection_id: Identifier) -> Collection:
        """Fetch a collection by its ID."""
        return self.base_client.get_collection(collection_id)

    def get_account(self, address: Address) -> Account:
        """Fetch an account at the latest sealed block."""
        return self.get_account_at_latest_block(address)

    def get_account_at_latest_block(self, address: Address) -> Account:
        """Fetch an account at the latest sealed block."""
        return self.base_client.get_account_at_block_height(
            address, HeightQuery(heights=[SEALED])
        )

    def get_account_at_block_height(self, address: Address, block_height: int) -> Account:
        """Fetch an account at a block height."""
        return self.base_client.get_account_at_block_height(
            address, HeightQuery(heights=[block_height])
        )

    def get_latest_protocol_state_snapshot(self) -> bytes:
        """Protocol state snapshots are not offered by the HTTP API."""
        return self.base_client.get_latest_protocol_state_snapshot()

    def close(self) -> None:
        """Nothing to release: every request opens and closes its own connection."""
        return None


def new_client(host: str) -> Client:
    """Create a client talking to the given host."""
    return Client(new_base_client(host))