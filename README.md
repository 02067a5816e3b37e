# flowsdk

A small Python library for working with the Flow blockchain. It uses only the
standard library.

## What is in it

- `flowsdk.address`: the 8-byte `Address` type (`hex()`, `to_int()`,
  `to_json()`, `is_valid(chain)`), the `ChainID` networks, conversion helpers
  (`hex_to_address`, `bytes_to_address`, `int_to_address`,
  `address_from_json`), and the deterministic `AddressGenerator`
  (`address()`, `next()`, `next_address()`, `set_index(i)`) built on a
  [64,45,7] linear code. `service_address(chain)` and `zero_address(chain)`
  give the first generated address and the unowned address of a chain.
  Running the generator past its maximum state raises `AddressGenerationError`.
- `flowsdk.account`: `Account`, `AccountKey` with canonical RLP `encode()` and
  `validate()` (raises `InvalidAccountKeyError` for an unsupported
  signature/hash pair or a weight outside 0..1000), `decode_account_key()`,
  the `SignatureAlgorithm` and `HashAlgorithm` enums and their
  `*_from_string` parsers.
- `flowsdk.account_proof`: `encode_account_proof_message(address, app_id,
  nonce_hex)` builds the RLP message a wallet signs to prove it owns an
  account. It raises `InvalidAppIDError` for an empty app ID and
  `InvalidNonceError` for a nonce that is not hex or shorter than 32 bytes.
- `flowsdk.entities`: `Identifier` (32 bytes), `hex_to_id`, `Block`,
  `BlockHeader`, `BlockPayload`, `BlockSeal`, `CollectionGuarantee` and
  `Collection`, whose `id()` is the SHA3-256 hash of its RLP encoding.
- `flowsdk.rlp`: `encode()` for bytes, strings, non-negative integers and
  nested lists, and a strict `decode()`; malformed input raises `RLPError`.
- `flowsdk.rest`: the REST Access API.
  - `models`: dataclasses for the API's JSON objects, with `from_dict` and
    `to_dict`.
  - `handler`: `HTTPHandler`, which builds request URLs (with `ExpandOpts`
    and `SelectOpts` query options), sends requests with `urllib` and decodes
    responses into models. Error responses from the node raise `HTTPError`,
    which carries `message`, `url` and `code`.
  - `convert`: functions turning API models into accounts, blocks and
    collections, and Base64 helpers for scripts and arguments.
  - `client`: `Client` and `BaseClient`, created with `new_client(host)` and
    `new_base_client(host)`, plus `HeightQuery` and the special heights
    `FINAL` and `SEALED`. Host constants: `EMULATOR_HOST`, `TESTNET_HOST`,
    `MAINNET_HOST`, `CANARYNET_HOST`.

## Installation

```
pip install flowsdk
```

## Examples

Generating and checking addresses:

```python
from flowsdk.address import AddressGenerator, ChainID, hex_to_address, service_address

gen = AddressGenerator(ChainID.MAINNET)
first = gen.next_address()
assert first == service_address(ChainID.MAINNET)
assert first.is_valid(ChainID.MAINNET)

addr = hex_to_address("0x1")
print(addr.hex())  # 0000000000000001
```

Encoding an account-proof message:

```python
from flowsdk.account_proof import encode_account_proof_message
from flowsdk.address import hex_to_address

msg = encode_account_proof_message(
    hex_to_address("ABC123DEF456"),
    "AWESOME-APP-ID",
    "3037366134636339643564623330316636626239323161663465346131393662",
)
```

Querying an Access node over REST:

```python
from flowsdk.rest.client import EMULATOR_HOST, new_client

with new_client(EMULATOR_HOST) as client:
    header = client.get_latest_block_header(True)
    print(header.height, header.id.hex())
```

`Client` offers `ping`, blocks and block headers by ID, by height or latest,
`get_collection`, and accounts at the latest sealed block or at a height.
`BaseClient.ping` raises `ConnectionError` when the node cannot be reached.

## What it does not do

- `Client` and `BaseClient` do not send, fetch or look up the results of
  transactions, execute scripts, or query events and execution results. The
  `HTTPHandler` has the matching low-level calls (`send_transaction`,
  `get_transaction`, `execute_script_at_block_height`,
  `execute_script_at_block_id`, `get_events`, `get_execution_results`,
  `get_execution_result_by_id`), which return API models or raw encoded
  strings.
- There is no encoding or decoding of Cadence values and no signing: public
  keys are kept as raw bytes, and nothing here creates keys or signatures.
- Protocol state snapshots are not available over the REST API;
  `get_latest_protocol_state_snapshot` raises `RuntimeError`.
- There is no gRPC client and no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```