import base64
from datetime import datetime, timezone

import pytest

from flowsdk.account import HashAlgorithm, SignatureAlgorithm
from flowsdk.rest import models
from flowsdk.rest.convert import (
    encode_args,
    encode_script,
    to_account,
    to_address,
    to_args,
    to_block,
    to_block_header,
    to_block_seals,
    to_blocks,
    to_collection,
    to_collection_guarantees,
    to_contracts,
    to_keys,
    to_script,
)

BLOCK_ID = "11" * 32
PARENT_ID = "22" * 32
COLLECTION_ID = "33" * 32
SEAL_BLOCK_ID = "44" * 32
RESULT_ID = "55" * 32
TX_ID = "66" * 32
ADDRESS = "f8d6e0586b0a20c7"
PUBLIC_KEY_HEX = "ab" * 64
TIMESTAMP = datetime(2022, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def contract_fixture():
    return "HelloWorld", base64.b64encode(b"\n\t\tcontract HelloWorld {}\n\t").decode()


def account_key_fixture():
    return models.AccountPublicKey(
        index="0",
        public_key="0x" + PUBLIC_KEY_HEX,
        signing_algorithm=models.SigningAlgorithm.ECDSA_P256,
        hashing_algorithm=models.HashingAlgorithm.SHA3_256,
        sequence_number="0",
        weight="1000",
        revoked=False,
    )


def account_fixture():
    name, source = contract_fixture()
    return models.Account(
        address=ADDRESS,
        balance="10",
        keys=[account_key_fixture()],
        contracts={name: source},
    )


def block_fixture():
    return models.Block(
        header=models.BlockHeader(
            id=BLOCK_ID,
            parent_id=PARENT_ID,
            height="42",
            timestamp=TIMESTAMP,
            parent_voter_signature=base64.b64encode(b"test").decode(),
        ),
        payload=models.BlockPayload(
            collection_guarantees=[models.CollectionGuarantee(collection_id=COLLECTION_ID)],
            block_seals=[
                models.BlockSeal(
                    block_id=SEAL_BLOCK_ID,
                    result_id=RESULT_ID,
                    final_state="",
                    aggregated_approval_signatures=[
                        models.AggregatedSignature(
                            verifier_signatures=["dGVzdA=="], signer_ids=["1"]
                        )
                    ],
                )
            ],
        ),
    )


def test_convert_block():
    http_block = block_fixture()
    block = to_block(http_block)
    assert block.id.hex() == http_block.header.id
    assert str(block.height) == http_block.header.height
    assert block.timestamp == http_block.header.timestamp
    assert len(block.seals) == len(http_block.payload.block_seals)
    assert block.parent_id.hex() == http_block.header.parent_id
    assert len(block.collection_guarantees) == len(http_block.payload.collection_guarantees)
    assert (
        block.collection_guarantees[0].collection_id.hex()
        == http_block.payload.collection_guarantees[0].collection_id
    )
    assert block.seals[0].block_id.hex() == SEAL_BLOCK_ID
    assert block.seals[0].execution_receipt_id.hex() == RESULT_ID


def test_convert_blocks():
    blocks = to_blocks([block_fixture(), block_fixture()])
    assert [b.height for b in blocks] == [42, 42]
    assert to_blocks([]) == []


def test_block_with_invalid_verifier_signature_fails():
    http_block = block_fixture()
    http_block.payload.block_seals[0].aggregated_approval_signatures[0].verifier_signatures = [
        "not base64!"
    ]
    with pytest.raises(ValueError):
        to_block(http_block)


def test_block_without_header_fails():
    with pytest.raises(ValueError):
        to_block(models.Block(payload=models.BlockPayload()))


def test_block_header_height_invalid_gives_zero():
    header = to_block_header(models.BlockHeader(id=BLOCK_ID, height="abc"))
    assert header.height == 0
    assert header.id.hex() == BLOCK_ID


def test_convert_account():
    http_account = account_fixture()
    name, code = contract_fixture()
    account = to_account(http_account)
    assert account.address.hex() == http_account.address
    assert len(account.keys) == len(http_account.keys)
    assert account.keys[0].public_key == bytes.fromhex(PUBLIC_KEY_HEX)
    assert account.contracts[name] == base64.b64decode(code)
    assert str(account.balance) == http_account.balance


def test_convert_keys_fields():
    key = to_keys([account_key_fixture()])[0]
    assert key.sig_algo == SignatureAlgorithm.ECDSA_P256
    assert key.hash_algo == HashAlgorithm.SHA3_256
    assert key.weight == 1000
    assert key.index == 0
    assert key.sequence_number == 0
    assert key.revoked is False


def test_convert_keys_secp256k1_and_bad_numbers():
    raw = models.AccountPublicKey(
        index="x",
        public_key="zz",
        signing_algorithm=models.SigningAlgorithm.ECDSA_SECP256K1,
        hashing_algorithm=models.HashingAlgorithm.SHA2_256,
        sequence_number="-1",
        weight="7",
        revoked=True,
    )
    key = to_keys([raw])[0]
    assert key.sig_algo == SignatureAlgorithm.ECDSA_SECP256K1
    assert key.hash_algo == HashAlgorithm.SHA2_256
    assert key.index == 0
    assert key.sequence_number == 0
    assert key.weight == 7
    assert key.public_key == b""
    assert key.revoked is True


def test_to_contracts_invalid_base64():
    with pytest.raises(ValueError):
        to_contracts({"Bad": "@@@"})


def test_to_address_matches_hex():
    assert to_address("0x" + ADDRESS).hex() == ADDRESS


def test_convert_collection():
    http_coll = models.Collection(
        id=COLLECTION_ID, transactions=[models.Transaction(id=TX_ID)]
    )
    collection = to_collection(http_coll)
    assert len(collection.transaction_ids) == len(http_coll.transactions)
    assert collection.transaction_ids[0].hex() == http_coll.transactions[0].id


def test_collection_guarantees_and_seals():
    guarantees = to_collection_guarantees([models.CollectionGuarantee(collection_id=COLLECTION_ID)])
    assert guarantees[0].collection_id.hex() == COLLECTION_ID
    seals = to_block_seals([models.BlockSeal(block_id=SEAL_BLOCK_ID, result_id=RESULT_ID)])
    assert seals[0].block_id.hex() == SEAL_BLOCK_ID


def test_script_round_trip():
    assert encode_script(b"hello") == "aGVsbG8="
    assert to_script(encode_script(b"main() {}")) == b"main() {}"


def test_args_round_trip():
    args = [b"one", b"", b"\x00\xff"]
    encoded = encode_args(args)
    assert encoded[0] == "b25l"
    assert to_args(encoded) == args


def test_to_args_invalid():
    with pytest.raises(ValueError):
        to_args(["!!"])