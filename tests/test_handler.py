import base64
import json
import socket
import threading
import urllib.request
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

import pytest

from flowsdk.rest import models
from flowsdk.rest.handler import ExpandOpts, HTTPError, HTTPHandler, SelectOpts

CONTRACT_CODE = base64.b64encode(b"contract HelloWorld {}").decode()

BLOCK = {
    "header": {
        "id": "aa" * 32,
        "parent_id": "bb" * 32,
        "height": "42",
        "timestamp": "2021-06-01T12:00:00Z",
        "parent_voter_signature": "dGVzdA==",
    },
    "payload": {
        "collection_guarantees": [{"collection_id": "cc" * 32, "signer_ids": [], "signature": ""}],
        "block_seals": [
            {
                "block_id": "dd" * 32,
                "result_id": "ee" * 32,
                "final_state": "",
                "aggregated_approval_signatures": [
                    {"verifier_signatures": ["dGVzdA=="], "signer_ids": ["1"]}
                ],
            }
        ],
    },
    "_expandable": None,
}

ACCOUNT = {
    "address": "0000000000000001",
    "balance": "10",
    "keys": [
        {
            "index": "0",
            "public_key": "0x" + "ab" * 64,
            "signing_algorithm": "ECDSAP256",
            "hashing_algorithm": "SHA3_256",
            "sequence_number": "0",
            "weight": "1000",
            "revoked": False,
        }
    ],
    "contracts": {"HelloWorld": CONTRACT_CODE},
    "_expandable": None,
}

TRANSACTION = {
    "id": "11" * 32,
    "script": base64.b64encode(b"transaction {}").decode(),
    "arguments": [],
    "reference_block_id": "22" * 32,
    "gas_limit": "42",
    "payer": "0000000000000002",
    "proposal_key": {"address": "0000000000000002", "key_index": "1", "sequence_number": "7"},
    "authorizers": ["0000000000000003"],
    "payload_signatures": [
        {"address": "0000000000000003", "key_index": "0", "signature": "c2ln"}
    ],
    "envelope_signatures": [
        {"address": "0000000000000002", "key_index": "1", "signature": "c2ln"}
    ],
    "_expandable": None,
}

COLLECTION = {"id": "33" * 32, "transactions": [{"id": "11" * 32}], "_expandable": None}

EVENT = {
    "type": "A.Foo.Bar",
    "transaction_id": "44" * 32,
    "transaction_index": "0",
    "event_index": "1",
    "payload": base64.b64encode(b"{}").decode(),
}

BLOCK_EVENTS = {
    "block_id": "55" * 32,
    "block_height": "7",
    "block_timestamp": "2021-06-01T12:00:00Z",
    "events": [EVENT],
}

EXECUTION_RESULT = {
    "id": "66" * 32,
    "block_id": "55" * 32,
    "events": [EVENT],
    "chunks": [
        {
            "block_id": "55" * 32,
            "collection_index": "0",
            "start_state": "",
            "end_state": "",
            "event_collection": "",
            "index": "0",
            "number_of_transactions": "2",
            "total_computation_used": "100",
        }
    ],
    "previous_result_id": "77" * 32,
}


class _State:
    def __init__(self):
        self.status = 200
        self.body = b"null"
        self.paths = []
        self.bodies = []
        self.base = ""

    def respond(self, data, status=200):
        self.status = status
        self.body = json.dumps(data).encode()

    def raw(self, body, status):
        self.status = status
        self.body = body


@pytest.fixture
def server():
    state = _State()

    class Handler(BaseHTTPRequestHandler):
        def _reply(self):
            state.paths.append(self.path)
            length = int(self.headers.get("Content-Length") or 0)
            state.bodies.append(self.rfile.read(length))
            self.send_response(state.status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(state.body)))
            self.end_headers()
            self.wfile.write(state.body)

        do_GET = _reply
        do_POST = _reply

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    state.base = f"http://127.0.0.1:{httpd.server_port}"
    yield state
    httpd.shutdown()
    httpd.server_close()


def _no_proxy():
    return urllib.request.build_opener(urllib.request.ProxyHandler({}))


@pytest.fixture
def handler(server):
    return HTTPHandler(server.base, opener=_no_proxy(), timeout=5)


def test_invalid_response(server, handler):
    server.respond("123")
    with pytest.raises(ValueError) as info:
        handler.get_blocks_by_heights("1", "", "")
    assert str(info.value).startswith("get block by height 1 failed: JSON decoding failed")
    assert server.paths == ["/blocks?expand=payload&height=1"]


def test_get_block_by_id_success(server, handler):
    server.respond([BLOCK])
    block = handler.get_block_by_id("0x1")
    assert block == models.Block.from_dict(BLOCK)
    assert block.header.height == "42"
    assert server.paths == ["/blocks/0x1?expand=payload"]


def test_get_block_by_id_empty(server, handler):
    server.respond([])
    with pytest.raises(LookupError, match="get block failed"):
        handler.get_block_by_id("0x1")


def test_get_blocks_range_success(server, handler):
    server.respond([BLOCK])
    blocks = handler.get_blocks_by_heights("", "1", "2")
    assert blocks == [models.Block.from_dict(BLOCK)]
    assert server.paths == ["/blocks?end_height=2&expand=payload&start_height=1"]


def test_get_blocks_list_success(server, handler):
    server.respond([BLOCK, BLOCK])
    blocks = handler.get_blocks_by_heights("1,2", "", "")
    assert len(blocks) == 2
    assert blocks[1] == models.Block.from_dict(BLOCK)
    assert server.paths == ["/blocks?expand=payload&height=1%2C2"]


@pytest.mark.parametrize(
    "heights,start,end", [("", "1", ""), ("", "", "1"), ("", "", "")]
)
def test_get_blocks_range_failure(server, handler, heights, start, end):
    with pytest.raises(ValueError, match="must provide either heights or start and end height"):
        handler.get_blocks_by_heights(heights, start, end)
    assert server.paths == []


def test_get_blocks_bad_request(server, handler):
    server.respond({"code": 400, "message": "invalid height values"}, status=400)
    with pytest.raises(HTTPError) as info:
        handler.get_blocks_by_heights("foo,bar", "", "")
    assert str(info.value) == "get block by height foo,bar failed: invalid height values"
    assert info.value.code == 400
    assert server.paths == ["/blocks?expand=payload&height=foo%2Cbar"]


def test_get_account_success(server, handler):
    server.respond(ACCOUNT)
    account = handler.get_account(ACCOUNT["address"], "sealed")
    assert account == models.Account.from_dict(ACCOUNT)
    assert account.contracts["HelloWorld"] == CONTRACT_CODE
    assert server.paths == [
        "/accounts/0000000000000001?expand=keys%2Ccontracts&height=sealed"
    ]


def test_get_account_failure(server, handler):
    server.respond({"code": 400, "message": "invalid height value"}, status=400)
    with pytest.raises(HTTPError) as info:
        handler.get_account("0x1", "foo")
    assert str(info.value) == "get account 0x1 failed: invalid height value"
    assert server.paths == ["/accounts/0x1?expand=keys%2Ccontracts&height=foo"]


def test_get_collection(server, handler):
    server.respond(COLLECTION)
    collection = handler.get_collection("0x1")
    assert collection == models.Collection.from_dict(COLLECTION)
    assert collection.transactions[0].id == "11" * 32
    assert server.paths == ["/collections/0x1"]


def test_execute_script_at_height(server, handler):
    server.respond("42")
    value = handler.execute_script_at_block_height("1", "main() { return 42; }", None)
    assert value == "42"
    assert server.paths == ["/scripts?block_height=1"]
    assert json.loads(server.bodies[0]) == {"script": "main() { return 42; }"}


def test_execute_script_at_block_id(server, handler):
    server.respond("42")
    value = handler.execute_script_at_block_id("0x1", "main() { return 42; }", ["YQ=="])
    assert value == "42"
    assert server.paths == ["/scripts?block_id=0x1"]
    assert json.loads(server.bodies[0]) == {
        "script": "main() { return 42; }",
        "arguments": ["YQ=="],
    }


def test_execute_script_failure(server, handler):
    server.respond({"code": 400, "message": "execution failure"}, status=400)
    with pytest.raises(HTTPError) as info:
        handler.execute_script_at_block_height("1", "main() { return 42; }", None)
    assert str(info.value) == "executing script main() { return 42; } failed: execution failure"


def test_send_transaction_success(server, handler):
    server.respond(TRANSACTION)
    raw = json.dumps(TRANSACTION).encode()
    echoed = handler.send_transaction(raw)
    assert echoed == models.Transaction.from_dict(TRANSACTION)
    assert server.paths == ["/transactions"]
    assert server.bodies == [raw]


def test_send_transaction_invalid_argument(server, handler):
    server.respond({"code": 400, "message": "rpc error: code = InvalidArgument"}, status=400)
    with pytest.raises(HTTPError) as info:
        handler.send_transaction(json.dumps(TRANSACTION).encode())
    assert str(info.value) == "rpc error: code = InvalidArgument"
    assert info.value.code == 400
    assert info.value.url.endswith("/transactions")


def test_get_transaction(server, handler):
    server.respond(TRANSACTION)
    tx = handler.get_transaction("0x1", False)
    assert tx == models.Transaction.from_dict(TRANSACTION)
    assert server.paths == ["/transactions/0x1"]


def test_get_transaction_with_result(server, handler):
    server.respond(TRANSACTION)
    tx = handler.get_transaction("0x1", True)
    assert tx.gas_limit == "42"
    assert server.paths == ["/transactions/0x1?expand=result"]


def test_get_events_for_range(server, handler):
    server.respond([BLOCK_EVENTS])
    events = handler.get_events("A.Foo", "1", "3", [])
    assert events == [models.BlockEvents.from_dict(BLOCK_EVENTS)]
    assert server.paths == ["/events?end_height=3&start_height=1&type=A.Foo"]


def test_get_events_for_ids(server, handler):
    server.respond([BLOCK_EVENTS])
    events = handler.get_events("A.Foo", "", "", ["0x1", "0x2"])
    assert events[0].events[0].type == "A.Foo.Bar"
    assert server.paths == ["/events?block_ids=0x1%2C0x2&type=A.Foo"]


def test_get_events_failure_arguments(server, handler):
    with pytest.raises(ValueError, match="must either provide start and end height or block IDs"):
        handler.get_events("A", "", "", None)
    assert server.paths == []


def test_get_events_failure_response(server, handler):
    server.respond({"code": 400, "message": "events not found"}, status=400)
    with pytest.raises(HTTPError) as info:
        handler.get_events("A.Foo", "1", "3", None)
    assert str(info.value) == "get events by type A.Foo failed: events not found"


def test_get_execution_results_by_ids(server, handler):
    server.respond([EXECUTION_RESULT])
    results = handler.get_execution_results(["0x1"])
    assert results == [models.ExecutionResult.from_dict(EXECUTION_RESULT)]
    assert server.paths == ["/execution_results?block_ids=0x1"]


def test_get_execution_result_by_id(server, handler):
    server.respond(EXECUTION_RESULT)
    result = handler.get_execution_result_by_id("0x1")
    assert result == models.ExecutionResult.from_dict(EXECUTION_RESULT)
    assert result.chunks[0].number_of_transactions == "2"
    assert server.paths == ["/execution_results/0x1"]


def test_execution_results_error_lists_ids(server, handler):
    server.respond({"code": 404, "message": "not found"}, status=404)
    with pytest.raises(HTTPError) as info:
        handler.get_execution_results(["0x1", "0x2"])
    assert str(info.value) == "get execution results by IDs [0x1 0x2] failed: not found"


def test_url_builder(handler):
    url = handler.build_url("/test", ExpandOpts(["foo", "bar"]), SelectOpts(["zoo", "moo"]))
    parts = urlsplit(url)
    assert parts.query == "expands=foo%2Cbar&select=zoo%2Cmoo"
    assert parts.path == "/test"


def test_options_to_query():
    assert ExpandOpts(["a", "b"]).to_query() == ("expands", "a,b")
    assert SelectOpts(["c"]).to_query() == ("select", "c")


def test_invalid_host():
    with pytest.raises(ValueError):
        HTTPHandler("http://[::1")


def test_error_body_not_json(server, handler):
    server.raw(b"oops", 500)
    with pytest.raises(ValueError) as info:
        handler.get_collection("0x1")
    assert str(info.value).startswith("get collection ID 0x1 failed")


def test_connection_refused():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    handler = HTTPHandler(f"http://127.0.0.1:{port}", opener=_no_proxy(), timeout=5)
    with pytest.raises(ConnectionError) as info:
        handler.get_collection("0x1")
    assert str(info.value).startswith("get collection ID 0x1 failed")


def test_debug_output(server, capsys):
    handler = HTTPHandler(server.base, debug=True, opener=_no_proxy(), timeout=5)
    server.respond(COLLECTION)
    handler.get_collection("0x1")
    out = capsys.readouterr().out
    assert "-> GET " in out
    assert "/collections/0x1" in out