"""Low-level HTTP access to the Flow Access REST API."""

from __future__ import annotations

import json
import time
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from flowsdk.rest import models

__all__ = ["HTTPError", "ExpandOpts", "SelectOpts", "HTTPHandler"]

_M = TypeVar("_M")


class HTTPError(Exception):
    """An error response returned by the Access API."""

    def __init__(self, message: str, url: str = "", code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.code = code

    def __str__(self) -> str:
        return self.message


class _QueryOpts(Protocol):
    def to_query(self) -> tuple[str, str]: ...


@dataclass
class ExpandOpts:
    """Fields to retrieve as extra data in a response."""

    expands: list[str] = field(default_factory=list)

    def to_query(self) -> tuple[str, str]:
        return "expands", ",".join(self.expands)


@dataclass
class SelectOpts:
    """Fields to keep in a response, filtering out everything else."""

    selects: list[str] = field(default_factory=list)

    def to_query(self) -> tuple[str, str]:
        return "select", ",".join(self.selects)


def _add_query(url: str, *pairs: tuple[str, str]) -> str:
    """Add query parameters and re-encode the query sorted by key."""
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True) + list(pairs)
    query.sort(key=lambda kv: kv[0])
    return urlunsplit(parts._replace(query=urlencode(query)))


def _wrap(exc: BaseException, context: str) -> Exception:
    message = f"{context}: {exc}"
    if isinstance(exc, HTTPError):
        return HTTPError(message, url=exc.url, code=exc.code)
    if isinstance(exc, OSError):
        return ConnectionError(message)
    return ValueError(message)


def _decoding_failed(exc: BaseException) -> ValueError:
    return ValueError(f"JSON decoding failed: {exc}")


def _decode_list(data: Any, cls: type[_M]) -> list[_M]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(
            f"JSON decoding failed: cannot decode {type(data).__name__} into list of {cls.__name__}"
        )
    try:
        return [cls.from_dict(item) for item in data]  # type: ignore[attr-defined]
    except (TypeError, ValueError) as exc:
        raise _decoding_failed(exc) from exc


def _decode_object(data: Any, cls: type[_M]) -> _M:
    if data is None:
        return cls()
    try:
        return cls.from_dict(data)  # type: ignore[attr-defined]
    except (TypeError, ValueError) as exc:
        raise _decoding_failed(exc) from exc


def _decode_string(data: Any) -> str:
    if data is None:
        return ""
    if not isinstance(data, str):
        raise ValueError(f"JSON decoding failed: cannot decode {type(data).__name__} into string")
    return data


_FAILURES = (HTTPError, ValueError, TypeError, OSError)


class HTTPHandler:
    """Builds requests to the Access API and decodes its responses into models."""

    def __init__(
        self,
        base: str,
        debug: bool = False,
        *,
        opener: urllib.request.OpenerDirector | None = None,
        timeout: float | None = 30.0,
    ) -> None:
        urlsplit(base)  # raises ValueError for malformed hosts
        self.base = base
        self.debug = debug
        self.timeout = timeout
        self._opener = opener or urllib.request.build_opener()

    def build_url(self, path: str, *args: _QueryOpts) -> str:
        """Join the base and path and add the query of every option."""
        url = f"{self.base}{path}"
        for opt in args:
            url = _add_query(url, opt.to_query())
        return url

    def _log(self, text: str) -> None:
        if self.debug:
            print(text, end="")

    def _send(self, request: urllib.request.Request) -> tuple[int, bytes]:
        try:
            with self._opener.open(request, timeout=self.timeout) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as exc:
            with exc:
                return exc.code, exc.read()

    @staticmethod
    def _error_from_body(url: str, status: int, body: bytes) -> Exception:
        try:
            data = json.loads(body)
        except ValueError as exc:
            return ValueError(f"invalid error response: {exc}")
        if not isinstance(data, dict):
            return ValueError(f"invalid error response: {type(data).__name__} is not an object")
        code = data.get("code")
        message = data.get("message")
        return HTTPError(
            message if isinstance(message, str) else "",
            url=url,
            code=code if isinstance(code, int) and not isinstance(code, bool) else status,
        )

    @staticmethod
    def _decode_json(body: bytes) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            raise _decoding_failed(exc) from exc

    def get(self, url: str) -> Any:
        """Send a GET request and return the decoded JSON response."""
        self._log(f"\n-> GET {url} t={int(time.time())}")
        status, body = self._send(urllib.request.Request(url, method="GET"))
        if status >= 400:
            self._log(f"\n<- FAILED GET {url} status={status} t={int(time.time())} - {body!r}")
            raise self._error_from_body(url, status, body)
        self._log(f"\n<- GET {url} t={int(time.time())} - {body!r}")
        return self._decode_json(body)

    def post(self, url: str, body: bytes) -> Any:
        """Send a JSON POST request and return the decoded JSON response."""
        self._log(f"\n-> POST {url} t={int(time.time())} - {body!r}")
        request = urllib.request.Request(
            url, data=body, method="POST", headers={"Content-Type": "application/json"}
        )
        try:
            status, response_body = self._send(request)
        except OSError as exc:
            raise ConnectionError(f"HTTP POST {url} failed: {exc}") from exc
        if status >= 400:
            self._log(f"\n<- POST FAILED {url}, status={status}, response: {response_body!r}")
            raise self._error_from_body(url, status, response_body)
        self._log(f"\n<- POST {url} t={int(time.time())} - {body!r}")
        return self._decode_json(response_body)

    def get_block_by_id(self, block_id: str, *args: _QueryOpts) -> models.Block:
        """Fetch one block with its payload."""
        url = _add_query(self.build_url(f"/blocks/{block_id}", *args), ("expand", "payload"))
        try:
            blocks = _decode_list(self.get(url), models.Block)
        except _FAILURES as exc:
            raise _wrap(exc, f"get block ID {block_id} failed") from exc
        if not blocks:
            raise LookupError("get block failed")
        return blocks[0]

    def get_blocks_by_heights(
        self, heights: str, start_height: str, end_height: str, *args: _QueryOpts
    ) -> list[models.Block]:
        """Fetch blocks by a list of heights or by a height range."""
        url = self.build_url("/blocks", *args)
        if heights:
            pairs = [("height", heights)]
        elif start_height and end_height:
            pairs = [("start_height", start_height), ("end_height", end_height)]
        else:
            raise ValueError("must provide either heights or start and end height")
        url = _add_query(url, *pairs, ("expand", "payload"))
        try:
            return _decode_list(self.get(url), models.Block)
        except _FAILURES as exc:
            raise _wrap(exc, f"get block by height {heights} failed") from exc

    def get_account(self, address: str, height: str, *args: _QueryOpts) -> models.Account:
        """Fetch an account with its keys and contracts at a height."""
        url = _add_query(
            self.build_url(f"/accounts/{address}", *args),
            ("height", height),
            ("expand", "keys,contracts"),
        )
        try:
            return _decode_object(self.get(url), models.Account)
        except _FAILURES as exc:
            raise _wrap(exc, f"get account {address} failed") from exc

    def get_collection(self, collection_id: str, *args: _QueryOpts) -> models.Collection:
        """Fetch a collection by ID."""
        url = self.build_url(f"/collections/{collection_id}", *args)
        try:
            return _decode_object(self.get(url), models.Collection)
        except _FAILURES as exc:
            raise _wrap(exc, f"get collection ID {collection_id} failed") from exc

    def _execute_script(
        self,
        query: dict[str, str],
        script: str,
        arguments: list[str] | None,
        *args: _QueryOpts,
    ) -> str:
        url = _add_query(self.build_url("/scripts", *args), *query.items())
        body = json.dumps(
            models.ScriptsBody(script=script, arguments=list(arguments or [])).to_dict()
        ).encode("utf-8")
        try:
            return _decode_string(self.post(url, body))
        except _FAILURES as exc:
            raise _wrap(exc, f"executing script {script} failed") from exc

    def execute_script_at_block_height(
        self, height: str, script: str, arguments: list[str] | None, *args: _QueryOpts
    ) -> str:
        """Execute a script at a block height and return the encoded result."""
        return self._execute_script({"block_height": height}, script, arguments, *args)

    def execute_script_at_block_id(
        self, block_id: str, script: str, arguments: list[str] | None, *args: _QueryOpts
    ) -> str:
        """Execute a script at a block ID and return the encoded result."""
        return self._execute_script({"block_id": block_id}, script, arguments, *args)

    def get_transaction(
        self, transaction_id: str, include_result: bool, *args: _QueryOpts
    ) -> models.Transaction:
        """Fetch a transaction, optionally with its result."""
        url = self.build_url(f"/transactions/{transaction_id}", *args)
        if include_result:
            url = _add_query(url, ("expand", "result"))
        try:
            return _decode_object(self.get(url), models.Transaction)
        except _FAILURES as exc:
            raise _wrap(exc, f"get transaction ID {transaction_id} failed") from exc

    def send_transaction(self, transaction: bytes, *args: _QueryOpts) -> models.Transaction:
        """Submit an encoded transaction and return the transaction the API echoes."""
        data = self.post(self.build_url("/transactions", *args), transaction)
        return _decode_object(data, models.Transaction)

    def get_events(
        self,
        event_type: str,
        start: str,
        end: str,
        block_ids: list[str] | None,
        *args: _QueryOpts,
    ) -> list[models.BlockEvents]:
        """Fetch events of a type by height range or by block IDs."""
        url = self.build_url("/events", *args)
        if start and end:
            pairs = [("start_height", start), ("end_height", end)]
        elif block_ids:
            pairs = [("block_ids", ",".join(block_ids))]
        else:
            raise ValueError("must either provide start and end height or block IDs")
        url = _add_query(url, *pairs, ("type", event_type))
        try:
            return _decode_list(self.get(url), models.BlockEvents)
        except _FAILURES as exc:
            raise _wrap(exc, f"get events by type {event_type} failed") from exc

    def get_execution_results(
        self, block_ids: list[str], *args: _QueryOpts
    ) -> list[models.ExecutionResult]:
        """Fetch the execution results of blocks."""
        url = _add_query(
            self.build_url("/execution_results", *args), ("block_ids", ",".join(block_ids))
        )
        try:
            return _decode_list(self.get(url), models.ExecutionResult)
        except _FAILURES as exc:
            ids = "[" + " ".join(block_ids) + "]"
            raise _wrap(exc, f"get execution results by IDs {ids} failed") from exc

    def get_execution_result_by_id(
        self, result_id: str, *args: _QueryOpts
    ) -> models.ExecutionResult:
        """Fetch one execution result by its ID."""
        url = self.build_url(f"/execution_results/{result_id}", *args)
        try:
            return _decode_object(self.get(url), models.ExecutionResult)
        except _FAILURES as exc:
            raise _wrap(exc, f"get execution result by ID {result_id} failed") from exc