"""
JSON-RPC 2.0 envelope handling for the MCP endpoint.

Incoming messages are parsed once into either a ``Call`` (has an ``id``, even a
null one) or a ``Notify`` (no ``id`` key at all). Everything downstream works
with those two shapes instead of probing dictionaries for keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

JSONRPC_VERSION = "2.0"

# Error codes shared with clients; values must not change.
MISSING_CREDENTIAL = -32001
INVALID_CREDENTIAL = -32002
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

RpcId = Union[str, int, float, None]


class ProtocolError(Exception):
    """Routing or reference failure that must reach the client as a JSON-RPC error."""

    def __init__(self, code: int, message: str, *, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class InvalidMessageError(ProtocolError):
    """Raised when a message cannot be turned into a Call or Notify."""

    def __init__(self, code: int, message: str, *, rpc_id: RpcId = None, is_notification: bool = False) -> None:
        super().__init__(code, message)
        self.rpc_id = rpc_id
        self.is_notification = is_notification


@dataclass(frozen=True, slots=True)
class Call:
    """A request expecting exactly one response."""

    id: RpcId
    method: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Notify:
    """A fire-and-forget message; never answered, even on failure."""

    method: str
    params: Dict[str, Any] = field(default_factory=dict)


Message = Union[Call, Notify]


def valid_id(value: Any) -> bool:
    if value is None or isinstance(value, str):
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_message(raw: Any) -> Message:
    """
    Turn one decoded JSON value into a Call or Notify.

    Raises:
        InvalidMessageError: when the value is not a usable JSON-RPC request.
            ``rpc_id`` carries the request id when it could be read, and
            ``is_notification`` tells the caller to stay silent.
    """
    if not isinstance(raw, dict):
        raise InvalidMessageError(INVALID_REQUEST, "Invalid request")

    is_notification = "id" not in raw
    rpc_id = raw.get("id")
    if not is_notification and not valid_id(rpc_id):
        raise InvalidMessageError(INVALID_REQUEST, "Invalid request")

    method = raw.get("method")
    if not isinstance(method, str) or not method:
        raise InvalidMessageError(
            INVALID_REQUEST, "Invalid request", rpc_id=rpc_id, is_notification=is_notification
        )

    raw_params = raw.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        raise InvalidMessageError(
            INVALID_PARAMS, "Invalid params", rpc_id=rpc_id, is_notification=is_notification
        )

    if is_notification:
        return Notify(method=method, params=params)
    return Call(id=rpc_id, method=method, params=params)


def success_payload(rpc_id: RpcId, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "result": result, "id": rpc_id}


def error_payload(rpc_id: RpcId, code: int, message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "error": error, "id": rpc_id}
