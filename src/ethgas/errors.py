# ethgas/errors.py
from typing import Any, Optional
from dataclasses import dataclass


class RPCError(Exception):
    """Base class for every failure raised by a single RPC call."""


class RPCTransportError(RPCError):
    """
    The HTTP exchange itself failed, before a JSON-RPC envelope could be read.

    `stage` tells which step broke:
    - "http": connection, timeout, TLS or non-2xx status
    - "decode": body is not JSON
    - "envelope": JSON does not match the expected response shape
    """

    def __init__(self, message: str, stage: str = "http", status_code: Optional[int] = None):
        super().__init__(message)
        self.stage = stage
        self.status_code = status_code


@dataclass
class JSONRPCError(RPCError):
    code: int
    message: str
    data: Any = None

    def __str__(self) -> str:
        return f"JSON-RPC Error {self.code}: {self.message}"

    def to_dict(self):
        base = {"code": self.code, "message": self.message}
        if self.data is not None:
            base["data"] = self.data
        return base


class RPCEmptyResponseError(RPCError):
    """Response envelope carried neither `result` nor `error`."""

    def __init__(self, message: str = "Unknown RPC Error: response has neither result nor error"):
        super().__init__(message)


class EncodingError(RPCError, ValueError):
    """A hex quantity returned by the node could not be parsed."""

    def __init__(self, value: Any, reason: str = "not a valid hex quantity"):
        super().__init__(f"{value!r} is {reason}")
        self.value = value
        self.reason = reason


# Standard JSON-RPC 2.0 error codes, used by the development node
PARSE_ERROR = lambda d=None: JSONRPCError(-32700, "Parse error", d)
INVALID_REQUEST = lambda d=None: JSONRPCError(-32600, "Invalid Request", d)
METHOD_NOT_FOUND = lambda d=None: JSONRPCError(-32601, "Method not found", d)
INVALID_PARAMS = lambda d=None: JSONRPCError(-32602, "Invalid params", d)
INTERNAL_ERROR = lambda d=None: JSONRPCError(-32603, "Internal error", d)
SERVER_ERROR = lambda code= -32000, d=None: JSONRPCError(code, "Server error", d)
