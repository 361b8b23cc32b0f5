# ethgas/schemas.py
from typing import Any, Generic, List, Literal, Optional, TypeVar, Union
from pydantic import BaseModel, Field

JSONValue = Union[str, int, float, bool, None, dict, list]

T = TypeVar("T")


class RPCRequest(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: Union[List[Any], dict] = Field(default_factory=list)
    # fixed id: calls are awaited one at a time, nothing to correlate
    id: Optional[Union[int, str]] = 1


class RPCErrorObject(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class RPCResponse(BaseModel, Generic[T]):
    """
    Response envelope, parametrised over the decoded result type.

    `RPCResponse[str]` rejects a non-string `result`, so a node returning the
    wrong shape is caught while decoding and never reaches the caller.
    """

    jsonrpc: Optional[str] = None
    result: Optional[T] = None
    error: Optional[RPCErrorObject] = None
    id: Optional[Union[int, str]] = None
