# ethgas/server/dispatcher.py
import inspect
import logging
from typing import Any, Callable, Optional
from typing import TYPE_CHECKING

from ethgas.errors import INVALID_PARAMS, SERVER_ERROR, JSONRPCError

if TYPE_CHECKING:
    from ethgas.server.registry import RPCMethodRegistry


async def _call_fn(fn: Callable, params: Optional[Any]):
    """
    Call `fn` (sync or async) with params (None | list | dict).
    Always return concrete result (never a coroutine).
    Raises INVALID_PARAMS if params type is wrong.
    """
    try:
        if params is None:
            result = fn()
        elif isinstance(params, list):
            result = fn(*params)
        elif isinstance(params, dict):
            result = fn(**params)
        else:
            raise INVALID_PARAMS({"reason": "params must be list or dict or null"})
    except TypeError as e:
        raise INVALID_PARAMS({"reason": str(e)})

    if inspect.isawaitable(result):
        return await result
    return result


class RPCDispatcher:
    def __init__(self, registry: "RPCMethodRegistry"):
        self.registry = registry
        self.logger = logging.getLogger("ethgas.node")

    async def dispatch(self, method: str, params: Optional[Any], request_id: Any = None):
        fn = self.registry.get(method)  # raises METHOD_NOT_FOUND
        try:
            result = await _call_fn(fn, params)
        except JSONRPCError:
            raise
        except Exception as e:
            self.logger.exception(f"{method} failed")
            raise SERVER_ERROR(d={"exception": str(e)})
        return {"result": result, "id": request_id}
