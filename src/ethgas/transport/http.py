# ethgas/transport/http.py
import json
import logging
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ethgas.errors import INVALID_REQUEST, PARSE_ERROR, JSONRPCError
from ethgas.schemas import RPCRequest, RPCResponse
from ethgas.server.dispatcher import RPCDispatcher


class HTTPTransport:
    """Serves single JSON-RPC requests posted over HTTP."""

    def __init__(self, dispatcher: RPCDispatcher):
        self.dispatcher = dispatcher
        self.logger = logging.getLogger("ethgas.node")

    async def handle(self, request: Request) -> Response:
        raw = await request.body()
        if not raw:
            return self._error_response(INVALID_REQUEST("empty body"), None, 400)

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            return self._error_response(PARSE_ERROR(str(e)), None, 400)

        if isinstance(payload, list):
            return self._error_response(INVALID_REQUEST("batch requests are not supported"), None, 400)
        if not isinstance(payload, dict):
            return self._error_response(INVALID_REQUEST("request must be an object"), None, 400)

        resp = await self._handle_single(payload)
        return Response(status_code=204) if resp is None else JSONResponse(resp)

    async def _handle_single(self, item: dict) -> Any:
        try:
            req = RPCRequest.model_validate(item)
        except ValidationError as e:
            return self._make_response(error=INVALID_REQUEST(str(e)), id=item.get("id"))

        if "id" not in item:  # notification
            try:
                await self.dispatcher.dispatch(req.method, req.params)
            except JSONRPCError as e:
                self.logger.debug(f"notification {req.method} failed: {e}")
            return None

        self.logger.debug(f"{req.method} id={req.id}")
        try:
            result = await self.dispatcher.dispatch(req.method, req.params, req.id)
            return self._make_response(result=result["result"], id=req.id)
        except JSONRPCError as e:
            return self._make_response(error=e, id=req.id)

    def _make_response(self, result=None, error=None, id=None):
        return RPCResponse[Any](
            jsonrpc="2.0",
            result=result,
            error=error.to_dict() if error else None,
            id=id,
        ).model_dump(exclude_none=True)

    def _error_response(self, error, id, status=400):
        return JSONResponse(
            status_code=status,
            content=RPCResponse[Any](jsonrpc="2.0", error=error.to_dict(), id=id).model_dump(exclude_none=True),
        )
