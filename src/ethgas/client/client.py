# ethgas/client/client.py
import logging
from typing import Any, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import ValidationError

from ethgas.config.default import RPC_TIMEOUT
from ethgas.errors import JSONRPCError, RPCEmptyResponseError, RPCTransportError
from ethgas.schemas import JSONValue, RPCRequest, RPCResponse

T = TypeVar("T")


def _redact(url: str) -> str:
    """Keep scheme and host only; node URLs often embed an access key."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return "<invalid url>"
    return f"{parsed.scheme}://{parsed.host}"


class JSONRPCTransport:
    """
    JSON-RPC 2.0 over HTTP POST against a single endpoint.

    Pass an existing `httpx.AsyncClient` to share connections; it is then
    left open on `close()`. Otherwise the transport owns its client.
    """

    def __init__(self, url: str, *, timeout: Optional[float] = None, client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=RPC_TIMEOUT if timeout is None else timeout)
        self.logger = logging.getLogger("ethgas.client")

    async def __aenter__(self) -> "JSONRPCTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def call_method(
        self,
        method: str,
        params: Optional[Sequence[JSONValue]] = None,
        result_type: Type[T] = Any,
    ) -> T:
        """Send one request and return its `result` decoded as `result_type`."""
        req = RPCRequest(method=method, params=list(params or []))
        target = _redact(self.url)
        self.logger.debug(f"-> {method} @ {target}")

        try:
            resp = await self.client.post(self.url, json=req.model_dump())
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self.logger.warning(f"{method} @ {target}: HTTP {status}")
            raise RPCTransportError(f"{target} answered HTTP {status}", stage="http", status_code=status) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning(f"{method} @ {target}: {type(e).__name__}: {e}")
            raise RPCTransportError(f"request to {target} failed: {type(e).__name__}: {e}", stage="http") from e

        try:
            data = resp.json()
        except ValueError as e:
            self.logger.warning(f"{method} @ {target}: body is not JSON")
            raise RPCTransportError(f"{target} returned a non-JSON body", stage="decode") from e

        try:
            envelope = RPCResponse[result_type].model_validate(data)
        except ValidationError as e:
            self.logger.warning(f"{method} @ {target}: unexpected response shape")
            raise RPCTransportError(
                f"{target} returned an unexpected response shape: {e.error_count()} error(s)",
                stage="envelope",
            ) from e

        return self._resolve(method, envelope)

    def _resolve(self, method: str, envelope: RPCResponse) -> Any:
        # result first: a node that sends both is answered with its result
        if envelope.result is not None:
            self.logger.debug(f"<- {method}: ok")
            return envelope.result
        if envelope.error is not None:
            err = envelope.error
            self.logger.info(f"<- {method}: error {err.code} {err.message}")
            raise JSONRPCError(code=err.code, message=err.message, data=err.data)
        self.logger.warning(f"<- {method}: neither result nor error")
        raise RPCEmptyResponseError()

    async def close(self):
        if self._owns_client:
            await self.client.aclose()


async def send_rpc(
    endpoint: str,
    method: str,
    params: Sequence[JSONValue],
    result_type: Type[T] = Any,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> T:
    """
    Call `method` on `endpoint` once and return the decoded result.

    Raises RPCTransportError, JSONRPCError or RPCEmptyResponseError.
    Cancellation is not intercepted and aborts the in-flight request.
    """
    async with JSONRPCTransport(endpoint, timeout=timeout, client=client) as transport:
        return await transport.call_method(method, params, result_type)
