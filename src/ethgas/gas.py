# ethgas/gas.py
import logging
from typing import Optional

import httpx

from ethgas.client.client import send_rpc
from ethgas.config.default import RPC_URL
from ethgas.primitives import decode_quantity, encode_data, encode_quantity, format_address
from ethgas.transaction import Transaction

logger = logging.getLogger("ethgas.gas")


def build_estimate_params(tx: Transaction) -> dict:
    """
    Project a transaction onto the call object `eth_estimateGas` expects.

    Only the call shape is sent: nonce, gas fields and the signature are
    meaningless to the estimator and are left out.
    """
    return {
        "from": format_address(tx.from_),
        "to": format_address(tx.to),
        "value": encode_quantity(tx.value),
        "data": encode_data(tx.data),
    }


async def estimate_gas(
    tx: Transaction,
    endpoint: Optional[str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> int:
    """
    Ask the node how much gas `tx` would consume.

    Node-side and HTTP failures surface as the errors of `send_rpc`; a reply
    that is not a hex quantity raises EncodingError.
    """
    params = build_estimate_params(tx)
    gas_estimate = await send_rpc(
        endpoint or RPC_URL,
        "eth_estimateGas",
        [params],
        str,
        client=client,
        timeout=timeout,
    )
    try:
        return decode_quantity(gas_estimate)
    except ValueError:
        logger.error(f"eth_estimateGas returned a malformed quantity: {gas_estimate!r}")
        raise
