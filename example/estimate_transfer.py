# estimate_transfer.py
"""
Estimate the gas of a plain ETH transfer.

Uses ETH_RPC_URL (or INFURA_KEY) from the environment / .env, falling back to
a local node. Start one with `python -m ethgas.main` to try it offline.
"""
import asyncio

from ethgas.config.default import RPC_URL, configure_logging
from ethgas.errors import EncodingError, JSONRPCError, RPCEmptyResponseError, RPCTransportError
from ethgas.gas import estimate_gas
from ethgas.transaction import Transaction


async def main() -> None:
    tx = Transaction(**{
        "nonce": 123,
        "gas_price": 1000,
        "gas_limit": 1_000_000_000,
        "from": "0x84d82ac02AdE3a3d8a636Fb06E442ab701aA7BB4",
        "to": "0x1111111111111111111111111111111111111111",
        "value": 1,
        "data": b"",
        "v": 777,
        "r": 987654321,
        "s": 121212,
    })

    try:
        gas = await estimate_gas(tx, RPC_URL)
        print(f"estimated gas: {gas}")
    except JSONRPCError as e:
        print(f"node rejected the call: {e}")
    except RPCEmptyResponseError as e:
        print(f"node sent an empty reply: {e}")
    except RPCTransportError as e:
        print(f"could not reach the node ({e.stage}): {e}")
    except EncodingError as e:
        print(f"node replied with garbage: {e}")


if __name__ == "__main__":
    configure_logging("DEBUG")
    asyncio.run(main())
