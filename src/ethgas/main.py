# ethgas/main.py
"""
Local development node answering `eth_estimateGas` with the intrinsic gas
of a plain call, so the client can be exercised without a real network.

    python -m ethgas.main
"""
from ethgas.errors import INVALID_PARAMS
from ethgas.primitives import decode_data, decode_quantity, encode_quantity, to_address
from ethgas.server.registry import RPCMethodRegistry, RegistrySettings

TX_BASE_GAS = 21000
TX_DATA_ZERO_GAS = 4
TX_DATA_NONZERO_GAS = 16


def intrinsic_gas(data: bytes) -> int:
    zeros = data.count(0)
    return TX_BASE_GAS + zeros * TX_DATA_ZERO_GAS + (len(data) - zeros) * TX_DATA_NONZERO_GAS


def create_devnode(settings: RegistrySettings | dict | None = None) -> RPCMethodRegistry:
    rpc = RPCMethodRegistry(name="ethgas-devnode", settings=settings)

    @rpc.register("eth_estimateGas")
    def eth_estimate_gas(call: dict, block: str = "latest") -> str:
        """Intrinsic gas of a call object; execution cost is not simulated."""
        if not isinstance(call, dict):
            raise INVALID_PARAMS({"reason": "call must be an object"})
        try:
            if "from" in call:
                to_address(call["from"])
            if call.get("to") is not None:
                to_address(call["to"])
            if "value" in call:
                decode_quantity(call["value"])
            data = decode_data(call.get("data") or call.get("input") or "0x")
        except ValueError as e:
            raise INVALID_PARAMS({"reason": str(e)})
        return encode_quantity(intrinsic_gas(data))

    return rpc


if __name__ == "__main__":
    create_devnode().run()
