import httpx
import pytest
from eth_utils import is_checksum_address

from ethgas import gas
from ethgas.errors import EncodingError, JSONRPCError, RPCEmptyResponseError, RPCTransportError
from ethgas.gas import build_estimate_params, estimate_gas
from ethgas.transaction import Transaction

from conftest import NODE_URL, RECIPIENT, SENDER, StubNode


def _tx(**overrides):
    fields = {"from": SENDER, "to": RECIPIENT, "value": 1, "data": b""}
    fields.update(overrides)
    return Transaction(**fields)


def test_params_carry_only_call_shape(transfer_tx):
    params = build_estimate_params(transfer_tx)

    assert set(params) == {"from", "to", "value", "data"}
    assert params["from"].lower() == SENDER.lower()
    assert params["to"] == RECIPIENT
    assert is_checksum_address(params["from"])
    assert params["value"] == "0x1"
    assert params["data"] == "0x"


@pytest.mark.parametrize("value, encoded", [
    (0, "0x0"),
    (1, "0x1"),
    (10**18, "0xde0b6b3a7640000"),
    (2**256 - 1, "0x" + "f" * 64),
])
def test_value_is_minimal_hex_quantity(value, encoded):
    assert build_estimate_params(_tx(value=value))["value"] == encoded


@pytest.mark.parametrize("data, encoded", [
    (b"", "0x"),
    (b"\x00", "0x00"),
    (b"\xde\xad\xbe\xef", "0xdeadbeef"),
    (bytes.fromhex("a9059cbb"), "0xa9059cbb"),
])
def test_data_hex_encoding(data, encoded):
    assert build_estimate_params(_tx(data=data))["data"] == encoded


@pytest.mark.parametrize("length", [0, 1, 2, 31, 32, 33, 255, 4096])
def test_data_hex_is_prefixed_even_and_lowercase(length):
    payload = bytes((i * 37 + 11) % 256 for i in range(length))
    encoded = build_estimate_params(_tx(data=payload))["data"]

    assert encoded.startswith("0x")
    assert len(encoded) == 2 + 2 * length
    assert encoded == encoded.lower()
    assert bytes.fromhex(encoded[2:]) == payload


@pytest.mark.asyncio
@pytest.mark.parametrize("tx_fields", [
    {},
    {"value": 0},
    {"value": 2**256 - 1, "data": b"\x01\x02"},
    {"from": RECIPIENT, "to": SENDER},
])
async def test_estimate_gas_parses_node_quantity(tx_fields):
    node = StubNode({"jsonrpc": "2.0", "id": 1, "result": "0x5208"})
    async with node.client() as client:
        assert await estimate_gas(_tx(**tx_fields), NODE_URL, client=client) == 21000


@pytest.mark.asyncio
async def test_estimate_gas_sends_single_call_object(transfer_tx):
    node = StubNode({"result": "0x5208"})
    async with node.client() as client:
        await estimate_gas(transfer_tx, NODE_URL, client=client)

    assert len(node.requests) == 1
    body = node.bodies[0]
    assert body["jsonrpc"] == "2.0"
    assert body["method"] == "eth_estimateGas"
    assert body["id"] == 1
    assert body["params"] == [build_estimate_params(transfer_tx)]


@pytest.mark.asyncio
async def test_estimate_gas_surfaces_node_error(transfer_tx):
    reply = {"result": None, "error": {"code": -32000, "message": "insufficient funds"}}
    async with StubNode(reply).client() as client:
        with pytest.raises(JSONRPCError) as exc_info:
            await estimate_gas(transfer_tx, NODE_URL, client=client)
    assert exc_info.value.code == -32000
    assert exc_info.value.message == "insufficient funds"


@pytest.mark.asyncio
async def test_estimate_gas_empty_response(transfer_tx):
    async with StubNode({"result": None, "error": None}).client() as client:
        with pytest.raises(RPCEmptyResponseError):
            await estimate_gas(transfer_tx, NODE_URL, client=client)


@pytest.mark.asyncio
@pytest.mark.parametrize("result", ["not-a-hex-string", "0x", "", "0xzz", "0x5208 ", "0x-1", "0x" + "1" * 65])
async def test_estimate_gas_malformed_quantity(transfer_tx, result):
    async with StubNode({"result": result}).client() as client:
        with pytest.raises(EncodingError) as exc_info:
            await estimate_gas(transfer_tx, NODE_URL, client=client)
    assert exc_info.value.value == result


@pytest.mark.asyncio
async def test_estimate_gas_numeric_result_is_transport_failure(transfer_tx):
    async with StubNode({"result": 21000}).client() as client:
        with pytest.raises(RPCTransportError) as exc_info:
            await estimate_gas(transfer_tx, NODE_URL, client=client)
    assert exc_info.value.stage == "envelope"


@pytest.mark.asyncio
async def test_estimate_gas_defaults_to_configured_endpoint(transfer_tx, monkeypatch):
    monkeypatch.setattr(gas, "RPC_URL", "http://configured.test:8545/")
    node = StubNode({"result": "0x5208"})
    async with node.client() as client:
        await estimate_gas(transfer_tx, client=client)
    assert node.requests[0].url.host == "configured.test"


@pytest.mark.asyncio
async def test_estimate_gas_eth_transfer(transfer_tx, devnode_client):
    async with devnode_client() as client:
        assert await estimate_gas(transfer_tx, NODE_URL, client=client) == 21000


@pytest.mark.asyncio
async def test_estimate_gas_counts_calldata(devnode_client):
    tx = _tx(data=b"\x00\x00\xa9\x05")
    async with devnode_client() as client:
        assert await estimate_gas(tx, NODE_URL, client=client) == 21000 + 2 * 4 + 2 * 16


@pytest.mark.asyncio
async def test_estimate_gas_unreachable_node(transfer_tx):
    async with StubNode(exc=httpx.ConnectError).client() as client:
        with pytest.raises(RPCTransportError):
            await estimate_gas(transfer_tx, NODE_URL, client=client)
