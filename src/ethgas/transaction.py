# ethgas/transaction.py
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ethgas.primitives import check_uint256, decode_data, decode_quantity, to_address


def _quantity(value: Any) -> Any:
    if isinstance(value, str):
        return decode_quantity(value)
    return check_uint256(value)


def _payload(value: Any) -> Any:
    if isinstance(value, str):
        return decode_data(value)
    if isinstance(value, (bytearray, memoryview, list, tuple)):
        try:
            return bytes(value)
        except TypeError as e:
            raise ValueError(f"invalid payload: {e}") from e
    return value


Address = Annotated[bytes, BeforeValidator(to_address)]
Uint256 = Annotated[int, BeforeValidator(_quantity)]
Payload = Annotated[bytes, BeforeValidator(_payload)]


class Transaction(BaseModel):
    """
    A transaction whose sender has already been recovered from (v, r, s).

    Only `from_`, `to`, `value` and `data` feed gas estimation; the rest is
    carried so the same object can move through signing and submission code.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    nonce: Uint256 = 0
    gas_price: Optional[Uint256] = None
    gas_limit: Uint256 = 0
    from_: Address = Field(..., alias="from")
    to: Address
    value: Uint256 = 0
    data: Payload = b""
    v: int = Field(0, ge=0)  # recovery id
    r: Uint256 = 0
    s: Uint256 = 0
