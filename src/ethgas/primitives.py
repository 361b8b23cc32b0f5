# ethgas/primitives.py
"""
Address, quantity and byte-payload codecs for the node's JSON representation.

Quantities travel as minimal `0x`-prefixed hex ("0x0", "0x5208"), payloads as
lowercase `0x`-prefixed hex with two characters per byte, addresses as EIP-55
checksummed strings.
"""
import re
from typing import Union

from eth_utils import (
    decode_hex,
    encode_hex,
    is_address,
    to_canonical_address,
    to_checksum_address,
    to_hex,
)

from ethgas.errors import EncodingError

UINT256_MAX = 2**256 - 1

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def to_address(value: Union[str, bytes]) -> bytes:
    """Return the 20 raw bytes of an address given as hex text or raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(value)}")
        return bytes(value)
    if not isinstance(value, str) or not is_address(value.lower()):
        raise ValueError(f"invalid address: {value!r}")
    return to_canonical_address(value.lower())


def format_address(raw: bytes) -> str:
    return to_checksum_address(to_address(raw))


def check_uint256(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"uint256 must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{value} is out of uint256 range")
    return value


def encode_quantity(value: int) -> str:
    return to_hex(check_uint256(value))


def decode_quantity(text: str) -> int:
    """
    Parse a hex quantity into a uint256.

    A single leading "0x" is optional. Anything else that is not hex digits,
    an empty digit string or a value above 2**256 - 1 raises EncodingError.
    """
    if not isinstance(text, str):
        raise EncodingError(text, "not a string")
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    if not _HEX_DIGITS.fullmatch(digits):
        raise EncodingError(text)
    value = int(digits, 16)
    if value > UINT256_MAX:
        raise EncodingError(text, "out of uint256 range")
    return value


def encode_data(payload: bytes) -> str:
    return encode_hex(bytes(payload))


def decode_data(text: str) -> bytes:
    try:
        return decode_hex(text)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid hex payload: {text!r}") from e
