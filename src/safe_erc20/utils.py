import logging
from typing import Union

from eth_utils import to_bytes

logger = logging.getLogger("safe_erc20")


def hex_to_bytes(data: Union[str, bytes, bytearray]) -> bytes:
    """
    Normalise call or return data to raw bytes.

    Accepts 0x-prefixed or bare hex strings and bytes-like objects.
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    stripped = data[2:] if data.startswith(("0x", "0X")) else data
    if not stripped:
        return b""
    return to_bytes(hexstr=stripped)


def hex_to_bytes32(hexstr: str) -> bytes:
    """
    Left-pad a hex string of at most 32 bytes to exactly 32 bytes.

    Raises:
        ValueError: If the value holds more than 64 hex digits.
    """
    stripped = hexstr[2:] if hexstr.startswith(("0x", "0X")) else hexstr
    if len(stripped) > 64:
        raise ValueError(f"Expected at most 32 bytes of hex, got {len(stripped)} digits")
    return to_bytes(hexstr=stripped.rjust(64, "0"))
