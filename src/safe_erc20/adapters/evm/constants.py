"""
EVM Constants and Configuration

Provides the numeric limits and well-known addresses the safe operations
rely on, environment-aware configuration getters for the JSON-RPC invoker,
and a small per-chain table of wrapped native assets.
"""

import os
from typing import Dict, Optional

from pydantic import BaseModel, Field
from web3 import Web3
import dotenv

dotenv.load_dotenv()

# ---------------------------------------------------------------------------
# Numeric limits
# ---------------------------------------------------------------------------

#: Maximum uint256.
MAX_UINT256: int = (1 << 256) - 1

#: Maximum uint160, the amount width of Permit2 AllowanceTransfer.
MAX_UINT160: int = (1 << 160) - 1

# ---------------------------------------------------------------------------
# Permit2
# ---------------------------------------------------------------------------

#: Canonical Uniswap Permit2 singleton address (same on all EVM networks).
PERMIT2_ADDRESS: str = "0x000000000022D473030F116dDEE9F6B43aC78BA3"

# ---------------------------------------------------------------------------
# Transaction defaults
# ---------------------------------------------------------------------------

#: Gas limit used when estimation fails (common when the call would revert).
FALLBACK_GAS_LIMIT: int = 100000

#: Multiplier applied to gas estimates.
GAS_ESTIMATE_BUFFER: float = 1.1

#: Seconds to wait for a transaction receipt.
DEFAULT_RECEIPT_TIMEOUT: int = 120


class EvmChainConfig(BaseModel):
    """EVM network configuration relevant to wrapped native operations."""
    caip2: str
    chain_id: int
    name: str = Field(..., description="Human-readable network name")
    native_symbol: str = Field(..., description="Native currency symbol")
    wrapped_native: str = Field(..., description="Wrapped native token contract address")


_EVM_CHAINS_DATA: Dict = {
    "eip155:1": {
        "name": "Ethereum Mainnet",
        "native_symbol": "ETH",
        "wrapped_native": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    },
    "eip155:10": {
        "name": "OP Mainnet",
        "native_symbol": "ETH",
        "wrapped_native": "0x4200000000000000000000000000000000000006",
    },
    "eip155:137": {
        "name": "Polygon Mainnet",
        "native_symbol": "POL",
        "wrapped_native": "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
    },
    "eip155:8453": {
        "name": "Base Mainnet",
        "native_symbol": "ETH",
        "wrapped_native": "0x4200000000000000000000000000000000000006",
    },
    "eip155:42161": {
        "name": "Arbitrum One",
        "native_symbol": "ETH",
        "wrapped_native": "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
    },
    "eip155:11155111": {
        "name": "Sepolia Testnet",
        "native_symbol": "ETH",
        "wrapped_native": "0xfFf9976782d46CC05630D1f6eBAb18b2324d6B14",
    },
}


def _parse_caip2_eip155_chain_id(caip2: str) -> int:
    """
    Extract the chain ID from ``eip155:<id>`` (or ``eip155-<id>``).

    Raises:
        ValueError: If ``caip2`` is not an eip155 identifier with a positive
            integer chain ID.
    """
    if not isinstance(caip2, str):
        raise ValueError(f"CAIP-2 identifier must be a string, got {type(caip2).__name__}")

    namespace, _, reference = caip2.strip().replace("-", ":").partition(":")
    if namespace != "eip155" or not reference.isdigit() or int(reference) <= 0:
        raise ValueError(f"Invalid eip155 CAIP-2 identifier: '{caip2}'")
    return int(reference)


def get_chain_config(caip2: str) -> Optional[EvmChainConfig]:
    """
    Look up the configuration of a supported chain.

    Args:
        caip2: CAIP-2 chain identifier (``'eip155:1'`` or ``'eip155-1'``).

    Returns:
        EvmChainConfig, or None if the chain is not in the table.

    Raises:
        ValueError: If ``caip2`` is not a valid eip155 identifier.
    """
    chain_id = _parse_caip2_eip155_chain_id(caip2)
    key = f"eip155:{chain_id}"
    data = _EVM_CHAINS_DATA.get(key)
    if data is None:
        return None
    return EvmChainConfig(caip2=key, chain_id=chain_id, **data)


def get_wrapped_native_address(chain_id: int) -> str:
    """
    Return the checksummed wrapped native token address for ``chain_id``.

    Raises:
        ValueError: If the chain has no configured wrapped native token.
    """
    config = get_chain_config(f"eip155:{chain_id}")
    if config is None:
        supported = ", ".join(sorted(_EVM_CHAINS_DATA))
        raise ValueError(f"No wrapped native token configured for chain {chain_id}. Supported: {supported}")
    return Web3.to_checksum_address(config.wrapped_native)


def get_private_key_from_env() -> Optional[str]:
    """
    Load the signing private key from environment variables.

    Environment Variable:
        - SAFE_ERC20_PRIVATE_KEY: 0x-prefixed hex private key

    Returns:
        str: Private key from environment, or None if not configured

    Note:
        The private key should be stored securely in environment variables
        and never committed to version control.
    """
    return os.getenv("SAFE_ERC20_PRIVATE_KEY")


def get_rpc_url_from_env() -> Optional[str]:
    """
    Load the JSON-RPC endpoint from environment variables.

    Environment Variable:
        - SAFE_ERC20_RPC_URL: HTTP(S) JSON-RPC endpoint

    Returns:
        str: RPC URL from environment, or None if not configured
    """
    return os.getenv("SAFE_ERC20_RPC_URL")


def get_receipt_timeout_from_env() -> int:
    """
    Load the transaction receipt timeout (seconds) from environment variables.

    Environment Variable:
        - SAFE_ERC20_RECEIPT_TIMEOUT: integer seconds, defaults to 120

    Raises:
        ValueError: If the variable is set but not a positive integer.
    """
    raw = os.getenv("SAFE_ERC20_RECEIPT_TIMEOUT")
    if raw is None or not raw.strip():
        return DEFAULT_RECEIPT_TIMEOUT
    try:
        timeout = int(raw)
    except ValueError as exc:
        raise ValueError(f"SAFE_ERC20_RECEIPT_TIMEOUT must be an integer, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError("SAFE_ERC20_RECEIPT_TIMEOUT must be positive")
    return timeout
