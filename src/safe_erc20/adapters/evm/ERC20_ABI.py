
"""
ERC20 + EIP-2612 + Permit2 + Wrapped Native ABI Module

This module provides minimal ABI definitions for every call the safe
operations issue. The encoders derive both the 4-byte selector and the
argument type list from these entries, so each entry is the single source
of truth for its call layout.

Usage:
    from ERC20_ABI import (
        get_transfer_abi,
        get_approve_abi,
        get_permit2_transfer_from_abi,
    )

    # Encode an approve call
    approve_abi = get_approve_abi()
"""

from typing import Dict, Any, List


def get_transfer_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ERC20 `transfer(to, amount)`.

    Returns:
        List[Dict[str, Any]]: ABI for ERC20 `transfer` function.
    """
    return [
        {
            "name": "transfer",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "to", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
            "outputs": [{"name": "", "type": "bool"}],
        }
    ]


def get_transfer_from_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ERC20 `transferFrom(from, to, amount)`.

    Returns:
        List[Dict[str, Any]]: ABI for ERC20 `transferFrom` function.
    """
    return [
        {
            "name": "transferFrom",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "from", "type": "address"},
                {"name": "to", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
            "outputs": [{"name": "", "type": "bool"}],
        }
    ]


def get_balance_abi() -> List[Dict[str, Any]]:
    """
    ABI entry for ERC20 `balanceOf(account)`.

    Read through a static call; the result must be exactly one uint256 word.
    """
    return [
        {
            "name": "balanceOf",
            "type": "function",
            "stateMutability": "view",
            "inputs": [{"name": "account", "type": "address"}],
            "outputs": [{"name": "", "type": "uint256"}],
        }
    ]


def get_allowance_abi() -> List[Dict[str, Any]]:
    """
    ABI entry for ERC20 `allowance(owner, spender)`, read fresh before
    every allowance adjustment.
    """
    return [
        {
            "name": "allowance",
            "type": "function",
            "stateMutability": "view",
            "inputs": [
                {"name": "owner", "type": "address"},
                {"name": "spender", "type": "address"},
            ],
            "outputs": [{"name": "", "type": "uint256"}],
        }
    ]


def get_approve_abi() -> List[Dict[str, Any]]:
    """
    ABI entry for ERC20 `approve(spender, amount)`.

    Some tokens (USDT) revert when changing a non-zero allowance to another
    non-zero value; `force_approve` handles that by zeroing first.
    """
    return [
        {
            "name": "approve",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "spender", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
            "outputs": [{"name": "", "type": "bool"}],
        }
    ]


def get_eip2612_permit_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for EIP-2612 ``permit``.

    The function signature on-chain::

        function permit(
            address owner, address spender, uint256 value,
            uint256 deadline, uint8 v, bytes32 r, bytes32 s
        ) external

    Returns:
        List[Dict[str, Any]]: ABI containing the ``permit`` function entry.
    """
    return [
        {
            "name": "permit",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "owner",    "type": "address"},
                {"name": "spender",  "type": "address"},
                {"name": "value",    "type": "uint256"},
                {"name": "deadline", "type": "uint256"},
                {"name": "v",        "type": "uint8"},
                {"name": "r",        "type": "bytes32"},
                {"name": "s",        "type": "bytes32"},
            ],
            "outputs": [],
        }
    ]


def get_dai_permit_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for the DAI-style ``permit``.

    DAI predates EIP-2612 and permits an all-or-nothing allowance::

        function permit(
            address holder, address spender, uint256 nonce,
            uint256 expiry, bool allowed, uint8 v, bytes32 r, bytes32 s
        ) external

    Returns:
        List[Dict[str, Any]]: ABI containing the DAI ``permit`` function entry.
    """
    return [
        {
            "name": "permit",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "holder",  "type": "address"},
                {"name": "spender", "type": "address"},
                {"name": "nonce",   "type": "uint256"},
                {"name": "expiry",  "type": "uint256"},
                {"name": "allowed", "type": "bool"},
                {"name": "v",       "type": "uint8"},
                {"name": "r",       "type": "bytes32"},
                {"name": "s",       "type": "bytes32"},
            ],
            "outputs": [],
        }
    ]


def get_permit2_permit_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for Uniswap Permit2 ``permit`` (AllowanceTransfer, single token).

    The function signature on-chain::

        function permit(
            address owner,
            PermitSingle memory permitSingle,
            bytes calldata signature
        ) external

    where ``PermitSingle = { PermitDetails details; address spender; uint256 sigDeadline }``
    and ``PermitDetails = { address token; uint160 amount; uint48 expiration; uint48 nonce }``.

    Returns:
        List[Dict[str, Any]]: ABI containing the ``permit`` function entry
        with fully-resolved tuple components.
    """
    return [
        {
            "name": "permit",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "owner", "type": "address"},
                {
                    "name": "permitSingle",
                    "type": "tuple",
                    "components": [
                        {
                            "name": "details",
                            "type": "tuple",
                            "components": [
                                {"name": "token",      "type": "address"},
                                {"name": "amount",     "type": "uint160"},
                                {"name": "expiration", "type": "uint48"},
                                {"name": "nonce",      "type": "uint48"},
                            ],
                        },
                        {"name": "spender",     "type": "address"},
                        {"name": "sigDeadline", "type": "uint256"},
                    ],
                },
                {"name": "signature", "type": "bytes"},
            ],
            "outputs": [],
        }
    ]


def get_permit2_transfer_from_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for Uniswap Permit2 ``transferFrom`` (AllowanceTransfer).

    Used to move tokens through the canonical Permit2 singleton
    (``0x000000000022D473030F116dDEE9F6B43aC78BA3``) against an allowance
    previously granted there::

        function transferFrom(address from, address to, uint160 amount, address token) external

    Returns:
        List[Dict[str, Any]]: ABI containing the ``transferFrom`` function entry.
    """
    return [
        {
            "name": "transferFrom",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "from",   "type": "address"},
                {"name": "to",     "type": "address"},
                {"name": "amount", "type": "uint160"},
                {"name": "token",  "type": "address"},
            ],
            "outputs": [],
        }
    ]


def get_weth_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for wrapped native asset ``deposit``, ``withdraw`` and ``withdrawTo``.

    Returns:
        List[Dict[str, Any]]: ABI with the three wrapped-native entries.
    """
    return [
        {
            "name": "deposit",
            "type": "function",
            "stateMutability": "payable",
            "inputs": [],
            "outputs": [],
        },
        {
            "name": "withdraw",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [{"name": "amount", "type": "uint256"}],
            "outputs": [],
        },
        {
            "name": "withdrawTo",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "amount", "type": "uint256"},
                {"name": "to",     "type": "address"},
            ],
            "outputs": [],
        },
    ]
