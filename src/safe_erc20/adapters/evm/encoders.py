"""
EVM Operation Encoders

One pure function per logical token operation, each returning the exact
``CallPayload`` the target expects. Selectors and argument types are taken
from the ABI entries in ``ERC20_ABI`` so the call layout is declared in one
place.

No encoder performs a call. Encoding is total for well-formed inputs:
address validity is checked by checksumming, and out-of-range integers are
rejected by ``eth_abi`` with its own error.
"""

from typing import Any, Dict, List, Sequence, Tuple, Union

from eth_abi import encode
from eth_utils.abi import collapse_if_tuple, function_abi_to_4byte_selector
from web3 import Web3

from ...engine.exceptions import SafeTransferFromFailed
from ...schemas.bases import CallPayload
from ...utils import hex_to_bytes, hex_to_bytes32
from .constants import MAX_UINT160, PERMIT2_ADDRESS
from .ERC20_ABI import (
    get_transfer_abi,
    get_transfer_from_abi,
    get_approve_abi,
    get_balance_abi,
    get_allowance_abi,
    get_eip2612_permit_abi,
    get_dai_permit_abi,
    get_permit2_permit_abi,
    get_permit2_transfer_from_abi,
    get_weth_abi,
)

BytesLike = Union[str, bytes]


def _function_entry(abi: List[Dict[str, Any]], name: str) -> Dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == name:
            return entry
    raise KeyError(f"Function '{name}' not present in ABI")


def selector_of(abi: List[Dict[str, Any]], name: str) -> bytes:
    """
    Return the 4-byte selector of function ``name`` in ``abi``.
    """
    return function_abi_to_4byte_selector(_function_entry(abi, name))


def _encode_call(
    abi: List[Dict[str, Any]],
    name: str,
    args: Sequence[Any],
    *,
    operation: str,
    value: int = 0,
) -> CallPayload:
    entry = _function_entry(abi, name)
    types = [collapse_if_tuple(arg) for arg in entry["inputs"]]
    data = function_abi_to_4byte_selector(entry) + encode(types, list(args))
    return CallPayload(operation=operation, data=data, value=value)


def _address(addr: str) -> str:
    return Web3.to_checksum_address(addr)


def _bytes32(component: BytesLike) -> bytes:
    if isinstance(component, (bytes, bytearray)):
        if len(component) != 32:
            raise ValueError(f"Expected 32 bytes, got {len(component)}")
        return bytes(component)
    return hex_to_bytes32(component)


# ---------------------------------------------------------------------------
# ERC-20
# ---------------------------------------------------------------------------

def encode_transfer(to: str, amount: int) -> CallPayload:
    return _encode_call(get_transfer_abi(), "transfer", [_address(to), amount], operation="transfer")


def encode_transfer_from(from_: str, to: str, amount: int) -> CallPayload:
    return _encode_call(
        get_transfer_from_abi(),
        "transferFrom",
        [_address(from_), _address(to), amount],
        operation="transferFrom",
    )


def encode_approve(spender: str, amount: int) -> CallPayload:
    return _encode_call(get_approve_abi(), "approve", [_address(spender), amount], operation="approve")


def encode_balance_of(account: str) -> CallPayload:
    return _encode_call(get_balance_abi(), "balanceOf", [_address(account)], operation="balanceOf")


def encode_allowance(owner: str, spender: str) -> CallPayload:
    return _encode_call(
        get_allowance_abi(),
        "allowance",
        [_address(owner), _address(spender)],
        operation="allowance",
    )


# ---------------------------------------------------------------------------
# Permits
# ---------------------------------------------------------------------------

def encode_permit(
    owner: str,
    spender: str,
    value: int,
    deadline: int,
    v: int,
    r: BytesLike,
    s: BytesLike,
) -> CallPayload:
    """
    Encode an EIP-2612 ``permit(owner, spender, value, deadline, v, r, s)`` call.

    Args:
        owner: Token owner that signed the permit.
        spender: Address being granted the allowance.
        value: Allowance to set, in the token's smallest unit.
        deadline: Unix timestamp after which the permit is invalid.
        v: ECDSA recovery ID.
        r: Signature ``r`` (bytes32, hex string or raw bytes).
        s: Signature ``s`` (bytes32, hex string or raw bytes).
    """
    return _encode_call(
        get_eip2612_permit_abi(),
        "permit",
        [_address(owner), _address(spender), value, deadline, v, _bytes32(r), _bytes32(s)],
        operation="permit",
    )


def encode_dai_permit(
    holder: str,
    spender: str,
    nonce: int,
    expiry: int,
    allowed: bool,
    v: int,
    r: BytesLike,
    s: BytesLike,
) -> CallPayload:
    """
    Encode a DAI-style ``permit(holder, spender, nonce, expiry, allowed, v, r, s)`` call.

    ``allowed=True`` grants an unlimited allowance, ``False`` revokes it.
    """
    return _encode_call(
        get_dai_permit_abi(),
        "permit",
        [_address(holder), _address(spender), nonce, expiry, allowed, v, _bytes32(r), _bytes32(s)],
        operation="permit",
    )


def encode_permit2_permit(
    owner: str,
    token: str,
    amount: int,
    expiration: int,
    nonce: int,
    spender: str,
    sig_deadline: int,
    signature: BytesLike,
) -> CallPayload:
    """
    Encode a Permit2 ``permit(owner, PermitSingle, signature)`` call.

    The resulting payload targets ``PERMIT2_ADDRESS``, not the token.

    Args:
        owner: Token owner that signed the permit.
        token: Token the allowance applies to.
        amount: Allowance (uint160).
        expiration: Allowance expiry timestamp (uint48).
        nonce: Permit2 nonce for (owner, token, spender) (uint48).
        spender: Address being granted the allowance.
        sig_deadline: Signature expiry timestamp.
        signature: Packed 65-byte signature (r || s || v).
    """
    permit_single = ((_address(token), amount, expiration, nonce), _address(spender), sig_deadline)
    return _encode_call(
        get_permit2_permit_abi(),
        "permit",
        [_address(owner), permit_single, hex_to_bytes(signature)],
        operation="permit2.permit",
    )


def raw_payload(data: BytesLike, operation: str = "permit") -> CallPayload:
    """
    Wrap caller-supplied, pre-encoded call data.

    Used by the universal permit path so any permit standard can be
    dispatched without this library encoding each variant.

    Raises:
        ValueError: If the data is too short to carry a selector.
    """
    raw = hex_to_bytes(data)
    if len(raw) < 4:
        raise ValueError(f"Call data must hold at least a 4-byte selector, got {len(raw)} bytes")
    return CallPayload(operation=operation, data=raw)


# ---------------------------------------------------------------------------
# Permit2 transfers
# ---------------------------------------------------------------------------

def encode_permit2_transfer_from(from_: str, to: str, amount: int, token: str) -> CallPayload:
    return _encode_call(
        get_permit2_transfer_from_abi(),
        "transferFrom",
        [_address(from_), _address(to), amount, _address(token)],
        operation="permit2.transferFrom",
    )


def encode_transfer_from_universal(
    token: str,
    from_: str,
    to: str,
    amount: int,
    use_permit2: bool,
) -> Tuple[str, CallPayload]:
    """
    Encode a transferFrom routed either through the token or through Permit2.

    Args:
        token: Token contract address.
        from_: Address tokens are taken from.
        to: Recipient address.
        amount: Amount to move. Must fit in uint160 when ``use_permit2``.
        use_permit2: Route through the Permit2 singleton instead of the
            token's own allowance storage.

    Returns:
        ``(target, payload)``: the address to call and the call payload.

    Raises:
        SafeTransferFromFailed: If ``use_permit2`` and ``amount`` does not fit
            in uint160.
    """
    if use_permit2:
        if amount > MAX_UINT160:
            raise SafeTransferFromFailed(
                "permit2.transferFrom", token, f"amount {amount} exceeds uint160"
            )
        return PERMIT2_ADDRESS, encode_permit2_transfer_from(from_, to, amount, token)
    return _address(token), encode_transfer_from(from_, to, amount)


# ---------------------------------------------------------------------------
# Wrapped native asset
# ---------------------------------------------------------------------------

def encode_deposit(amount: int) -> CallPayload:
    """``deposit()`` with ``amount`` native units attached."""
    return _encode_call(get_weth_abi(), "deposit", [], operation="deposit", value=amount)


def encode_withdraw(amount: int) -> CallPayload:
    return _encode_call(get_weth_abi(), "withdraw", [amount], operation="withdraw")


def encode_withdraw_to(amount: int, to: str) -> CallPayload:
    return _encode_call(get_weth_abi(), "withdrawTo", [amount, _address(to)], operation="withdrawTo")
