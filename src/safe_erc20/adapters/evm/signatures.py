"""
EVM Off-Chain Permit Signing Utilities

Local EIP-712 signing helpers that produce ready-to-send permit call data
for ``SafeERC20.safe_permit``. All cryptographic operations are performed
in-process using ``eth_account``; no RPC calls are made.

Exported helpers
----------------
sign_eip2612_permit
    Sign an EIP-2612 ``Permit`` and return its (v, r, s) components.

build_permit_call_data
    Sign an EIP-2612 permit and return the encoded ``permit(...)`` call data.

sign_permit2_permit / build_permit2_permit_call_data
    The same for a Permit2 ``PermitSingle`` (AllowanceTransfer) permit,
    whose call data targets the Permit2 singleton.
"""

from eth_account import Account
from web3 import Web3

from .constants import PERMIT2_ADDRESS
from .encoders import encode_permit, encode_permit2_permit
from .standards import (
    EIP712Domain,
    EIP2612TypedData,
    PermitSignature,
    Permit2PermitSingleTypedData,
)


def _require_signer(private_key: str, owner: str) -> None:
    signer = Account.from_key(private_key).address
    if signer.lower() != owner.lower():
        raise ValueError(f"Private key belongs to {signer}, not to permit owner {owner}")


# ---------------------------------------------------------------------------
# EIP-2612
# ---------------------------------------------------------------------------

def sign_eip2612_permit(
    *,
    private_key: str,
    token: str,
    chain_id: int,
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
    domain_name: str,
    domain_version: str = "1",
) -> PermitSignature:
    """
    Sign an EIP-2612 ``Permit`` and return its ECDSA components.

    Args:
        private_key:    Hex-encoded secp256k1 private key of ``owner``.
        token:          Token contract address, the EIP-712 ``verifyingContract``.
        chain_id:       EVM network ID.
        owner:          Token owner; must match the address of ``private_key``.
        spender:        Address being granted the allowance.
        value:          Allowance to set, in the token's smallest unit.
        nonce:          Current ``nonces(owner)`` of the token.
        deadline:       Unix timestamp after which the permit is invalid.
        domain_name:    EIP-712 domain ``name`` exactly as registered in the token.
        domain_version: EIP-712 domain ``version`` string.

    Returns:
        ``PermitSignature`` with v, r, s populated.

    Raises:
        ValueError: If ``private_key`` does not belong to ``owner``.
    """
    _require_signer(private_key, owner)

    typed_data = EIP2612TypedData(
        domain=EIP712Domain(
            name=domain_name,
            version=domain_version,
            chain_id=chain_id,
            verifying_contract=Web3.to_checksum_address(token),
        ),
        owner=Web3.to_checksum_address(owner),
        spender=Web3.to_checksum_address(spender),
        value=value,
        nonce=nonce,
        deadline=deadline,
    )
    signed = Account.sign_typed_data(private_key, full_message=typed_data.to_dict())

    return PermitSignature(
        v=signed.v,
        r="0x" + signed.r.to_bytes(32, "big").hex(),
        s="0x" + signed.s.to_bytes(32, "big").hex(),
    )


def build_permit_call_data(
    *,
    private_key: str,
    token: str,
    chain_id: int,
    owner: str,
    spender: str,
    value: int,
    nonce: int,
    deadline: int,
    domain_name: str,
    domain_version: str = "1",
) -> str:
    """
    Sign an EIP-2612 permit and encode the ``permit(...)`` call.

    Returns:
        0x-prefixed call data to pass to ``SafeERC20.safe_permit``.

    Example::

        call_data = build_permit_call_data(
            private_key="0xOWNER_KEY",
            token="0xToken",
            chain_id=1,
            owner="0xOwner",
            spender="0xSpender",
            value=1_000_000,
            nonce=0,
            deadline=1_900_000_000,
            domain_name="My Token",
        )
        await safe.safe_permit("0xToken", call_data)
    """
    sig = sign_eip2612_permit(
        private_key=private_key, token=token, chain_id=chain_id,
        owner=owner, spender=spender, value=value, nonce=nonce,
        deadline=deadline, domain_name=domain_name, domain_version=domain_version,
    )
    return encode_permit(owner, spender, value, deadline, sig.v, sig.r, sig.s).to_hex()


# ---------------------------------------------------------------------------
# Permit2 (AllowanceTransfer)
# ---------------------------------------------------------------------------

def sign_permit2_permit(
    *,
    private_key: str,
    chain_id: int,
    owner: str,
    token: str,
    amount: int,
    expiration: int,
    nonce: int,
    spender: str,
    sig_deadline: int,
    permit2_address: str = PERMIT2_ADDRESS,
) -> PermitSignature:
    """
    Sign a Permit2 ``PermitSingle`` and return its ECDSA components.

    Raises:
        ValueError: If ``private_key`` does not belong to ``owner``.
    """
    _require_signer(private_key, owner)

    typed_data = Permit2PermitSingleTypedData(
        domain=EIP712Domain(
            name="Permit2",
            chain_id=chain_id,
            verifying_contract=Web3.to_checksum_address(permit2_address),
        ),
        token=Web3.to_checksum_address(token),
        amount=amount,
        expiration=expiration,
        nonce=nonce,
        spender=Web3.to_checksum_address(spender),
        sig_deadline=sig_deadline,
    )
    signed = Account.sign_typed_data(private_key, full_message=typed_data.to_dict())

    return PermitSignature(
        v=signed.v,
        r="0x" + signed.r.to_bytes(32, "big").hex(),
        s="0x" + signed.s.to_bytes(32, "big").hex(),
    )


def build_permit2_permit_call_data(
    *,
    private_key: str,
    chain_id: int,
    owner: str,
    token: str,
    amount: int,
    expiration: int,
    nonce: int,
    spender: str,
    sig_deadline: int,
    permit2_address: str = PERMIT2_ADDRESS,
) -> str:
    """
    Sign a Permit2 permit and encode the ``permit(owner, PermitSingle, bytes)`` call.

    The returned call data must be sent to the Permit2 singleton, i.e.
    ``safe_permit(token, call_data, target=PERMIT2_ADDRESS)``.
    """
    sig = sign_permit2_permit(
        private_key=private_key, chain_id=chain_id, owner=owner, token=token,
        amount=amount, expiration=expiration, nonce=nonce, spender=spender,
        sig_deadline=sig_deadline, permit2_address=permit2_address,
    )
    return encode_permit2_permit(
        owner, token, amount, expiration, nonce, spender, sig_deadline, sig.to_packed_hex()
    ).to_hex()
