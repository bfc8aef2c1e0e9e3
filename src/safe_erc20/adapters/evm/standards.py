"""
EIP-712 typed-data containers for the permits this library can sign.

Each container renders to the ``full_message`` dict accepted by
``eth_account.Account.sign_typed_data`` and ``encode_typed_data``.
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Optional


@dataclass
class EIP712Domain:
    """
    EIP-712 domain separator fields.

    ``version`` is optional: EIP-2612 tokens include it, the Permit2
    singleton does not. The rendered type list follows the fields present.
    """
    name: str
    chain_id: int
    verifying_contract: str
    version: Optional[str] = None

    def type_fields(self) -> List[Dict[str, str]]:
        fields = [{"name": "name", "type": "string"}]
        if self.version is not None:
            fields.append({"name": "version", "type": "string"})
        fields.append({"name": "chainId", "type": "uint256"})
        fields.append({"name": "verifyingContract", "type": "address"})
        return fields

    def to_dict(self) -> Dict[str, Any]:
        domain = {"name": self.name}
        if self.version is not None:
            domain["version"] = self.version
        domain["chainId"] = self.chain_id
        domain["verifyingContract"] = self.verifying_contract
        return domain


@dataclass
class EIP2612TypedData:
    """
    EIP-2612 ``Permit(owner, spender, value, nonce, deadline)`` typed data.

    Attributes:
        domain: Token's EIP-712 domain (name and version as registered by the token)
        owner: Token owner granting the allowance
        spender: Address being granted the allowance
        value: Allowance to set
        nonce: Current ``nonces(owner)`` of the token
        deadline: Unix timestamp after which the permit is invalid
    """
    domain: EIP712Domain
    owner: str
    spender: str
    value: int
    nonce: int
    deadline: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "types": {
                "EIP712Domain": self.domain.type_fields(),
                "Permit": [
                    {"name": "owner", "type": "address"},
                    {"name": "spender", "type": "address"},
                    {"name": "value", "type": "uint256"},
                    {"name": "nonce", "type": "uint256"},
                    {"name": "deadline", "type": "uint256"},
                ],
            },
            "primaryType": "Permit",
            "domain": self.domain.to_dict(),
            "message": {
                "owner": self.owner,
                "spender": self.spender,
                "value": self.value,
                "nonce": self.nonce,
                "deadline": self.deadline,
            },
        }


@dataclass
class Permit2PermitSingleTypedData:
    """
    Permit2 AllowanceTransfer ``PermitSingle`` typed data.

    The domain is ``name="Permit2"`` without a version, verified by the
    Permit2 singleton.

    Attributes:
        domain: Permit2 domain
        token: ERC-20 token the allowance applies to
        amount: Allowance amount (uint160)
        expiration: Allowance expiry timestamp (uint48)
        nonce: Permit2 nonce for (owner, token, spender) (uint48)
        spender: Address being granted the allowance
        sig_deadline: Unix timestamp after which the signature is invalid
    """
    domain: EIP712Domain
    token: str
    amount: int
    expiration: int
    nonce: int
    spender: str
    sig_deadline: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "types": {
                "EIP712Domain": self.domain.type_fields(),
                "PermitSingle": [
                    {"name": "details", "type": "PermitDetails"},
                    {"name": "spender", "type": "address"},
                    {"name": "sigDeadline", "type": "uint256"},
                ],
                "PermitDetails": [
                    {"name": "token", "type": "address"},
                    {"name": "amount", "type": "uint160"},
                    {"name": "expiration", "type": "uint48"},
                    {"name": "nonce", "type": "uint48"},
                ],
            },
            "primaryType": "PermitSingle",
            "domain": self.domain.to_dict(),
            "message": {
                "details": {
                    "token": self.token,
                    "amount": self.amount,
                    "expiration": self.expiration,
                    "nonce": self.nonce,
                },
                "spender": self.spender,
                "sigDeadline": self.sig_deadline,
            },
        }


@dataclass
class PermitSignature:
    """ECDSA components of a signed permit.

    Attributes:
        v: Recovery byte (27 or 28)
        r: 0x-prefixed 32-byte hex
        s: 0x-prefixed 32-byte hex
    """

    v: int
    r: str
    s: str

    def to_packed_hex(self) -> str:
        """Packed 65-byte ``r || s || v`` hex, the ``bytes signature`` Permit2 expects."""
        r = self.r.replace("0x", "").zfill(64)
        s = self.s.replace("0x", "").zfill(64)
        return "0x" + r + s + format(self.v, "02x")
