from .adapter import SafeERC20
from .invoker import Web3Invoker
from .constants import (
    MAX_UINT256,
    MAX_UINT160,
    PERMIT2_ADDRESS,
    EvmChainConfig,
    get_chain_config,
    get_wrapped_native_address,
)
from .encoders import (
    encode_transfer,
    encode_transfer_from,
    encode_approve,
    encode_balance_of,
    encode_allowance,
    encode_permit,
    encode_dai_permit,
    encode_permit2_permit,
    encode_permit2_transfer_from,
    encode_transfer_from_universal,
    encode_deposit,
    encode_withdraw,
    encode_withdraw_to,
    raw_payload,
)
from .standards import (
    EIP712Domain,
    EIP2612TypedData,
    PermitSignature,
    Permit2PermitSingleTypedData,
)
from .signatures import (
    sign_eip2612_permit,
    build_permit_call_data,
    sign_permit2_permit,
    build_permit2_permit_call_data,
)

__all__ = [
    "SafeERC20",
    "Web3Invoker",
    "MAX_UINT256",
    "MAX_UINT160",
    "PERMIT2_ADDRESS",
    "EvmChainConfig",
    "get_chain_config",
    "get_wrapped_native_address",
    "encode_transfer",
    "encode_transfer_from",
    "encode_approve",
    "encode_balance_of",
    "encode_allowance",
    "encode_permit",
    "encode_dai_permit",
    "encode_permit2_permit",
    "encode_permit2_transfer_from",
    "encode_transfer_from_universal",
    "encode_deposit",
    "encode_withdraw",
    "encode_withdraw_to",
    "raw_payload",
    "EIP712Domain",
    "EIP2612TypedData",
    "PermitSignature",
    "Permit2PermitSingleTypedData",
    "sign_eip2612_permit",
    "build_permit_call_data",
    "sign_permit2_permit",
    "build_permit2_permit_call_data",
]
