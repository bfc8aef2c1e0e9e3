from .classifier import (
    decode_return_shape,
    classify,
    classify_word,
    require_success,
)
from .exceptions import (
    SafeERC20Error,
    SafeERC20FailedOperation,
    SafeTransferFailed,
    SafeTransferFromFailed,
    ForceApproveFailed,
    SafeIncreaseAllowanceFailed,
    SafeDecreaseAllowanceFailed,
    SafeBalanceOfFailed,
    SafeAllowanceFailed,
    SafeDepositFailed,
    SafeWithdrawFailed,
    ConfigurationError,
    BlockchainInteractionError,
)

__all__ = [
    "decode_return_shape",
    "classify",
    "classify_word",
    "require_success",
    "SafeERC20Error",
    "SafeERC20FailedOperation",
    "SafeTransferFailed",
    "SafeTransferFromFailed",
    "ForceApproveFailed",
    "SafeIncreaseAllowanceFailed",
    "SafeDecreaseAllowanceFailed",
    "SafeBalanceOfFailed",
    "SafeAllowanceFailed",
    "SafeDepositFailed",
    "SafeWithdrawFailed",
    "ConfigurationError",
    "BlockchainInteractionError",
]
