from .adapters import (
    BaseInvoker,
    SafeERC20,
    Web3Invoker,
    PERMIT2_ADDRESS,
    build_permit_call_data,
    build_permit2_permit_call_data,
)
from .engine import (
    classify,
    classify_word,
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
from .schemas import CallPayload, CallOutcome, OperationResult, ResultStatus, ReturnShape

__all__ = [
    "BaseInvoker",
    "SafeERC20",
    "Web3Invoker",
    "PERMIT2_ADDRESS",
    "build_permit_call_data",
    "build_permit2_permit_call_data",
    "classify",
    "classify_word",
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
    "CallPayload",
    "CallOutcome",
    "OperationResult",
    "ResultStatus",
    "ReturnShape",
]
