"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by safe token operations. A raised
``SafeERC20FailedOperation`` is the Hard Failure of a whole operation: the
caller sees either a completed operation or one of these exceptions, never
an in-band error value.

Exception Hierarchy:
    SafeERC20Error (root)
    ├── SafeERC20FailedOperation
    │   ├── SafeTransferFailed
    │   ├── SafeTransferFromFailed
    │   ├── ForceApproveFailed
    │   ├── SafeIncreaseAllowanceFailed
    │   ├── SafeDecreaseAllowanceFailed
    │   ├── SafeBalanceOfFailed
    │   ├── SafeAllowanceFailed
    │   ├── SafeDepositFailed
    │   └── SafeWithdrawFailed
    ├── ConfigurationError
    └── BlockchainInteractionError
"""

from typing import Optional

from ..schemas.bases import OperationResult


class SafeERC20Error(Exception):
    """
    Root exception class for all project-specific exceptions.

    All custom exceptions inherit from this class to enable unified
    exception handling by callers.
    """
    pass


class SafeERC20FailedOperation(SafeERC20Error):
    """
    Raised when a safe token operation is a Hard Failure.

    This includes scenarios such as:
    - The token call reverted
    - The token returned ``false`` (Soft Failure escalated by the wrapper)
    - The token returned data that is neither empty nor a single bool/word

    Attributes:
        operation: Logical operation that failed (e.g. ``"transfer"``)
        token: Target contract address
        reason: Diagnostic failure reason
        result: Classifier result, when the failure came from a classified call
    """

    def __init__(
        self,
        operation: str,
        token: Optional[str],
        reason: str,
        result: Optional[OperationResult] = None,
    ):
        self.operation = operation
        self.token = token
        self.reason = reason
        self.result = result
        super().__init__(f"{operation} failed on {token}: {reason}")


class SafeTransferFailed(SafeERC20FailedOperation):
    """Raised when ``safe_transfer`` fails."""
    pass


class SafeTransferFromFailed(SafeERC20FailedOperation):
    """
    Raised when ``safe_transfer_from`` or ``safe_transfer_from_universal``
    fails, including a Permit2 amount that does not fit in uint160.
    """
    pass


class ForceApproveFailed(SafeERC20FailedOperation):
    """
    Raised when ``force_approve`` fails even after zeroing the allowance.
    """
    pass


class SafeIncreaseAllowanceFailed(SafeERC20FailedOperation):
    """
    Raised when the increased allowance would not fit in uint256.
    """
    pass


class SafeDecreaseAllowanceFailed(SafeERC20FailedOperation):
    """
    Raised when decreasing the allowance would take it below zero.

    Attributes:
        current: Allowance read from the token
        requested: Amount the caller asked to subtract
    """

    def __init__(self, token: Optional[str], current: int, requested: int):
        self.current = current
        self.requested = requested
        super().__init__(
            "decreaseAllowance",
            token,
            f"allowance underflow (current {current}, decrease {requested})",
        )


class SafeBalanceOfFailed(SafeERC20FailedOperation):
    """Raised when ``balanceOf`` reverts or returns a non-word payload."""
    pass


class SafeAllowanceFailed(SafeERC20FailedOperation):
    """Raised when ``allowance`` reverts or returns a non-word payload."""
    pass


class SafeDepositFailed(SafeERC20FailedOperation):
    """Raised when a wrapped native ``deposit`` fails."""
    pass


class SafeWithdrawFailed(SafeERC20FailedOperation):
    """Raised when a wrapped native ``withdraw`` or ``withdrawTo`` fails."""
    pass


class ConfigurationError(SafeERC20Error):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing private key
    - Missing RPC URL
    - Unsupported network configuration
    """
    pass


class BlockchainInteractionError(SafeERC20Error):
    """
    Raised when the RPC transport itself fails.

    This is distinct from a contract revert, which is reported as a failed
    call outcome and classified. Scenarios include:
    - RPC call timeout
    - Network connectivity issues
    - Transaction receipt never observed

    Attributes:
        rpc_method: RPC method that was called (e.g. ``'eth_call'``)
    """

    def __init__(self, message: str, rpc_method: Optional[str] = None):
        self.rpc_method = rpc_method
        super().__init__(message)
