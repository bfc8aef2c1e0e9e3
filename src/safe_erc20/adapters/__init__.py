from .bases import BaseInvoker
from .evm import (
    SafeERC20,
    Web3Invoker,
    PERMIT2_ADDRESS,
    build_permit_call_data,
    build_permit2_permit_call_data,
)

__all__ = [
    "BaseInvoker",
    "SafeERC20",
    "Web3Invoker",
    "PERMIT2_ADDRESS",
    "build_permit_call_data",
    "build_permit2_permit_call_data",
]
