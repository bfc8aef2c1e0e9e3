from .bases import (
    CanonicalModel,
    CallPayload,
    CallOutcome,
    ReturnShape,
    ResultStatus,
    OperationResult,
)

__all__ = [
    "CanonicalModel",
    "CallPayload",
    "CallOutcome",
    "ReturnShape",
    "ResultStatus",
    "OperationResult",
]
