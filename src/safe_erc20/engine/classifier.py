"""
Result Classifier

Maps the raw outcome of a token call to a single classified result. The
return bytes are first decoded into an explicit ``ReturnShape`` and the
status is then derived from the shape:

+-----------------+-------------+-------------------------------+
| call succeeded  | shape       | status                        |
+=================+=============+===============================+
| no              | (any)       | HARD_FAILURE "call reverted"  |
+-----------------+-------------+-------------------------------+
| yes             | EMPTY       | SUCCESS                       |
+-----------------+-------------+-------------------------------+
| yes             | BOOLEAN 1   | SUCCESS                       |
+-----------------+-------------+-------------------------------+
| yes             | BOOLEAN 0   | SOFT_FAILURE                  |
+-----------------+-------------+-------------------------------+
| yes             | MALFORMED   | HARD_FAILURE                  |
+-----------------+-------------+-------------------------------+

Numeric reads (``balanceOf``, ``allowance``) use ``classify_word`` instead,
which requires exactly one 32-byte word.
"""

from typing import Optional, Type

from ..schemas.bases import CallOutcome, OperationResult, ResultStatus, ReturnShape
from .exceptions import SafeERC20FailedOperation

WORD_SIZE = 32

REASON_REVERTED = "call reverted"
REASON_RETURNED_FALSE = "operation returned false"
REASON_MALFORMED = "malformed return data"


def decode_return_shape(return_data: bytes) -> ReturnShape:
    """
    Decode the shape of the bytes returned by a state-changing token call.

    Args:
        return_data: Raw return bytes.

    Returns:
        ``EMPTY`` for no data, ``BOOLEAN`` for a single word holding 0 or 1,
        ``MALFORMED`` otherwise.
    """
    if len(return_data) == 0:
        return ReturnShape.EMPTY
    if len(return_data) == WORD_SIZE and int.from_bytes(return_data, "big") in (0, 1):
        return ReturnShape.BOOLEAN
    return ReturnShape.MALFORMED


def classify(outcome: CallOutcome) -> OperationResult:
    """
    Classify a state-changing call (transfer, transferFrom, approve, permit,
    deposit, withdraw).

    Args:
        outcome: Raw outcome reported by the invoker.

    Returns:
        OperationResult with the classified status.
    """
    shape = decode_return_shape(outcome.return_data)

    if not outcome.call_succeeded:
        return OperationResult(status=ResultStatus.HARD_FAILURE, shape=shape, reason=REASON_REVERTED)

    if shape == ReturnShape.EMPTY:
        return OperationResult(status=ResultStatus.SUCCESS, shape=shape)

    if shape == ReturnShape.BOOLEAN:
        if int.from_bytes(outcome.return_data, "big") == 1:
            return OperationResult(status=ResultStatus.SUCCESS, shape=shape)
        return OperationResult(status=ResultStatus.SOFT_FAILURE, shape=shape, reason=REASON_RETURNED_FALSE)

    return OperationResult(status=ResultStatus.HARD_FAILURE, shape=shape, reason=REASON_MALFORMED)


def classify_word(outcome: CallOutcome) -> OperationResult:
    """
    Classify a numeric read and decode its value.

    The return data must be exactly one 32-byte word; any other length is a
    Hard Failure.

    Args:
        outcome: Raw outcome of a ``balanceOf`` / ``allowance`` call.

    Returns:
        OperationResult with ``value`` set on success.
    """
    if not outcome.call_succeeded:
        return OperationResult(
            status=ResultStatus.HARD_FAILURE,
            shape=decode_return_shape(outcome.return_data),
            reason=REASON_REVERTED,
        )

    if len(outcome.return_data) != WORD_SIZE:
        return OperationResult(
            status=ResultStatus.HARD_FAILURE,
            shape=ReturnShape.MALFORMED,
            reason=f"{REASON_MALFORMED}: expected {WORD_SIZE} bytes, got {len(outcome.return_data)}",
        )

    return OperationResult(
        status=ResultStatus.SUCCESS,
        shape=ReturnShape.WORD,
        value=int.from_bytes(outcome.return_data, "big"),
    )


def require_success(
    result: OperationResult,
    *,
    operation: str,
    token: Optional[str],
    error_cls: Type[SafeERC20FailedOperation] = SafeERC20FailedOperation,
) -> OperationResult:
    """
    Escalate any non-success result (Soft Failures included) to a Hard Failure.

    Args:
        result: Classified result.
        operation: Operation name used in the error message.
        token: Target contract address.
        error_cls: Exception class to raise.

    Returns:
        The same result when it is a success.

    Raises:
        SafeERC20FailedOperation: (or ``error_cls``) for any other status.
    """
    if result.is_success():
        return result
    raise error_cls(operation, token, result.reason or result.status.value, result)
