"""
Base Schema Models for safe-erc20

This module defines the data objects that flow through a single safe token
operation. Every object here is created, consumed and discarded within one
operation; nothing persists across calls.

Core Classes:
    - CanonicalModel: Pydantic base model with deterministic JSON serialization
    - CallPayload: Immutable call data (selector + ABI-encoded arguments) for one call
    - CallOutcome: Raw result of one external call (success flag + return bytes)
    - ReturnShape: Tagged decoding of raw return bytes
    - ResultStatus: Success / Soft Failure / Hard Failure
    - OperationResult: Classified outcome of one call

Dependencies:
    - pydantic: For data validation and serialization
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class CanonicalModel(BaseModel):
    """
    Pydantic base model with canonical JSON serialization.

    Ensures a deterministic JSON representation (sorted keys, no extra
    whitespace) so results can be logged and compared byte-for-byte.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_canonical_json(self) -> str:
        """
        Convert model to a canonical JSON string.

        Bytes fields are rendered as 0x-prefixed hex.

        Returns:
            str: JSON string with sorted keys and no extra whitespace.
        """
        data = self.model_dump(mode="json")
        return json.dumps(
            data,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model to dictionary representation.

        Returns:
            Dict[str, Any]: Dictionary with all model fields.
        """
        return self.model_dump()


@dataclass(frozen=True)
class CallPayload:
    """
    Call data for exactly one external call.

    Attributes:
        operation: Logical operation name (e.g. ``"transfer"``), used for
            diagnostics only.
        data: Selector followed by ABI-encoded arguments.
        value: Native units attached to the call (wei). Only wrapped-native
            ``deposit`` attaches value.
    """
    operation: str
    data: bytes
    value: int = 0

    @property
    def selector(self) -> bytes:
        return self.data[:4]

    def to_hex(self) -> str:
        return "0x" + self.data.hex()


class CallOutcome(CanonicalModel):
    """
    Raw outcome of a low-level call as reported by an invoker.

    If ``call_succeeded`` is False the operation is a Hard Failure regardless
    of ``return_data``; in that case ``return_data`` carries revert data when
    the node reported any.

    Attributes:
        call_succeeded: Whether the call itself completed without reverting.
        return_data: Raw bytes returned by the target.
    """

    call_succeeded: bool = Field(..., description="Whether the call completed without reverting")
    return_data: bytes = Field(default=b"", description="Raw bytes returned by the target")

    @field_serializer("return_data", when_used="json")
    def _serialize_return_data(self, data: bytes) -> str:
        return "0x" + data.hex()


class ReturnShape(str, Enum):
    """
    Shape of the bytes returned by a token call.

    Attributes:
        EMPTY: No return data (legacy tokens that omit the return value)
        BOOLEAN: A single ABI-encoded bool (one 32-byte word holding 0 or 1)
        WORD: A single 32-byte word decoded as an unsigned integer
        MALFORMED: Anything else
    """
    EMPTY = "empty"
    BOOLEAN = "boolean"
    WORD = "word"
    MALFORMED = "malformed"


class ResultStatus(str, Enum):
    """
    Enumeration of classified operation outcomes.

    Attributes:
        SUCCESS: The operation visibly succeeded
        SOFT_FAILURE: The call completed but reported ``false``
        HARD_FAILURE: The call reverted or returned unparseable data
    """
    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"
    HARD_FAILURE = "hard_failure"


class OperationResult(CanonicalModel):
    """
    Classified outcome of one call.

    Produced only by the result classifier; callers never construct it.

    Attributes:
        status: Classified status (ResultStatus enum)
        shape: Shape the return data decoded to
        reason: Diagnostic failure reason, None on success
        value: Decoded unsigned integer for numeric reads (balanceOf, allowance)
    """

    status: ResultStatus = Field(..., description="Classified status")
    shape: ReturnShape = Field(..., description="Decoded shape of the return data")
    reason: Optional[str] = Field(None, description="Failure reason for diagnostics")
    value: Optional[int] = Field(None, ge=0, description="Decoded numeric value for word reads")

    def is_success(self) -> bool:
        """
        Check if the operation succeeded.

        Returns:
            bool: True only for ``ResultStatus.SUCCESS``.
        """
        return self.status == ResultStatus.SUCCESS

    def get_error_message(self) -> Optional[str]:
        """
        Get formatted error message, or None if the operation succeeded.
        """
        if self.is_success():
            return None
        return f"{self.status.value}: {self.reason} (return data shape: {self.shape.value})"
