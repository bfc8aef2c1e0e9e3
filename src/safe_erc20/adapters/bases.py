"""
Abstract Base Class for Raw Invokers

Defines the single wire-level boundary the safe operations depend on:

    (target address, payload bytes, native value attached) -> (succeeded, return bytes)

Concrete invokers (a JSON-RPC backed one for live chains, in-memory ones for
tests) implement this interface. An invoker never retries and never
interprets return bytes; interpretation belongs to the result classifier.
"""

from abc import ABC, abstractmethod

from ..schemas.bases import CallPayload, CallOutcome


class BaseInvoker(ABC):
    """
    Abstract Base Class for Raw Invokers.

    An invoker performs calls on behalf of one account. That account plays
    the role of the calling contract: it is the ``msg.sender`` of every call
    and the owner whose allowances ``safe_increase_allowance`` and
    ``safe_decrease_allowance`` adjust.

    Key Responsibilities:
    1. call: Perform a state-changing call, attaching ``payload.value``
    2. static_call: Perform a read-only call
    3. simulate: Dry-run a state-changing call without committing it
    4. address: Expose the calling account

    Calling an address without code is a no-op success: implementations
    report ``call_succeeded=True`` with empty ``return_data``.
    """

    @property
    @abstractmethod
    def address(self) -> str:
        """
        Checksum address of the account on whose behalf calls are made.
        """
        pass

    @abstractmethod
    async def call(self, target: str, payload: CallPayload) -> CallOutcome:
        """
        Perform a state-changing call against ``target``.

        Args:
            target: Contract address to call.
            payload: Call data and native value to attach.

        Returns:
            CallOutcome: ``call_succeeded`` False if the call reverted.

        Raises:
            BlockchainInteractionError: If the transport fails (not a revert).
        """
        pass

    @abstractmethod
    async def simulate(self, target: str, payload: CallPayload) -> CallOutcome:
        """
        Dry-run a state-changing call against ``target`` with ``payload.value``
        attached, leaving no trace on chain.

        Returns:
            CallOutcome: What ``call`` would observe if issued now.

        Raises:
            BlockchainInteractionError: If the transport fails (not a revert).
        """
        pass

    @abstractmethod
    async def static_call(self, target: str, payload: CallPayload) -> CallOutcome:
        """
        Perform a read-only call against ``target``.

        Args:
            target: Contract address to call.
            payload: Call data (``value`` is ignored).

        Returns:
            CallOutcome: ``call_succeeded`` False if the call reverted.

        Raises:
            BlockchainInteractionError: If the transport fails (not a revert).
        """
        pass
