"""
Safe Token Operations

``SafeERC20`` wraps every interaction with an ERC-20 token (and a wrapped
native token) so that the caller observes exactly one of two outcomes:
the operation completed, or a ``SafeERC20FailedOperation`` was raised.

Each operation is one encode → invoke → classify cycle, except
``force_approve`` which may zero the allowance and re-attempt, and the
allowance adjustments which read the current allowance first. Calls inside
one operation are awaited strictly in sequence. A state-changing call is
simulated and classified before it is committed, so a call that would return
false or malformed data never reaches the chain.

``safe_permit`` is the one tolerant operation: a failed permit is logged and
reported as ``False`` because a front-running third party may already have
consumed the same signature.
"""

from typing import Optional, Type, Union

from ...engine.classifier import classify, classify_word, require_success
from ...engine.exceptions import (
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
)
from ...schemas.bases import CallPayload, OperationResult
from ...utils import logger
from ..bases import BaseInvoker
from .constants import MAX_UINT256
from .encoders import (
    encode_transfer,
    encode_transfer_from,
    encode_transfer_from_universal,
    encode_approve,
    encode_balance_of,
    encode_allowance,
    encode_deposit,
    encode_withdraw,
    encode_withdraw_to,
    raw_payload,
)


class SafeERC20:
    """
    Safe wrappers around token calls made by one account.

    Args:
        invoker: Raw invoker performing the calls. Its ``address`` is the
            account whose allowances the adjustment operations read and set.

    Example:
        safe = SafeERC20(Web3Invoker())
        await safe.safe_increase_allowance(usdc, router, 5_000_000)
        await safe.safe_transfer(usdc, recipient, 1_000_000)
    """

    def __init__(self, invoker: BaseInvoker):
        self.invoker = invoker

    async def _execute(
        self,
        target: str,
        payload: CallPayload,
        *,
        token: str,
        error_cls: Type[SafeERC20FailedOperation],
        operation: Optional[str] = None,
    ) -> OperationResult:
        result = await self._attempt(target, payload)
        return require_success(
            result,
            operation=operation or payload.operation,
            token=token,
            error_cls=error_cls,
        )

    async def _attempt(self, target: str, payload: CallPayload) -> OperationResult:
        logger.debug(f"{payload.operation} -> {target} data={payload.to_hex()} value={payload.value}")
        # A call the classifier would reject is never committed
        result = classify(await self.invoker.simulate(target, payload))
        if not result.is_success():
            logger.debug(f"{payload.operation} on {target} rejected in simulation: {result.get_error_message()}")
            return result

        outcome = await self.invoker.call(target, payload)
        result = classify(outcome)
        logger.debug(f"{payload.operation} on {target}: {result.status.value} ({result.shape.value})")
        return result

    async def _read_word(
        self,
        token: str,
        payload: CallPayload,
        error_cls: Type[SafeERC20FailedOperation],
    ) -> int:
        outcome = await self.invoker.static_call(token, payload)
        result = require_success(
            classify_word(outcome),
            operation=payload.operation,
            token=token,
            error_cls=error_cls,
        )
        return result.value

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    async def safe_transfer(self, token: str, to: str, amount: int) -> None:
        """
        Transfer ``amount`` of ``token`` from the calling account to ``to``.

        Raises:
            SafeTransferFailed: If the token reverts, returns false or
                returns malformed data.
        """
        await self._execute(token, encode_transfer(to, amount), token=token, error_cls=SafeTransferFailed)

    async def safe_transfer_from(self, token: str, from_: str, to: str, amount: int) -> None:
        """
        Move ``amount`` of ``token`` from ``from_`` to ``to`` using the calling
        account's allowance.

        Raises:
            SafeTransferFromFailed: On any non-success outcome.
        """
        await self._execute(
            token,
            encode_transfer_from(from_, to, amount),
            token=token,
            error_cls=SafeTransferFromFailed,
        )

    async def safe_transfer_from_universal(
        self,
        token: str,
        from_: str,
        to: str,
        amount: int,
        use_permit2: bool = False,
    ) -> None:
        """
        ``transferFrom`` routed either through the token itself or through the
        Permit2 singleton.

        Args:
            token: Token contract address.
            from_: Address tokens are taken from.
            to: Recipient address.
            amount: Amount to move.
            use_permit2: Spend an allowance granted on Permit2 instead of the
                token's own allowance. ``amount`` must fit in uint160.

        Raises:
            SafeTransferFromFailed: If the amount does not fit Permit2's
                uint160 or the call fails.
        """
        target, payload = encode_transfer_from_universal(token, from_, to, amount, use_permit2)
        await self._execute(target, payload, token=token, error_cls=SafeTransferFromFailed)

    # ------------------------------------------------------------------
    # Allowances
    # ------------------------------------------------------------------

    async def force_approve(self, token: str, spender: str, amount: int) -> None:
        """
        Set the allowance of ``spender`` to ``amount``, working around tokens
        that refuse to change a non-zero allowance to another non-zero value.

        ``approve(amount)`` is attempted first. If it does not succeed, the
        allowance is reset with ``approve(0)`` and ``approve(amount)`` is
        attempted again; both must succeed.

        Raises:
            ForceApproveFailed: If the zero-out or the re-attempt fails.
        """
        payload = encode_approve(spender, amount)
        result = await self._attempt(token, payload)
        if result.is_success():
            return

        logger.warning(
            f"approve({amount}) on {token} for {spender} not accepted "
            f"({result.get_error_message()}), resetting allowance to zero"
        )
        await self._execute(
            token, encode_approve(spender, 0), token=token,
            error_cls=ForceApproveFailed, operation="forceApprove",
        )
        await self._execute(
            token, payload, token=token,
            error_cls=ForceApproveFailed, operation="forceApprove",
        )

    async def safe_increase_allowance(self, token: str, spender: str, amount: int) -> None:
        """
        Raise the calling account's allowance for ``spender`` by ``amount``.

        Raises:
            SafeAllowanceFailed: If the current allowance cannot be read.
            SafeIncreaseAllowanceFailed: If the new allowance exceeds uint256.
            ForceApproveFailed: If the new allowance cannot be set.
        """
        current = await self.safe_allowance(token, self.invoker.address, spender)
        new_allowance = current + amount
        if new_allowance > MAX_UINT256:
            raise SafeIncreaseAllowanceFailed(
                "increaseAllowance",
                token,
                f"allowance overflow (current {current}, increase {amount})",
            )
        await self.force_approve(token, spender, new_allowance)

    async def safe_decrease_allowance(self, token: str, spender: str, amount: int) -> None:
        """
        Lower the calling account's allowance for ``spender`` by ``amount``.

        Raises:
            SafeAllowanceFailed: If the current allowance cannot be read.
            SafeDecreaseAllowanceFailed: If ``amount`` exceeds the current allowance.
            ForceApproveFailed: If the new allowance cannot be set.
        """
        current = await self.safe_allowance(token, self.invoker.address, spender)
        if amount > current:
            raise SafeDecreaseAllowanceFailed(token, current, amount)
        await self.force_approve(token, spender, current - amount)

    async def safe_permit(
        self,
        token: str,
        permit_call_data: Union[str, bytes],
        target: Optional[str] = None,
    ) -> bool:
        """
        Submit a signed permit, tolerating its failure.

        The call data is sent as-is, so any permit standard works: EIP-2612,
        DAI-style, or a Permit2 ``permit`` (pass ``target=PERMIT2_ADDRESS``).
        A permit may legitimately fail when someone else already submitted the
        same signature, so callers typically follow up with an allowance-based
        transfer that fails on its own if the allowance is missing.

        Args:
            token: Token the permit grants an allowance on.
            permit_call_data: Complete, pre-encoded permit call data.
            target: Contract to send the permit to. Defaults to ``token``.

        Returns:
            bool: True if the permit succeeded, False if it reverted, returned
            false or returned malformed data.

        Raises:
            ValueError: If ``permit_call_data`` is not valid call data.
            BlockchainInteractionError: On transport failures.
        """
        payload = raw_payload(permit_call_data)
        try:
            await self._execute(target or token, payload, token=token, error_cls=SafeERC20FailedOperation)
        except SafeERC20FailedOperation as e:
            logger.warning(f"Permit on {target or token} not applied: {e.reason}")
            return False
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def safe_balance_of(self, token: str, account: str) -> int:
        """
        Read ``balanceOf(account)``.

        Raises:
            SafeBalanceOfFailed: If the call reverts or does not return one word.
        """
        return await self._read_word(token, encode_balance_of(account), SafeBalanceOfFailed)

    async def safe_allowance(self, token: str, owner: str, spender: str) -> int:
        """
        Read ``allowance(owner, spender)``. Never cached.

        Raises:
            SafeAllowanceFailed: If the call reverts or does not return one word.
        """
        return await self._read_word(token, encode_allowance(owner, spender), SafeAllowanceFailed)

    # ------------------------------------------------------------------
    # Wrapped native asset
    # ------------------------------------------------------------------

    async def safe_deposit(self, weth: str, amount: int) -> None:
        """
        Wrap ``amount`` native units. A zero amount performs no call.

        Raises:
            SafeDepositFailed: If ``deposit()`` fails.
        """
        if amount == 0:
            return
        await self._execute(weth, encode_deposit(amount), token=weth, error_cls=SafeDepositFailed)

    async def safe_withdraw(self, weth: str, amount: int) -> None:
        """Unwrap ``amount`` to the calling account."""
        await self._execute(weth, encode_withdraw(amount), token=weth, error_cls=SafeWithdrawFailed)

    async def safe_withdraw_to(self, weth: str, amount: int, to: str) -> None:
        """Unwrap ``amount`` and send the native units to ``to``."""
        await self._execute(weth, encode_withdraw_to(amount, to), token=weth, error_cls=SafeWithdrawFailed)
