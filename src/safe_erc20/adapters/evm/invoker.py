"""
JSON-RPC Raw Invoker

``Web3Invoker`` performs calls against a live EVM node through ``AsyncWeb3``
on behalf of a local ``eth_account`` key. It is the only place this library
touches the network.

State-changing calls are simulated with ``eth_call`` first. The simulation
both captures the return bytes the classifier needs (a mined receipt does
not carry them) and keeps a reverting call from being broadcast at all.
``simulate`` exposes the same dry run so ``SafeERC20`` can classify a call
before anything is signed.
"""

from typing import Any, Dict, Optional

from eth_account import Account
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError

from ...engine.exceptions import BlockchainInteractionError, ConfigurationError
from ...schemas.bases import CallOutcome, CallPayload
from ...utils import hex_to_bytes, logger
from ..bases import BaseInvoker
from .constants import (
    FALLBACK_GAS_LIMIT,
    GAS_ESTIMATE_BUFFER,
    get_private_key_from_env,
    get_rpc_url_from_env,
    get_receipt_timeout_from_env,
)


def _revert_data(exc: ContractLogicError) -> bytes:
    data = getattr(exc, "data", None)
    if isinstance(data, (str, bytes, bytearray)):
        try:
            return hex_to_bytes(data)
        except ValueError:
            return b""
    return b""


class Web3Invoker(BaseInvoker):
    """
    Raw invoker backed by an ``AsyncWeb3`` HTTP provider.

    Configuration is resolved from constructor arguments first, then from the
    environment (``SAFE_ERC20_PRIVATE_KEY``, ``SAFE_ERC20_RPC_URL``,
    ``SAFE_ERC20_RECEIPT_TIMEOUT``; a ``.env`` file is honoured).

    Args:
        private_key: Hex private key of the calling account.
        rpc_url: HTTP(S) JSON-RPC endpoint.
        request_timeout: Per-request HTTP timeout in seconds.
        receipt_timeout: Seconds to wait for a transaction to be mined.
        web3: Pre-built ``AsyncWeb3`` instance; overrides ``rpc_url``.

    Raises:
        ConfigurationError: If no private key or RPC endpoint is available.

    Example:
        invoker = Web3Invoker(rpc_url="https://sepolia.example/rpc")
        safe = SafeERC20(invoker)
        await safe.safe_transfer(token, recipient, 1_000_000)
    """

    def __init__(
        self,
        private_key: Optional[str] = None,
        rpc_url: Optional[str] = None,
        request_timeout: int = 60,
        receipt_timeout: Optional[int] = None,
        web3: Optional[AsyncWeb3] = None,
    ):
        resolved_pk = private_key or get_private_key_from_env()
        if not resolved_pk:
            raise ConfigurationError(
                "Private key not provided. Either pass 'private_key' parameter or "
                "set 'SAFE_ERC20_PRIVATE_KEY' environment variable."
            )
        self.account = Account.from_key(resolved_pk)
        self.wallet_address = AsyncWeb3.to_checksum_address(self.account.address)

        if web3 is None:
            resolved_url = rpc_url or get_rpc_url_from_env()
            if not resolved_url:
                raise ConfigurationError(
                    "RPC URL not provided. Either pass 'rpc_url' parameter or "
                    "set 'SAFE_ERC20_RPC_URL' environment variable."
                )
            web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
                resolved_url,
                request_kwargs={"timeout": request_timeout}
            ))
        self.web3 = web3
        self._receipt_timeout = receipt_timeout or get_receipt_timeout_from_env()

    @property
    def address(self) -> str:
        return self.wallet_address

    def _call_params(self, target: str, payload: CallPayload) -> Dict[str, Any]:
        params = {
            "from": self.wallet_address,
            "to": AsyncWeb3.to_checksum_address(target),
            "data": payload.to_hex(),
        }
        if payload.value:
            params["value"] = payload.value
        return params

    async def _simulate(self, params: Dict[str, Any]) -> CallOutcome:
        try:
            raw = await self.web3.eth.call(params)
        except ContractLogicError as e:
            logger.debug(f"eth_call to {params['to']} reverted: {e}")
            return CallOutcome(call_succeeded=False, return_data=_revert_data(e))
        except Exception as e:
            raise BlockchainInteractionError(f"eth_call to {params['to']} failed: {e}", rpc_method="eth_call") from e
        return CallOutcome(call_succeeded=True, return_data=bytes(raw))

    async def static_call(self, target: str, payload: CallPayload) -> CallOutcome:
        params = self._call_params(target, payload)
        params.pop("value", None)
        return await self._simulate(params)

    async def simulate(self, target: str, payload: CallPayload) -> CallOutcome:
        return await self._simulate(self._call_params(target, payload))

    async def call(self, target: str, payload: CallPayload) -> CallOutcome:
        params = self._call_params(target, payload)

        simulated = await self._simulate(params)
        if not simulated.call_succeeded:
            return simulated

        try:
            tx_params = await self._build_transaction(params)
            signed_tx = self.account.sign_transaction(tx_params)
            tx_hash = await self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            raise BlockchainInteractionError(
                f"Failed to broadcast {payload.operation} to {params['to']}: {e}",
                rpc_method="eth_sendRawTransaction",
            ) from e

        tx_hex = tx_hash.hex()
        logger.debug(f"{payload.operation} sent to {params['to']}: {tx_hex}")

        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout)
        except Exception as e:
            raise BlockchainInteractionError(
                f"Receipt for {tx_hex} not observed: {e}",
                rpc_method="eth_getTransactionReceipt",
            ) from e

        if receipt["status"] == 0:
            logger.debug(f"{payload.operation} transaction {tx_hex} reverted on-chain")
            return CallOutcome(call_succeeded=False)
        return simulated

    async def _build_transaction(self, params: Dict[str, Any]) -> Dict[str, Any]:
        w3 = self.web3
        tx_params = {
            "chainId": await w3.eth.chain_id,
            "nonce": await w3.eth.get_transaction_count(self.wallet_address),
            "to": params["to"],
            "data": params["data"],
            "value": params.get("value", 0),
        }

        # Gas estimation with 10% buffer
        try:
            gas_estimate = await w3.eth.estimate_gas(params)
            tx_params["gas"] = int(gas_estimate * GAS_ESTIMATE_BUFFER)
        except Exception:
            tx_params["gas"] = FALLBACK_GAS_LIMIT

        # EIP-1559 fees, legacy gasPrice when the node has no fee history
        try:
            fee_history = await w3.eth.fee_history(1, "latest", [25.0])
            base_fee = fee_history["baseFeePerGas"][-1]
            priority_fee = fee_history["reward"][0][0]
            tx_params["maxPriorityFeePerGas"] = priority_fee
            tx_params["maxFeePerGas"] = (base_fee * 2) + priority_fee
        except Exception:
            tx_params["gasPrice"] = await w3.eth.gas_price

        return tx_params
