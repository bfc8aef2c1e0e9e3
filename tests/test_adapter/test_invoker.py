"""
Test suite for Web3Invoker with a mocked AsyncWeb3.
Tests: 1) configuration 2) static calls and reverts 3) transaction pipeline 4) transport errors
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from hexbytes import HexBytes
from web3.exceptions import ContractLogicError

from safe_erc20.adapters.evm.constants import FALLBACK_GAS_LIMIT
from safe_erc20.adapters.evm.encoders import encode_transfer, encode_deposit, encode_balance_of
from safe_erc20.adapters.evm.invoker import Web3Invoker
from safe_erc20.adapters.evm.adapter import SafeERC20
from safe_erc20.engine.exceptions import BlockchainInteractionError, ConfigurationError, SafeTransferFailed

from test_mocks import (
    MOCK_OWNER_PRIVATE_KEY,
    MOCK_OWNER_ADDRESS,
    MOCK_RECIPIENT_ADDRESS,
    MOCK_TOKEN_ADDRESS,
    MOCK_CHAIN_ID,
)

TRUE_WORD = (1).to_bytes(32, "big")
REVERT_DATA = "0x08c379a0" + "00" * 32


class _Completed:
    """Re-awaitable stand-in for AsyncWeb3 properties such as ``eth.chain_id``."""

    def __init__(self, value):
        self.value = value

    def __await__(self):
        if False:
            yield
        return self.value


def create_mock_web3(call_result: bytes = TRUE_WORD, receipt_status: int = 1) -> MagicMock:
    w3 = MagicMock()
    w3.eth.call = AsyncMock(return_value=HexBytes(call_result))
    w3.eth.chain_id = _Completed(MOCK_CHAIN_ID)
    w3.eth.gas_price = _Completed(20000000000)
    w3.eth.get_transaction_count = AsyncMock(return_value=7)
    w3.eth.estimate_gas = AsyncMock(return_value=50000)
    w3.eth.fee_history = AsyncMock(return_value={"baseFeePerGas": [10, 12], "reward": [[2]]})
    w3.eth.send_raw_transaction = AsyncMock(return_value=HexBytes("0x" + "ab" * 32))
    w3.eth.wait_for_transaction_receipt = AsyncMock(return_value={"status": receipt_status})
    return w3


def create_invoker(w3: MagicMock) -> Web3Invoker:
    return Web3Invoker(private_key=MOCK_OWNER_PRIVATE_KEY, web3=w3, receipt_timeout=5)


# ========================================================================
# Configuration
# ========================================================================

def test_missing_private_key(monkeypatch):
    monkeypatch.delenv("SAFE_ERC20_PRIVATE_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        Web3Invoker(rpc_url="http://localhost:8545")


def test_missing_rpc_url(monkeypatch):
    monkeypatch.delenv("SAFE_ERC20_RPC_URL", raising=False)

    with pytest.raises(ConfigurationError):
        Web3Invoker(private_key=MOCK_OWNER_PRIVATE_KEY)


def test_configuration_from_environment(monkeypatch):
    monkeypatch.setenv("SAFE_ERC20_PRIVATE_KEY", MOCK_OWNER_PRIVATE_KEY)
    monkeypatch.setenv("SAFE_ERC20_RPC_URL", "http://localhost:8545")
    monkeypatch.setenv("SAFE_ERC20_RECEIPT_TIMEOUT", "30")

    invoker = Web3Invoker()

    assert invoker.address == MOCK_OWNER_ADDRESS
    assert invoker._receipt_timeout == 30


# ========================================================================
# Static calls
# ========================================================================

@pytest.mark.asyncio
async def test_static_call_returns_data():
    w3 = create_mock_web3(call_result=(42).to_bytes(32, "big"))
    invoker = create_invoker(w3)

    outcome = await invoker.static_call(MOCK_TOKEN_ADDRESS, encode_balance_of(MOCK_OWNER_ADDRESS))

    assert outcome.call_succeeded
    assert int.from_bytes(outcome.return_data, "big") == 42
    params = w3.eth.call.await_args.args[0]
    assert params["from"] == MOCK_OWNER_ADDRESS
    assert params["to"] == MOCK_TOKEN_ADDRESS
    assert "value" not in params


@pytest.mark.asyncio
async def test_static_call_revert_is_failed_outcome():
    w3 = create_mock_web3()
    w3.eth.call = AsyncMock(side_effect=ContractLogicError("execution reverted", data=REVERT_DATA))
    invoker = create_invoker(w3)

    outcome = await invoker.static_call(MOCK_TOKEN_ADDRESS, encode_balance_of(MOCK_OWNER_ADDRESS))

    assert not outcome.call_succeeded
    assert outcome.return_data == bytes.fromhex(REVERT_DATA[2:])


@pytest.mark.asyncio
async def test_static_call_transport_error_raises():
    w3 = create_mock_web3()
    w3.eth.call = AsyncMock(side_effect=ConnectionError("connection refused"))
    invoker = create_invoker(w3)

    with pytest.raises(BlockchainInteractionError) as exc_info:
        await invoker.static_call(MOCK_TOKEN_ADDRESS, encode_balance_of(MOCK_OWNER_ADDRESS))

    assert exc_info.value.rpc_method == "eth_call"


# ========================================================================
# State-changing calls
# ========================================================================

@pytest.mark.asyncio
async def test_call_broadcasts_and_returns_simulated_data():
    w3 = create_mock_web3()
    invoker = create_invoker(w3)

    outcome = await invoker.call(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))

    assert outcome.call_succeeded
    assert outcome.return_data == TRUE_WORD
    w3.eth.send_raw_transaction.assert_awaited_once()
    w3.eth.wait_for_transaction_receipt.assert_awaited_once()
    assert w3.eth.wait_for_transaction_receipt.await_args.kwargs["timeout"] == 5


@pytest.mark.asyncio
async def test_call_revert_is_not_broadcast():
    w3 = create_mock_web3()
    w3.eth.call = AsyncMock(side_effect=ContractLogicError("execution reverted"))
    invoker = create_invoker(w3)

    outcome = await invoker.call(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))

    assert not outcome.call_succeeded
    assert outcome.return_data == b""
    w3.eth.send_raw_transaction.assert_not_awaited()


@pytest.mark.asyncio
async def test_call_failed_receipt_is_failed_outcome():
    w3 = create_mock_web3(receipt_status=0)
    invoker = create_invoker(w3)

    outcome = await invoker.call(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))

    assert not outcome.call_succeeded


@pytest.mark.asyncio
async def test_call_broadcast_error_raises():
    w3 = create_mock_web3()
    w3.eth.send_raw_transaction = AsyncMock(side_effect=ConnectionError("connection reset"))
    invoker = create_invoker(w3)

    with pytest.raises(BlockchainInteractionError) as exc_info:
        await invoker.call(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))

    assert exc_info.value.rpc_method == "eth_sendRawTransaction"


@pytest.mark.asyncio
async def test_call_receipt_timeout_raises():
    w3 = create_mock_web3()
    w3.eth.wait_for_transaction_receipt = AsyncMock(side_effect=TimeoutError("not mined"))
    invoker = create_invoker(w3)

    with pytest.raises(BlockchainInteractionError):
        await invoker.call(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))


@pytest.mark.asyncio
async def test_call_attaches_value():
    w3 = create_mock_web3(call_result=b"")
    invoker = create_invoker(w3)

    outcome = await invoker.call(MOCK_TOKEN_ADDRESS, encode_deposit(500))

    assert outcome.call_succeeded
    assert w3.eth.call.await_args.args[0]["value"] == 500


# ========================================================================
# Transaction building
# ========================================================================

@pytest.mark.asyncio
async def test_build_transaction_eip1559():
    w3 = create_mock_web3()
    invoker = create_invoker(w3)
    params = invoker._call_params(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))

    tx = await invoker._build_transaction(params)

    assert tx["chainId"] == MOCK_CHAIN_ID
    assert tx["nonce"] == 7
    assert tx["gas"] == 55000
    assert tx["maxPriorityFeePerGas"] == 2
    assert tx["maxFeePerGas"] == 12 * 2 + 2
    assert "gasPrice" not in tx
    assert "from" not in tx


@pytest.mark.asyncio
async def test_build_transaction_fallbacks():
    w3 = create_mock_web3()
    w3.eth.estimate_gas = AsyncMock(side_effect=ValueError("cannot estimate"))
    w3.eth.fee_history = AsyncMock(side_effect=ValueError("method not found"))
    invoker = create_invoker(w3)
    params = invoker._call_params(MOCK_TOKEN_ADDRESS, encode_transfer(MOCK_RECIPIENT_ADDRESS, 1))

    tx = await invoker._build_transaction(params)

    assert tx["gas"] == FALLBACK_GAS_LIMIT
    assert tx["gasPrice"] == 20000000000
    assert "maxFeePerGas" not in tx


# ========================================================================
# Simulation before commit
# ========================================================================

@pytest.mark.asyncio
async def test_simulate_keeps_value_and_never_broadcasts():
    w3 = create_mock_web3(call_result=b"")
    invoker = create_invoker(w3)

    outcome = await invoker.simulate(MOCK_TOKEN_ADDRESS, encode_deposit(500))

    assert outcome.call_succeeded
    assert w3.eth.call.await_args.args[0]["value"] == 500
    w3.eth.send_raw_transaction.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("call_result", [bytes(32), b"\x01" * 31])
async def test_rejected_transfer_is_not_broadcast(call_result):
    w3 = create_mock_web3(call_result=call_result)
    safe = SafeERC20(create_invoker(w3))

    with pytest.raises(SafeTransferFailed):
        await safe.safe_transfer(MOCK_TOKEN_ADDRESS, MOCK_RECIPIENT_ADDRESS, 1)

    w3.eth.send_raw_transaction.assert_not_awaited()
    w3.eth.wait_for_transaction_receipt.assert_not_awaited()


@pytest.mark.asyncio
async def test_accepted_transfer_is_broadcast_once():
    w3 = create_mock_web3()
    safe = SafeERC20(create_invoker(w3))

    await safe.safe_transfer(MOCK_TOKEN_ADDRESS, MOCK_RECIPIENT_ADDRESS, 1)

    w3.eth.send_raw_transaction.assert_awaited_once()
