import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.outcome import FailureKind, Outcome, OutcomeAlreadyDelivered, OutcomeHandle
from executors.mint import MintExecutor
from executors.registry import build_registry
from executors.swap import SwapExecutor
from models.transaction import ExecutionResult
from tests.fakes import FakeChain, FakeCompletion, RecordingCallback

SWAP = {"from_token": "SUI", "destination_token": "USDC", "amount": 1}
MINT = {"name": "a", "description": "b", "url": "c"}


# ---------------------------------------------------------------------
# OutcomeHandle
# ---------------------------------------------------------------------

def test_handle_refuses_second_delivery():
    callback = RecordingCallback()
    handle = OutcomeHandle(callback)
    outcome = Outcome(success=True, text="ok", content={})

    asyncio.run(handle.deliver(outcome))
    with pytest.raises(OutcomeAlreadyDelivered):
        asyncio.run(handle.deliver(outcome))

    assert callback.outcomes == [outcome]
    assert handle.outcome is outcome


def test_async_callback_is_awaited():
    callback = AsyncMock()
    outcome = Outcome(success=True, text="ok", content={})

    asyncio.run(OutcomeHandle(callback).deliver(outcome))

    callback.assert_awaited_once_with(outcome)


def test_raising_callback_does_not_escape():
    callback = MagicMock(side_effect=RuntimeError("ui crashed"))
    handle = OutcomeHandle(callback)

    asyncio.run(handle.deliver(Outcome(success=True, text="ok", content={})))

    assert handle.delivered
    callback.assert_called_once()


# ---------------------------------------------------------------------
# Exactly once, whichever stage fails
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "completion, chain, expected",
    [
        (FakeCompletion(error=RuntimeError("down")), FakeChain(), FailureKind.EXTRACTION_FAILURE),
        (FakeCompletion({"from_token": "SUI"}), FakeChain(), FailureKind.INVALID_INTENT),
        (FakeCompletion({**SWAP, "from_token": "NOPE"}), FakeChain(), FailureKind.TOKEN_NOT_FOUND),
        (
            FakeCompletion(SWAP),
            FakeChain(result=ExecutionResult(success=False, message="rejected")),
            FailureKind.EXECUTION_FAILURE,
        ),
        (FakeCompletion(SWAP), FakeChain(), None),
    ],
)
def test_swap_callback_fires_once(mainnet_config, registry, signer, completion, chain, expected):
    callback = RecordingCallback()
    executor = SwapExecutor(mainnet_config, completion, registry, chain, signer)

    outcome = asyncio.run(executor.execute("swap", callback))

    assert len(callback.outcomes) == 1
    assert callback.outcomes[0] is outcome
    assert outcome.kind is expected
    assert outcome.success is (expected is None)


def test_unexpected_exception_becomes_internal_error(mainnet_config, chain, signer):
    callback = RecordingCallback()
    executor = MintExecutor(mainnet_config, FakeCompletion(MINT), chain, signer)

    with patch("executors.mint.build_mint_call", side_effect=KeyError("boom")):
        outcome = asyncio.run(executor.execute("mint", callback))

    assert outcome.kind is FailureKind.INTERNAL_ERROR
    assert callback.outcomes == [outcome]
    assert chain.calls == []


def test_execute_without_callback_still_returns_outcome(mainnet_config, chain, signer):
    executor = MintExecutor(mainnet_config, FakeCompletion(MINT), chain, signer)

    outcome = asyncio.run(executor.execute("mint"))

    assert outcome.success


# ---------------------------------------------------------------------
# Registry lookup
# ---------------------------------------------------------------------

def test_registry_matches_names_and_similes(mainnet_config, registry, chain, signer):
    actions = build_registry(mainnet_config, FakeCompletion(), registry, chain, signer)

    assert isinstance(actions.get("mint"), MintExecutor)
    assert isinstance(actions.get("create_nft"), MintExecutor)
    assert isinstance(actions.get("SWAP_TOKENS"), SwapExecutor)
    assert actions.get("bridge") is None
    assert [a["name"] for a in actions.describe()] == ["MINT_NFT", "SWAP_TOKEN"]
