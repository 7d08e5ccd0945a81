import asyncio

from config import PipelineConfig
from core.outcome import FailureKind
from executors.mint import MintExecutor
from models.transaction import ExecutionResult
from tests.fakes import TX_DIGEST, FakeChain, FakeCompletion

SPRING_POEM = {
    "name": "Spring Poem",
    "description": "A poem about spring",
    "url": "ipfs://Qm123",
}
SPRING_POEM_TEXT = "mint NFT named 'Spring Poem', description 'A poem about spring', url 'ipfs://Qm123'"


def run_mint(config, completion, chain, signer, callback, text=SPRING_POEM_TEXT):
    executor = MintExecutor(config, completion, chain, signer)
    return asyncio.run(executor.execute(text, callback))


def test_mint_succeeds_with_transaction_reference(testnet_config, chain, signer, callback):
    outcome = run_mint(testnet_config, FakeCompletion(SPRING_POEM), chain, signer, callback)

    assert outcome.success
    assert outcome.content["digest"] == TX_DIGEST
    assert outcome.content["explorer_url"] == f"https://testnet.suivision.xyz/txblock/{TX_DIGEST}"
    assert callback.outcomes == [outcome]

    (call, _), = chain.calls
    assert call.target == "0xnftpackage::testnet_nft::mint_to_sender"
    assert call.arguments == ("Spring Poem", "A poem about spring", "ipfs://Qm123")


def test_mint_has_no_network_gate(mainnet_config, chain, signer, callback):
    outcome = run_mint(mainnet_config, FakeCompletion(SPRING_POEM), chain, signer, callback)

    assert outcome.success


def test_missing_url_is_invalid(testnet_config, chain, signer, callback):
    completion = FakeCompletion({**SPRING_POEM, "url": None})

    outcome = run_mint(testnet_config, completion, chain, signer, callback)

    assert outcome.kind is FailureKind.INVALID_INTENT
    assert "Missing required parameters" in outcome.text
    assert outcome.content["intent"]["url"] is None
    assert chain.calls == []


def test_unparseable_extraction(testnet_config, chain, signer, callback):
    outcome = run_mint(testnet_config, FakeCompletion("not json"), chain, signer, callback)

    assert outcome.kind is FailureKind.EXTRACTION_FAILURE
    assert "unparseable" in outcome.text
    assert chain.calls == []


def test_extraction_timeout(testnet_config, chain, signer, callback):
    from dataclasses import replace

    class SlowCompletion:
        async def extract(self, prompt_text, schema):
            await asyncio.sleep(5)

    config = replace(testnet_config, extraction_timeout=0.01)
    outcome = run_mint(config, SlowCompletion(), chain, signer, callback)

    assert outcome.kind is FailureKind.EXTRACTION_FAILURE
    assert "timed out" in outcome.text


def test_rejected_mint_reports_chain_message(testnet_config, signer, callback):
    chain = FakeChain(result=ExecutionResult(success=False, message="MoveAbort in mint_to_sender"))

    outcome = run_mint(testnet_config, FakeCompletion(SPRING_POEM), chain, signer, callback)

    assert outcome.kind is FailureKind.EXECUTION_FAILURE
    assert outcome.text == "Failed to mint NFT: MoveAbort in mint_to_sender"
    assert outcome.content["intent"] == SPRING_POEM


def test_missing_contract_config_is_unavailable(chain, signer, callback):
    completion = FakeCompletion(SPRING_POEM)

    outcome = run_mint(PipelineConfig(nft_package_id="0xpkg"), completion, chain, signer, callback)

    assert outcome.kind is FailureKind.ACTION_UNAVAILABLE
    assert completion.prompts == []
    assert chain.calls == []
