import logging

from agents.prompts import MINT_TEMPLATE
from config import PipelineConfig
from core.outcome import FailureKind, Outcome, StageFailure
from core.ports import ChainClient, CompletionService, Signer
from core.schema import MINT_SCHEMA
from core.transaction import TransactionTicket
from executors.base import BaseExecutor
from models.actions import MintParams
from services.extractor import extract_intent
from services.intent_validator import validate_intent
from services.outcome_reporter import report_failure, report_mint_success
from services.sui_client import submit_transaction
from services.transaction_builder import build_mint_call

logger = logging.getLogger("mint_executor")


class MintExecutor(BaseExecutor):
    """
    Mint an NFT to the signer's own address.
    """

    name = "MINT_NFT"
    similes = ("MINT", "CREATE_NFT", "GENERATE_NFT", "ISSUE_NFT")
    description = "Mint NFT on Sui blockchain"
    action_label = "mint NFT"

    def __init__(
        self,
        config: PipelineConfig,
        completion: CompletionService,
        chain: ChainClient,
        signer: Signer,
    ):
        self.config = config
        self.completion = completion
        self.chain = chain
        self.signer = signer
        self.schema = MINT_SCHEMA

    def is_available(self) -> bool:
        return self.config.mint_configured

    async def run(self, text: str) -> Outcome:
        logger.info("[MINT] starting")

        # Step 1: Extract
        candidate = await extract_intent(
            self.completion,
            MINT_TEMPLATE,
            text,
            self.schema,
            timeout=self.config.extraction_timeout,
        )
        if isinstance(candidate, StageFailure):
            return report_failure(candidate, self.action_label)
        logger.info(f"[MINT] extracted={candidate}")

        # Step 2: Validate
        validation = validate_intent(candidate, self.schema)
        if not validation.ok:
            return report_failure(
                StageFailure(
                    kind=FailureKind.INVALID_INTENT,
                    message=f"Missing required parameters: name, description, or url ({validation.describe()})",
                    intent=candidate,
                    details={
                        "missing": list(validation.missing),
                        "mismatched": list(validation.mismatched),
                    },
                ),
                self.action_label,
            )
        params = MintParams(**validation.values)

        # Step 3: Build + submit
        ticket = TransactionTicket(build_mint_call(self.config, params))
        logger.info(f"[MINT] target={ticket.call.target}")

        result = await submit_transaction(
            self.chain, ticket, self.signer, timeout=self.config.execution_timeout
        )
        if isinstance(result, StageFailure):
            return report_failure(
                StageFailure(
                    kind=result.kind,
                    message=result.message,
                    intent=params.model_dump(),
                    details=result.details,
                ),
                self.action_label,
            )

        return report_mint_success(result, params, self.config.network)
