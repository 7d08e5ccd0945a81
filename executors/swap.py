import logging

from agents.prompts import SWAP_TEMPLATE
from config import PipelineConfig
from core.outcome import FailureKind, Outcome, StageFailure
from core.ports import ChainClient, CompletionService, Signer, TokenRegistry
from core.schema import SWAP_SCHEMA
from core.transaction import TransactionTicket
from executors.base import BaseExecutor
from models.actions import U64_MAX, SwapParams
from services.extractor import extract_intent
from services.intent_validator import validate_intent
from services.network_gate import check_network
from services.outcome_reporter import report_failure, report_swap_success
from services.sui_client import submit_transaction
from services.token_resolver import TokenResolver, to_base_units
from services.transaction_builder import build_swap_call

logger = logging.getLogger("swap_executor")


class SwapExecutor(BaseExecutor):
    """
    Swap from any token in the agent's wallet to another token.
    """

    name = "SWAP_TOKEN"
    similes = ("SWAP_TOKENS", "SWAP")
    description = "Swap from any token in the agent's wallet to another token"
    action_label = "swap"

    def __init__(
        self,
        config: PipelineConfig,
        completion: CompletionService,
        registry: TokenRegistry,
        chain: ChainClient,
        signer: Signer,
    ):
        self.config = config
        self.completion = completion
        self.registry = registry
        self.chain = chain
        self.signer = signer
        self.schema = SWAP_SCHEMA.with_defaults(
            slippage=config.default_slippage,
            min_amount_out=config.default_min_amount_out,
        )

    def is_available(self) -> bool:
        return self.config.swap_configured

    def _invalid(self, message: str, intent, **details) -> Outcome:
        return report_failure(
            StageFailure(
                kind=FailureKind.INVALID_INTENT,
                message=message,
                intent=intent,
                details=details,
            ),
            self.action_label,
        )

    async def run(self, text: str) -> Outcome:
        logger.info("Starting SWAP_TOKEN handler...")

        # -----------------
        # Extract
        # -----------------
        candidate = await extract_intent(
            self.completion,
            SWAP_TEMPLATE,
            text,
            self.schema,
            timeout=self.config.extraction_timeout,
        )
        if isinstance(candidate, StageFailure):
            return report_failure(candidate, self.action_label)
        logger.info(f"Swap content: {candidate}")

        # -----------------
        # Validate
        # -----------------
        validation = validate_intent(candidate, self.schema)
        if not validation.ok:
            logger.warning(f"Invalid content for SWAP_TOKEN action: {validation.describe()}")
            return self._invalid(
                f"Unable to process swap request. Invalid content provided ({validation.describe()})",
                candidate,
                missing=list(validation.missing),
                mismatched=list(validation.mismatched),
            )
        intent = validation.values

        min_amount_out_defaulted = "min_amount_out" in validation.defaulted
        if min_amount_out_defaulted:
            logger.warning(
                f"min_amount_out not specified, defaulting to {intent['min_amount_out']}"
            )

        # -----------------
        # Network gate
        # -----------------
        gate = check_network(self.config.network, self.config.swap_allowed_networks, intent)
        if gate is not None:
            return report_failure(gate, self.action_label)

        # -----------------
        # Resolve
        # -----------------
        resolver = TokenResolver(self.registry, self.config.network)
        pair = await resolver.resolve_pair(
            intent["from_token"], intent["destination_token"], intent=intent
        )
        if isinstance(pair, StageFailure):
            return report_failure(pair, self.action_label)
        from_token, destination_token = pair
        logger.info(f"From token: {from_token.address}, destination token: {destination_token.address}")

        if from_token.address == destination_token.address:
            return self._invalid(
                f"Cannot swap {from_token.symbol} to itself", intent
            )

        try:
            amount_in = to_base_units(intent["amount"], from_token.decimals)
            min_amount_out = to_base_units(intent["min_amount_out"], destination_token.decimals)
        except ValueError as e:
            return self._invalid(f"Could not convert amounts: {e}", intent)

        if amount_in == 0:
            return self._invalid(
                f"Amount {intent['amount']} is smaller than one base unit of {from_token.symbol}",
                intent,
            )

        oversized = [
            label
            for label, value in (("amount", amount_in), ("min_amount_out", min_amount_out))
            if value > U64_MAX
        ]
        if oversized:
            return self._invalid(
                f"Amount exceeds u64 range: {', '.join(oversized)}",
                intent,
                oversized=oversized,
            )

        params = SwapParams(
            from_token=from_token,
            destination_token=destination_token,
            amount_in=amount_in,
            min_amount_out=min_amount_out,
            slippage=intent["slippage"],
        )
        logger.info(f"Swap amount: {amount_in}, min amount out: {min_amount_out}")

        # -----------------
        # Build + submit
        # -----------------
        ticket = TransactionTicket(build_swap_call(self.config, params))
        result = await submit_transaction(
            self.chain, ticket, self.signer, timeout=self.config.execution_timeout
        )
        if isinstance(result, StageFailure):
            return report_failure(
                StageFailure(
                    kind=result.kind,
                    message=result.message,
                    intent=intent,
                    details=result.details,
                ),
                self.action_label,
            )

        return report_swap_success(
            result,
            intent,
            params,
            self.config.network,
            min_amount_out_defaulted=min_amount_out_defaulted,
        )
