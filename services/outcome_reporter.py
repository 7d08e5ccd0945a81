# services/outcome_reporter.py

from typing import Any, Dict, Optional

from core.outcome import Outcome, StageFailure
from models.actions import MintParams, SwapParams
from models.transaction import ExecutionResult
from services.sui_client import explorer_link


def report_failure(failure: StageFailure, action_label: str) -> Outcome:
    """
    Diagnostic message is kept verbatim; the parsed intent rides along
    for caller-side debugging.
    """
    content: Dict[str, Any] = {
        "error": {"type": failure.kind.value, "message": failure.message},
    }
    if failure.intent is not None:
        content["intent"] = failure.intent
    content.update(failure.details)

    return Outcome(
        success=False,
        text=f"Failed to {action_label}: {failure.message}",
        content=content,
        kind=failure.kind,
    )


def report_mint_success(
    result: ExecutionResult,
    params: MintParams,
    network: str,
) -> Outcome:
    link = explorer_link(network, result.digest) if result.digest else None
    text = f"Successfully minted NFT '{params.name}'"
    if link:
        text += f", Transaction: {link}"

    return Outcome(
        success=True,
        text=text,
        content={
            "digest": result.digest,
            "explorer_url": link,
            "intent": params.model_dump(),
        },
    )


def report_swap_success(
    result: ExecutionResult,
    intent: Dict[str, Any],
    params: SwapParams,
    network: str,
    min_amount_out_defaulted: Optional[bool] = False,
) -> Outcome:
    link = explorer_link(network, result.digest) if result.digest else None
    text = (
        f"Successfully swapped {intent['amount']} {params.from_token.symbol} "
        f"to {params.destination_token.symbol}"
    )
    if link:
        text += f", Transaction: {link}"

    return Outcome(
        success=True,
        text=text,
        content={
            "digest": result.digest,
            "explorer_url": link,
            "intent": intent,
            "amount_in": str(params.amount_in),
            "min_amount_out": str(params.min_amount_out),
            "slippage": params.slippage,
            "from_token": params.from_token.address,
            "destination_token": params.destination_token.address,
            "min_amount_out_defaulted": bool(min_amount_out_defaulted),
        },
    )
