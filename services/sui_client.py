# services/sui_client.py

import logging
from asyncio import wait_for, TimeoutError
from typing import Optional, Union

from core.outcome import FailureKind, StageFailure
from core.ports import ChainClient, Signer
from core.transaction import TransactionTicket
from models.transaction import ExecutionResult, TransactionCall
from services.sui_rpc import SuiRpcClient, SuiRpcError

logger = logging.getLogger("sui_client")


def explorer_link(network: str, digest: str) -> Optional[str]:
    """None for networks without a public explorer (devnet, localnet)."""
    network = network.lower()
    if network == "mainnet":
        return f"https://suivision.xyz/txblock/{digest}"
    if network == "testnet":
        return f"https://testnet.suivision.xyz/txblock/{digest}"
    return None


class SuiExecutionClient:
    """
    Build -> sign -> execute through the fullnode JSON-RPC:
    1. unsafe_moveCall returns unsigned transaction bytes
    2. the signer signs them
    3. sui_executeTransactionBlock submits and waits for local execution
    """

    def __init__(self, rpc: SuiRpcClient, gas_budget: int = 10_000_000):
        self.rpc = rpc
        self.gas_budget = gas_budget

    async def submit(self, call: TransactionCall, signer: Signer) -> ExecutionResult:
        try:
            unsigned = await self.rpc.call(
                "unsafe_moveCall",
                [
                    signer.address,
                    call.package,
                    call.module,
                    call.function,
                    list(call.type_arguments),
                    list(call.arguments),
                    None,
                    str(self.gas_budget),
                ],
            )
            tx_bytes = (unsigned or {}).get("txBytes")
            if not tx_bytes:
                logger.warning(f"[BUILD FAILED] target={call.target}, no txBytes returned")
                return ExecutionResult(
                    success=False,
                    message="Fullnode did not return transaction bytes for the move call",
                )
            signature = signer.sign_transaction(tx_bytes)

            response = await self.rpc.call(
                "sui_executeTransactionBlock",
                [
                    tx_bytes,
                    [signature],
                    {"showEffects": True},
                    "WaitForLocalExecution",
                ],
            )
        except SuiRpcError as e:
            logger.warning(f"[RPC REJECTED] target={call.target}, error={e.message}")
            return ExecutionResult(success=False, message=e.message)

        if not response:
            logger.warning(f"[TX UNKNOWN] target={call.target}, empty execution response")
            return ExecutionResult(
                success=False,
                message="Fullnode returned an empty response for the executed transaction",
            )

        digest = response.get("digest")
        status = ((response.get("effects") or {}).get("status") or {})
        if status.get("status") == "success":
            logger.info(f"[TX CONFIRMED] target={call.target}, digest={digest}")
            return ExecutionResult(success=True, digest=digest, raw=response)

        error = status.get("error") or "Transaction execution failed"
        logger.warning(f"[TX FAILED] target={call.target}, digest={digest}, error={error}")
        return ExecutionResult(success=False, digest=digest, message=error, raw=response)


async def submit_transaction(
    client: ChainClient,
    ticket: TransactionTicket,
    signer: Signer,
    timeout: float = 60,
) -> Union[ExecutionResult, StageFailure]:
    """
    Exactly one submission, never retried.
    """
    ticket.mark_submitted()
    try:
        result = await wait_for(client.submit(ticket.call, signer), timeout=timeout)
    except TimeoutError:
        result = ExecutionResult(
            success=False,
            message=f"Transaction submission timed out after {timeout:g}s",
        )
    except Exception as e:
        logger.exception(f"[SUBMIT ERROR] target={ticket.call.target}")
        result = ExecutionResult(success=False, message=str(e))

    ticket.settle(result)
    if result.success:
        return result

    return StageFailure(
        kind=FailureKind.EXECUTION_FAILURE,
        message=result.message or "Transaction was rejected",
        details={"digest": result.digest} if result.digest else {},
    )
