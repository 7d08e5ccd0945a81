# core/transaction.py
from enum import Enum

from models.transaction import ExecutionResult, TransactionCall


class TransactionState(str, Enum):
    BUILT = "built"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        return self in {TransactionState.CONFIRMED, TransactionState.REJECTED}


class TransactionStateError(RuntimeError):
    pass


class TransactionTicket:
    """
    Tracks one built call through BUILT -> SUBMITTED -> CONFIRMED | REJECTED.
    Submission is single-shot.
    """

    def __init__(self, call: TransactionCall):
        self.call = call
        self.state = TransactionState.BUILT
        self.result: ExecutionResult | None = None

    def mark_submitted(self) -> None:
        if self.state is not TransactionState.BUILT:
            raise TransactionStateError(
                f"Transaction {self.call.target} already {self.state.value}"
            )
        self.state = TransactionState.SUBMITTED

    def settle(self, result: ExecutionResult) -> None:
        if self.state is not TransactionState.SUBMITTED:
            raise TransactionStateError(
                f"Cannot settle transaction in state {self.state.value}"
            )
        self.result = result
        self.state = (
            TransactionState.CONFIRMED if result.success else TransactionState.REJECTED
        )
