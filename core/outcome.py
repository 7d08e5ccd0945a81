# core/outcome.py
import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from pydantic import BaseModel

logger = logging.getLogger("outcome")


class FailureKind(str, Enum):
    EXTRACTION_FAILURE = "ExtractionFailure"
    INVALID_INTENT = "InvalidIntent"
    UNSUPPORTED_NETWORK = "UnsupportedNetwork"
    TOKEN_NOT_FOUND = "TokenNotFound"
    EXECUTION_FAILURE = "ExecutionFailure"
    ACTION_UNAVAILABLE = "ActionUnavailable"

    # Unexpected exceptions only; business failures use the kinds above
    INTERNAL_ERROR = "InternalError"


@dataclass(frozen=True)
class StageFailure:
    """
    Returned (never raised) by a stage that cannot continue.
    """

    kind: FailureKind
    message: str
    intent: Optional[Dict[str, Any]] = None
    details: Dict[str, Any] = field(default_factory=dict)


class Outcome(BaseModel):
    """Terminal, caller-visible result of one pipeline run."""

    success: bool
    text: str
    content: Dict[str, Any]
    kind: Optional[FailureKind] = None


OutcomeCallback = Callable[[Outcome], Union[None, Awaitable[None]]]


class OutcomeAlreadyDelivered(RuntimeError):
    pass


class OutcomeHandle:
    """
    Single-use delivery port for the caller's callback.
    """

    def __init__(self, callback: Optional[OutcomeCallback] = None):
        self._callback = callback
        self._delivered: Optional[Outcome] = None

    @property
    def delivered(self) -> bool:
        return self._delivered is not None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._delivered

    async def deliver(self, outcome: Outcome) -> None:
        if self._delivered is not None:
            raise OutcomeAlreadyDelivered("Outcome was already delivered for this run")
        self._delivered = outcome

        if self._callback is None:
            return
        try:
            result = self._callback(outcome)
            if inspect.isawaitable(result):
                await result
        except Exception:
            # The caller's callback must not break the pipeline contract
            logger.exception("Outcome callback raised")
