import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from core.outcome import (
    FailureKind,
    Outcome,
    OutcomeCallback,
    OutcomeHandle,
    StageFailure,
)
from services.outcome_reporter import report_failure

logger = logging.getLogger("executor")


class BaseExecutor(ABC):
    """
    Base contract for all action executors.
    Executors take raw user text and deliver exactly one Outcome.
    """

    name: str = ""
    similes: Tuple[str, ...] = ()
    description: str = ""
    action_label: str = "run action"

    def is_available(self) -> bool:
        return True

    def matches(self, requested: str) -> bool:
        requested = requested.strip().upper()
        return requested == self.name.upper() or requested in {s.upper() for s in self.similes}

    async def execute(self, text: str, callback: Optional[OutcomeCallback] = None) -> Outcome:
        """
        Runs the pipeline once. Never raises: every failure becomes an Outcome
        and the callback fires exactly once.
        """
        handle = OutcomeHandle(callback)
        try:
            if not self.is_available():
                outcome = report_failure(
                    StageFailure(
                        kind=FailureKind.ACTION_UNAVAILABLE,
                        message=f"{self.name} is not configured",
                    ),
                    self.action_label,
                )
            else:
                outcome = await self.run(text)
        except Exception as e:
            logger.exception(f"[UNEXPECTED] action={self.name}")
            outcome = report_failure(
                StageFailure(kind=FailureKind.INTERNAL_ERROR, message=str(e)),
                self.action_label,
            )

        await handle.deliver(outcome)
        return outcome

    @abstractmethod
    async def run(self, text: str) -> Outcome:
        pass
