# models/transaction.py
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class TransactionCall(BaseModel):
    """A single Move call: target function plus ordered arguments."""

    model_config = ConfigDict(frozen=True)

    package: str
    module: str
    function: str
    type_arguments: Tuple[str, ...] = Field(default_factory=tuple)
    arguments: Tuple[Any, ...] = Field(default_factory=tuple)

    @property
    def target(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


class ExecutionResult(BaseModel):
    success: bool
    digest: Optional[str] = None
    message: Optional[str] = None
    raw: Optional[Dict[str, Any]] = None
