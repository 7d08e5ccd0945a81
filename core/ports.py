# core/ports.py
"""
Narrow interfaces of the external collaborators the pipeline depends on.
"""

from typing import Any, Dict, Optional, Protocol

from core.schema import IntentSchema
from models.token import TokenMetadata
from models.transaction import ExecutionResult, TransactionCall


class CompletionService(Protocol):
    """Text-completion backend producing a schema-shaped object."""

    async def extract(self, prompt_text: str, schema: IntentSchema) -> Dict[str, Any]:
        ...


class TokenRegistry(Protocol):
    """Maps a symbol or coin type to canonical metadata, None when unknown."""

    async def resolve(self, reference: str, network: str) -> Optional[TokenMetadata]:
        ...


class Signer(Protocol):
    """Opaque signing identity"""

    address: str

    def sign_transaction(self, tx_bytes_b64: str) -> str:
        """Sign base64 transaction bytes and return the serialized signature"""
        ...


class ChainClient(Protocol):
    async def submit(self, call: TransactionCall, signer: Signer) -> ExecutionResult:
        ...
