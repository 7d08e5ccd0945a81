from typing import Dict, Iterable, List, Optional

from config import PipelineConfig
from core.ports import ChainClient, CompletionService, Signer, TokenRegistry
from executors.base import BaseExecutor
from executors.mint import MintExecutor
from executors.swap import SwapExecutor


class ActionRegistry:
    """
    Name / simile -> executor lookup (case-insensitive).
    """

    def __init__(self, executors: Iterable[BaseExecutor]):
        self._executors: List[BaseExecutor] = list(executors)

    def get(self, requested: str) -> Optional[BaseExecutor]:
        for executor in self._executors:
            if executor.matches(requested):
                return executor
        return None

    def describe(self) -> List[Dict[str, object]]:
        return [
            {
                "name": e.name,
                "similes": list(e.similes),
                "description": e.description,
                "available": e.is_available(),
            }
            for e in self._executors
        ]

    def __iter__(self):
        return iter(self._executors)

    def __len__(self) -> int:
        return len(self._executors)


def build_registry(
    config: PipelineConfig,
    completion: CompletionService,
    registry: TokenRegistry,
    chain: ChainClient,
    signer: Signer,
) -> ActionRegistry:
    return ActionRegistry(
        [
            MintExecutor(config, completion, chain, signer),
            SwapExecutor(config, completion, registry, chain, signer),
        ]
    )
