import asyncio
import sys

from config import get_env_var, load_config
from agents.extraction_agent import PydanticAICompletionService, build_google_model
from core.outcome import Outcome
from executors.registry import build_registry
from services.signer import get_signer
from services.sui_client import SuiExecutionClient
from services.sui_registry import SuiTokenRegistry
from services.sui_rpc import SuiRpcClient


def print_outcome(outcome: Outcome) -> None:
    print("Success:" if outcome.success else f"Failed ({outcome.kind.value}):", outcome.text)


async def main(action: str, user_text: str) -> int:
    config = load_config()
    rpc = SuiRpcClient(config.fullnode_url)
    actions = build_registry(
        config,
        PydanticAICompletionService(
            build_google_model(config.model_name, get_env_var("GOOGLE_API_KEY"))
        ),
        SuiTokenRegistry(rpc),
        SuiExecutionClient(rpc, gas_budget=config.gas_budget),
        get_signer(),
    )

    executor = actions.get(action)
    if executor is None:
        print(f"Unknown action: {action}")
        return 2

    outcome = await executor.execute(user_text, print_outcome)
    return 0 if outcome.success else 1


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print('Usage: python main.py <ACTION> "<request text>"')
        sys.exit(2)
    if sys.platform.startswith("win"):
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    sys.exit(asyncio.run(main(sys.argv[1], " ".join(sys.argv[2:]))))
