import logging
from typing import Any, Dict, Optional

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from agents.prompts import EXTRACTION_SYSTEM_PROMPT
from core.schema import IntentSchema

logger = logging.getLogger("extraction_agent")


def build_google_model(model_name: str, api_key: str) -> GoogleModel:
    provider = GoogleProvider(api_key=api_key)
    return GoogleModel(model_name, provider=provider)


# -----------------------------
# Intent Extraction Agent
# -----------------------------
class PydanticAICompletionService:
    """
    Completion service backed by a pydantic-ai Agent.
    The schema's draft model is the agent's output type, so the LLM is
    constrained to the schema's shape while values stay untrusted.
    """

    def __init__(self, model: Model | str, system_prompt: Optional[str] = None):
        self.model = model
        self.system_prompt = system_prompt or EXTRACTION_SYSTEM_PROMPT
        self._agents: Dict[str, Agent] = {}

    def _agent_for(self, schema: IntentSchema) -> Agent:
        agent = self._agents.get(schema.name)
        if agent is None:
            agent = Agent(
                self.model,
                system_prompt=self.system_prompt,
                output_type=schema.draft_model(),
            )
            self._agents[schema.name] = agent
        return agent

    async def extract(self, prompt_text: str, schema: IntentSchema) -> Dict[str, Any]:
        result = await self._agent_for(schema).run(prompt_text)
        output = result.output
        logger.info(f"[EXTRACTED] schema={schema.name}, output={output}")
        return output.model_dump()
