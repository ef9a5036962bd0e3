"""Base agent configuration for Pydantic AI agents."""

from pydantic_ai import Agent

from rfp_desk.config import LLM_MODEL, LLM_RETRIES, OPENAI_API_KEY
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.agents")


# Shared agent config: model and retries from settings
def create_agent(name: str, system_prompt: str, **kwargs) -> Agent:
    """Create a Pydantic AI agent with the configured model and shared settings."""
    if LLM_MODEL.startswith("openai:") and not OPENAI_API_KEY:
        logger.warning("agents.missing_api_key", agent=name, model=LLM_MODEL)
    return Agent(
        LLM_MODEL,
        name=name,
        system_prompt=system_prompt,
        retries=LLM_RETRIES,
        **kwargs,
    )
