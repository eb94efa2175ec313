"""Agno agent service that restructures extracted text.

The agent is asked for a JSON array of Notion-style blocks. Its answer is
returned raw; src.reflow.salvage turns whatever comes back into text for
paragraph reflow, so prompt drift does not break the pipeline.

Architecture Decisions:

1. **No storage, no knowledge base** - Each conversion is a single
   stateless request. There is no session to continue and nothing to
   retrieve.

2. **Singleton Pattern** - Model client construction is reused across
   requests.

3. **Service Wrapper** - Decouples the HTTP layer from Agno's interface and
   turns every model failure into GenerationUnavailable.
"""

import logging

from agno.agent import Agent
from agno.models.openai import OpenAIChat
from pydantic import ValidationError

from src.agent.config import AgentConfig, get_agent_config
from src.exceptions import GenerationUnavailable

logger = logging.getLogger(__name__)

STRUCTURING_INSTRUCTIONS = [
    "Convert the unstructured text you are given into a JSON array of Notion blocks.",
    "Lines beginning with #, ## or ### are heading_1, heading_2 or heading_3.",
    "Lines starting with -, * or + are bulleted_list_item.",
    "Lines starting with 1., 2., etc. are numbered_list_item.",
    "Everything else is a paragraph.",
    "Merge consecutive lines of the same type into one block.",
    "Keep the original wording. Do not summarize or add content.",
    "Output only the JSON array, with no markdown and no explanations.",
]


class StructuringService:
    """Service wrapping the Agno agent used for text structuring."""

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the structuring service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured Agent with an OpenAI-compatible model.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            description="Turns raw document text into structured Notion blocks.",
            instructions=STRUCTURING_INSTRUCTIONS,
            markdown=False,
        )

    async def structure(self, text: str) -> str:
        """Ask the model to structure a text.

        Args:
            text: Extracted document text.

        Returns:
            The raw model response (JSON, fenced JSON or prose).

        Raises:
            GenerationUnavailable: If the model call fails or returns nothing.
        """
        logger.info(f"Structuring {len(text)} characters with {self._config.model_name}")
        prompt_text = self._config.truncate_input(text)
        if len(prompt_text) < len(text):
            logger.warning(
                f"Sending the first {len(prompt_text)} of {len(text)} characters to the model"
            )
        try:
            response = await self._agent.arun(f"Text:\n{prompt_text}")
        except Exception as e:
            logger.error(f"Structuring request failed: {e}")
            raise GenerationUnavailable(f"Text generation failed: {e}") from e

        content = response.content if response is not None else None
        if not isinstance(content, str) or not content.strip():
            raise GenerationUnavailable("Text generation returned an empty response")

        logger.debug(f"Raw structuring response: {content[:500]}")
        return content


# Module-level singleton instance
_structuring_service: StructuringService | None = None


def get_structuring_service() -> StructuringService:
    """Get or create the global structuring service.

    Returns:
        The StructuringService instance.

    Raises:
        GenerationUnavailable: If no API key is configured.
    """
    global _structuring_service
    if _structuring_service is None:
        try:
            _structuring_service = StructuringService()
        except ValidationError as e:
            raise GenerationUnavailable(
                "Text generation is not configured: set LLM_API_KEY or OPENAI_API_KEY"
            ) from e
    return _structuring_service
