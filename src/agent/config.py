"""Configuration of the structuring model.

Structuring is a one-shot rewrite of extracted document text, so the config
carries what that call needs: the endpoint, a low temperature, and a cap on
how much document text one request may carry.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AgentConfig(BaseModel):
    """Settings for the Agno structuring agent.

    Works with OpenAI or any OpenAI-compatible server via LLM_BASE_URL.

    Attributes:
        api_key: API key for model access.
        base_url: Endpoint root without a trailing slash, or None for OpenAI.
        model_name: Model identifier to use.
        temperature: Sampling temperature; low keeps the output close to the source.
        max_tokens: Maximum tokens in generated response.
        max_input_chars: Document text sent per request; the rest is cut.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL"),
        description="OpenAI-compatible endpoint root",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"),
        min_length=1,
    )
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1, le=128000)
    max_input_chars: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_INPUT_CHARS", "60000")),
        gt=0,
        description="Characters of document text per structuring request",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Require a non-blank key."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str | None) -> str | None:
        """Treat a blank URL as unset and drop a trailing slash."""
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")

    def truncate_input(self, text: str) -> str:
        """Cut document text to ``max_input_chars``."""
        return text[: self.max_input_chars]


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
