"""Agno agent logic for LLM-assisted structuring.

Responsibilities:
    - Agent initialization with OpenAI-compatible models
    - Fixed instructions asking for Notion-style JSON blocks
    - Mapping model failures to GenerationUnavailable

Maintains clean separation from the HTTP layer.
"""

from src.agent.config import AgentConfig, get_agent_config
from src.agent.structuring_agent import StructuringService, get_structuring_service

__all__ = ["AgentConfig", "StructuringService", "get_agent_config", "get_structuring_service"]
