"""Agno agent logic for Gemini text generation.

Responsibilities:
    - Agent initialization with a fixed Gemini model
    - Streaming token generation as plain text chunks
    - Folding every model failure into GenerationError

Kept separate from the HTTP layer and from the chat UI, which receive the
service as an injected dependency.
"""

from seka_portal.agent.chat_agent import AgentService, GenerationError, get_agent_service
from seka_portal.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "AgentService",
    "GenerationError",
    "get_agent_config",
    "get_agent_service",
]
