"""Agno agent service streaming Gemini responses.

The service is the model-service boundary for the chat assistant: one
prompt in, a lazy sequence of text chunks out. Each call opens a fresh
stream; nothing is carried between turns, so the agent is built without
storage, history or knowledge.

Failures of any kind surface as GenerationError so callers only need to
handle one error type.
"""

import logging
from collections.abc import AsyncGenerator

from agno.agent import Agent
from agno.models.google import Gemini
from agno.run.agent import RunEvent

from seka_portal.agent.config import AgentConfig, get_agent_config

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when a streamed generation request fails."""

    pass


class AgentService:
    """Service wrapping the Agno agent bound to a fixed Gemini model."""

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent with the Gemini model and no conversation history.
        """
        model = Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
        )

        return Agent(
            model=model,
            add_history_to_context=False,
        )

    async def stream_response(self, prompt: str) -> AsyncGenerator[str]:
        """Stream response chunks for a prompt.

        Args:
            prompt: The user's prompt, sent as the sole content.

        Yields:
            Response text chunks in arrival order.

        Raises:
            GenerationError: If the model run fails at any point.
        """
        logger.debug(f"Opening stream with model {self._config.model_name}")
        try:
            response_stream = self._agent.arun(prompt, stream=True)

            async for event in response_stream:
                kind = getattr(event, "event", None)
                if kind == RunEvent.run_error:
                    raise GenerationError(getattr(event, "content", None) or "Model run failed")
                if kind == RunEvent.run_content and isinstance(event.content, str) and event.content:
                    yield event.content

        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(str(e)) from e


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Returns:
        The AgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
