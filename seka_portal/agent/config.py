"""Agent configuration with environment variable loading.

Pydantic-based configuration for the Gemini-backed assistant agent.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"


def _api_key_from_env() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")


class AgentConfig(BaseModel):
    """Configuration for the assistant agent.

    Attributes:
        api_key: Google AI API key for model access.
        model_name: Fixed Gemini model identifier used for every turn.
    """

    api_key: str = Field(
        default_factory=_api_key_from_env,
        validate_default=True,
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", DEFAULT_MODEL),
        min_length=1,
        validate_default=True,
        description="Model to use",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set GEMINI_API_KEY, GOOGLE_API_KEY or API_KEY in .env"
            )
        return v.strip()


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
