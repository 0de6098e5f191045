"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat client.
Points at any service implementing the auth/thread/chat/evaluation contract.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, field_validator

# Load environment variables from .env file
load_dotenv()


def _optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_base_url: Base URL of the chat service.
        request_timeout: Per-request timeout in seconds (None disables timeouts).
        max_question_length: Longest question the client will send.
        example_question_count: Number of example prompts offered per load.
        rollback_evaluation_on_failure: Undo optimistic feedback if the post fails.
        notification_seconds: How long transient notifications stay visible.
    """

    # Values from the environment go through the same validation as arguments
    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("CHAT_API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the chat service",
    )
    request_timeout: PositiveFloat | None = Field(
        default_factory=lambda: _optional_float("CHAT_REQUEST_TIMEOUT"),
        description="Request timeout in seconds, unset for no timeout",
    )
    max_question_length: int = Field(
        default_factory=lambda: int(os.getenv("CHAT_MAX_QUESTION_LENGTH", "150")),
        ge=1,
        description="Maximum number of characters in a question",
    )
    example_question_count: int = Field(
        default_factory=lambda: int(os.getenv("CHAT_EXAMPLE_QUESTION_COUNT", "4")),
        ge=0,
        description="Example questions shown on an empty chat",
    )
    rollback_evaluation_on_failure: bool = Field(
        default_factory=lambda: os.getenv(
            "CHAT_ROLLBACK_EVALUATION_ON_FAILURE", "false"
        ).lower() in ("1", "true", "yes"),
        description="Reset a message's evaluation when the feedback post fails",
    )
    notification_seconds: float = Field(
        default_factory=lambda: float(os.getenv("CHAT_NOTIFICATION_SECONDS", "5")),
        gt=0.0,
        description="Duration of transient notifications",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that the base URL is provided and normalise it."""
        if not v or not v.strip():
            raise ValueError("API base URL required. Set CHAT_API_BASE_URL in .env")
        return v.strip().rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the environment holds invalid values.
    """
    return ClientConfig()
