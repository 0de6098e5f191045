"""Unit tests for ClientConfig.

Tests defaults, environment loading and validation.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.session.config import ClientConfig, get_client_config


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = ClientConfig(
            api_base_url="https://chat.example.org",
            request_timeout=30.0,
            max_question_length=200,
            example_question_count=2,
            rollback_evaluation_on_failure=True,
            notification_seconds=3.0,
        )

        assert config.api_base_url == "https://chat.example.org"
        assert config.request_timeout == 30.0
        assert config.max_question_length == 200
        assert config.example_question_count == 2
        assert config.rollback_evaluation_on_failure is True
        assert config.notification_seconds == 3.0

    def test_config_with_default_values(self) -> None:
        """Config uses the original client's limits when nothing is set."""
        with patch.dict("os.environ", {}, clear=True):
            config = ClientConfig()

        assert config.api_base_url == "http://localhost:8000"
        assert config.request_timeout is None
        assert config.max_question_length == 150
        assert config.example_question_count == 4
        assert config.rollback_evaluation_on_failure is False
        assert config.notification_seconds == 5.0

    def test_config_strips_trailing_slash(self) -> None:
        """Base URL is normalised so paths join cleanly."""
        config = ClientConfig(api_base_url="  https://chat.example.org/  ")

        assert config.api_base_url == "https://chat.example.org"

    def test_config_fails_with_empty_base_url(self) -> None:
        """Config rejects an empty base URL."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(api_base_url="   ")

        assert "CHAT_API_BASE_URL" in str(exc_info.value)

    def test_config_fails_with_zero_question_length(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(max_question_length=0)

        assert "max_question_length" in str(exc_info.value).lower()

    def test_config_fails_with_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(request_timeout=0)

        assert "request_timeout" in str(exc_info.value).lower()


class TestGetClientConfig:
    """Tests for get_client_config factory function."""

    def test_get_config_from_environment(self) -> None:
        """get_client_config reads every setting from the environment."""
        env = {
            "CHAT_API_BASE_URL": "https://env.example.org/",
            "CHAT_REQUEST_TIMEOUT": "12.5",
            "CHAT_MAX_QUESTION_LENGTH": "80",
            "CHAT_EXAMPLE_QUESTION_COUNT": "6",
            "CHAT_ROLLBACK_EVALUATION_ON_FAILURE": "true",
            "CHAT_NOTIFICATION_SECONDS": "2",
        }
        with patch.dict("os.environ", env, clear=True):
            config = get_client_config()

        assert config.api_base_url == "https://env.example.org"
        assert config.request_timeout == 12.5
        assert config.max_question_length == 80
        assert config.example_question_count == 6
        assert config.rollback_evaluation_on_failure is True
        assert config.notification_seconds == 2.0

    def test_get_config_fails_with_invalid_env_var(self) -> None:
        """get_client_config raises when the environment holds bad values."""
        with (
            patch.dict("os.environ", {"CHAT_MAX_QUESTION_LENGTH": "0"}, clear=True),
            pytest.raises(ValidationError),
        ):
            get_client_config()
