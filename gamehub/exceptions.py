from typing import Any, List, Optional


class GameHubError(Exception):
    """Base class for errors raised by the webhook kit."""


class ConfigurationError(GameHubError, ValueError):
    """A required setting (API key, webhook secret) is missing or empty."""


class AuthenticationError(GameHubError):
    """The webhook signature did not match the raw body."""


class MalformedPayloadError(GameHubError, ValueError):
    """The webhook body is not a JSON object or a field has the wrong type."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = errors or []
