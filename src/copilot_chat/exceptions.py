class CopilotChatError(Exception):
    """Base exception class for copilot-chat errors."""

    default_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        original_exception: Exception | None = None,
        provider_name: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Error message. If None, uses the default message.
            original_exception: The original exception that caused this error.
            provider_name: Name of the provider that raised this error.

        """
        self.message = message or self.default_message
        super().__init__(self.message)
        self.original_exception = original_exception
        self.provider_name = provider_name

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.provider_name:
            return f"[{self.provider_name}] {self.message}"
        return self.message


class InvalidRequestError(CopilotChatError):
    """Raised when a completion request is rejected before it is adapted."""

    default_message = "Invalid request"


class RequestConstructionError(CopilotChatError):
    """Raised when a vendor request cannot be built from a completion request."""

    default_message = "Unable to build request"


class SerializationError(RequestConstructionError):
    """Raised when a tool call input cannot be serialized to JSON text."""

    default_message = "Tool call input is not JSON serializable"


class RateLimitError(CopilotChatError):
    """Raised when the API rate limit is exceeded."""

    default_message = "Rate limit exceeded"


class AuthenticationError(CopilotChatError):
    """Raised when authentication with the provider fails."""

    default_message = "Authentication failed"


class ProviderError(CopilotChatError):
    """Raised when the provider encounters an internal error."""

    default_message = "Provider error"


class MissingApiKeyError(CopilotChatError):
    """Raised when a required API key is not provided."""

    def __init__(self, provider_name: str, env_var_name: str) -> None:
        """Initialize the error.

        Args:
            provider_name: Name of the provider requiring the API key.
            env_var_name: Name of the environment variable for the API key.

        """
        self.env_var_name = env_var_name
        message = (
            f"No {provider_name} API key provided. "
            f"Please provide it in the config or set the {env_var_name} environment variable."
        )
        super().__init__(message, provider_name=provider_name)
