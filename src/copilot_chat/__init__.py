from copilot_chat.config import ClientConfig, CopilotChatSettings, load_settings
from copilot_chat.exceptions import (
    AuthenticationError,
    CopilotChatError,
    InvalidRequestError,
    MissingApiKeyError,
    ProviderError,
    RateLimitError,
    RequestConstructionError,
    SerializationError,
)
from copilot_chat.providers.copilot_chat import (
    CompletionEventStream,
    CopilotChatProvider,
    into_copilot_chat,
    map_to_completion_events,
    validate_request,
)

__all__ = [
    "AuthenticationError",
    "ClientConfig",
    "CompletionEventStream",
    "CopilotChatError",
    "CopilotChatProvider",
    "CopilotChatSettings",
    "InvalidRequestError",
    "MissingApiKeyError",
    "ProviderError",
    "RateLimitError",
    "RequestConstructionError",
    "SerializationError",
    "into_copilot_chat",
    "load_settings",
    "map_to_completion_events",
    "validate_request",
]
