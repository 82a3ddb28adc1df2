from .copilot_chat import CopilotChatProvider
from .streaming import CompletionEventStream, ToolCallAccumulator, map_response_event, map_to_completion_events
from .utils import into_copilot_chat, validate_request

__all__ = [
    "CompletionEventStream",
    "CopilotChatProvider",
    "ToolCallAccumulator",
    "into_copilot_chat",
    "map_response_event",
    "map_to_completion_events",
    "validate_request",
]
