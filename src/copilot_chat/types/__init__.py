from copilot_chat.types.completion import (
    CompletionRequest,
    ImageContent,
    MessageContent,
    RedactedThinkingContent,
    RequestMessage,
    RequestTool,
    Role,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolResultContent,
    ToolUseContent,
)
from copilot_chat.types.copilot import CopilotChatRequest, ResponseEvent
from copilot_chat.types.events import (
    CompletionErrorKind,
    CompletionEvent,
    ErrorEvent,
    StopEvent,
    StopReason,
    TextEvent,
    ToolUseEvent,
)
from copilot_chat.types.model import CopilotChatModel, ModelVendor, ToolSchemaFormat

__all__ = [
    "CompletionErrorKind",
    "CompletionEvent",
    "CompletionRequest",
    "CopilotChatModel",
    "CopilotChatRequest",
    "ErrorEvent",
    "ImageContent",
    "MessageContent",
    "ModelVendor",
    "RedactedThinkingContent",
    "RequestMessage",
    "RequestTool",
    "ResponseEvent",
    "Role",
    "StopEvent",
    "StopReason",
    "TextContent",
    "TextEvent",
    "ThinkingContent",
    "ToolChoice",
    "ToolResultContent",
    "ToolSchemaFormat",
    "ToolUseContent",
    "ToolUseEvent",
]
