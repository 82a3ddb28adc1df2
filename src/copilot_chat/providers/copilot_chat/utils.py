"""Conversion of completion requests into Copilot Chat requests."""

import copy
import json

from typing_extensions import assert_never

from copilot_chat.constants import (
    EMPTY_PROMPT_MESSAGE,
    IMAGE_TOOL_RESULT_WITHOUT_VISION,
    INTENT,
    NOOP_TOOL_DESCRIPTION,
    NOOP_TOOL_NAME,
    NOOP_TOOL_PARAMETERS,
    PROVIDER_NAME,
    RESPONSE_COUNT,
    TEMPERATURE,
    USER_ROLE_MESSAGE,
)
from copilot_chat.exceptions import InvalidRequestError, SerializationError
from copilot_chat.logging import logger
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
from copilot_chat.types.copilot import (
    AssistantMessage,
    ChatMessage,
    ChatMessageContent,
    ChatMessagePart,
    CopilotChatRequest,
    CopilotToolChoice,
    FunctionContent,
    FunctionDefinition,
    ImagePart,
    ImageUrl,
    SystemMessage,
    TextPart,
    Tool,
    ToolCall,
    ToolMessage,
    UserMessage,
)
from copilot_chat.types.model import CopilotChatModel


def validate_request(request: CompletionRequest) -> None:
    """Reject requests the Copilot API would refuse.

    The API also returns an error when the final message is not from the user, but
    catching it here gives a more helpful message.

    Raises:
        InvalidRequestError: If the final message is empty or not authored by the user.

    """
    if not request.messages:
        return

    last_message = request.messages[-1]
    if last_message.contents_empty():
        raise InvalidRequestError(EMPTY_PROMPT_MESSAGE, provider_name=PROVIDER_NAME)
    if last_message.role is not Role.USER:
        raise InvalidRequestError(USER_ROLE_MESSAGE, provider_name=PROVIDER_NAME)


def into_copilot_chat(model: CopilotChatModel, request: CompletionRequest) -> CopilotChatRequest:
    """Convert a CompletionRequest into a Copilot Chat request for the given model.

    Raises:
        SerializationError: If a tool call input cannot be serialized to JSON text.

    """
    tool_called = False
    messages: list[ChatMessage] = []
    for message in _merge_consecutive_messages(request.messages):
        match message.role:
            case Role.USER:
                messages.extend(_convert_user_message(message, model))
            case Role.ASSISTANT:
                assistant_message = _convert_assistant_message(message)
                tool_called = tool_called or bool(assistant_message.tool_calls)
                messages.append(assistant_message)
            case Role.SYSTEM:
                messages.append(SystemMessage(content=message.string_contents()))
            case _:
                assert_never(message.role)

    tools = _convert_tools(request.tools)
    if _needs_noop_tool(tool_called, tools):
        tools.append(_noop_tool())

    return CopilotChatRequest(
        intent=INTENT,
        n=RESPONSE_COUNT,
        stream=model.uses_streaming,
        temperature=TEMPERATURE,
        model=model.id,
        messages=messages,
        tools=tools,
        tool_choice=_convert_tool_choice(request.tool_choice),
    )


def _merge_consecutive_messages(messages: list[RequestMessage]) -> list[RequestMessage]:
    """Join runs of same-role messages into one, keeping content order."""
    merged: list[RequestMessage] = []
    for message in messages:
        if merged and merged[-1].role == message.role:
            merged[-1].content.extend(message.content)
        else:
            merged.append(RequestMessage(role=message.role, content=list(message.content)))
    return merged


def _convert_user_message(message: RequestMessage, model: CopilotChatModel) -> list[ChatMessage]:
    """Tool results become tool messages, the rest one user message."""
    converted: list[ChatMessage] = [
        ToolMessage(tool_call_id=content.tool_use_id, content=_convert_tool_result(content, model))
        for content in message.content
        if isinstance(content, ToolResultContent)
    ]

    parts: list[ChatMessagePart] = []
    for content in message.content:
        match content:
            case TextContent(text=text) | ThinkingContent(text=text):
                if not text:
                    continue
                if parts and isinstance(parts[-1], TextPart):
                    parts[-1].text += text
                else:
                    parts.append(TextPart(text=text))
            case ImageContent():
                if model.supports_vision:
                    parts.append(_image_part(content))
            case ToolResultContent() | ToolUseContent() | RedactedThinkingContent():
                pass
            case _:
                assert_never(content)

    if parts:
        converted.append(UserMessage(content=parts))
    return converted


def _convert_tool_result(tool_result: ToolResultContent, model: CopilotChatModel) -> ChatMessageContent:
    if isinstance(tool_result.content, str):
        return tool_result.content
    if model.supports_vision:
        return [_image_part(tool_result.content)]
    # Callers must strip image results before they reach a model without vision.
    logger.error(
        "Tool %s responded with an image, but model %s does not support vision.",
        tool_result.tool_name,
        model.id,
    )
    return IMAGE_TOOL_RESULT_WITHOUT_VISION


def _convert_assistant_message(message: RequestMessage) -> AssistantMessage:
    tool_calls: list[ToolCall] = []
    text_content = ""
    for content in message.content:
        match content:
            case ToolUseContent():
                tool_calls.append(
                    ToolCall(
                        id=content.id,
                        function=FunctionContent(name=content.name, arguments=_serialize_tool_input(content)),
                    )
                )
            case TextContent(text=text) | ThinkingContent(text=text):
                text_content += text
            case RedactedThinkingContent() | ToolResultContent() | ImageContent():
                pass
            case _:
                assert_never(content)

    return AssistantMessage(content=text_content or [], tool_calls=tool_calls)


def _serialize_tool_input(tool_use: ToolUseContent) -> str:
    try:
        return json.dumps(tool_use.input, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        msg = f"Failed to serialize input of tool call {tool_use.id} ({tool_use.name}): {e}"
        raise SerializationError(msg, original_exception=e, provider_name=PROVIDER_NAME) from e


def _image_part(image: ImageContent) -> ImagePart:
    return ImagePart(image_url=ImageUrl(url=image.to_base64_url()))


def _convert_tools(tools: list[RequestTool]) -> list[Tool]:
    return [
        Tool(
            function=FunctionDefinition(
                name=tool.name,
                description=tool.description,
                parameters=copy.deepcopy(tool.input_schema),
            )
        )
        for tool in tools
    ]


def _needs_noop_tool(tool_called: bool, tools: list[Tool]) -> bool:
    """The API rejects earlier tool calls when the request defines no tools."""
    return tool_called and not tools


def _noop_tool() -> Tool:
    return Tool(
        function=FunctionDefinition(
            name=NOOP_TOOL_NAME,
            description=NOOP_TOOL_DESCRIPTION,
            parameters=copy.deepcopy(NOOP_TOOL_PARAMETERS),
        )
    )


def _convert_tool_choice(tool_choice: ToolChoice | None) -> CopilotToolChoice | None:
    match tool_choice:
        case None:
            return None
        case ToolChoice.AUTO:
            return CopilotToolChoice.AUTO
        case ToolChoice.ANY:
            return CopilotToolChoice.ANY
        case ToolChoice.NONE:
            return CopilotToolChoice.NONE
        case _:
            assert_never(tool_choice)
