"""Wire types of the Copilot Chat completions API.

The request side mirrors the JSON body the API accepts. The response side models the
decoded objects the API streams back: a list of choices, each carrying either an
incremental ``delta`` (streaming) or a complete ``message`` (non-streaming), tool call
fragments keyed by index and an optional finish reason.
"""

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator


class CopilotToolChoice(StrEnum):
    AUTO = "auto"
    ANY = "any"
    NONE = "none"


class ImageUrl(BaseModel):
    url: str


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ChatMessagePart = Annotated[TextPart | ImagePart, Field(discriminator="type")]

# Either plain text or a list of parts. An empty list is the explicit "no content" value.
ChatMessageContent = str | list[ChatMessagePart]


class FunctionContent(BaseModel):
    name: str
    arguments: str


class ToolCall(BaseModel):
    id: str
    type: Literal["function"] = "function"
    function: FunctionContent


class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: ChatMessageContent


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: ChatMessageContent
    tool_calls: list[ToolCall] = Field(default_factory=list)


class ToolMessage(BaseModel):
    role: Literal["tool"] = "tool"
    tool_call_id: str
    content: ChatMessageContent


ChatMessage = Annotated[
    SystemMessage | UserMessage | AssistantMessage | ToolMessage,
    Field(discriminator="role"),
]


class FunctionDefinition(BaseModel):
    name: str
    description: str
    parameters: dict[str, Any]


class Tool(BaseModel):
    type: Literal["function"] = "function"
    function: FunctionDefinition


class CopilotChatRequest(BaseModel):
    intent: bool
    n: int
    stream: bool
    temperature: float
    model: str
    messages: list[ChatMessage]
    tools: list[Tool] = Field(default_factory=list)
    tool_choice: CopilotToolChoice | None = None

    def has_image_parts(self) -> bool:
        """True when any message content carries an image part."""
        for message in self.messages:
            if isinstance(message, SystemMessage) or isinstance(message.content, str):
                continue
            if any(isinstance(part, ImagePart) for part in message.content):
                return True
        return False

    def to_api_params(self) -> dict[str, Any]:
        """Convert to the JSON request body, dropping unset and empty optional fields."""
        params = self.model_dump(mode="json", exclude_none=True)
        for message in params["messages"]:
            if message.get("tool_calls") == []:
                message.pop("tool_calls")
        if not params["tools"]:
            params.pop("tools")
        return params


class FunctionChunk(BaseModel):
    name: str | None = None
    arguments: str | None = None


class ToolCallChunk(BaseModel):
    index: int
    id: str | None = None
    function: FunctionChunk | None = None


class ResponseDelta(BaseModel):
    content: str | None = None
    role: str | None = None
    tool_calls: list[ToolCallChunk] = Field(default_factory=list)

    @field_validator("tool_calls", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ResponseChoice(BaseModel):
    index: int = 0
    finish_reason: str | None = None
    delta: ResponseDelta | None = None
    message: ResponseDelta | None = None


class ResponseEvent(BaseModel):
    id: str | None = None
    choices: list[ResponseChoice] = Field(default_factory=list)

    @field_validator("choices", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v
