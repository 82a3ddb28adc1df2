from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field
from typing_extensions import assert_never


class Role(StrEnum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ToolChoice(StrEnum):
    AUTO = "auto"
    ANY = "any"
    NONE = "none"


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ThinkingContent(BaseModel):
    type: Literal["thinking"] = "thinking"
    text: str
    signature: str | None = None


class RedactedThinkingContent(BaseModel):
    type: Literal["redacted_thinking"] = "redacted_thinking"
    data: str


class ImageContent(BaseModel):
    """A base64 encoded image attached to a message."""

    type: Literal["image"] = "image"
    source: str
    media_type: str = "image/png"

    def to_base64_url(self) -> str:
        return f"data:{self.media_type};base64,{self.source}"


class ToolUseContent(BaseModel):
    """A tool invocation previously emitted by the model."""

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Any = Field(default_factory=dict)
    raw_input: str = ""
    is_input_complete: bool = True


class ToolResultContent(BaseModel):
    """The outcome of a tool invocation, sent back on a user turn."""

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    tool_name: str
    is_error: bool = False
    content: str | ImageContent


MessageContent = Annotated[
    TextContent | ThinkingContent | RedactedThinkingContent | ImageContent | ToolUseContent | ToolResultContent,
    Field(discriminator="type"),
]


def content_text(content: MessageContent) -> str | None:
    """Return the plain text carried by a content block, if any."""
    match content:
        case TextContent(text=text) | ThinkingContent(text=text):
            return text
        case ToolResultContent(content=str() as text):
            return text
        case ToolResultContent() | RedactedThinkingContent() | ImageContent() | ToolUseContent():
            return None
        case _:
            assert_never(content)


class RequestMessage(BaseModel):
    role: Role
    content: list[MessageContent] = Field(default_factory=list)

    def contents_empty(self) -> bool:
        """True when the message carries nothing but whitespace text."""
        for content in self.content:
            match content:
                case TextContent() | ThinkingContent() | ToolResultContent():
                    text = content_text(content)
                    if text is None or text.strip():
                        return False
                case RedactedThinkingContent() | ImageContent() | ToolUseContent():
                    return False
                case _:
                    assert_never(content)
        return True

    def string_contents(self) -> str:
        return "".join(text for text in map(content_text, self.content) if text is not None)


class RequestTool(BaseModel):
    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=dict)


class CompletionRequest(BaseModel):
    """A vendor-agnostic chat completion request."""

    messages: list[RequestMessage] = Field(default_factory=list)
    tools: list[RequestTool] = Field(default_factory=list)
    tool_choice: ToolChoice | None = None
