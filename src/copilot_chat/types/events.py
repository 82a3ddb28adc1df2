from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class StopReason(StrEnum):
    END_TURN = "end_turn"
    TOOL_USE = "tool_use"


class CompletionErrorKind(StrEnum):
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    BAD_INPUT_JSON = "bad_input_json"


class TextEvent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolUseEvent(BaseModel):
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Any
    raw_input: str
    is_input_complete: bool = True


class StopEvent(BaseModel):
    type: Literal["stop"] = "stop"
    reason: StopReason


class ErrorEvent(BaseModel):
    """An error delivered in-band; the consumer decides whether to abort.

    ``bad_input_json`` errors also carry the tool call whose arguments failed to parse.
    """

    type: Literal["error"] = "error"
    kind: CompletionErrorKind
    detail: str
    tool_use_id: str | None = None
    tool_name: str | None = None
    raw_input: str | None = None
    json_parse_error: str | None = None


CompletionEvent = Annotated[
    TextEvent | ToolUseEvent | StopEvent | ErrorEvent,
    Field(discriminator="type"),
]
