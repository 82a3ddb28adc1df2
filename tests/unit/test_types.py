import pytest

from copilot_chat.types.completion import (
    ImageContent,
    RedactedThinkingContent,
    RequestMessage,
    Role,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolResultContent,
    ToolUseContent,
)
from copilot_chat.types.copilot import CopilotChatRequest, ResponseEvent
from copilot_chat.types.model import CopilotChatModel, ModelVendor, ToolSchemaFormat


def test_message_content_is_parsed_by_type() -> None:
    message = RequestMessage.model_validate(
        {
            "role": "assistant",
            "content": [
                {"type": "thinking", "text": "hmm"},
                {"type": "text", "text": "Sure."},
                {"type": "tool_use", "id": "call_1", "name": "foo", "input": {"x": 1}},
            ],
        }
    )

    assert message.role is Role.ASSISTANT
    assert [type(content) for content in message.content] == [ThinkingContent, TextContent, ToolUseContent]


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ([TextContent(text=" "), ThinkingContent(text="\n")], True),
        ([], True),
        ([TextContent(text="hi")], False),
        ([ImageContent(source="aGk=")], False),
        ([RedactedThinkingContent(data="x")], False),
        ([ToolResultContent(tool_use_id="c", tool_name="t", content="  ")], True),
        ([ToolResultContent(tool_use_id="c", tool_name="t", content=ImageContent(source="aGk="))], False),
    ],
)
def test_contents_empty(content: list[object], expected: bool) -> None:
    assert RequestMessage(role=Role.USER, content=content).contents_empty() is expected  # type: ignore[arg-type]


def test_string_contents_skips_non_text() -> None:
    message = RequestMessage(
        role=Role.SYSTEM,
        content=[
            TextContent(text="a"),
            ImageContent(source="aGk="),
            ThinkingContent(text="b"),
            ToolResultContent(tool_use_id="c", tool_name="t", content="c"),
        ],
    )

    assert message.string_contents() == "abc"


def test_image_base64_url() -> None:
    assert ImageContent(source="aGk=", media_type="image/jpeg").to_base64_url() == "data:image/jpeg;base64,aGk="


@pytest.mark.parametrize(
    ("vendor", "expected"),
    [
        (ModelVendor.OPENAI, ToolSchemaFormat.JSON_SCHEMA),
        (ModelVendor.ANTHROPIC, ToolSchemaFormat.JSON_SCHEMA),
        (ModelVendor.GOOGLE, ToolSchemaFormat.JSON_SCHEMA_SUBSET),
    ],
)
def test_tool_input_format(vendor: ModelVendor, expected: ToolSchemaFormat) -> None:
    assert CopilotChatModel(id="m", vendor=vendor).tool_input_format is expected


def test_model_descriptor_defaults() -> None:
    model = CopilotChatModel(id="gpt-4o")

    assert model.display_name == "gpt-4o"
    assert model.telemetry_id == "copilot_chat/gpt-4o"
    assert model.uses_streaming is True
    assert model.supports_tool_choice(ToolChoice.AUTO) is False


def test_response_event_tolerates_null_lists() -> None:
    event = ResponseEvent.model_validate(
        {"choices": [{"index": 0, "delta": {"content": None, "tool_calls": None}, "finish_reason": None}]}
    )

    assert event.choices[0].delta is not None
    assert event.choices[0].delta.tool_calls == []
    assert ResponseEvent.model_validate({"choices": None}).choices == []


def test_request_api_params_drop_empty_tool_calls() -> None:
    request = CopilotChatRequest.model_validate(
        {
            "intent": True,
            "n": 1,
            "stream": True,
            "temperature": 0.1,
            "model": "gpt-4o",
            "messages": [
                {"role": "assistant", "content": "Hello"},
                {"role": "user", "content": "Hi"},
            ],
        }
    )

    params = request.to_api_params()

    assert params["messages"] == [{"role": "assistant", "content": "Hello"}, {"role": "user", "content": "Hi"}]
    assert "tools" not in params
    assert "tool_choice" not in params
    assert request.has_image_parts() is False
