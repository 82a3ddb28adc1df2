import pytest

from copilot_chat.types.completion import CompletionRequest, RequestMessage, Role, TextContent
from copilot_chat.types.model import CopilotChatModel, ModelVendor


@pytest.fixture
def text_model() -> CopilotChatModel:
    return CopilotChatModel(id="gpt-4o-mini", name="GPT-4o mini", supports_tools=True)


@pytest.fixture
def vision_model() -> CopilotChatModel:
    return CopilotChatModel(
        id="claude-sonnet-4",
        name="Claude Sonnet 4",
        vendor=ModelVendor.ANTHROPIC,
        supports_vision=True,
        supports_tools=True,
    )


@pytest.fixture
def user_request() -> CompletionRequest:
    return CompletionRequest(messages=[RequestMessage(role=Role.USER, content=[TextContent(text="Hello")])])
