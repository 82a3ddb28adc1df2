from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from typing_extensions import assert_never

from copilot_chat.constants import PROVIDER_ID
from copilot_chat.types.completion import ToolChoice


class ModelVendor(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"


class ToolSchemaFormat(StrEnum):
    JSON_SCHEMA = "json_schema"
    JSON_SCHEMA_SUBSET = "json_schema_subset"


class CopilotChatModel(BaseModel):
    """Capabilities of a model served through Copilot Chat."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    vendor: ModelVendor = ModelVendor.OPENAI
    supports_vision: bool = False
    supports_tools: bool = False
    supports_streaming: bool = True
    max_token_count: int = 128_000

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def uses_streaming(self) -> bool:
        return self.supports_streaming

    @property
    def tool_input_format(self) -> ToolSchemaFormat:
        if self.vendor is ModelVendor.GOOGLE:
            return ToolSchemaFormat.JSON_SCHEMA_SUBSET
        return ToolSchemaFormat.JSON_SCHEMA

    @property
    def telemetry_id(self) -> str:
        return f"{PROVIDER_ID}/{self.id}"

    def supports_tool_choice(self, choice: ToolChoice) -> bool:
        match choice:
            case ToolChoice.AUTO | ToolChoice.ANY | ToolChoice.NONE:
                return self.supports_tools
            case _:
                assert_never(choice)
