from __future__ import annotations

import os
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from copilot_chat.config import ClientConfig, CopilotChatSettings, load_settings
from copilot_chat.constants import PROVIDER_ID, PROVIDER_NAME
from copilot_chat.exceptions import MissingApiKeyError
from copilot_chat.logging import logger
from copilot_chat.types.copilot import ResponseEvent
from copilot_chat.utils.exception_handler import _handle_exception

from .streaming import CompletionEventStream
from .utils import into_copilot_chat, validate_request

if TYPE_CHECKING:
    from collections.abc import Callable

    from openai import AsyncStream
    from openai.types.chat import ChatCompletionChunk

    from copilot_chat.types.completion import CompletionRequest, ToolChoice
    from copilot_chat.types.copilot import CopilotChatRequest
    from copilot_chat.types.model import CopilotChatModel


class CopilotChatProvider:
    """GitHub Copilot Chat Provider.

    Each call to :meth:`astream_completion` validates and converts the request before
    anything is sent, then returns an independent stream of completion events.
    Concurrency limits, retries and timeouts are left to the caller.
    """

    PROVIDER_ID = PROVIDER_ID
    PROVIDER_NAME = PROVIDER_NAME
    ENV_API_KEY_NAME = "COPILOT_CHAT_API_KEY"
    PROVIDER_DOCUMENTATION_URL = "https://docs.github.com/en/copilot"

    client: AsyncOpenAI

    def __init__(
        self,
        model: CopilotChatModel,
        api_key: str | None = None,
        api_base: str | None = None,
        settings: CopilotChatSettings | None = None,
        **kwargs: Any,
    ) -> None:
        self.model = model
        self.settings = settings or load_settings()
        self.config = ClientConfig(
            api_key=api_key or os.getenv(self.ENV_API_KEY_NAME),
            api_base=api_base or self.settings.api_url,
            client_args=kwargs or None,
        )
        if not self.config.api_key:
            raise MissingApiKeyError(self.PROVIDER_NAME, self.ENV_API_KEY_NAME)
        self._init_client()

    def _init_client(self) -> None:
        self.client = AsyncOpenAI(
            base_url=self.config.api_base,
            api_key=self.config.api_key,
            default_headers=self.settings.default_headers(),
            **(self.config.client_args or {}),
        )

    @property
    def supports_tools(self) -> bool:
        return self.model.supports_tools

    @property
    def supports_images(self) -> bool:
        return self.model.supports_vision

    @property
    def telemetry_id(self) -> str:
        return self.model.telemetry_id

    @property
    def max_token_count(self) -> int:
        return self.model.max_token_count

    def supports_tool_choice(self, choice: ToolChoice) -> bool:
        return self.model.supports_tool_choice(choice)

    @staticmethod
    def _convert_completion_chunk_response(response: ChatCompletionChunk) -> ResponseEvent:
        """Convert a streamed OpenAI SDK chunk to a Copilot Chat response event."""
        return ResponseEvent.model_validate(response.model_dump())

    @staticmethod
    def _convert_completion_response(response: ChatCompletion) -> ResponseEvent:
        """Convert a complete OpenAI SDK response to a Copilot Chat response event."""
        response_dict = response.model_dump()
        for choice in response_dict.get("choices") or []:
            message = choice.get("message") or {}
            # Complete messages do not number their tool calls.
            for index, tool_call in enumerate(message.get("tool_calls") or []):
                tool_call.setdefault("index", index)
        return ResponseEvent.model_validate(response_dict)

    async def astream_completion(self, request: CompletionRequest) -> CompletionEventStream:
        """Send a completion request and stream back completion events.

        Raises:
            InvalidRequestError: If the request is rejected before conversion.
            SerializationError: If a tool call input cannot be serialized.
            CopilotChatError: If the API refuses to open the response.

        """
        validate_request(request)
        copilot_request = into_copilot_chat(self.model, request)
        events = await self._astream_response_events(copilot_request)
        return CompletionEventStream(events, is_streaming=copilot_request.stream)

    async def _astream_response_events(self, request: CopilotChatRequest) -> AsyncIterator[ResponseEvent]:
        params = request.to_api_params()
        extra_body = {"intent": params.pop("intent")}
        extra_headers = {"Copilot-Vision-Request": "true"} if request.has_image_parts() else None

        logger.debug(
            "Sending Copilot Chat request: model=%s stream=%s messages=%d tools=%d",
            request.model,
            request.stream,
            len(request.messages),
            len(request.tools),
        )
        try:
            response: ChatCompletion | AsyncStream[ChatCompletionChunk] = await self.client.chat.completions.create(
                **params,
                extra_body=extra_body,
                extra_headers=extra_headers,
            )
        except Exception as e:
            _handle_exception(e, self.PROVIDER_NAME)

        if isinstance(response, ChatCompletion):
            return self._single_event(response)
        return self._stream_events(response)

    async def _single_event(self, response: ChatCompletion) -> AsyncIterator[ResponseEvent]:
        yield self._convert_completion_response(response)

    def _stream_events(self, stream: AsyncStream[ChatCompletionChunk]) -> AsyncIterator[ResponseEvent]:
        return _ChunkEventStream(stream, self._convert_completion_chunk_response)


class _ChunkEventStream(AsyncIterator[ResponseEvent]):
    """Response events read from an open SDK stream; closing it closes the HTTP response."""

    def __init__(
        self,
        stream: AsyncStream[ChatCompletionChunk],
        convert: Callable[[ChatCompletionChunk], ResponseEvent],
    ) -> None:
        self._stream = stream
        self._chunks = aiter(stream)
        self._convert = convert

    async def __anext__(self) -> ResponseEvent:
        return self._convert(await anext(self._chunks))

    async def aclose(self) -> None:
        try:
            aclose = getattr(self._chunks, "aclose", None)
            if aclose is not None:
                await aclose()
        finally:
            await self._stream.close()
