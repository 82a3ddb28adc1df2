"""Normalization of Copilot Chat response events into completion events.

Tool calls arrive as fragments keyed by index: the first fragment usually carries the
call id and function name, later ones append pieces of the JSON arguments. A
:class:`ToolCallAccumulator` owned by each stream reassembles them, and is drained when
the choice finishes with ``tool_calls``.
"""

import json
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from copilot_chat.logging import logger
from copilot_chat.types.copilot import ResponseEvent, ToolCallChunk
from copilot_chat.types.events import (
    CompletionErrorKind,
    CompletionEvent,
    ErrorEvent,
    StopEvent,
    StopReason,
    TextEvent,
    ToolUseEvent,
)


@dataclass
class RawToolCall:
    id: str = ""
    name: str = ""
    arguments: str = ""


@dataclass
class ToolCallAccumulator:
    """Tool call fragments collected so far, keyed by vendor-assigned index."""

    tool_calls_by_index: dict[int, RawToolCall] = field(default_factory=dict)

    def apply(self, chunk: ToolCallChunk) -> None:
        entry = self.tool_calls_by_index.setdefault(chunk.index, RawToolCall())
        if chunk.id is not None:
            entry.id = chunk.id
        if chunk.function is not None:
            if chunk.function.name is not None:
                entry.name = chunk.function.name
            if chunk.function.arguments is not None:
                entry.arguments += chunk.function.arguments

    def drain(self) -> list[RawToolCall]:
        """Remove and return every pending tool call, in ascending index order."""
        drained = [self.tool_calls_by_index[index] for index in sorted(self.tool_calls_by_index)]
        self.tool_calls_by_index.clear()
        return drained


async def map_to_completion_events(
    events: AsyncIterable[ResponseEvent],
    *,
    is_streaming: bool,
) -> AsyncIterator[CompletionEvent]:
    """Turn a Copilot Chat response stream into completion events.

    Malformed events and tool calls with unparsable arguments are reported as
    ``ErrorEvent`` items and the stream carries on. An exception raised by the source
    is reported as a single transport ``ErrorEvent``, after which the stream ends.
    Closing the returned generator after the first pull closes the source; wrap it in
    :class:`CompletionEventStream` to release the source even before that.

    Args:
        events: Decoded response events, in arrival order.
        is_streaming: Whether events carry incremental ``delta`` objects (streaming) or
            complete ``message`` objects.

    """
    accumulator = ToolCallAccumulator()
    iterator = aiter(events)
    try:
        while True:
            try:
                event = await anext(iterator)
            except StopAsyncIteration:
                break
            except Exception as e:
                logger.warning("Copilot Chat response stream failed: %s", e)
                yield ErrorEvent(kind=CompletionErrorKind.TRANSPORT, detail=str(e) or type(e).__name__)
                break

            for completion_event in map_response_event(event, accumulator, is_streaming=is_streaming):
                yield completion_event
    finally:
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()


class CompletionEventStream(AsyncIterator[CompletionEvent]):
    """Completion events normalized from a response event source it owns.

    Unlike a bare async generator, :meth:`aclose` releases the source even when no
    event has been pulled yet.
    """

    def __init__(self, events: AsyncIterator[ResponseEvent], *, is_streaming: bool) -> None:
        self._source = events
        self._events = map_to_completion_events(events, is_streaming=is_streaming)

    async def __anext__(self) -> CompletionEvent:
        return await anext(self._events)

    async def aclose(self) -> None:
        await self._events.aclose()  # type: ignore[attr-defined]
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()


def map_response_event(
    event: ResponseEvent,
    accumulator: ToolCallAccumulator,
    *,
    is_streaming: bool,
) -> list[CompletionEvent]:
    """Fold one response event into the accumulator and return the events it completes."""
    if not event.choices:
        return [_malformed("Response contained no choices")]

    # Only the first choice is consumed; requests always ask for a single one.
    choice = event.choices[0]
    delta = choice.delta if is_streaming else choice.message
    if delta is None:
        return [_malformed("Response contained no delta")]

    completion_events: list[CompletionEvent] = []
    if delta.content is not None:
        completion_events.append(TextEvent(text=delta.content))

    for tool_call in delta.tool_calls:
        accumulator.apply(tool_call)

    match choice.finish_reason:
        case None:
            pass
        case "stop":
            completion_events.append(StopEvent(reason=StopReason.END_TURN))
        case "tool_calls":
            completion_events.extend(_tool_use_event(tool_call) for tool_call in accumulator.drain())
            completion_events.append(StopEvent(reason=StopReason.TOOL_USE))
        case finish_reason:
            completion_events.append(_stop_for_unexpected_finish_reason(finish_reason))

    return completion_events


def _stop_for_unexpected_finish_reason(finish_reason: str) -> StopEvent:
    """Unknown finish reasons (``length``, ``content_filter``, ...) end the turn."""
    logger.warning("Unexpected Copilot Chat finish_reason: %r", finish_reason)
    return StopEvent(reason=StopReason.END_TURN)


def _tool_use_event(tool_call: RawToolCall) -> ToolUseEvent | ErrorEvent:
    # An empty string means the tool takes no arguments.
    if not tool_call.arguments:
        return _tool_use(tool_call, {})

    try:
        tool_input = json.loads(tool_call.arguments)
    except (ValueError, RecursionError) as e:
        return ErrorEvent(
            kind=CompletionErrorKind.BAD_INPUT_JSON,
            detail=f"Received invalid JSON arguments for tool {tool_call.name!r}: {e}",
            tool_use_id=tool_call.id,
            tool_name=tool_call.name,
            raw_input=tool_call.arguments,
            json_parse_error=str(e),
        )
    return _tool_use(tool_call, tool_input)


def _tool_use(tool_call: RawToolCall, tool_input: Any) -> ToolUseEvent:
    return ToolUseEvent(
        id=tool_call.id,
        name=tool_call.name,
        input=tool_input,
        raw_input=tool_call.arguments,
        is_input_complete=True,
    )


def _malformed(detail: str) -> ErrorEvent:
    logger.warning("Malformed Copilot Chat response event: %s", detail)
    return ErrorEvent(kind=CompletionErrorKind.MALFORMED_RESPONSE, detail=detail)
