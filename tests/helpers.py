"""Builders for synthetic Copilot Chat response streams."""

from collections.abc import AsyncIterator, Iterable
from typing import Any

from copilot_chat.types.copilot import ResponseEvent


def response_event(
    content: str | None = None,
    tool_calls: list[dict[str, Any]] | None = None,
    finish_reason: str | None = None,
    field: str = "delta",
) -> ResponseEvent:
    """Build a single-choice response event carrying a delta (or message)."""
    body: dict[str, Any] = {}
    if content is not None:
        body["content"] = content
    if tool_calls is not None:
        body["tool_calls"] = tool_calls
    return ResponseEvent.model_validate({"choices": [{"index": 0, field: body, "finish_reason": finish_reason}]})


def tool_call_fragment(
    index: int,
    id: str | None = None,  # noqa: A002
    name: str | None = None,
    arguments: str | None = None,
) -> dict[str, Any]:
    fragment: dict[str, Any] = {"index": index}
    if id is not None:
        fragment["id"] = id
    function: dict[str, Any] = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    if function:
        fragment["function"] = function
    return fragment


async def event_source(events: Iterable[ResponseEvent], error: Exception | None = None) -> AsyncIterator[ResponseEvent]:
    for event in events:
        yield event
    if error is not None:
        raise error
