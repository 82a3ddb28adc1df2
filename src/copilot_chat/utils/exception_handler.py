from typing import NoReturn

import openai
from pydantic import ValidationError

from copilot_chat.exceptions import (
    AuthenticationError,
    CopilotChatError,
    InvalidRequestError,
    ProviderError,
    RateLimitError,
)


def _handle_exception(exception: Exception, provider_name: str) -> NoReturn:
    """Re-raise an SDK exception as the matching copilot-chat exception.

    Library exceptions and pydantic validation errors bubble up unchanged, as does
    anything the OpenAI SDK did not raise.
    """
    if isinstance(exception, CopilotChatError | ValidationError):
        raise exception

    if isinstance(exception, openai.AuthenticationError | openai.PermissionDeniedError):
        raise AuthenticationError(str(exception), original_exception=exception, provider_name=provider_name) from exception
    if isinstance(exception, openai.RateLimitError):
        raise RateLimitError(str(exception), original_exception=exception, provider_name=provider_name) from exception
    if isinstance(exception, openai.BadRequestError):
        raise InvalidRequestError(str(exception), original_exception=exception, provider_name=provider_name) from exception
    if isinstance(exception, openai.APIError):
        raise ProviderError(str(exception), original_exception=exception, provider_name=provider_name) from exception

    raise exception
