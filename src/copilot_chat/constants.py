PROVIDER_ID = "copilot_chat"
PROVIDER_NAME = "GitHub Copilot Chat"

# Fixed sampling parameters sent with every request.
RESPONSE_COUNT = 1
INTENT = True
TEMPERATURE = 0.1

# The API answers Bad Request when earlier turns contain tool calls but the request
# carries no tool definitions. A placeholder tool avoids it.
NOOP_TOOL_NAME = "noop"
NOOP_TOOL_DESCRIPTION = "No operation"
NOOP_TOOL_PARAMETERS = {"type": "object"}

IMAGE_TOOL_RESULT_WITHOUT_VISION = "[Tool responded with an image, but this model does not support vision]"

EMPTY_PROMPT_MESSAGE = "Empty prompts aren't allowed. Please provide a non-empty prompt."
USER_ROLE_MESSAGE = (
    "The final message must be from the user. "
    "To provide a system prompt, you must provide the system prompt followed by a user prompt."
)
