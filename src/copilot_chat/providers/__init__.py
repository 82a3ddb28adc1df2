from copilot_chat.providers.copilot_chat import CopilotChatProvider

__all__ = ["CopilotChatProvider"]
