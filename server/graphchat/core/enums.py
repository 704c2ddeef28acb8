from enum import Enum


class MessageRole(str, Enum):
    """
    Role of a message in the conversation.

    Closed set matching the OpenAI/LangChain chat message contract.
    """
    SYSTEM = "system"          # Priming prompt and pipeline instructions
    USER = "user"              # Human message
    ASSISTANT = "assistant"    # LLM response
    TOOL = "tool"              # Knowledge-graph API result

    def __str__(self) -> str:
        return self.value


class DisplayMode(str, Enum):
    """
    Which chat history the UI renders.

    - SIMPLE: bare-bones curated history for novice users
    - CONDENSED: full history grouped by stage for intermediate users
    - FULL: every message for expert users

    Inherits from str so it serializes as string in JSON.
    """
    SIMPLE = "simple"
    CONDENSED = "condensed"
    FULL = "full"

    @property
    def label(self) -> str:
        return DISPLAY_MODE_LABELS[self]

    def __str__(self) -> str:
        return self.value


DISPLAY_MODE_LABELS = {
    DisplayMode.SIMPLE: "Simple View",
    DisplayMode.CONDENSED: "Condensed View",
    DisplayMode.FULL: "Full Chat History",
}


class StatusColor(str, Enum):
    """Badge color of the live status indicator."""
    WARNING = "yellow"     # Something is pending
    INFO = "blue"          # Idle, waiting on the user

    def __str__(self) -> str:
        return self.value
