from typing import Optional

from pydantic import BaseModel

from graphchat.core.enums import StatusColor
from graphchat.core.state import ChatMessage

MAX_LABEL_LENGTH = 60
ELLIPSIS = "..."

EXECUTING_QUERY = "Executing Query"
SUMMARIZING_RESULTS = "Summarizing Results"
WAITING_FOR_USER = "Waiting for User Input"


class PendingFlags(BaseModel):
    """Which externally-run operations are in flight. Set by the orchestration."""
    chat_pending: bool = False
    query_pending: bool = False
    summarize_pending: bool = False


class ChatStatus(BaseModel):
    color: StatusColor
    label: str


def _stage_label(message: Optional[ChatMessage]) -> str:
    stage = message.stage if message else None
    if stage is None:
        return ""
    return stage.description or stage.sub_stage or ""


def derive_status(flags: PendingFlags, latest_message: Optional[ChatMessage]) -> ChatStatus:
    """
    Reduce the pending flags and the latest full-history message to one status.

    First match wins: chat submission, then query execution, then result
    summarization, else idle.
    """
    if flags.chat_pending:
        color, label = StatusColor.WARNING, _stage_label(latest_message)
    elif flags.query_pending:
        color, label = StatusColor.WARNING, EXECUTING_QUERY
    elif flags.summarize_pending:
        color, label = StatusColor.WARNING, SUMMARIZING_RESULTS
    else:
        color, label = StatusColor.INFO, WAITING_FOR_USER

    if len(label) > MAX_LABEL_LENGTH:
        label = label[:MAX_LABEL_LENGTH] + ELLIPSIS

    return ChatStatus(color=color, label=label)
