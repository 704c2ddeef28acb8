from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from graphchat.core.enums import MessageRole


class Stage(BaseModel):
    """Pipeline phase that produced a message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    main_stage: str = Field(..., alias="mainStage")
    sub_stage: str = Field(..., alias="subStage")
    description: Optional[str] = None


class ChatMessage(BaseModel):
    """
    One turn in the conversation.

    `chat_id` comes from the owning ChatHistoryStore's counter; plain user
    turns carry no stage.
    """

    model_config = ConfigDict(populate_by_name=True)

    role: MessageRole
    content: str
    chat_id: int = Field(..., alias="chatId", ge=1)
    name: str
    stage: Optional[Stage] = None


class MessageDraft(BaseModel):
    """A message not yet in a history. Without `chat_id` the store assigns one."""

    model_config = ConfigDict(populate_by_name=True)

    role: MessageRole
    content: str
    name: str
    chat_id: Optional[int] = Field(None, alias="chatId", ge=1)
    stage: Optional[Stage] = None
