from typing import List, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage

from graphchat.core.enums import MessageRole
from graphchat.core.state import ChatMessage


def to_langchain_message(message: ChatMessage) -> BaseMessage:
    """Convert one stored turn to the LangChain type the LLM orchestration expects."""
    additional_kwargs = {"chat_id": message.chat_id}
    if message.stage is not None:
        additional_kwargs["stage"] = message.stage.model_dump(by_alias=True)

    role = message.role
    if role is MessageRole.SYSTEM:
        return SystemMessage(content=message.content, additional_kwargs=additional_kwargs)
    elif role is MessageRole.USER:
        return HumanMessage(content=message.content, name=message.name, additional_kwargs=additional_kwargs)
    elif role is MessageRole.ASSISTANT:
        return AIMessage(content=message.content, name=message.name, additional_kwargs=additional_kwargs)
    elif role is MessageRole.TOOL:
        return ToolMessage(
            content=message.content,
            tool_call_id=message.name,
            name=message.name,
            additional_kwargs=additional_kwargs,
        )
    raise ValueError(f"Unknown message role: {role}")


def to_langchain_messages(history: Sequence[ChatMessage]) -> List[BaseMessage]:
    return [to_langchain_message(m) for m in history]
