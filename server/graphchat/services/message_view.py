"""
Message views - what the rendering layer receives for each chat entry.

Assistant turns get their embedded query split out so the UI can offer to
copy it into the query editor; every other role is shown verbatim.
"""

from typing import Any, Dict, List, Sequence

from graphchat.core.enums import DisplayMode, MessageRole
from graphchat.core.state import ChatMessage
from graphchat.services.condenser import CondensedChat, condense
from graphchat.services.query_extractor import extract_query

LLM_WARNING = "This was generated by an LLM that can make mistakes."

FEEDBACK_PROMPTS = [
    "You identified the wrong data. I was actually looking for: ",
    "You misunderstood my question. I was actually asking about: ",
    "I want to ask something different: ",
]


def _header(message: ChatMessage) -> Dict[str, Any]:
    return {
        "chatId": message.chat_id,
        "name": message.name,
        "role": message.role.value,
    }


def _render_llm_response(message: ChatMessage) -> Dict[str, Any]:
    parsed = extract_query(message.content)
    if parsed is None:
        return {**_header(message), "kind": "text", "content": message.content, "warning": LLM_WARNING}

    return {
        **_header(message),
        "kind": "query",
        "pre": parsed.pre,
        "query": parsed.query,
        "post": parsed.post,
        "warning": LLM_WARNING,
        "feedback_prompts": list(FEEDBACK_PROMPTS),
    }


def render_message(message: ChatMessage) -> Dict[str, Any]:
    role = message.role
    if role is MessageRole.ASSISTANT:
        return _render_llm_response(message)
    elif role in (MessageRole.SYSTEM, MessageRole.USER, MessageRole.TOOL):
        return {**_header(message), "kind": "text", "content": message.content}
    else:
        raise ValueError(f"Unknown message role: {role}")


def render_condensed(group: CondensedChat) -> Dict[str, Any]:
    """A condensed entry is labelled by its first message's stage."""
    stage = group[0].stage
    return {
        "stage": stage.model_dump(by_alias=True) if stage else None,
        "messages": [render_message(m) for m in group],
    }


def render_history(
    mode: DisplayMode,
    full_history: Sequence[ChatMessage],
    simple_history: Sequence[ChatMessage],
) -> List[Dict[str, Any]]:
    if mode is DisplayMode.CONDENSED:
        return [render_condensed(group) for group in condense(full_history)]
    elif mode is DisplayMode.FULL:
        return [render_message(m) for m in full_history]
    elif mode is DisplayMode.SIMPLE:
        return [render_message(m) for m in simple_history]
    else:
        raise ValueError(f"Unknown display mode: {mode}")
