"""
Condenser - groups the full chat history for the condensed view.

Neighbouring messages from the same pipeline stage are folded together so
an intermediate user sees one entry per step instead of every LLM/tool turn.
The result is derived on every call and never stored.
"""

from typing import List, Optional, Sequence

from graphchat.core.state import ChatMessage

# One or two grouped chat messages
CondensedChat = List[ChatMessage]


def _main_stage(message: ChatMessage) -> Optional[str]:
    return message.stage.main_stage if message.stage else None


def _sub_stage(message: ChatMessage) -> Optional[str]:
    return message.stage.sub_stage if message.stage else None


def stages_match(first: ChatMessage, second: ChatMessage) -> bool:
    """
    True if the main stages OR the sub stages are equal.

    A missing stage compares equal to another missing stage and unequal to
    any present one.
    """
    # NOTE: OR rather than AND merges more eagerly; kept until product confirms.
    return (
        _main_stage(first) == _main_stage(second)
        or _sub_stage(first) == _sub_stage(second)
    )


def condense(full_history: Sequence[ChatMessage]) -> List[CondensedChat]:
    """
    Convert the full chat history into condensed groups.

    Args:
        full_history: Messages in append order

    Returns:
        Groups of one or two messages, in input order. The first message
        (the system priming prompt) is never included, and stage-less
        messages that pair with nothing are dropped.
    """
    condensed: List[CondensedChat] = []

    i = 1  # skip the initial system prompt
    while i < len(full_history):
        current = full_history[i]
        following = full_history[i + 1] if i + 1 < len(full_history) else None

        if following is not None and stages_match(current, following):
            condensed.append([current, following])
            i += 2
            continue

        if current.stage is not None:
            condensed.append([current])
        i += 1

    return condensed
