"""
Chat History Store - per-session conversation state.

Holds two independent append-only logs:
- full history: every system/tool/LLM/user turn, in chronological order
- simple history: the curated subset shown to novice users

plus the display mode selector and the chat id counter. Nothing here
persists past the process lifetime.
"""

import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from graphchat.core.config import get_settings
from graphchat.core.enums import DisplayMode, MessageRole
from graphchat.core.state import ChatMessage, MessageDraft, Stage
from graphchat.services.demo_data import demo_full_history, demo_simple_history

logger = logging.getLogger(__name__)


class ChatIdConflict(ValueError):
    """A caller-supplied chat id is at or below one already handed out."""


class ChatHistoryStore:
    def __init__(
        self,
        full_history: Iterable[ChatMessage] = (),
        simple_history: Iterable[ChatMessage] = (),
        display_mode: DisplayMode = DisplayMode.CONDENSED,
    ) -> None:
        # One lock serializes all four mutators.
        self._lock = threading.RLock()
        self._full_history: List[ChatMessage] = list(full_history)
        self._simple_history: List[ChatMessage] = list(simple_history)
        self._display_mode = DisplayMode(display_mode)

        seeded_ids = [m.chat_id for m in self._full_history + self._simple_history]
        self._chat_id_counter = max(seeded_ids, default=0) + 1

    # ------------------------------------------------------------------
    # Read slices
    # ------------------------------------------------------------------

    @property
    def full_history(self) -> Tuple[ChatMessage, ...]:
        with self._lock:
            return tuple(self._full_history)

    @property
    def simple_history(self) -> Tuple[ChatMessage, ...]:
        with self._lock:
            return tuple(self._simple_history)

    @property
    def display_mode(self) -> DisplayMode:
        return self._display_mode

    @property
    def chat_id_counter(self) -> int:
        return self._chat_id_counter

    def latest_full_message(self) -> Optional[ChatMessage]:
        with self._lock:
            return self._full_history[-1] if self._full_history else None

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def append_full(self, messages: Iterable[ChatMessage]) -> None:
        """Append messages to the end of the full history, keeping their order."""
        messages = list(messages)
        with self._lock:
            last_id = self._full_history[-1].chat_id if self._full_history else 0
            for message in messages:
                if message.chat_id <= last_id:
                    logger.warning(
                        f"[HISTORY] Out-of-order chat id {message.chat_id} appended after {last_id}"
                    )
                last_id = message.chat_id
            self._full_history.extend(messages)

    def append_simple(self, message: ChatMessage) -> None:
        with self._lock:
            self._simple_history.append(message)

    def next_chat_id(self) -> int:
        """Return the current counter value, then advance it."""
        with self._lock:
            chat_id = self._chat_id_counter
            self._chat_id_counter += 1
            return chat_id

    def set_display_mode(self, mode: DisplayMode) -> None:
        with self._lock:
            self._display_mode = DisplayMode(mode)

    def new_message(
        self,
        role: MessageRole,
        content: str,
        name: str,
        stage: Optional[Stage] = None,
    ) -> ChatMessage:
        """Build a message with a fresh chat id. Does not append it."""
        return ChatMessage(
            role=role,
            content=content,
            chat_id=self.next_chat_id(),
            name=name,
            stage=stage,
        )

    def append_new_full(self, drafts: Iterable[MessageDraft]) -> List[ChatMessage]:
        """
        Assign ids to drafts and append them to the full history in one step.

        Id assignment and append share the lock, so concurrent callers can
        never interleave ids out of append order.

        Raises:
            ChatIdConflict: a draft carries an id the counter has already passed
        """
        with self._lock:
            messages = [self._from_draft(draft) for draft in drafts]
            self.append_full(messages)
            return messages

    def append_new_simple(self, draft: MessageDraft) -> ChatMessage:
        """Same as append_new_full, for one simple-history message."""
        with self._lock:
            message = self._from_draft(draft)
            self.append_simple(message)
            return message

    def _claim_chat_id(self, requested: Optional[int]) -> int:
        # Caller holds the lock.
        if requested is None:
            return self.next_chat_id()
        if requested < self._chat_id_counter:
            raise ChatIdConflict(
                f"Chat id {requested} is already used; next free id is {self._chat_id_counter}"
            )
        self._chat_id_counter = requested + 1
        return requested

    def _from_draft(self, draft: MessageDraft) -> ChatMessage:
        return ChatMessage(
            role=draft.role,
            content=draft.content,
            chat_id=self._claim_chat_id(draft.chat_id),
            name=draft.name,
            stage=draft.stage,
        )


class SessionRegistry:
    """
    Maps session ids to their own ChatHistoryStore.

    Each browser tab or test gets a separate store, so state is never
    shared between sessions.
    """

    def __init__(self, demo_mode: bool = False) -> None:
        self._lock = threading.Lock()
        self._stores: Dict[str, ChatHistoryStore] = {}
        self._demo_mode = demo_mode

    def get(self, session_id: str) -> ChatHistoryStore:
        with self._lock:
            store = self._stores.get(session_id)
            if store is None:
                store = self._create_store()
                self._stores[session_id] = store
                logger.info(f"[HISTORY] Created store for session {session_id}")
            return store

    def reset(self, session_id: str) -> bool:
        with self._lock:
            return self._stores.pop(session_id, None) is not None

    def _create_store(self) -> ChatHistoryStore:
        if self._demo_mode:
            return ChatHistoryStore(
                full_history=demo_full_history(),
                simple_history=demo_simple_history(),
            )
        return ChatHistoryStore()


_registry: Optional[SessionRegistry] = None
_registry_lock = threading.Lock()


def get_session_registry() -> SessionRegistry:
    """Get or create the process-wide session registry (FastAPI dependency)."""
    global _registry

    with _registry_lock:
        if _registry is None:
            _registry = SessionRegistry(demo_mode=get_settings().demo_mode)
        return _registry
