"""
Chat History API Routes.

Exposes a session's chat history store to the rendering layer: the three
readable slices, the four mutators, and the condensed/status projections.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from graphchat.core.enums import DisplayMode, StatusColor
from graphchat.core.state import MessageDraft
from graphchat.services.chat_history import (
    ChatHistoryStore,
    ChatIdConflict,
    SessionRegistry,
    get_session_registry,
)
from graphchat.services.message_view import render_history
from graphchat.services.status import PendingFlags, derive_status

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/sessions/{session_id}",
    tags=["Chat History"],
)


class AppendFullRequest(BaseModel):
    messages: List[MessageDraft] = Field(..., min_length=1)


class DisplayModeRequest(BaseModel):
    mode: DisplayMode


class HistoryResponse(BaseModel):
    display_mode: DisplayMode
    view: DisplayMode
    entries: List[Dict[str, Any]]


class StatusResponse(BaseModel):
    color: StatusColor
    label: str


def get_store(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> ChatHistoryStore:
    return registry.get(session_id)


@router.get("/history", response_model=HistoryResponse)
def get_history(
    mode: Optional[DisplayMode] = Query(None, description="Override the session's display mode"),
    store: ChatHistoryStore = Depends(get_store),
) -> HistoryResponse:
    view = mode or store.display_mode
    entries = render_history(view, store.full_history, store.simple_history)
    return HistoryResponse(display_mode=store.display_mode, view=view, entries=entries)


@router.post("/messages/full", status_code=status.HTTP_201_CREATED)
def append_full(
    request: AppendFullRequest,
    store: ChatHistoryStore = Depends(get_store),
) -> Dict[str, Any]:
    """
    Append messages to the full history.

    Messages without `chatId` get one from the session counter. A supplied
    `chatId` must be at or above the counter, which then moves past it.
    """
    try:
        messages = store.append_new_full(request.messages)
    except ChatIdConflict as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    logger.info(f"[HISTORY] Appended {len(messages)} messages to full history")
    return {"chatIds": [m.chat_id for m in messages]}


@router.post("/messages/simple", status_code=status.HTTP_201_CREATED)
def append_simple(
    request: MessageDraft,
    store: ChatHistoryStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        message = store.append_new_simple(request)
    except ChatIdConflict as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return {"chatId": message.chat_id}


@router.put("/display-mode")
def set_display_mode(
    request: DisplayModeRequest,
    store: ChatHistoryStore = Depends(get_store),
) -> Dict[str, Any]:
    store.set_display_mode(request.mode)
    return {"display_mode": store.display_mode, "label": store.display_mode.label}


@router.post("/chat-id")
def next_chat_id(store: ChatHistoryStore = Depends(get_store)) -> Dict[str, int]:
    return {"chatId": store.next_chat_id()}


@router.get("/status", response_model=StatusResponse)
def get_status(
    chat_pending: bool = False,
    query_pending: bool = False,
    summarize_pending: bool = False,
    store: ChatHistoryStore = Depends(get_store),
) -> StatusResponse:
    flags = PendingFlags(
        chat_pending=chat_pending,
        query_pending=query_pending,
        summarize_pending=summarize_pending,
    )
    result = derive_status(flags, store.latest_full_message())
    return StatusResponse(color=result.color, label=result.label)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> None:
    if not registry.reset(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    logger.info(f"[HISTORY] Discarded session {session_id}")
