"""Unit tests for the live status indicator."""
from hypothesis import given
from hypothesis import strategies as st

from conftest import make_message
from graphchat.core.enums import StatusColor
from graphchat.core.state import Stage
from graphchat.services.status import (
    EXECUTING_QUERY,
    SUMMARIZING_RESULTS,
    WAITING_FOR_USER,
    PendingFlags,
    derive_status,
)

DESCRIBED = Stage(main_stage="Query Building", sub_stage="Generate query", description="Writing a query")
UNDESCRIBED = Stage(main_stage="Query Building", sub_stage="Generate query")


class TestDeriveStatus:
    """Tests for the priority ladder."""

    def test_idle(self):
        status = derive_status(PendingFlags(), make_message(2, stage=DESCRIBED))

        assert status.color == StatusColor.INFO
        assert status.label == WAITING_FOR_USER

    def test_chat_pending_uses_description(self):
        status = derive_status(PendingFlags(chat_pending=True), make_message(2, stage=DESCRIBED))

        assert status.color == StatusColor.WARNING
        assert status.label == "Writing a query"

    def test_chat_pending_falls_back_to_sub_stage(self):
        status = derive_status(PendingFlags(chat_pending=True), make_message(2, stage=UNDESCRIBED))

        assert status.label == "Generate query"

    def test_chat_pending_without_stage_is_empty(self):
        status = derive_status(PendingFlags(chat_pending=True), make_message(2))

        assert status.color == StatusColor.WARNING
        assert status.label == ""

    def test_chat_pending_with_empty_history(self):
        status = derive_status(PendingFlags(chat_pending=True), None)

        assert status.label == ""

    def test_idle_with_empty_history(self):
        assert derive_status(PendingFlags(), None).label == WAITING_FOR_USER

    def test_query_pending(self):
        status = derive_status(PendingFlags(query_pending=True), None)

        assert status.color == StatusColor.WARNING
        assert status.label == EXECUTING_QUERY

    def test_summarize_pending(self):
        status = derive_status(PendingFlags(summarize_pending=True), None)

        assert status.color == StatusColor.WARNING
        assert status.label == SUMMARIZING_RESULTS

    def test_chat_beats_query(self):
        flags = PendingFlags(chat_pending=True, query_pending=True, summarize_pending=True)
        status = derive_status(flags, make_message(2, stage=DESCRIBED))

        assert status.label == "Writing a query"

    def test_query_beats_summarize(self):
        flags = PendingFlags(query_pending=True, summarize_pending=True)

        assert derive_status(flags, None).label == EXECUTING_QUERY


class TestLabelTruncation:
    """Labels longer than 60 characters are cut and get an ellipsis."""

    def _status_for(self, description: str):
        stage = Stage(main_stage="m", sub_stage="s", description=description)
        return derive_status(PendingFlags(chat_pending=True), make_message(2, stage=stage))

    def test_exactly_sixty_untouched(self):
        assert self._status_for("x" * 60).label == "x" * 60

    def test_sixty_one_truncated(self):
        assert self._status_for("x" * 61).label == "x" * 60 + "..."

    @given(st.text(min_size=61, max_size=300))
    def test_long_labels_are_sixty_three(self, description: str):
        label = self._status_for(description).label

        assert len(label) == 63
        assert label == description[:60] + "..."

    @given(st.text(min_size=1, max_size=60))
    def test_short_labels_untouched(self, description: str):
        assert self._status_for(description).label == description
