"""Pytest configuration and shared fixtures."""
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from neo4j.exceptions import CypherSyntaxError

from graphchat.core.enums import MessageRole
from graphchat.core.state import ChatMessage, Stage
from graphchat.main import app
from graphchat.services.chat_history import SessionRegistry, get_session_registry
from graphchat.services.neo4j_client import Neo4jClient, get_neo4j_client


class FakeRecord:
    """Mimics neo4j.Record: ordered keys plus item access."""

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def keys(self) -> List[str]:
        return list(self._data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]


class FakeSession:
    def __init__(self, queries: Dict[str, List[Dict[str, Any]]], database: Optional[str]):
        self._queries = queries
        self.database = database
        self.closed = False
        self.runs: List[tuple] = []

    def run(self, query: str, parameters: Optional[Dict[str, Any]] = None):
        self.runs.append((query, parameters))
        if query not in self._queries:
            raise CypherSyntaxError("Invalid input 'I': expected a clause")
        return iter([FakeRecord(row) for row in self._queries[query]])

    def close(self) -> None:
        self.closed = True


class FakeDriver:
    """In-memory stand-in for neo4j.Driver that records every session it hands out."""

    def __init__(self, queries: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.queries = queries or {}
        self.sessions: List[FakeSession] = []
        self.closed = False

    def session(self, database: Optional[str] = None) -> FakeSession:
        session = FakeSession(self.queries, database)
        self.sessions.append(session)
        return session

    def close(self) -> None:
        self.closed = True


TWO_NODE_QUERY = "MATCH (n) RETURN n.name AS name LIMIT 2"


@pytest.fixture
def fake_driver():
    """Driver over a two-node fixture graph."""
    return FakeDriver({TWO_NODE_QUERY: [{"name": "A"}, {"name": "B"}]})


@pytest.fixture
def neo4j_client(fake_driver):
    return Neo4jClient(driver=fake_driver, database="neo4j")


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def client(neo4j_client, registry):
    """TestClient with the database and session registry swapped for test doubles."""
    app.dependency_overrides[get_neo4j_client] = lambda: neo4j_client
    app.dependency_overrides[get_session_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_message(
    chat_id: int,
    role: MessageRole = MessageRole.ASSISTANT,
    stage: Optional[Stage] = None,
    content: str = "",
    name: str = "LLM",
) -> ChatMessage:
    return ChatMessage(role=role, content=content or f"message {chat_id}", chat_id=chat_id, name=name, stage=stage)


@pytest.fixture
def system_prompt():
    return make_message(1, role=MessageRole.SYSTEM, name="system", content="You are a knowledge graph assistant.")
