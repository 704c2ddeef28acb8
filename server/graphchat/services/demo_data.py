"""
Canned conversation used to pre-seed sessions when DEMO_MODE is on.

Lets the UI be previewed without an LLM key or a running graph database.
"""

from typing import List

from graphchat.core.enums import MessageRole
from graphchat.core.state import ChatMessage, Stage

DEMO_QUESTION = "Which drivers have won the Formula One championship more than five times?"

DEMO_QUERY = """MATCH (d:Driver)-[:WON]->(c:Championship)
WITH d, count(c) AS titles
WHERE titles > 5
RETURN d.name AS name, titles
ORDER BY titles DESC"""

_EXPLORATION = Stage(main_stage="Explore KG", sub_stage="Identify entities")
_QUERY_BUILDING = Stage(
    main_stage="Query Building",
    sub_stage="Generate query",
    description="Writing a Cypher query from the explored entities",
)
_SUMMARY = Stage(main_stage="Results Summary", sub_stage="Summarize results")


def demo_full_history() -> List[ChatMessage]:
    return [
        ChatMessage(
            role=MessageRole.SYSTEM,
            content="You answer questions by writing Cypher queries against a knowledge graph.",
            chat_id=1,
            name="system",
        ),
        ChatMessage(role=MessageRole.USER, content=DEMO_QUESTION, chat_id=2, name="User"),
        ChatMessage(
            role=MessageRole.SYSTEM,
            content="Identify the entities and relationships needed to answer the question.",
            chat_id=3,
            name="system",
            stage=_EXPLORATION,
        ),
        ChatMessage(
            role=MessageRole.ASSISTANT,
            content="The question needs Driver nodes and their WON relationships to Championship nodes.",
            chat_id=4,
            name="LLM",
            stage=_EXPLORATION,
        ),
        ChatMessage(
            role=MessageRole.ASSISTANT,
            content=f"Here is a query that answers the question:\n```cypher\n{DEMO_QUERY}\n```\nRun it to see the drivers.",
            chat_id=5,
            name="LLM",
            stage=_QUERY_BUILDING,
        ),
        ChatMessage(
            role=MessageRole.TOOL,
            content='[{"name": "Michael Schumacher", "titles": 7}, {"name": "Lewis Hamilton", "titles": 7}]',
            chat_id=6,
            name="query_results",
            stage=_SUMMARY,
        ),
        ChatMessage(
            role=MessageRole.ASSISTANT,
            content="Michael Schumacher and Lewis Hamilton have each won seven championships.",
            chat_id=7,
            name="LLM",
            stage=_SUMMARY,
        ),
    ]


def demo_simple_history() -> List[ChatMessage]:
    full = demo_full_history()
    return [full[1], full[4], full[6]]
