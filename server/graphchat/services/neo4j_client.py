import atexit
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from neo4j import Driver, GraphDatabase
from neo4j.exceptions import DriverError, Neo4jError
from neo4j.graph import Node, Path, Relationship
from neo4j.spatial import Point
import neo4j.time

from graphchat.core.config import get_settings

logger = logging.getLogger(__name__)


class QueryExecutionError(Exception):
    """A query failed in the driver or while converting its rows.

    Only the driver's message is kept; the query text and parameters are
    left out so they never reach the logs.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def to_python(value: Any) -> Any:
    # Points and durations are tuple subclasses; match them before sequences.
    if isinstance(value, Point):
        return {"srid": value.srid, "coordinates": list(value)}
    elif isinstance(value, neo4j.time.Duration):
        return str(value)
    elif isinstance(value, dict):
        return {k: to_python(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [to_python(v) for v in value]
    elif isinstance(value, Node):
        return {
            "element_id": value.element_id,
            "labels": sorted(value.labels),
            "properties": to_python(dict(value)),
        }
    elif isinstance(value, Relationship):
        return {
            "element_id": value.element_id,
            "type": value.type,
            "start_node": value.start_node.element_id if value.start_node else None,
            "end_node": value.end_node.element_id if value.end_node else None,
            "properties": to_python(dict(value)),
        }
    elif isinstance(value, Path):
        return {
            "nodes": [to_python(node) for node in value.nodes],
            "relationships": [to_python(rel) for rel in value.relationships],
        }
    elif isinstance(value, (neo4j.time.DateTime, neo4j.time.Date, neo4j.time.Time)):
        return value.iso_format()
    else:
        return value


def records_to_rows(records) -> List[Dict[str, Any]]:
    """One plain dict per record, keyed by the record's column names."""
    return [
        {key: to_python(record[key]) for key in record.keys()}
        for record in records
    ]


class Neo4jClient:
    def __init__(self, driver: Optional[Driver] = None, database: Optional[str] = None) -> None:
        settings = get_settings()
        self._database_name = database if database is not None else settings.neo4j_database
        self._driver = driver or GraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_username, settings.neo4j_password),
        )

    def close(self) -> None:
        self._driver.close()

    def execute(
        self,
        cypher_query: str,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run one query in its own session and return its rows.

        The session is opened per call and closed before returning, on
        success and on every failure.

        Raises:
            QueryExecutionError: driver, syntax, constraint or conversion failure
        """
        session = self._driver.session(database=self._database_name)
        try:
            result = session.run(cypher_query, parameters or {})
            return records_to_rows(list(result))
        except (Neo4jError, DriverError) as exc:
            message = getattr(exc, "message", None) or str(exc)
            logger.error(f"[NEO4J] Query failed: {message}")
            raise QueryExecutionError(message) from exc
        except (TypeError, ValueError) as exc:
            logger.error(f"[NEO4J] Could not convert query result: {exc}")
            raise QueryExecutionError(str(exc)) from exc
        finally:
            session.close()


@lru_cache(maxsize=1)
def get_neo4j_client() -> Neo4jClient:
    client = Neo4jClient()
    atexit.register(client.close)
    return client
