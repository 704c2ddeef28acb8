"""
Cypher proxy route.

Runs a (possibly hand-edited) graph query against Neo4j and returns the
rows as plain JSON objects.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from graphchat.services.neo4j_client import Neo4jClient, QueryExecutionError, get_neo4j_client

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Query Proxy"],
)


class CypherRequest(BaseModel):
    cypher: str = Field(
        ...,
        description="Query text to run",
        examples=["MATCH (n) RETURN n.name AS name LIMIT 2"],
    )
    params: Optional[Dict[str, Any]] = Field(
        None,
        description="Query parameters; missing means no parameters",
    )


class CypherResponse(BaseModel):
    records: List[Dict[str, Any]]


class CypherError(BaseModel):
    error: str


@router.post(
    "/cypher",
    response_model=CypherResponse,
    responses={500: {"model": CypherError}},
)
def run_cypher(
    request: CypherRequest,
    client: Neo4jClient = Depends(get_neo4j_client),
):
    """
    Execute one query in a fresh Neo4j session.

    Returns:
        200 with `records`, one object per row keyed by column name

    Failure:
        500 with the driver's error message in `error`
    """
    try:
        records = client.execute(request.cypher, request.params or {})
    except QueryExecutionError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": exc.message},
        )

    logger.info(f"[CYPHER] Returned {len(records)} records")
    return CypherResponse(records=records)
