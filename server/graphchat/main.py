"""
GraphChat Main Application
FastAPI entry point for the knowledge-graph chat service: the Cypher query
proxy and the per-session chat history views.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from graphchat.api.routes import chat_history, cypher
from graphchat.core.config import get_settings
from graphchat.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="GraphChat - Knowledge Graph Chat",
        description="Query proxy and chat history views for natural-language knowledge graph questions",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(cypher.router)
    app.include_router(chat_history.router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/")
    def root():
        return {
            "message": "Welcome to GraphChat API",
            "version": "0.1.0",
            "docs": "/docs",
            "health": "/health",
            "demo_mode": settings.demo_mode,
        }

    @app.exception_handler(404)
    async def not_found_handler(request, exc):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": getattr(exc, "detail", None) or "The requested resource was not found",
                "path": str(request.url),
            },
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request, exc):
        logger.exception("[APP] Unhandled error")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "graphchat.main:app",
        host=settings.host,
        port=settings.port,
    )
