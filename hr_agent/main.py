"""Main FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hr_agent import __version__
from hr_agent.api.endpoints import router
from hr_agent.clients.azure_openai import create_chat_model, create_embeddings
from hr_agent.clients.credentials import create_token_provider
from hr_agent.clients.mongo import MongoConnection
from hr_agent.core.config import load_settings
from hr_agent.models.conversation import ErrorResponse
from hr_agent.services.agent import Agent
from hr_agent.services.conversation_store import create_conversation_store
from hr_agent.utils.logging import LogConfig, get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect to the database and initialize the agent before serving traffic.

    Any configuration error propagates so the server refuses to start.
    """
    settings = load_settings()
    setup_logging(LogConfig(level=settings.log_level))

    connection = MongoConnection.from_settings(settings)
    await connection.connect()
    try:
        token_provider = create_token_provider(settings)
        agent = Agent(
            model=create_chat_model(settings, token_provider),
            embeddings=create_embeddings(settings, token_provider),
            connection=connection,
            store=create_conversation_store(settings, connection),
            max_turns=settings.agent_max_turns,
        )
        await agent.initialize()
        app.state.agent = agent

        logger.info(f"Server ready on port {settings.port}")
        yield
    finally:
        await connection.close()


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed chat bodies are reported as 500 with an error field."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    problems = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            problems.append("malformed JSON")
        else:
            problems.append(".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=f"Invalid request body: {', '.join(problems)}").model_dump(),
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="HR Agent",
        description="A conversational HR assistant that looks up employees via vector search.",
        version=__version__,
        lifespan=lifespan,
        tags_metadata=[
            {
                "name": "Conversation",
                "description": "Start and continue threaded conversations with the HR agent.",
            },
            {
                "name": "Health",
                "description": "Service liveness checks.",
            },
        ],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured port."""
    settings = load_settings()
    uvicorn.run("hr_agent.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
