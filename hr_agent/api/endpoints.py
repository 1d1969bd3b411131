"""API endpoints for the HR agent service."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from hr_agent import __version__
from hr_agent.models.conversation import ChatRequest, ChatResponse, ErrorResponse, HealthResponse, StartChatResponse
from hr_agent.services.agent import Agent
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error"


def get_agent(request: Request) -> Agent:
    """Agent created by the application lifespan."""
    return request.app.state.agent


def error_response(message: str = INTERNAL_ERROR) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())


@router.get("/", response_class=PlainTextResponse, tags=["Health"])
async def root() -> str:
    """Liveness string."""
    return "HR Agent Server"


@router.post(
    "/chat",
    response_model=StartChatResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Conversation"],
)
async def start_conversation(body: ChatRequest, request: Request):
    """Start a new conversation; the thread id is the current time in milliseconds."""
    thread_id = str(time.time_ns() // 1_000_000)
    try:
        logger.info(f"Starting conversation {thread_id}: {body.message[:50]}...")
        response_text = await get_agent(request).send_message(body.message, thread_id)
        return StartChatResponse(thread_id=thread_id, response=response_text)
    except Exception as e:
        logger.error(f"Error starting conversation {thread_id}: {e}", exc_info=True)
        return error_response()


@router.post(
    "/chat/{thread_id}",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Conversation"],
)
async def continue_conversation(thread_id: str, body: ChatRequest, request: Request):
    """Send a message in an existing conversation."""
    try:
        logger.info(f"Processing message for thread {thread_id}: {body.message[:50]}...")
        response_text = await get_agent(request).send_message(body.message, thread_id)
        return ChatResponse(response=response_text)
    except Exception as e:
        logger.error(f"Error in chat for thread {thread_id}: {e}", exc_info=True)
        return error_response()


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
    )
