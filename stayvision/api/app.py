"""FastAPI surface for the StayVision "Simulate Your Stay" backend."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()

import logging
from typing import List

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stayvision import __version__
from stayvision.api.dependencies import (
    get_conversation_service,
    get_feedback_sink,
    get_settings,
    lifespan,
)
from stayvision.api.response_builder import _result_to_response
from stayvision.api.schemas import (
    ConversationRequest,
    ConversationResponse,
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    HealthResponse,
    PropertyListResponse,
)
from stayvision.core.catalog import get_catalog
from stayvision.core.errors import PropertyNotFoundError, StayVisionError
from stayvision.core.schemas import Property

logger = logging.getLogger(__name__)

settings = get_settings()

if settings.sentry_dsn:  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="StayVision API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(StayVisionError)
async def stayvision_error_handler(request: Request, exc: StayVisionError) -> JSONResponse:
    logger.error(f"{type(exc).__name__} while handling {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple health endpoint used for readiness probes."""

    return HealthResponse()


@app.get("/api/properties", response_model=PropertyListResponse)
async def list_properties() -> PropertyListResponse:
    """List every property available for a stay preview."""

    properties: List[Property] = list(get_catalog())
    return PropertyListResponse(properties=properties, count=len(properties))


@app.get(
    "/api/properties/{property_id}",
    response_model=Property,
    responses={404: {"model": ErrorResponse}},
)
async def get_property(property_id: str) -> Property:
    prop = get_catalog().lookup(property_id)
    if prop is None:
        raise PropertyNotFoundError(property_id)
    return prop


@app.post("/api/feedback", response_model=FeedbackResponse)
async def submit_feedback(payload: FeedbackRequest) -> FeedbackResponse:
    """Record guest feedback about a generated preview.

    Feedback is logged and kept in memory only; it does not survive a restart.
    """
    get_feedback_sink().record(payload)
    return FeedbackResponse(success=True)


@app.post(
    "/api/getResponseFromLLM",
    response_model=ConversationResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_response_from_llm(payload: ConversationRequest) -> ConversationResponse:
    """Advance the "Simulate Your Stay" conversation by one turn.

    The client sends the full message history it received from the previous
    call. The backend seeds a system prompt for new conversations, returns a
    welcome message when the guest has not said anything yet, and otherwise
    either asks the model for the next question or, once enough has been
    gathered, generates the 3-day itinerary.

    Example JSON payload:
        ```json
        {
            "propertyId": "wildhouse-farm",
            "messages": [],
            "userMessage": "Family of four with a dog, we love hiking"
        }
        ```

    Raises:
        404: unknown ``propertyId`` (no model call is made)
        502: the model call failed or returned an unusable itinerary
    """
    logger.info(f"Conversation request for property: {payload.property_id}")
    service = get_conversation_service()
    try:
        prop, result = await service.respond(payload)
    except StayVisionError:
        raise
    except ValueError as exc:
        logger.error(f"Value error during conversation: {str(exc)}")
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception as exc:
        logger.error(f"Unexpected error during conversation: {str(exc)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to process conversation"})

    response = _result_to_response(prop, result)
    logger.info(f"Conversation turn completed: completed={response.completed}")
    return response
