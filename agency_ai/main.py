"""FastAPI application exposing the agency AI pipeline."""

import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from agency_ai.infra.error_handler import AggregationError, GenerationError
from agency_ai.infra.logging import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    app_logger.info("Application starting up")

    yield

    app_logger.info("Application shutting down")

    # Close database connections if any were opened
    from agency_ai.infra.database import dispose_engine
    dispose_engine()


app = FastAPI(
    title="Agency AI API",
    description="""
    AI content pipeline for Smart Agency OS.

    ## Features

    - **Proposals**: Draft client proposals from a title, brief and terms
    - **Reports**: Draft client reports split into summary, risks and next steps
    - **Onboarding**: Suggest onboarding checklists for new engagements
    - **Copilot**: Answer questions with the agency's current business data
    - **Insights**: Rule-based recommendations about the agency
    """,
    version="1.0.0",
    lifespan=lifespan,
    tags_metadata=[
        {
            "name": "AI",
            "description": "Proposal, report, onboarding, copilot and insights generation",
        },
        {
            "name": "Health",
            "description": "Health check and monitoring endpoints",
        },
    ],
)

# Setup middleware (last added runs first)
from agency_ai.infra.middleware import RequestIDMiddleware, RequestLoggingMiddleware, setup_cors
from agency_ai.infra.timeout import TimeoutMiddleware, REQUEST_TIMEOUT

app.add_middleware(TimeoutMiddleware, timeout=REQUEST_TIMEOUT)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
setup_cors(app)

# Register routers
from agency_ai.api.routers import ai, health

app.include_router(ai.router)
app.include_router(health.router)


# Error handlers
@app.exception_handler(GenerationError)
async def generation_exception_handler(request: Request, exc: GenerationError):
    """The model call failed; only the user-facing message leaves the service."""
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message},
    )


@app.exception_handler(AggregationError)
async def aggregation_exception_handler(request: Request, exc: AggregationError):
    """The tenant identifier was rejected before any data was read."""
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions."""
    error_id = str(uuid.uuid4())
    app_logger.error(f"Unhandled exception: {exc}", exc_info=True, extra={"error_id": error_id})
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error. Error ID: {error_id}"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30,
    )
