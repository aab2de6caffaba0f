"""
FastAPI main application for the Listing Search Assistant.

This is the entry point for the backend API server.
"""

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .config import get_settings
from .models.schemas import (
    QueryRequest,
    SearchResponse,
    ErrorResponse,
    HealthResponse,
)
from .services import close_listing_store
from .workflow import SearchWorkflow, get_workflow
from . import __version__

# Settings
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup/shutdown events.
    """
    # Startup
    logger.info("Starting Listing Search API...")
    logger.info(f"Version: {__version__}")

    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; classification and search will fail")
    if not (settings.SUPABASE_URL and settings.SUPABASE_KEY):
        logger.warning("SUPABASE_URL/SUPABASE_KEY are not set; listing retrieval will fail")
    if not settings.OPENAI_ASSISTANT_ID:
        logger.warning("OPENAI_ASSISTANT_ID is not set; general questions cannot be answered")

    logger.info("Listing Search API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Listing Search API...")
    await close_listing_store()


# Create FastAPI application
app = FastAPI(
    title="Listing Search API",
    description="""
    Natural-language search for real-estate listings.

    Send a free-text message in one of nine languages and receive either
    matching listings or an answer from the assistant.
    """,
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Answer malformed request bodies with an error response.

    The search endpoint never replies with anything but one of its three
    response shapes, so a body that is not a JSON object gets status 200 too.
    """
    logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    error = ErrorResponse(message="Request body must be a JSON object with a 'prompt' field.")
    return JSONResponse(status_code=200, content=error.model_dump())


# ============================================================
# API Endpoints
# ============================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Listing Search API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Health check endpoint reporting which upstream services are configured.
    """
    llm_configured = bool(settings.OPENAI_API_KEY)
    store_configured = bool(settings.SUPABASE_URL and settings.SUPABASE_KEY)
    assistant_configured = bool(settings.OPENAI_ASSISTANT_ID)

    return HealthResponse(
        status="healthy" if llm_configured and store_configured else "degraded",
        version=__version__,
        llm_configured=llm_configured,
        listing_store_configured=store_configured,
        assistant_configured=assistant_configured,
    )


@app.post("/search-properties", response_model=SearchResponse, tags=["Search"])
async def search_properties(
    request: QueryRequest,
    workflow: SearchWorkflow = Depends(get_workflow),
):
    """
    Main endpoint for searching listings.

    Always answers with exactly one response object whose ``type`` is
    "properties", "agent" or "error".
    """
    logger.info(f"Search request: {str(request.prompt or '')[:50]}...")

    response = await workflow.arun(request.prompt)

    logger.info(f"Response type: {response.type}")
    return response


@app.get("/workflow/diagram", tags=["Debug"])
async def get_workflow_diagram(workflow: SearchWorkflow = Depends(get_workflow)):
    """
    Get a visual representation of the workflow graph.
    """
    return {
        "diagram": workflow.get_graph_visualization(),
    }


# ============================================================
# Run with Uvicorn (for development)
# ============================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "listing_search.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
