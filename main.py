import logging
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from jobloom.core.cache import create_cache_client
from jobloom.core.config import settings
from jobloom.core.database import engine, init_db
from jobloom.core.deps import UNAUTHORIZED, uid_from_header
from jobloom.core.logging_config import setup_logging
from jobloom.core.security import build_token_verifier
from jobloom.services.completion_client import CompletionClient
from jobloom.api.endpoints import ai, health, jobs

setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Process-wide clients are built here once and shared by all requests.
    """
    # Startup
    logger.info("Starting up JobLoom API...")
    init_db()

    app.state.token_verifier = build_token_verifier(settings)
    app.state.completion_client = CompletionClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
    )
    app.state.cache = create_cache_client(settings.REDIS_URL)

    yield

    # Shutdown
    logger.info("Shutting down JobLoom API...")
    await app.state.completion_client.close()
    if app.state.cache is not None:
        app.state.cache.close()
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Job application tracker with AI resume analysis and mock interviews",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(jobs.router)
app.include_router(ai.router)
app.include_router(health.router)

# Validation failures on these routes reuse the route's own failure message
VALIDATION_FAILURE_DETAIL = {
    "/analyze-resume": ai.ANALYSIS_FAILED,
    "/mock-interview": ai.MOCK_INTERVIEW_FAILED,
}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Collapse request validation failures into the two client-visible outcomes.

    A body that cannot be parsed stops FastAPI before the bearer dependency
    runs, so the token is checked here first: unauthenticated callers get 401,
    everyone else a generic 500 with the detail kept in the log.
    """
    uid = await run_in_threadpool(
        uid_from_header,
        request.app.state.token_verifier,
        request.headers.get("Authorization"),
    )
    if uid is None:
        return JSONResponse(
            status_code=401,
            content={"detail": UNAUTHORIZED},
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.warning(f"Rejected request to {request.url.path} from user {uid}: {exc.errors()}")
    detail = VALIDATION_FAILURE_DETAIL.get(request.url.path, jobs.SERVER_ERROR)
    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/")
async def root():
    """Root endpoint - API health check"""
    return {
        "message": "JobLoom API",
        "version": "1.0.0",
        "status": "healthy"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
