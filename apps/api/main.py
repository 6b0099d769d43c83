"""
Grocery Ingestion API - FastAPI application entry point

Startup builds one Pipeline (knowledge store, grocery list, parser,
orchestrator) and keeps it on app.state; shutdown waits for in-flight
storage enrichment before releasing the database.
"""
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from apps.api.dependencies import Pipeline, build_pipeline, close_pipeline, get_pipeline
from apps.api.routers import entries, ingest, knowledge
from grocery.common.config import get_settings
from grocery.common.database import sessionmanager
from grocery.common.log_config import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

logger = structlog.get_logger()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("starting_grocery_api",
                environment=settings.environment,
                version=VERSION)

    app.state.pipeline = await build_pipeline(settings)

    yield

    logger.info("shutting_down_grocery_api",
                pending_enrichment=app.state.pipeline.orchestrator.pending_tasks)
    await close_pipeline(app.state.pipeline)


app = FastAPI(
    title="Grocery Ingestion API",
    description="Free-text grocery items → aisle-categorized entries with storage guidance",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Attach request_id/path to every log line emitted while handling the request"""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)

    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_errors(exc)
    logger.warning("validation_error", errors=errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


def jsonable_errors(exc: RequestValidationError):
    """Validation errors minus `ctx` (may hold exception objects)"""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "request_id": structlog.contextvars.get_contextvars().get("request_id"),
        },
    )


app.include_router(ingest.router, prefix="/api/v1/ingest", tags=["Ingest"])
app.include_router(entries.router, prefix="/api/v1/entries", tags=["Entries"])
app.include_router(knowledge.router, prefix="/api/v1/knowledge", tags=["Knowledge"])


@app.get("/health", tags=["System"])
async def health_check(pipeline: Pipeline = Depends(get_pipeline)):
    """Liveness plus pipeline state; 503 only when a configured database is unreachable"""
    database = "not_configured"
    if sessionmanager.initialized:
        try:
            await sessionmanager.ping()
            database = "connected"
        except Exception as e:
            logger.error("health_check_failed", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "error": str(e)},
            )

    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": VERSION,
        "services": {
            "database": database,
            "enrichment": "enabled" if pipeline.orchestrator.enricher is not None else "disabled",
        },
        "knowledge_records": len(pipeline.store),
        "entries": len(pipeline.grocery_list),
        "pending_enrichment": pipeline.store.pending_names(),
    }


@app.get("/metrics", tags=["System"])
async def metrics():
    """Prometheus scrape endpoint"""
    if not settings.metrics_enabled:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Metrics disabled"}
        )

    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/", tags=["System"])
async def root():
    return {
        "name": "Grocery Ingestion API",
        "version": VERSION,
        "endpoints": ["/api/v1/ingest", "/api/v1/entries", "/api/v1/knowledge"],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "apps.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
