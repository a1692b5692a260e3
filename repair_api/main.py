"""Main FastAPI application for the repair assistant API.

Provides:
- Health check endpoint
- Repair guide endpoint used by the web form (``/api/diagnose``)
- Normalization tool for replaying stored model replies
"""

from datetime import datetime, timezone
from typing import Dict

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repair_api.api.v1.endpoints import diagnose, tools
from repair_api.api.v1.schemas import ErrorResponse
from repair_api.config import settings
from repair_api.logging_config import configure_logging

configure_logging(settings.log_level, settings.log_format)
logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Repair Assistant - step-by-step repair guides from an LLM",
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


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Form endpoints answer bad bodies with the failure envelope."""
    if not request.url.path.startswith("/api/"):
        return await request_validation_exception_handler(request, exc)
    logger.warning("invalid_request_body", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="Invalid request body").model_dump(),
    )


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("app_starting", name=settings.app_name, version=settings.app_version)
    logger.info("llm_config", endpoint=settings.llm_endpoint, model=settings.llm_model)
    if not settings.has_llm_credentials:
        logger.warning("llm_api_key_missing", hint="set GROQ_API_KEY")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    logger.info("app_shutting_down", name=settings.app_name)
    if diagnose.get_llm_client.cache_info().currsize:
        await diagnose.get_llm_client().aclose()


@app.get("/", tags=["Root"])
async def root() -> Dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message with API information
    """
    return {
        "message": "Repair Assistant API",
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    return {
        "status": "healthy" if settings.has_llm_credentials else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "llm": "configured" if settings.has_llm_credentials else "missing_api_key",
    }


# Include routers
app.include_router(diagnose.router, prefix="/api", tags=["Diagnostics"])
app.include_router(tools.router, prefix="/v1/tools", tags=["Tools"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )
