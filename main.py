"""FastAPI application — entry point for the generation service."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from providers.errors import GenerationError
from providers.registry import Modality, default_provider
from routes import error_status, router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("=" * 70)
    logger.info("Generation service starting on http://localhost:%d", settings.port)
    for modality in Modality:
        logger.info("Default %s provider: %s", modality.value, default_provider(modality))
    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY not set; free Gemini providers need a caller-supplied key")
    logger.info("=" * 70)
    yield
    logger.info("Shutdown complete")


app = FastAPI(
    title="Generation Studio",
    description="Image, video, and chat generation across multiple AI providers",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    status = error_status(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.message, "kind": exc.kind})


app.include_router(router)

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
