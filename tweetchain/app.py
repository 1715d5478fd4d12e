"""
Markov Chain Tweet Service
Main application entry point

Seed users get one chain each; chains are built from tweets posted to
/markov/train and optionally cached on disk.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tweetchain.api.routers import markov_router
from tweetchain.config import settings
from tweetchain.services.chain_cache import ChainCache
from tweetchain.services.errors import GenerationError
from tweetchain.utils.logger import setup_logger

# Setup logging
logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for service initialization"""
    logger.info(f"[BOOT] Starting {settings.SERVICE_NAME} {settings.SERVICE_VERSION}...")

    # One chain per seed user; handlers never await mid-operation on a chain
    app.state.chains = {}
    app.state.chain_cache = ChainCache(settings.CHAIN_CACHE_DIR)

    logger.info(
        f"[BOOT] Cache dir: {settings.CHAIN_CACHE_DIR} "
        f"({'enabled' if settings.CHAIN_CACHE_ENABLED else 'disabled'} by default)"
    )
    logger.info(f"[BOOT] Max generation steps: {settings.MAX_GENERATION_STEPS or 'unbounded'}")

    try:
        yield
    finally:
        logger.info(f"[SHUTDOWN] Dropping {len(app.state.chains)} loaded chains")
        app.state.chains.clear()


# Create FastAPI app
app = FastAPI(
    title="Markov Chain Tweet Service",
    description="First-order Markov chains built from tweets",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GenerationError)
async def generation_exception_handler(request: Request, exc: GenerationError):
    logger.warning(f"[MARKOV] Generation failed: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "ok": False,
            "error": {
                "code": exc.code,
                "message": str(exc),
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[ERR] Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": {
                "code": "CHAIN_SERVICE_ERROR",
                "message": "Internal server error occurred",
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Health check
@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "ok": True,
        "data": {
            "status": "healthy",
            "chains_loaded": len(request.app.state.chains),
            "cache_enabled": settings.CHAIN_CACHE_ENABLED,
            "max_generation_steps": settings.MAX_GENERATION_STEPS,
        },
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "markov": "/markov/*",
        },
    }


app.include_router(markov_router.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tweetchain.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
