"""FastAPI application entrypoint."""
from fastapi import FastAPI
from wavqc.api import rest_status
from wavqc.audio.chunks import REQUIRED_BITS_PER_SAMPLE, REQUIRED_CHANNELS, REQUIRED_SAMPLE_RATE
from wavqc.core.config import settings
from wavqc.core.logging import setup_logging

# Setup logging
setup_logging()

# Create FastAPI app
app = FastAPI(
    title="WAVE Quality Control",
    description="Frame-level quality analysis of 8KHz 16bit mono PCM WAVE files",
    version="0.1.0"
)

# Include routers
app.include_router(rest_status.router)


@app.on_event("startup")
async def startup_event():
    """Log the active analysis profile."""
    from wavqc.core.logging import logger

    logger.info(f"Starting WAVE Quality Control on {settings.host}:{settings.port}")
    logger.info(
        f"Profile: {REQUIRED_SAMPLE_RATE} Hz, {REQUIRED_BITS_PER_SAMPLE}-bit, "
        f"{REQUIRED_CHANNELS} channel(s); frame length {settings.frame_length_ms} ms"
    )


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    from wavqc.core.logging import logger
    logger.info("Shutting down WAVE Quality Control")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "wavqc.main:app",
        host=settings.host,
        port=settings.port
    )
