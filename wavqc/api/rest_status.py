"""REST endpoints for health and WAVE analysis."""
from fastapi import APIRouter, HTTPException, Request
from wavqc.audio.document import WaveDocument
from wavqc.core.config import settings
from wavqc.core.errors import WaveError
from wavqc.core.logging import logger

router = APIRouter()


def _check_upload_size(size: int) -> None:
    """Refuse uploads above the configured limit."""
    if size > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"WAVE file of {size} bytes exceeds {settings.max_upload_bytes} bytes"
        )


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Status and version information
    """
    return {
        "status": "ok",
        "version": "0.1.0"
    }


@router.post("/analyze")
async def analyze_wave(request: Request):
    """
    Analyze a WAVE file sent as the raw request body.

    Returns:
        Format summary and frame characteristics
    """
    declared_length = request.headers.get("content-length")
    if declared_length and declared_length.isdigit():
        _check_upload_size(int(declared_length))

    content = await request.body()

    if not content:
        raise HTTPException(status_code=400, detail="Request body is empty")
    _check_upload_size(len(content))

    source = request.headers.get("x-filename", "upload")
    try:
        document = WaveDocument.from_bytes(content, source=source)
    except WaveError as e:
        logger.warning(f"Rejected {source} at stage '{e.stage}': {e.message}")
        raise HTTPException(status_code=422, detail={"stage": e.stage, "message": e.message})

    characteristics = document.characteristics
    logger.info(
        f"Analyzed {source}: {characteristics.total_frames} frames, "
        f"{characteristics.non_silence_frames} audio"
    )
    return {
        "source": source,
        "format": document.format_summary,
        "characteristics": characteristics.to_dict(),
    }
