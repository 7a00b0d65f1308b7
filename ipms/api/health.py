"""Health and metrics endpoints."""

from fastapi import APIRouter

from ipms.schemas.workflow import STAGE_LABELS

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/metrics")
async def metrics():
    """Basic service metadata for observability."""
    return {
        "service": "ipms",
        "version": "0.1.0",
        "stages": {stage.value: label for stage, label in STAGE_LABELS.items()},
    }
