"""
Health check endpoint.
"""
from fastapi import APIRouter
from datetime import datetime, timezone
import logging

from diva.config import settings
from diva.models.schemas import HealthCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint to verify system status.

    Returns:
        HealthCheckResponse; status is "degraded" when no provider API key
        is configured (conversion still works, generation will fail).
    """
    configured = bool(settings.OPENAI_API_KEY)
    if not configured:
        logger.warning("Health check: OPENAI_API_KEY is not set")

    return HealthCheckResponse(
        status="healthy" if configured else "degraded",
        llm_provider="configured" if configured else "missing_api_key",
        model=settings.OPENAI_MODEL,
        timestamp=datetime.now(timezone.utc),
    )
