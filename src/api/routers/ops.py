import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_config
from study_planner.config import AppConfig

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check(config: AppConfig = Depends(get_config)) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "llm_provider": config.llm_provider,
        "remote_configured": config.llm_provider == "mock" or bool(config.gemini.api_key),
    }


@router.get("/metrics")
def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
