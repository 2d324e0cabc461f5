"""Health check endpoints"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from ...config import FeatureFlags, APP_TITLE
from ...core.dependencies import get_store, get_analyzer
from ...services.analysis_service import ClauseAnalyzer
from ...storage.managers import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _features() -> dict:
    return {
        "ai_enabled": FeatureFlags.AI_ENABLED,
        "pymupdf_available": FeatureFlags.PYMUPDF_AVAILABLE,
        "pdfplumber_available": FeatureFlags.PDFPLUMBER_AVAILABLE,
        "docx_available": FeatureFlags.DOCX_AVAILABLE,
        "tts_available": FeatureFlags.GTTS_AVAILABLE,
        "googletrans_available": FeatureFlags.GOOGLETRANS_AVAILABLE
    }


@router.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": APP_TITLE,
        "features": _features()
    }


@router.get("/health/detailed")
async def detailed_health_check(
    store: DocumentStore = Depends(get_store),
    analyzer: ClauseAnalyzer = Depends(get_analyzer)
):
    """Detailed health check with component status"""
    try:
        storage = await store.get_system_stats()
        storage_status = "healthy"
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        storage = {}
        storage_status = f"error: {e}"

    return {
        "status": "healthy" if storage_status == "healthy" else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "components": {
            "storage": storage_status,
            "storage_backend": store.backend,
            "analysis_mode": analyzer.mode,
            "storage_stats": storage
        },
        "features": _features()
    }
