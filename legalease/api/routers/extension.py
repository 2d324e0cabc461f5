"""Endpoints used by the browser extension"""
import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException

from ...config import MIN_SELECTION_LENGTH
from ...models import (
    User, LegalDetectionRequest, LegalDetectionResponse,
    SelectionAnalysisRequest, AnalysisPreviewResponse
)
from ...core.dependencies import get_analyzer, get_detector
from ...core.security import get_current_user
from ...services.analysis_service import ClauseAnalyzer
from ...services.legal_detection import LegalContentDetector
from .analysis import analyze_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/extension", tags=["extension"])


@router.post("/detect", response_model=LegalDetectionResponse)
async def detect_legal_content(
    payload: LegalDetectionRequest,
    detector: LegalContentDetector = Depends(get_detector)
):
    """Find legal-looking text blocks in page text or HTML"""
    if not payload.text and not payload.html:
        raise HTTPException(status_code=400, detail="Text or HTML is required")
    return detector.detect(text=payload.text, html=payload.html)


@router.post("/analyze", response_model=AnalysisPreviewResponse)
async def analyze_selection(
    payload: SelectionAnalysisRequest,
    current_user: User = Depends(get_current_user),
    analyzer: ClauseAnalyzer = Depends(get_analyzer)
):
    """Analyze selected or page text without storing it"""
    text = (payload.text or "").strip()
    if len(text) < MIN_SELECTION_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Please select at least {MIN_SELECTION_LENGTH} characters of text"
        )

    source = urlparse(payload.source_url).netloc if payload.source_url else ""
    filename = f"Selection from {source}" if source else "Web selection"
    logger.info(f"🧩 Extension analysis requested by {current_user.id} ({len(text)} chars)")
    return await analyze_text(analyzer, text, filename)
