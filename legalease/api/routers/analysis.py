"""Stateless analysis, clause explanation and document comparison"""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from ...models import (
    User, AnalysisPreviewResponse, ClauseExplanation, ExplainRequest,
    CompareRequest, ComparisonResponse
)
from ...core.dependencies import get_store, get_analyzer, get_processor
from ...core.exceptions import AnalysisError
from ...core.security import get_current_user
from ...services.analysis_service import ClauseAnalyzer
from ...services.document_processor import DocumentProcessor
from ...storage.managers import DocumentStore
from ..uploads import read_upload
from .documents import get_owned_document

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


async def analyze_text(analyzer: ClauseAnalyzer, text: str, filename: str) -> AnalysisPreviewResponse:
    """Run an analysis that is returned to the caller and not stored"""
    try:
        analysis = await run_in_threadpool(analyzer.analyze_document, text, filename)
    except AnalysisError as e:
        logger.error(f"Stateless analysis of {filename} failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to analyze document")
    return AnalysisPreviewResponse(filename=filename, **analysis.model_dump())


@router.post("/analyze", response_model=AnalysisPreviewResponse)
async def analyze_upload(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    analyzer: ClauseAnalyzer = Depends(get_analyzer),
    processor: DocumentProcessor = Depends(get_processor)
):
    upload = await read_upload(file, processor)
    return await analyze_text(analyzer, upload.result.content, upload.filename)


@router.post("/explain", response_model=ClauseExplanation)
async def explain_clause(
    payload: ExplainRequest,
    current_user: User = Depends(get_current_user),
    analyzer: ClauseAnalyzer = Depends(get_analyzer)
):
    if not payload.clause_text or not payload.clause_text.strip():
        raise HTTPException(status_code=400, detail="Clause text is required")

    try:
        return await run_in_threadpool(analyzer.explain_clause, payload.clause_text)
    except AnalysisError as e:
        logger.error(f"Clause explanation failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to explain clause")


@router.post("/compare", response_model=ComparisonResponse)
async def compare_documents(
    payload: CompareRequest,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
    analyzer: ClauseAnalyzer = Depends(get_analyzer)
):
    document_ids = payload.document_ids or []
    if len(document_ids) < 2:
        raise HTTPException(status_code=400, detail="Need at least 2 documents to compare")

    entries = []
    for document_id in document_ids:
        document = await get_owned_document(document_id, store, current_user)
        entries.append((document, document.analysis_result))

    return ComparisonResponse(comparison=analyzer.compare_documents(entries))
