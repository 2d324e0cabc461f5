"""Document upload, retrieval and lifecycle endpoints"""
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, Query, UploadFile

from ...models import (
    User, AnalysisStatus, LegalDocument, DocumentUploadResponse, DocumentDetailResponse,
    DocumentListResponse, DocumentStatusResponse, ReanalyzeResponse
)
from ...core.dependencies import get_store, get_cache, get_analyzer, get_processor
from ...core.security import get_current_user
from ...services.analysis_service import ClauseAnalyzer
from ...services.document_processor import DocumentProcessor
from ...storage.managers import DocumentStore, AnalyticsCache
from ...tasks.analysis_tasks import run_document_analysis
from ..uploads import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

STATUS_PROGRESS = {
    AnalysisStatus.PENDING: 0,
    AnalysisStatus.ANALYZING: 50,
    AnalysisStatus.COMPLETED: 100,
    AnalysisStatus.ERROR: 0,
}


async def get_owned_document(document_id: str, store: DocumentStore, user: User) -> LegalDocument:
    """Fetch a document of the current user; other users' documents are reported as missing"""
    document = await store.get_document(document_id)
    if document is None or document.user_id != user.id:
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.post("/upload", response_model=DocumentUploadResponse)
async def upload_document(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    filename: Optional[str] = Form(None),
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
    cache: AnalyticsCache = Depends(get_cache),
    analyzer: ClauseAnalyzer = Depends(get_analyzer),
    processor: DocumentProcessor = Depends(get_processor)
):
    """Store an uploaded document and schedule its analysis"""
    upload = await read_upload(file, processor, filename)

    try:
        document = await store.create_document(
            user_id=current_user.id,
            filename=upload.filename,
            original_text=upload.result.content,
            file_size=upload.size,
            page_count=upload.result.page_count,
            extraction_warnings=upload.result.warnings
        )
    except Exception as e:
        logger.error(f"Could not store {upload.filename}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to store document")

    background_tasks.add_task(run_document_analysis, document.id, store, analyzer, cache)
    await cache.invalidate(current_user.id)

    logger.info(f"📥 Document {document.id} uploaded by {current_user.id}, analysis scheduled")
    return DocumentUploadResponse(
        document_id=document.id,
        message="Document uploaded successfully. Analysis in progress.",
        status=document.analysis_status,
        warnings=upload.result.warnings
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    search: Optional[str] = Query(None),
    status: Optional[AnalysisStatus] = Query(None),
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store)
):
    documents = await store.list_documents(current_user.id)
    if search:
        needle = search.lower()
        documents = [d for d in documents if needle in d.filename.lower()]
    if status:
        documents = [d for d in documents if d.analysis_status == status]
    return DocumentListResponse(documents=documents, total=len(documents))


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store)
):
    document = await get_owned_document(document_id, store, current_user)
    return DocumentDetailResponse(document=document, analysis=document.analysis_result)


@router.get("/{document_id}/status", response_model=DocumentStatusResponse)
async def get_document_status(
    document_id: str,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store)
):
    document = await get_owned_document(document_id, store, current_user)
    return DocumentStatusResponse(
        document_id=document.id,
        status=document.analysis_status,
        progress=STATUS_PROGRESS[document.analysis_status],
        error=document.error_message
    )


@router.post("/{document_id}/reanalyze", response_model=ReanalyzeResponse)
async def reanalyze_document(
    document_id: str,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
    cache: AnalyticsCache = Depends(get_cache),
    analyzer: ClauseAnalyzer = Depends(get_analyzer)
):
    document = await get_owned_document(document_id, store, current_user)
    if document.analysis_status == AnalysisStatus.ANALYZING:
        raise HTTPException(status_code=409, detail="Analysis already in progress")

    await store.set_document_status(document_id, AnalysisStatus.PENDING)
    await cache.invalidate(current_user.id)
    background_tasks.add_task(run_document_analysis, document_id, store, analyzer, cache)

    logger.info(f"🔁 Re-analysis scheduled for document {document_id}")
    return ReanalyzeResponse(
        document_id=document_id,
        status=AnalysisStatus.PENDING,
        message="Re-analysis started"
    )


@router.delete("/{document_id}")
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
    cache: AnalyticsCache = Depends(get_cache)
):
    await get_owned_document(document_id, store, current_user)
    await store.delete_document(document_id)
    await cache.invalidate(current_user.id)
    return {"success": True}
