"""Analysis export as a file download"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ...models import User, ExportRequest, ExportFormat
from ...core.dependencies import get_store
from ...core.security import get_current_user
from ...services.export_service import export_analysis
from ...storage.managers import DocumentStore
from ...utils import content_disposition
from .documents import get_owned_document

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"])


@router.post("/export")
async def export_document(
    payload: ExportRequest,
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store)
):
    if not payload.document_id or not payload.format:
        raise HTTPException(status_code=400, detail="Document ID and format are required")

    document = await get_owned_document(payload.document_id, store, current_user)
    analysis = document.analysis_result or await store.get_analysis(document.id)
    if analysis is None:
        raise HTTPException(status_code=404, detail="Analysis not found")

    try:
        export_format = ExportFormat(payload.format.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail="Unsupported format")

    result = export_analysis(document, analysis, export_format)
    logger.info(f"📤 Exported analysis of {document.id} as {export_format.value}")
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": content_disposition(result.filename)}
    )
