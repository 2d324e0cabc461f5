"""
Background analysis of uploaded documents.

A document moves pending -> analyzing -> completed | error. The task never
raises; failures are recorded on the document so polling clients see them.
"""
import time
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from ..models import AnalysisStatus
from ..services.analysis_service import ClauseAnalyzer
from ..storage.managers import DocumentStore, AnalyticsCache

logger = logging.getLogger(__name__)


async def run_document_analysis(
    document_id: str,
    store: DocumentStore,
    analyzer: ClauseAnalyzer,
    cache: Optional[AnalyticsCache] = None
):
    """Analyze a stored document and record the outcome on it"""
    start_time = time.time()
    user_id = None

    try:
        document = await store.get_document(document_id)
        if document is None:
            logger.warning(f"Document {document_id} vanished before analysis started")
            return
        user_id = document.user_id

        await store.set_document_status(document_id, AnalysisStatus.ANALYZING)
        logger.info(f"🔍 Analyzing document {document_id} ({document.filename}) with {analyzer.mode} analyzer")

        # The AI call blocks on HTTP
        analysis = await run_in_threadpool(analyzer.analyze_document, document.original_text, document.filename)

        await store.update_document_analysis(document_id, analysis)
        logger.info(f"✅ Document {document_id} analyzed in {time.time() - start_time:.2f}s "
                    f"(risk {analysis.overall_risk_score}, {len(analysis.clauses)} clauses)")

    except Exception as e:
        logger.error(f"❌ Analysis failed for document {document_id}: {e}", exc_info=True)
        try:
            await store.set_document_status(document_id, AnalysisStatus.ERROR, error_message=str(e))
        except Exception as status_error:
            logger.error(f"Could not record analysis error for {document_id}: {status_error}")

    finally:
        if cache is not None and user_id:
            await cache.invalidate(user_id)
