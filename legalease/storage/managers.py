"""
Document store with optional MongoDB persistence and an in-memory default.
"""
import json
import logging
from datetime import datetime
from typing import Dict, Optional, List, Any

from ..core.exceptions import StorageError
from ..config import ANALYTICS_CACHE_TTL
from ..models import User, LegalDocument, DocumentAnalysis, AnalysisStatus

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Key-value store for users, documents and analyses.

    Everything is keyed by generated UUID strings. When a NoSQL manager with a
    live MongoDB connection is attached, reads and writes go to MongoDB;
    otherwise the in-memory maps are used.
    """

    def __init__(self, nosql_manager=None):
        self.nosql_manager = nosql_manager
        self.users: Dict[str, User] = {}
        self.documents: Dict[str, LegalDocument] = {}
        self.analyses: Dict[str, DocumentAnalysis] = {}

    @property
    def mongodb_available(self) -> bool:
        return bool(self.nosql_manager and getattr(self.nosql_manager, 'mongodb_available', False))

    @property
    def backend(self) -> str:
        return 'mongodb' if self.mongodb_available else 'memory'

    # === USER MANAGEMENT ===

    async def create_user(self, email: str, name: str, password_hash: str = "") -> User:
        user = User(email=email, name=name, password_hash=password_hash)

        if self.mongodb_available:
            from .nosql_models import UserDocument
            try:
                await UserDocument(
                    user_id=user.id,
                    email=user.email,
                    name=user.name,
                    password_hash=password_hash,
                    created_at=user.created_at
                ).insert()
            except Exception as e:
                logger.error(f"MongoDB user save failed: {e}")
                raise StorageError(f"Could not save user: {e}") from e
        else:
            self.users[user.id] = user

        logger.info(f"👤 Created user {user.id} ({email})")
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        if self.mongodb_available:
            from .nosql_models import UserDocument
            user_doc = await UserDocument.find_one(UserDocument.email == email)
            return _user_from_document(user_doc) if user_doc else None

        for user in self.users.values():
            if user.email == email:
                return user
        return None

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        if self.mongodb_available:
            from .nosql_models import UserDocument
            user_doc = await UserDocument.find_one(UserDocument.user_id == user_id)
            return _user_from_document(user_doc) if user_doc else None

        return self.users.get(user_id)

    # === DOCUMENT MANAGEMENT ===

    async def create_document(
        self,
        user_id: str,
        filename: str,
        original_text: str,
        file_size: int = 0,
        page_count: int = 0,
        extraction_warnings: Optional[List[str]] = None
    ) -> LegalDocument:
        document = LegalDocument(
            user_id=user_id,
            filename=filename,
            original_text=original_text,
            file_size=file_size,
            page_count=page_count,
            extraction_warnings=list(extraction_warnings or [])
        )

        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord
            try:
                await LegalDocumentRecord(
                    document_id=document.id,
                    analysis_status=document.analysis_status.value,
                    **document.model_dump(exclude={'id', 'analysis_result', 'analysis_status'})
                ).insert()
            except Exception as e:
                logger.error(f"MongoDB document save failed: {e}")
                raise StorageError(f"Could not save document: {e}") from e
        else:
            self.documents[document.id] = document

        logger.debug(f"Document {document.id} stored for user {user_id}")
        return document.model_copy(deep=True)

    async def get_document(self, document_id: str) -> Optional[LegalDocument]:
        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord
            record = await LegalDocumentRecord.find_one(LegalDocumentRecord.document_id == document_id)
            if not record:
                return None
            document = _document_from_record(record)
            if document.analysis_status == AnalysisStatus.COMPLETED:
                document.analysis_result = await self.get_analysis(document_id)
            return document

        document = self.documents.get(document_id)
        return document.model_copy(deep=True) if document else None

    async def list_documents(self, user_id: str) -> List[LegalDocument]:
        """All documents of a user, newest first"""
        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord
            records = await LegalDocumentRecord.find(
                LegalDocumentRecord.user_id == user_id
            ).sort(-LegalDocumentRecord.uploaded_at).to_list()
            documents = []
            for record in records:
                document = _document_from_record(record)
                if document.analysis_status == AnalysisStatus.COMPLETED:
                    document.analysis_result = await self.get_analysis(document.id)
                documents.append(document)
            return documents

        documents = [d.model_copy(deep=True) for d in self.documents.values() if d.user_id == user_id]
        documents.sort(key=lambda d: d.uploaded_at, reverse=True)
        return documents

    async def count_documents(self, user_id: str) -> int:
        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord
            return await LegalDocumentRecord.find(LegalDocumentRecord.user_id == user_id).count()
        return sum(1 for d in self.documents.values() if d.user_id == user_id)

    async def set_document_status(
        self,
        document_id: str,
        status: AnalysisStatus,
        error_message: Optional[str] = None
    ):
        """Move a document to a new analysis status"""
        updates: Dict[str, Any] = {
            'analysis_status': status,
            'error_message': error_message,
        }
        if status == AnalysisStatus.ANALYZING:
            updates['analysis_started_at'] = datetime.utcnow()
        if status != AnalysisStatus.COMPLETED:
            updates['analysis_result'] = None
            updates['analysis_completed_at'] = None

        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord, AnalysisDocument
            record = await LegalDocumentRecord.find_one(LegalDocumentRecord.document_id == document_id)
            if not record:
                raise StorageError(f"Document {document_id} not found")
            record.analysis_status = status.value
            record.error_message = error_message
            if 'analysis_started_at' in updates:
                record.analysis_started_at = updates['analysis_started_at']
            if status != AnalysisStatus.COMPLETED:
                record.analysis_completed_at = None
                await AnalysisDocument.find(AnalysisDocument.document_id == document_id).delete()
            await record.save()
        else:
            document = self.documents.get(document_id)
            if not document:
                raise StorageError(f"Document {document_id} not found")
            for key, value in updates.items():
                setattr(document, key, value)
            if status != AnalysisStatus.COMPLETED:
                self._drop_analyses(document_id)

        logger.debug(f"Document {document_id} status -> {status.value}")

    async def update_document_analysis(self, document_id: str, analysis: DocumentAnalysis):
        """Attach a finished analysis and mark the document completed"""
        analysis.document_id = document_id
        completed_at = datetime.utcnow()

        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord, AnalysisDocument
            record = await LegalDocumentRecord.find_one(LegalDocumentRecord.document_id == document_id)
            if not record:
                raise StorageError(f"Document {document_id} not found")
            await AnalysisDocument.find(AnalysisDocument.document_id == document_id).delete()
            await AnalysisDocument(
                analysis_id=analysis.id,
                document_id=document_id,
                payload=analysis.model_dump(mode='json'),
                created_at=analysis.created_at
            ).insert()
            record.analysis_status = AnalysisStatus.COMPLETED.value
            record.error_message = None
            record.analysis_completed_at = completed_at
            await record.save()
        else:
            document = self.documents.get(document_id)
            if not document:
                raise StorageError(f"Document {document_id} not found")
            self._drop_analyses(document_id)
            self.analyses[analysis.id] = analysis
            document.analysis_status = AnalysisStatus.COMPLETED
            document.analysis_result = analysis
            document.error_message = None
            document.analysis_completed_at = completed_at

    async def get_analysis(self, document_id: str) -> Optional[DocumentAnalysis]:
        if self.mongodb_available:
            from .nosql_models import AnalysisDocument
            analysis_doc = await AnalysisDocument.find_one(AnalysisDocument.document_id == document_id)
            return DocumentAnalysis.model_validate(analysis_doc.payload) if analysis_doc else None

        for analysis in self.analyses.values():
            if analysis.document_id == document_id:
                return analysis.model_copy(deep=True)
        return None

    async def delete_document(self, document_id: str):
        """Remove a document together with its analysis"""
        if self.mongodb_available:
            from .nosql_models import LegalDocumentRecord, AnalysisDocument
            await AnalysisDocument.find(AnalysisDocument.document_id == document_id).delete()
            await LegalDocumentRecord.find(LegalDocumentRecord.document_id == document_id).delete()
        else:
            self.documents.pop(document_id, None)
            self._drop_analyses(document_id)

        logger.info(f"🗑️ Document {document_id} deleted")

    def _drop_analyses(self, document_id: str):
        stale = [key for key, analysis in self.analyses.items() if analysis.document_id == document_id]
        for key in stale:
            del self.analyses[key]

    # === STATISTICS AND MONITORING ===

    async def get_system_stats(self) -> Dict[str, Any]:
        """Get storage statistics"""
        stats = {
            'timestamp': datetime.utcnow().isoformat(),
            'storage_backend': self.backend,
            'redis_available': bool(self.nosql_manager and getattr(self.nosql_manager, 'redis_available', False))
        }

        if self.mongodb_available:
            from .nosql_models import UserDocument, LegalDocumentRecord, AnalysisDocument
            try:
                stats['mongodb_stats'] = {
                    'users': await UserDocument.count(),
                    'documents': await LegalDocumentRecord.count(),
                    'analyzing': await LegalDocumentRecord.find(
                        LegalDocumentRecord.analysis_status == AnalysisStatus.ANALYZING.value
                    ).count(),
                    'analyses': await AnalysisDocument.count()
                }
            except Exception as e:
                logger.error(f"MongoDB stats failed: {e}")
                stats['mongodb_error'] = str(e)

        stats['memory_stats'] = {
            'users': len(self.users),
            'documents': len(self.documents),
            'analyses': len(self.analyses)
        }
        return stats


class AnalyticsCache:
    """Per-user analytics cache in Redis; inert without a Redis connection"""

    def __init__(self, redis_client=None, ttl: int = ANALYTICS_CACHE_TTL):
        self.redis = redis_client
        self.ttl = ttl

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    def _get_key(self, user_id: str) -> str:
        return f"analytics:{user_id}"

    async def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        if not self.enabled:
            return None
        try:
            data = await self.redis.get(self._get_key(user_id))
        except Exception as e:
            logger.warning(f"Analytics cache read failed for {user_id}: {e}")
            return None
        return json.loads(data) if data else None

    async def set(self, user_id: str, payload: Dict[str, Any]):
        if not self.enabled:
            return
        try:
            await self.redis.set(self._get_key(user_id), json.dumps(payload), ex=self.ttl)
        except Exception as e:
            logger.warning(f"Analytics cache write failed for {user_id}: {e}")

    async def invalidate(self, user_id: str):
        if not self.enabled:
            return
        try:
            await self.redis.delete(self._get_key(user_id))
        except Exception as e:
            logger.warning(f"Analytics cache invalidation failed for {user_id}: {e}")


def _user_from_document(user_doc) -> User:
    return User(
        id=user_doc.user_id,
        email=user_doc.email,
        name=user_doc.name,
        created_at=user_doc.created_at,
        password_hash=user_doc.password_hash
    )


def _document_from_record(record) -> LegalDocument:
    return LegalDocument(
        id=record.document_id,
        user_id=record.user_id,
        filename=record.filename,
        original_text=record.original_text,
        uploaded_at=record.uploaded_at,
        analysis_status=AnalysisStatus(record.analysis_status),
        error_message=record.error_message,
        analysis_started_at=record.analysis_started_at,
        analysis_completed_at=record.analysis_completed_at,
        file_size=record.file_size,
        page_count=record.page_count,
        extraction_warnings=list(record.extraction_warnings)
    )


# Global storage references
_document_store: Optional[DocumentStore] = None
_analytics_cache: Optional[AnalyticsCache] = None

async def get_document_store() -> DocumentStore:
    """Get or create the document store, attaching MongoDB when configured"""
    global _document_store
    if _document_store is None:
        from .nosql_manager import get_nosql_manager
        nosql_manager = None
        try:
            nosql_manager = await get_nosql_manager()
        except Exception as e:
            logger.error(f"Storage initialization failed: {e}")
        _document_store = DocumentStore(nosql_manager)
        logger.info(f"📦 Document store ready (backend: {_document_store.backend})")
    return _document_store

async def get_analytics_cache() -> AnalyticsCache:
    """Get or create the analytics cache backed by the shared Redis client"""
    global _analytics_cache
    if _analytics_cache is None:
        store = await get_document_store()
        redis_client = None
        if store.nosql_manager and getattr(store.nosql_manager, 'redis_available', False):
            redis_client = store.nosql_manager.redis_client
        _analytics_cache = AnalyticsCache(redis_client)
    return _analytics_cache
