"""Dependency injection and initialization"""
import logging
from typing import Optional

from ..storage.managers import DocumentStore, AnalyticsCache, get_document_store, get_analytics_cache
from ..services.analysis_service import ClauseAnalyzer
from ..services.document_processor import DocumentProcessor
from ..services.analytics_service import AnalyticsService
from ..services.translation_service import TranslationService
from ..services.speech_service import SpeechService
from ..services.legal_detection import LegalContentDetector

logger = logging.getLogger(__name__)

# Global instances
clause_analyzer: Optional[ClauseAnalyzer] = None
document_processor: Optional[DocumentProcessor] = None
translation_service: Optional[TranslationService] = None
speech_service: Optional[SpeechService] = None
legal_detector: Optional[LegalContentDetector] = None
analytics_service = AnalyticsService()

def initialize_services():
    """Create the shared service instances"""
    global clause_analyzer, document_processor, translation_service, speech_service, legal_detector

    clause_analyzer = ClauseAnalyzer()
    document_processor = DocumentProcessor()
    translation_service = TranslationService()
    speech_service = SpeechService()
    legal_detector = LegalContentDetector(rules=clause_analyzer.rules)

    logger.info(f"✅ Services initialized (analysis mode: {clause_analyzer.mode}, "
                f"translation: {translation_service.provider})")

async def get_store() -> DocumentStore:
    return await get_document_store()

async def get_cache() -> AnalyticsCache:
    return await get_analytics_cache()

def get_analyzer() -> ClauseAnalyzer:
    if clause_analyzer is None:
        initialize_services()
    return clause_analyzer

def get_processor() -> DocumentProcessor:
    if document_processor is None:
        initialize_services()
    return document_processor

def get_analytics_service() -> AnalyticsService:
    return analytics_service

def get_translator() -> TranslationService:
    if translation_service is None:
        initialize_services()
    return translation_service

def get_speech() -> SpeechService:
    if speech_service is None:
        initialize_services()
    return speech_service

def get_detector() -> LegalContentDetector:
    if legal_detector is None:
        initialize_services()
    return legal_detector
