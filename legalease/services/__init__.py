"""Services package"""
from .document_processor import DocumentProcessor, ProcessingResult
from .ai_service import GenerativeAIService, get_ai_service, extract_json_object
from .clause_rules import RuleBasedAnalyzer
from .analysis_service import ClauseAnalyzer
from .analytics_service import AnalyticsService
from .export_service import export_analysis, ExportResult
from .translation_service import TranslationService
from .speech_service import SpeechService
from .legal_detection import LegalContentDetector

__all__ = [
    'DocumentProcessor',
    'ProcessingResult',
    'GenerativeAIService',
    'get_ai_service',
    'extract_json_object',
    'RuleBasedAnalyzer',
    'ClauseAnalyzer',
    'AnalyticsService',
    'export_analysis',
    'ExportResult',
    'TranslationService',
    'SpeechService',
    'LegalContentDetector'
]
