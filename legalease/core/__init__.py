"""Core functionality package"""
from .exceptions import (
    LegalEaseException,
    DocumentProcessingError,
    AnalysisError,
    AIServiceError,
    AuthenticationError,
    DocumentNotFoundError,
    StorageError,
    TranslationError,
    SpeechSynthesisError
)

__all__ = [
    'LegalEaseException',
    'DocumentProcessingError',
    'AnalysisError',
    'AIServiceError',
    'AuthenticationError',
    'DocumentNotFoundError',
    'StorageError',
    'TranslationError',
    'SpeechSynthesisError'
]
