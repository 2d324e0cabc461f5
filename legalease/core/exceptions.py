"""Custom exceptions for the application"""

class LegalEaseException(Exception):
    """Base exception for all custom exceptions"""
    pass

class DocumentProcessingError(LegalEaseException):
    """Raised when text extraction from an upload fails"""
    pass

class AnalysisError(LegalEaseException):
    """Raised when a document or clause analysis fails"""
    pass

class AIServiceError(AnalysisError):
    """Raised when the generative AI endpoint cannot produce a reply"""
    pass

class AuthenticationError(LegalEaseException):
    """Raised when authentication fails"""
    pass

class DocumentNotFoundError(LegalEaseException):
    """Raised when a document does not exist or belongs to another user"""
    pass

class StorageError(LegalEaseException):
    """Raised when the document store cannot complete an operation"""
    pass

class TranslationError(LegalEaseException):
    """Raised when translation fails"""
    pass

class SpeechSynthesisError(LegalEaseException):
    """Raised when text-to-speech generation fails"""
    pass
