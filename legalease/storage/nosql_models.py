from datetime import datetime
from typing import Optional, List, Dict, Any
from beanie import Document
from pydantic import Field

class UserDocument(Document):
    """Registered user in MongoDB"""
    user_id: str = Field(...)
    email: str = Field(...)
    name: str
    password_hash: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
        indexes = [
            "user_id",
            "email"
        ]

class LegalDocumentRecord(Document):
    """Uploaded legal document and its analysis status in MongoDB"""
    document_id: str = Field(...)
    user_id: str = Field(...)
    filename: str
    original_text: str
    uploaded_at: datetime = Field(default_factory=datetime.utcnow)
    analysis_status: str = "pending"  # pending, analyzing, completed, error
    error_message: Optional[str] = None
    analysis_started_at: Optional[datetime] = None
    analysis_completed_at: Optional[datetime] = None
    file_size: int = 0
    page_count: int = 0
    extraction_warnings: List[str] = Field(default_factory=list)

    class Settings:
        name = "documents"
        indexes = [
            "document_id",
            "user_id",
            "analysis_status",
            "uploaded_at"
        ]

class AnalysisDocument(Document):
    """Clause analysis for a document in MongoDB"""
    analysis_id: str = Field(...)
    document_id: str = Field(...)
    payload: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "analyses"
        indexes = [
            "analysis_id",
            "document_id",
            "created_at"
        ]
