"""Enumeration types for the LegalEase application"""
from enum import Enum

class AnalysisStatus(str, Enum):
    """Lifecycle of a document's analysis"""
    PENDING = "pending"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    ERROR = "error"

class RiskLevel(str, Enum):
    """Risk bands for clauses and documents"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class ExportFormat(str, Enum):
    """Supported export formats"""
    JSON = "json"
    CSV = "csv"

class ActivityType(str, Enum):
    """Kinds of entries in the analytics activity feed"""
    UPLOAD = "upload"
    ANALYSIS = "analysis"
    REVIEW = "review"

class ClauseCategory(str, Enum):
    """Clause categories recognised by the rule-based analyzer"""
    TERMINATION = "Termination"
    LIABILITY = "Liability"
    PAYMENT = "Payment"
    CONFIDENTIALITY = "Confidentiality"
    INTELLECTUAL_PROPERTY = "Intellectual Property"
    DISPUTE_RESOLUTION = "Dispute Resolution"
    PRIVACY = "Privacy"
    WARRANTY = "Warranty"
    RENEWAL = "Renewal"
    GENERAL = "General"
