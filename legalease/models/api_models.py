"""Pydantic models for API requests and responses"""
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..config import LOW_RISK_THRESHOLD, HIGH_RISK_THRESHOLD
from .enums import AnalysisStatus, RiskLevel, ActivityType


def new_id() -> str:
    return str(uuid.uuid4())


def clamp_score(value: Any) -> int:
    """Coerce a model-supplied score into the 0..100 range"""
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


def risk_level_for_score(score: int) -> RiskLevel:
    if score < LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    if score < HIGH_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def _normalize_risk(data: Dict[str, Any], score_key: str, alias: str) -> Dict[str, Any]:
    raw_score = data.get(score_key, data.get(alias))
    score = clamp_score(raw_score)
    data[score_key] = score
    data.pop(alias, None)

    level = data.get('risk_level', data.get('riskLevel'))
    data.pop('riskLevel', None)
    if isinstance(level, str) and level.lower() in {lvl.value for lvl in RiskLevel}:
        data['risk_level'] = level.lower()
    elif isinstance(level, RiskLevel):
        data['risk_level'] = level
    else:
        data['risk_level'] = risk_level_for_score(score)
    return data


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Users ---

class User(CamelModel):
    id: str = Field(default_factory=new_id)
    email: str
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    password_hash: str = Field(default="", exclude=True)


class SignUpRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class SignInRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    user: Optional[User] = None


# --- Analysis ---

class ClausePosition(CamelModel):
    start: int = 0
    end: int = 0


class Clause(CamelModel):
    id: str = Field(default_factory=new_id)
    text: str
    category: str = "General"
    risk_score: int = 0
    risk_level: RiskLevel = RiskLevel.LOW
    explanation: str = ""
    plain_language: str = ""
    analogy: Optional[str] = None
    recommendations: List[str] = Field(default_factory=list)
    position: ClausePosition = Field(default_factory=ClausePosition)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = _normalize_risk(dict(data), 'risk_score', 'riskScore')
            if not data.get('category'):
                data['category'] = "General"
        return data


class DocumentAnalysis(CamelModel):
    id: str = Field(default_factory=new_id)
    document_id: str = ""
    overall_risk_score: int = 0
    risk_level: RiskLevel = RiskLevel.LOW
    clauses: List[Clause] = Field(default_factory=list)
    summary: str = ""
    recommendations: List[str] = Field(default_factory=list)
    analysis_time: int = 0  # milliseconds
    created_at: datetime = Field(default_factory=datetime.utcnow)
    model: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        score = data.get('overall_risk_score', data.get('overallRiskScore'))
        if score is None:
            clauses = data.get('clauses') or []
            scores = [
                clamp_score(c.get('risk_score', c.get('riskScore')) if isinstance(c, dict) else c.risk_score)
                for c in clauses
            ]
            data['overall_risk_score'] = round(sum(scores) / len(scores)) if scores else 0
        return _normalize_risk(data, 'overall_risk_score', 'overallRiskScore')


class AnalysisPreviewResponse(DocumentAnalysis):
    """Analysis returned by the stateless endpoints"""
    filename: str = ""


class ClauseExplanation(CamelModel):
    explanation: str = ""
    plain_language: str = ""
    analogy: str = ""
    risks: List[str] = Field(default_factory=list)


class ExplainRequest(CamelModel):
    clause_text: Optional[str] = None


# --- Documents ---

class LegalDocument(CamelModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    filename: str
    original_text: str
    uploaded_at: datetime = Field(default_factory=datetime.utcnow)
    analysis_status: AnalysisStatus = AnalysisStatus.PENDING
    analysis_result: Optional[DocumentAnalysis] = None
    error_message: Optional[str] = None
    analysis_started_at: Optional[datetime] = None
    analysis_completed_at: Optional[datetime] = None
    file_size: int = 0
    page_count: int = 0
    extraction_warnings: List[str] = Field(default_factory=list)

    @property
    def file_type(self) -> str:
        if '.' not in self.filename:
            return "unknown"
        return self.filename.rsplit('.', 1)[-1].lower() or "unknown"


class DocumentUploadResponse(CamelModel):
    document_id: str
    message: str
    status: AnalysisStatus = AnalysisStatus.PENDING
    warnings: List[str] = Field(default_factory=list)


class DocumentDetailResponse(CamelModel):
    document: LegalDocument
    analysis: Optional[DocumentAnalysis] = None


class DocumentListResponse(CamelModel):
    documents: List[LegalDocument]
    total: int


class DocumentStatusResponse(CamelModel):
    document_id: str
    status: AnalysisStatus
    progress: int
    error: Optional[str] = None


class ReanalyzeResponse(CamelModel):
    document_id: str
    status: AnalysisStatus
    message: str


# --- Comparison ---

class CompareRequest(CamelModel):
    document_ids: Optional[List[str]] = None


class CommonClause(CamelModel):
    clause: str
    differences: List[str] = Field(default_factory=list)


class UniqueClauses(CamelModel):
    document: str
    clauses: List[str] = Field(default_factory=list)


class RiskComparison(CamelModel):
    highest: str
    lowest: str
    analysis: str


class DocumentComparison(CamelModel):
    summary: str
    common_clauses: List[CommonClause] = Field(default_factory=list)
    unique_clauses: List[UniqueClauses] = Field(default_factory=list)
    risk_comparison: RiskComparison
    recommendations: List[str] = Field(default_factory=list)


class ComparisonResponse(CamelModel):
    comparison: DocumentComparison


# --- Analytics ---

class RiskTrendPoint(CamelModel):
    date: str
    low: int = 0
    medium: int = 0
    high: int = 0


class ClauseCategoryStat(CamelModel):
    category: str
    count: int
    risk_level: RiskLevel


class DocumentTypeStat(CamelModel):
    type: str
    count: int
    average_risk: int


class ActivityItem(CamelModel):
    id: str
    type: ActivityType
    document: str
    timestamp: datetime
    risk_level: RiskLevel


class AnalyticsData(CamelModel):
    total_documents: int = 0
    high_risk_clauses: int = 0
    average_risk_score: int = 0
    average_analysis_time: int = 0
    risk_trends: List[RiskTrendPoint] = Field(default_factory=list)
    clause_categories: List[ClauseCategoryStat] = Field(default_factory=list)
    document_types: List[DocumentTypeStat] = Field(default_factory=list)
    recent_activity: List[ActivityItem] = Field(default_factory=list)


class RiskTrendsResponse(CamelModel):
    trends: List[RiskTrendPoint]


# --- Export ---

class ExportRequest(CamelModel):
    document_id: Optional[str] = None
    format: Optional[str] = None


# --- Language ---

class TranslateRequest(CamelModel):
    text: Optional[str] = None
    target_language: Optional[str] = None


class TranslateResponse(CamelModel):
    translated_text: str


class TTSRequest(CamelModel):
    text: Optional[str] = None
    language: Optional[str] = None


class TTSResponse(CamelModel):
    audio_url: str


# --- Browser extension ---

class LegalDetectionRequest(CamelModel):
    text: Optional[str] = None
    html: Optional[str] = None


class LegalSegment(CamelModel):
    text: str
    keywords: List[str]
    risk_score: int
    risk_level: RiskLevel


class LegalDetectionResponse(CamelModel):
    has_legal_content: bool
    clause_count: int
    avg_risk_score: int
    segments: List[LegalSegment] = Field(default_factory=list)


class SelectionAnalysisRequest(CamelModel):
    text: Optional[str] = None
    source_url: Optional[str] = None
