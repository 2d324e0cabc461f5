"""Models package"""
from .api_models import (
    User, SignUpRequest, SignInRequest, UserResponse,
    Clause, ClausePosition, DocumentAnalysis, AnalysisPreviewResponse,
    ClauseExplanation, ExplainRequest, LegalDocument, DocumentUploadResponse,
    DocumentDetailResponse, DocumentListResponse, DocumentStatusResponse,
    ReanalyzeResponse, CompareRequest, CommonClause, UniqueClauses,
    RiskComparison, DocumentComparison, ComparisonResponse, RiskTrendPoint,
    ClauseCategoryStat, DocumentTypeStat, ActivityItem, AnalyticsData,
    RiskTrendsResponse, ExportRequest, TranslateRequest, TranslateResponse,
    TTSRequest, TTSResponse, LegalDetectionRequest, LegalSegment,
    LegalDetectionResponse, SelectionAnalysisRequest,
    new_id, clamp_score, risk_level_for_score
)
from .enums import AnalysisStatus, RiskLevel, ExportFormat, ActivityType, ClauseCategory

__all__ = [
    'User', 'SignUpRequest', 'SignInRequest', 'UserResponse',
    'Clause', 'ClausePosition', 'DocumentAnalysis', 'AnalysisPreviewResponse',
    'ClauseExplanation', 'ExplainRequest', 'LegalDocument', 'DocumentUploadResponse',
    'DocumentDetailResponse', 'DocumentListResponse', 'DocumentStatusResponse',
    'ReanalyzeResponse', 'CompareRequest', 'CommonClause', 'UniqueClauses',
    'RiskComparison', 'DocumentComparison', 'ComparisonResponse', 'RiskTrendPoint',
    'ClauseCategoryStat', 'DocumentTypeStat', 'ActivityItem', 'AnalyticsData',
    'RiskTrendsResponse', 'ExportRequest', 'TranslateRequest', 'TranslateResponse',
    'TTSRequest', 'TTSResponse', 'LegalDetectionRequest', 'LegalSegment',
    'LegalDetectionResponse', 'SelectionAnalysisRequest',
    'new_id', 'clamp_score', 'risk_level_for_score',
    'AnalysisStatus', 'RiskLevel', 'ExportFormat', 'ActivityType', 'ClauseCategory'
]
