"""Aggregated analytics over a user's analyzed documents"""
import logging
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ..config import RISK_TREND_DAYS, RECENT_ACTIVITY_LIMIT
from ..models import (
    LegalDocument, AnalyticsData, RiskTrendPoint, ClauseCategoryStat,
    DocumentTypeStat, ActivityItem, ActivityType, AnalysisStatus, RiskLevel
)
from ..utils import mean_rounded

logger = logging.getLogger(__name__)

_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class AnalyticsService:
    """Builds dashboard data from documents that carry a completed analysis"""

    def build(self, documents: List[LegalDocument], now: Optional[datetime] = None) -> AnalyticsData:
        now = now or datetime.utcnow()
        completed = _completed(documents)

        high_risk_clauses = 0
        categories: "OrderedDict[str, Dict]" = OrderedDict()
        doc_types: "OrderedDict[str, List[int]]" = OrderedDict()

        for document in completed:
            analysis = document.analysis_result
            high_risk_clauses += sum(1 for c in analysis.clauses if c.risk_level == RiskLevel.HIGH)

            for clause in analysis.clauses:
                entry = categories.setdefault(clause.category, {'count': 0, 'risk_level': RiskLevel.LOW})
                entry['count'] += 1
                if _RISK_RANK[clause.risk_level] > _RISK_RANK[entry['risk_level']]:
                    entry['risk_level'] = clause.risk_level

            doc_types.setdefault(document.file_type, []).append(analysis.overall_risk_score)

        recent = sorted(completed, key=lambda d: d.analysis_result.created_at, reverse=True)[:RECENT_ACTIVITY_LIMIT]

        return AnalyticsData(
            total_documents=len(completed),
            high_risk_clauses=high_risk_clauses,
            average_risk_score=mean_rounded(d.analysis_result.overall_risk_score for d in completed),
            average_analysis_time=mean_rounded(d.analysis_result.analysis_time for d in completed),
            risk_trends=self.daily_trends(completed, now, RISK_TREND_DAYS),
            clause_categories=[
                ClauseCategoryStat(category=name, count=data['count'], risk_level=data['risk_level'])
                for name, data in categories.items()
            ],
            document_types=[
                DocumentTypeStat(type=ext, count=len(scores), average_risk=mean_rounded(scores))
                for ext, scores in doc_types.items()
            ],
            recent_activity=[
                ActivityItem(
                    id=d.id,
                    type=ActivityType.ANALYSIS,
                    document=d.filename,
                    timestamp=d.analysis_result.created_at,
                    risk_level=d.analysis_result.risk_level
                )
                for d in recent
            ]
        )

    def daily_trends(self, documents: List[LegalDocument], now: datetime, days: int) -> List[RiskTrendPoint]:
        """One zero-filled entry per day for the trailing window ending today"""
        today = now.date()
        window = OrderedDict(
            ((today - timedelta(days=offset)).isoformat(), RiskTrendPoint(date=(today - timedelta(days=offset)).isoformat()))
            for offset in range(days - 1, -1, -1)
        )
        for document in _completed(documents):
            key = document.analysis_result.created_at.date().isoformat()
            if key in window:
                _bump(window[key], document.analysis_result.risk_level)
        return list(window.values())

    def risk_trends(self, documents: List[LegalDocument], days: int = 30) -> List[RiskTrendPoint]:
        """Counts per analysis date, only dates that have analyses, last `days` entries"""
        trends: Dict[str, RiskTrendPoint] = {}
        for document in _completed(documents):
            key = document.analysis_result.created_at.date().isoformat()
            point = trends.setdefault(key, RiskTrendPoint(date=key))
            _bump(point, document.analysis_result.risk_level)
        ordered = [trends[key] for key in sorted(trends)]
        return ordered[-days:] if days > 0 else []


def _completed(documents: List[LegalDocument]) -> List[LegalDocument]:
    return [
        d for d in documents
        if d.analysis_status == AnalysisStatus.COMPLETED and d.analysis_result is not None
    ]


def _bump(point: RiskTrendPoint, level: RiskLevel):
    setattr(point, level.value, getattr(point, level.value) + 1)
