from datetime import datetime, timedelta

from legalease.models import DocumentAnalysis, LegalDocument, AnalysisStatus
from legalease.services.analytics_service import AnalyticsService

from conftest import LEASE_TEXT, NDA_TEXT, upload


def _completed(filename, score, created_at):
    analysis = DocumentAnalysis(overall_risk_score=score, created_at=created_at, analysis_time=100)
    return LegalDocument(
        user_id="u1", filename=filename, original_text="",
        analysis_status=AnalysisStatus.COMPLETED, analysis_result=analysis
    )


def test_analytics_over_completed_documents(auth_client):
    upload(auth_client, "lease.txt", LEASE_TEXT)
    upload(auth_client, "nda.md", NDA_TEXT)

    data = auth_client.get("/api/analytics").json()

    assert data["totalDocuments"] == 2
    assert data["highRiskClauses"] == 1
    assert data["averageRiskScore"] == 30
    assert len(data["riskTrends"]) == 7
    today = data["riskTrends"][-1]
    assert today["date"] == datetime.utcnow().date().isoformat()
    assert (today["low"], today["medium"], today["high"]) == (1, 1, 0)
    categories = {c["category"]: c for c in data["clauseCategories"]}
    assert categories["Liability"]["riskLevel"] == "high"
    assert categories["General"]["count"] == 2
    assert {t["type"]: t["averageRisk"] for t in data["documentTypes"]} == {"txt": 45, "md": 15}
    assert [a["document"] for a in data["recentActivity"]] == ["nda.md", "lease.txt"]


def test_analytics_for_new_user_is_empty(auth_client):
    data = auth_client.get("/api/analytics").json()

    assert data["totalDocuments"] == 0
    assert data["averageRiskScore"] == 0
    assert all(point["low"] == point["medium"] == point["high"] == 0 for point in data["riskTrends"])


def test_risk_trends_endpoint(auth_client):
    upload(auth_client)
    trends = auth_client.get("/api/analytics/risk-trends").json()["trends"]

    assert trends == [{"date": datetime.utcnow().date().isoformat(), "low": 0, "medium": 1, "high": 0}]


def test_risk_trends_only_dates_with_analyses():
    now = datetime(2024, 3, 10, 12)
    documents = [
        _completed("a.txt", 80, now - timedelta(days=5)),
        _completed("b.txt", 10, now - timedelta(days=5)),
        _completed("c.pdf", 50, now - timedelta(days=1)),
        LegalDocument(user_id="u1", filename="pending.txt", original_text=""),
    ]
    service = AnalyticsService()

    trends = service.risk_trends(documents, days=30)
    assert [(t.date, t.low, t.medium, t.high) for t in trends] == [
        ("2024-03-05", 1, 0, 1),
        ("2024-03-09", 0, 1, 0),
    ]
    assert [t.date for t in service.risk_trends(documents, days=1)] == ["2024-03-09"]


def test_daily_trends_are_zero_filled():
    now = datetime(2024, 3, 10, 12)
    documents = [_completed("old.txt", 90, now - timedelta(days=20)), _completed("new.txt", 90, now)]

    trends = AnalyticsService().daily_trends(documents, now, 7)

    assert [t.date for t in trends][0] == "2024-03-04"
    assert trends[-1].high == 1
    assert sum(t.high for t in trends) == 1


def test_build_ignores_unfinished_documents():
    now = datetime(2024, 3, 10, 12)
    documents = [
        _completed("a.txt", 80, now),
        LegalDocument(user_id="u1", filename="b.txt", original_text="", analysis_status=AnalysisStatus.ERROR),
    ]

    data = AnalyticsService().build(documents, now=now)

    assert data.total_documents == 1
    assert data.average_analysis_time == 100
    assert data.recent_activity[0].document == "a.txt"


def test_recent_activity_follows_analysis_time():
    now = datetime(2024, 3, 10, 12)
    reanalyzed = _completed("old-but-reanalyzed.txt", 60, now - timedelta(hours=1))
    reanalyzed.uploaded_at = now - timedelta(days=30)
    fresh = _completed("fresh.txt", 20, now - timedelta(days=2))
    fresh.uploaded_at = now - timedelta(days=2)

    data = AnalyticsService().build([fresh, reanalyzed], now=now)

    assert [a.document for a in data.recent_activity] == ["old-but-reanalyzed.txt", "fresh.txt"]
    assert data.recent_activity[0].timestamp == now - timedelta(hours=1)
