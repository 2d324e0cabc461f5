from legalease.core import dependencies
from legalease.main import app
from legalease.services.analysis_service import ClauseAnalyzer

from conftest import FakeAIService, LEASE_TEXT, NDA_TEXT, upload


def test_stateless_analyze_stores_nothing(auth_client, store):
    response = auth_client.post("/api/analyze", files={"file": ("lease.txt", LEASE_TEXT.encode(), "text/plain")})

    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "lease.txt"
    assert body["overallRiskScore"] == 45
    assert body["riskLevel"] == "medium"
    assert len(body["clauses"]) == 3
    assert body["id"]
    assert store.documents == {}


def test_analyze_validates_upload(auth_client):
    response = auth_client.post("/api/analyze", files={"file": ("lease.exe", b"abc", "text/plain")})
    assert response.status_code == 400


def test_analyze_skips_malformed_ai_clauses(auth_client):
    reply = {"overallRiskScore": 50, "clauses": [{"text": 12345, "riskScore": 80}]}
    app.dependency_overrides[dependencies.get_analyzer] = lambda: ClauseAnalyzer(
        ai_service=FakeAIService(replies=[reply])
    )
    response = auth_client.post("/api/analyze", files={"file": ("lease.txt", LEASE_TEXT.encode(), "text/plain")})

    assert response.status_code == 200
    body = response.json()
    assert body["overallRiskScore"] == 50
    assert body["clauses"] == []


def test_analyze_ai_failure_is_500(auth_client):
    app.dependency_overrides[dependencies.get_analyzer] = lambda: ClauseAnalyzer(
        ai_service=FakeAIService(replies=["no json here"])
    )
    response = auth_client.post("/api/analyze", files={"file": ("lease.txt", LEASE_TEXT.encode(), "text/plain")})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to analyze document"


def test_explain_clause(auth_client):
    response = auth_client.post("/api/explain", json={"clauseText": "You agree to indemnify us for all losses."})

    assert response.status_code == 200
    body = response.json()
    assert body["plainLanguage"]
    assert body["analogy"]
    assert body["risks"][0].startswith("Indemnify:")


def test_explain_requires_text(auth_client):
    assert auth_client.post("/api/explain", json={}).status_code == 400


def test_explain_failure_is_500(auth_client):
    app.dependency_overrides[dependencies.get_analyzer] = lambda: ClauseAnalyzer(
        ai_service=FakeAIService(replies=["not json at all"])
    )
    response = auth_client.post("/api/explain", json={"clauseText": "The tenant pays all repairs."})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to explain clause"


def test_compare_documents(auth_client):
    lease_id = upload(auth_client, "lease.txt", LEASE_TEXT)
    nda_id = upload(auth_client, "nda.md", NDA_TEXT)

    response = auth_client.post("/api/compare", json={"documentIds": [lease_id, nda_id]})

    assert response.status_code == 200
    comparison = response.json()["comparison"]
    assert comparison["riskComparison"]["highest"] == "lease.txt"
    assert comparison["riskComparison"]["lowest"] == "nda.md"
    assert comparison["commonClauses"][0]["clause"] == "General"
    assert len(comparison["uniqueClauses"]) == 2


def test_compare_needs_two_documents(auth_client):
    lease_id = upload(auth_client)
    response = auth_client.post("/api/compare", json={"documentIds": [lease_id]})

    assert response.status_code == 400
    assert response.json()["detail"] == "Need at least 2 documents to compare"


def test_compare_hides_foreign_documents(auth_client, other_client):
    mine = upload(auth_client)
    theirs = upload(other_client)

    assert auth_client.post("/api/compare", json={"documentIds": [mine, theirs]}).status_code == 404
