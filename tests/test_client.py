import pytest

from legalease.client import LegalEaseClient
from legalease.core.exceptions import AnalysisError, AuthenticationError, DocumentNotFoundError, LegalEaseException


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b""):
        self.status_code = status_code
        self._payload = payload
        self.content = content
        self.text = content.decode() if content else str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append((method, url, kwargs))
        return self.responses.pop(0)


def _detail(status, analysis=None, error=None):
    return FakeResponse(payload={
        "document": {
            "id": "d1", "userId": "u1", "filename": "lease.txt", "originalText": "text",
            "analysisStatus": status, "errorMessage": error
        },
        "analysis": analysis
    })


ANALYSIS = {"id": "a1", "documentId": "d1", "overallRiskScore": 45, "clauses": []}


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr("legalease.client.time.sleep", sleeps.append)
    return sleeps


def test_wait_for_analysis_reports_progress(no_sleep):
    session = FakeSession([_detail("pending"), _detail("analyzing"), _detail("completed", ANALYSIS)])
    progress = []

    analysis = LegalEaseClient("http://api", session=session).wait_for_analysis("d1", on_progress=progress.append)

    assert analysis.overall_risk_score == 45
    assert analysis.risk_level.value == "medium"
    assert progress == [32, 34, 100]
    assert no_sleep == [1.0, 1.0]
    assert session.requests[0][:2] == ("GET", "http://api/api/documents/d1")


def test_wait_for_analysis_error():
    session = FakeSession([_detail("analyzing"), _detail("error", error="boom")])

    with pytest.raises(AnalysisError, match="Analysis failed"):
        LegalEaseClient("http://api", session=session).wait_for_analysis("d1")


def test_wait_for_analysis_timeout(no_sleep):
    session = FakeSession([_detail("analyzing")] * 3)
    progress = []

    with pytest.raises(AnalysisError, match="Analysis timeout"):
        LegalEaseClient(session=session).wait_for_analysis("d1", interval=0.5, max_attempts=3, on_progress=progress.append)

    assert progress == [32, 34, 36]
    assert no_sleep == [0.5, 0.5]


def test_progress_is_capped_at_ninety():
    session = FakeSession([_detail("analyzing")] * 40)
    progress = []

    with pytest.raises(AnalysisError):
        LegalEaseClient(session=session).wait_for_analysis("d1", max_attempts=40, on_progress=progress.append)

    assert max(progress) == 90


def test_http_errors_map_to_exceptions():
    session = FakeSession([
        FakeResponse(401, {"detail": "Invalid credentials"}),
        FakeResponse(404, {"detail": "Document not found"}),
        FakeResponse(500, None, b"Internal Server Error"),
    ])
    client = LegalEaseClient(session=session)

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        client.signin("ana@example.com", "wrong")
    with pytest.raises(DocumentNotFoundError):
        client.get_document("missing")
    with pytest.raises(LegalEaseException, match="HTTP 500"):
        client.export("d1", "csv")


def test_upload_sends_file_and_name(tmp_path):
    path = tmp_path / "lease.txt"
    path.write_text("The Tenant shall pay rent.")
    session = FakeSession([FakeResponse(payload={"documentId": "d1", "message": "ok", "status": "pending"})])

    result = LegalEaseClient(session=session).upload(str(path))

    assert result.document_id == "d1"
    method, url, kwargs = session.requests[0]
    assert url.endswith("/api/documents/upload")
    assert kwargs["data"] == {"filename": "lease.txt"}
    assert kwargs["files"]["file"][0] == "lease.txt"


def test_export_returns_raw_bytes():
    session = FakeSession([FakeResponse(content=b"Clause,Category\n")])
    assert LegalEaseClient(session=session).export("d1", "csv") == b"Clause,Category\n"
    assert session.requests[0][2]["json"] == {"documentId": "d1", "format": "csv"}
