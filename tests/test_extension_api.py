from legalease.services.legal_detection import LegalContentDetector

PAGE_TEXT = (
    "Welcome to our store!\n\n"
    "By using this site you agree to our Terms of Service and accept that we may share "
    "personal data with third parties.\n\n"
    "Short privacy policy link."
)

PAGE_HTML = (
    "<html><head><script>var t = 'indemnify liability warranty governing law disclaimer';</script></head>"
    "<body><p>You agree to indemnify the company for any losses arising from your use of the service.</p>"
    "<p>Hello there</p></body></html>"
)


def test_detect_legal_paragraphs_in_text(client):
    response = client.post("/api/extension/detect", json={"text": PAGE_TEXT})

    assert response.status_code == 200
    body = response.json()
    assert body["hasLegalContent"] is True
    assert body["clauseCount"] == 1
    segment = body["segments"][0]
    assert segment["keywords"] == ["terms of service"]
    assert segment["riskScore"] == 30
    assert body["avgRiskScore"] == 30


def test_detect_ignores_scripts_in_html():
    result = LegalContentDetector().detect(html=PAGE_HTML)

    assert result.clause_count == 1
    assert result.segments[0].text.startswith("You agree to indemnify")
    assert result.segments[0].keywords == ["indemnify"]


def test_detect_nothing_legal():
    result = LegalContentDetector().detect(text="Mix flour, eggs and milk, then fry the pancakes in butter until golden.")

    assert result.has_legal_content is False
    assert result.avg_risk_score == 0
    assert result.segments == []


def test_detect_deduplicates_blocks():
    paragraph = "These terms and conditions are governed by the laws of the State of New York."
    result = LegalContentDetector().detect(text=f"{paragraph}\n\n{paragraph}")
    assert result.clause_count == 1


def test_detect_requires_input(client):
    assert client.post("/api/extension/detect", json={}).status_code == 400


def test_analyze_selection(auth_client, store):
    response = auth_client.post("/api/extension/analyze", json={
        "text": "You agree to binding arbitration and waive any right to a class action lawsuit.",
        "sourceUrl": "https://example.com/terms"
    })

    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "Selection from example.com"
    assert body["clauses"][0]["category"] == "Dispute Resolution"
    assert store.documents == {}


def test_analyze_selection_too_short(auth_client):
    response = auth_client.post("/api/extension/analyze", json={"text": "Too short."})
    assert response.status_code == 400


def test_analyze_selection_needs_session(client):
    response = client.post("/api/extension/analyze", json={"text": "x" * 40})
    assert response.status_code == 401
