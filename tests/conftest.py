import json

import pytest
from fastapi.testclient import TestClient

from legalease.main import app
from legalease.core import dependencies
from legalease.core.exceptions import AIServiceError, SpeechSynthesisError, TranslationError
from legalease.services.ai_service import extract_json_object
from legalease.services.analysis_service import ClauseAnalyzer
from legalease.services.document_processor import DocumentProcessor
from legalease.services.legal_detection import LegalContentDetector
from legalease.storage.managers import DocumentStore, AnalyticsCache

LEASE_TEXT = (
    "LEASE\n\n"
    "1. The Tenant shall indemnify and hold harmless the Landlord against all claims, "
    "with unlimited liability.\n\n"
    "2. Either party may terminate this Agreement by giving thirty days written notice "
    "to the other party.\n\n"
    "3. This Agreement constitutes the entire agreement between the parties hereto."
)

NDA_TEXT = (
    "1. The Recipient shall keep all confidential information secret and shall not disclose it.\n\n"
    "2. This Agreement constitutes the entire agreement between the parties hereto."
)


class FakeAIService:
    """Stands in for GenerativeAIService; replies are consumed in order"""

    def __init__(self, replies=None, configured=True, model="fake-model"):
        self.replies = list(replies or [])
        self.configured = configured
        self.model = model
        self.prompts = []

    def complete(self, prompt, system_prompt=None):
        self.prompts.append(prompt)
        if not self.replies:
            raise AIServiceError("All configured AI models failed")
        reply = self.replies.pop(0)
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        return reply, self.model

    def complete_json(self, prompt):
        text, model = self.complete(prompt)
        return extract_json_object(text), model


class FakeTranslator:
    provider = "fake"

    def __init__(self, fail=False):
        self.fail = fail

    async def translate(self, text, target_language):
        if self.fail:
            raise TranslationError("provider down")
        return f"[{target_language}] {text}"


class FakeSpeech:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def synthesize_data_url(self, text, language="en-US"):
        self.calls.append((text, language))
        if self.fail:
            raise SpeechSynthesisError("gTTS unreachable")
        return "data:audio/mpeg;base64,SUQz"


class FailingAnalyzer:
    mode = "failing"

    def analyze_document(self, text, filename):
        raise RuntimeError("model exploded")


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def cache():
    return AnalyticsCache()


@pytest.fixture
def rule_analyzer():
    return ClauseAnalyzer(ai_service=FakeAIService(configured=False))


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def client(store, cache, rule_analyzer, translator, speech):
    async def override_store():
        return store

    async def override_cache():
        return cache

    app.dependency_overrides[dependencies.get_store] = override_store
    app.dependency_overrides[dependencies.get_cache] = override_cache
    app.dependency_overrides[dependencies.get_analyzer] = lambda: rule_analyzer
    app.dependency_overrides[dependencies.get_processor] = lambda: DocumentProcessor()
    app.dependency_overrides[dependencies.get_translator] = lambda: translator
    app.dependency_overrides[dependencies.get_speech] = lambda: speech
    app.dependency_overrides[dependencies.get_detector] = lambda: LegalContentDetector()

    yield TestClient(app)

    app.dependency_overrides.clear()


def signup(test_client, email="ana@example.com", password="s3cret-pass", name="Ana"):
    response = test_client.post("/api/auth/signup", json={"email": email, "password": password, "name": name})
    assert response.status_code == 200, response.text
    return response.json()["user"]


def upload(test_client, filename="lease.txt", text=LEASE_TEXT):
    response = test_client.post(
        "/api/documents/upload",
        files={"file": (filename, text.encode("utf-8"), "text/plain")}
    )
    assert response.status_code == 200, response.text
    return response.json()["documentId"]


@pytest.fixture
def auth_client(client):
    signup(client)
    return client


@pytest.fixture
def other_client(client):
    """A second signed-in user sharing the same app and store"""
    other = TestClient(app)
    signup(other, email="bo@example.com", name="Bo")
    return other
