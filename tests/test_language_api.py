import base64

import pytest

from legalease.core.exceptions import SpeechSynthesisError, TranslationError
from legalease.core import dependencies
from legalease.main import app
from legalease.services.speech_service import SpeechService
from legalease.services.translation_service import TranslationService

from conftest import FakeAIService, FakeSpeech, FakeTranslator


def test_translate(auth_client):
    response = auth_client.post("/api/translate", json={"text": "Pay rent monthly.", "targetLanguage": "es"})

    assert response.status_code == 200
    assert response.json() == {"translatedText": "[es] Pay rent monthly."}


def test_translate_requires_fields(auth_client):
    assert auth_client.post("/api/translate", json={"text": "hi"}).status_code == 400


def test_translate_failure(auth_client):
    app.dependency_overrides[dependencies.get_translator] = lambda: FakeTranslator(fail=True)
    response = auth_client.post("/api/translate", json={"text": "hi", "targetLanguage": "fr"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Translation failed"


def test_tts_defaults_to_us_english(auth_client, speech):
    response = auth_client.post("/api/tts", json={"text": "Read this aloud."})

    assert response.status_code == 200
    assert response.json()["audioUrl"].startswith("data:audio/mpeg;base64,")
    assert speech.calls == [("Read this aloud.", "en-US")]


def test_tts_errors(auth_client):
    assert auth_client.post("/api/tts", json={}).status_code == 400

    app.dependency_overrides[dependencies.get_speech] = lambda: FakeSpeech(fail=True)
    response = auth_client.post("/api/tts", json={"text": "hello"})
    assert response.status_code == 500
    assert response.json()["detail"] == "TTS generation failed"


async def test_ai_translation_provider():
    service = TranslationService(provider="ai", ai_service=FakeAIService(replies=["Paga el alquiler."]))
    assert await service.translate("Pay the rent.", "Spanish") == "Paga el alquiler."


async def test_ai_translation_failure_is_translation_error():
    service = TranslationService(provider="ai", ai_service=FakeAIService(replies=[]))
    with pytest.raises(TranslationError):
        await service.translate("Pay the rent.", "Spanish")


async def test_unknown_provider():
    with pytest.raises(TranslationError):
        await TranslationService(provider="carrier-pigeon").translate("hi", "fr")


class FakeGTTS:
    instances = []

    def __init__(self, text, lang, tld, slow):
        self.text, self.lang, self.tld = text, lang, tld
        FakeGTTS.instances.append(self)

    def write_to_fp(self, fp):
        fp.write(b"ID3fake")


def test_speech_service_uses_accent_domain(monkeypatch):
    FakeGTTS.instances.clear()
    monkeypatch.setattr("gtts.gTTS", FakeGTTS)

    url = SpeechService().synthesize_data_url("Hello", "en-GB")

    assert url == "data:audio/mpeg;base64," + base64.b64encode(b"ID3fake").decode()
    assert (FakeGTTS.instances[0].lang, FakeGTTS.instances[0].tld) == ("en", "co.uk")


def test_speech_service_wraps_errors(monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("network down")

    monkeypatch.setattr("gtts.gTTS", broken)
    with pytest.raises(SpeechSynthesisError):
        SpeechService().synthesize("Hello")
