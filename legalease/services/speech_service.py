"""Text-to-speech for clause explanations"""
import io
import base64
import logging

from ..config import FeatureFlags, DEFAULT_TTS_LANGUAGE
from ..core.exceptions import SpeechSynthesisError

logger = logging.getLogger(__name__)

# gTTS picks the accent from the Google domain
ACCENT_TLDS = {
    "en-us": "us",
    "en-gb": "co.uk",
    "en-au": "com.au",
    "en-in": "co.in",
    "fr-ca": "ca",
    "pt-br": "com.br",
    "es-mx": "com.mx",
}


class SpeechService:
    """Synthesizes MP3 audio with gTTS"""

    def synthesize(self, text: str, language: str = DEFAULT_TTS_LANGUAGE) -> bytes:
        if not FeatureFlags.GTTS_AVAILABLE:
            raise SpeechSynthesisError("Text-to-speech not available: gTTS is not installed")

        from gtts import gTTS
        lang, tld = self._split_language(language)
        try:
            tts = gTTS(text=text, lang=lang, tld=tld, slow=False)
            mp3_fp = io.BytesIO()
            tts.write_to_fp(mp3_fp)
        except Exception as e:
            logger.error(f"TTS error: {e}")
            raise SpeechSynthesisError(f"Speech synthesis failed: {e}") from e

        audio = mp3_fp.getvalue()
        logger.info(f"🔊 Synthesized {len(audio)} bytes of audio ({language})")
        return audio

    def synthesize_data_url(self, text: str, language: str = DEFAULT_TTS_LANGUAGE) -> str:
        audio = self.synthesize(text, language)
        return "data:audio/mpeg;base64," + base64.b64encode(audio).decode('ascii')

    def _split_language(self, language: str):
        normalized = (language or DEFAULT_TTS_LANGUAGE).strip().replace('_', '-').lower()
        lang = normalized.split('-')[0]
        return lang, ACCENT_TLDS.get(normalized, "com")
