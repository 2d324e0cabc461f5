"""Translation of clause explanations"""
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from ..config import TRANSLATION_PROVIDER, FeatureFlags
from ..core.exceptions import TranslationError, AIServiceError
from .ai_service import GenerativeAIService, get_ai_service

logger = logging.getLogger(__name__)

TRANSLATE_PROMPT = """Translate the following text to {language}. Maintain legal accuracy and context.
Reply with the translation only.

{text}"""


class TranslationService:
    """Translates text with the generative AI endpoint or googletrans"""

    def __init__(self, provider: str = TRANSLATION_PROVIDER,
                 ai_service: Optional[GenerativeAIService] = None):
        self.provider = provider
        self.ai_service = ai_service

    async def translate(self, text: str, target_language: str) -> str:
        logger.info(f"Translating {len(text)} chars to {target_language} via {self.provider}")
        if self.provider == "ai":
            return await self._translate_with_ai(text, target_language)
        if self.provider == "googletrans":
            return await self._translate_with_googletrans(text, target_language)
        raise TranslationError(f"Unknown translation provider '{self.provider}'")

    async def _translate_with_ai(self, text: str, target_language: str) -> str:
        ai_service = self.ai_service or get_ai_service()
        try:
            translated, _ = await run_in_threadpool(
                ai_service.complete,
                TRANSLATE_PROMPT.format(language=target_language, text=text)
            )
        except AIServiceError as e:
            raise TranslationError(f"AI translation failed: {e}") from e
        return translated

    async def _translate_with_googletrans(self, text: str, target_language: str) -> str:
        if not FeatureFlags.GOOGLETRANS_AVAILABLE:
            raise TranslationError("googletrans is not installed")

        from googletrans import Translator, LANGCODES, LANGUAGES
        dest = _language_code(target_language, LANGCODES, LANGUAGES)
        try:
            async with Translator() as translator:
                result = await translator.translate(text, dest=dest)
        except Exception as e:
            raise TranslationError(f"googletrans failed: {e}") from e
        return result.text


def _language_code(target_language: str, langcodes, languages) -> str:
    """Accept 'Spanish', 'es' or 'es-ES'"""
    lowered = target_language.strip().lower()
    if lowered in langcodes:
        return langcodes[lowered]
    if lowered in languages:
        return lowered
    base = lowered.split('-')[0].split('_')[0]
    if base in languages:
        return base
    raise TranslationError(f"Unsupported target language '{target_language}'")
