"""Translation and text-to-speech of clause explanations"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from ...config import DEFAULT_TTS_LANGUAGE
from ...models import User, TranslateRequest, TranslateResponse, TTSRequest, TTSResponse
from ...core.dependencies import get_translator, get_speech
from ...core.exceptions import TranslationError, SpeechSynthesisError
from ...core.security import get_current_user
from ...services.translation_service import TranslationService
from ...services.speech_service import SpeechService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["language"])


@router.post("/translate", response_model=TranslateResponse)
async def translate_text(
    payload: TranslateRequest,
    current_user: User = Depends(get_current_user),
    translator: TranslationService = Depends(get_translator)
):
    if not payload.text or not payload.target_language:
        raise HTTPException(status_code=400, detail="Text and target language are required")

    try:
        translated = await translator.translate(payload.text, payload.target_language)
    except TranslationError as e:
        logger.error(f"Translation error: {e}")
        raise HTTPException(status_code=500, detail="Translation failed")
    return TranslateResponse(translated_text=translated)


@router.post("/tts", response_model=TTSResponse)
async def text_to_speech(
    payload: TTSRequest,
    current_user: User = Depends(get_current_user),
    speech: SpeechService = Depends(get_speech)
):
    if not payload.text:
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        audio_url = await run_in_threadpool(
            speech.synthesize_data_url, payload.text, payload.language or DEFAULT_TTS_LANGUAGE
        )
    except SpeechSynthesisError as e:
        logger.error(f"TTS error: {e}")
        raise HTTPException(status_code=500, detail="TTS generation failed")
    return TTSResponse(audio_url=audio_url)
