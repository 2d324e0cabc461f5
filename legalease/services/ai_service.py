"""Generative AI integration over an OpenAI-compatible chat endpoint"""
import re
import json
import logging
import requests
from typing import Optional, Dict, Any, List, Tuple

from ..config import (
    AI_MODELS, OPENAI_API_KEY, OPENAI_API_BASE, APP_REFERER, APP_TITLE,
    AI_TIMEOUT, AI_TEMPERATURE, AI_MAX_TOKENS
)
from ..core.exceptions import AIServiceError, AnalysisError

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a legal expert AI that explains legal documents to non-lawyers. "
    "When asked for JSON, reply with a single JSON object and nothing else."
)

class GenerativeAIService:
    """Calls the chat completions API, falling back through the configured models"""

    def __init__(
        self,
        api_key: str = None,
        api_base: str = None,
        models: List[str] = None,
        timeout: int = AI_TIMEOUT
    ):
        self.api_key = api_key if api_key is not None else OPENAI_API_KEY
        self.api_base = api_base or OPENAI_API_BASE
        self.models = models or AI_MODELS
        self.timeout = timeout

        if not self.api_key:
            logger.warning("AI API key not configured")

        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": APP_REFERER,
            "X-Title": APP_TITLE
        }

        self._session = requests.Session()
        self._session.headers.update(self.headers)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _create_payload(self, prompt: str, model: str, system_prompt: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt}
            ],
            "temperature": AI_TEMPERATURE,
            "max_tokens": AI_MAX_TOKENS
        }

    def complete(self, prompt: str, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> Tuple[str, str]:
        """Return (reply text, model used); raises AIServiceError when every model fails"""
        if not self.api_key:
            raise AIServiceError("AI API key not configured")

        for model in self.models:
            logger.info(f"Attempting API call with model: {model}")
            try:
                response = self._session.post(
                    f"{self.api_base}/chat/completions",
                    json=self._create_payload(prompt, model, system_prompt),
                    timeout=self.timeout
                )
                response.raise_for_status()
                result = response.json()

                if result.get('choices'):
                    content = result['choices'][0]['message']['content'].strip()
                    logger.info(f"✅ Response received from model: {model}")
                    return content, model
                logger.warning(f"API call to {model} succeeded but returned no choices")

            except requests.exceptions.RequestException as e:
                logger.error(f"Network error with model {model}: {e}")
            except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
                logger.error(f"Malformed response from model {model}: {e}")

        logger.error("❌ All configured models failed")
        raise AIServiceError("All configured AI models failed")

    def complete_json(self, prompt: str) -> Tuple[Dict[str, Any], str]:
        text, model = self.complete(prompt)
        return extract_json_object(text), model


def extract_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Parse the first {...} block of a model reply"""
    json_match = re.search(r'\{.*\}', text or "", re.DOTALL)
    if not json_match:
        raise AnalysisError("Invalid response format from AI model")
    try:
        data = json.loads(json_match.group())
    except json.JSONDecodeError as e:
        raise AnalysisError(f"AI model returned malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise AnalysisError("AI model returned JSON that is not an object")
    return data


_ai_service: Optional[GenerativeAIService] = None

def get_ai_service() -> GenerativeAIService:
    global _ai_service
    if _ai_service is None:
        _ai_service = GenerativeAIService()
    return _ai_service
