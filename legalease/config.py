"""Configuration and environment variables"""
import os
from typing import List

APP_REFERER = os.environ.get("APP_REFERER", "http://localhost:3000")
APP_TITLE = os.environ.get("APP_TITLE", "LegalEase AI")
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

# Browser origins allowed to send the session cookie
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.environ.get("CORS_ORIGINS", APP_REFERER).split(",") if origin.strip()
]
MAX_REQUEST_SIZE = 20 * 1024 * 1024

# AI Configuration
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
OPENAI_API_BASE = os.environ.get("OPENAI_API_BASE", "https://openrouter.ai/api/v1")
AI_MODELS: List[str] = [
    m.strip() for m in os.environ.get(
        "AI_MODELS", "google/gemini-flash-1.5,openai/gpt-4o-mini"
    ).split(",") if m.strip()
]
AI_TIMEOUT = int(os.environ.get("AI_TIMEOUT", "60"))
AI_TEMPERATURE = 0.2
AI_MAX_TOKENS = 4000
MAX_ANALYSIS_CHARS = 30000  # text sent to the model per document

# Sessions
JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "legalease-dev-secret-change-in-production")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
AUTH_COOKIE_NAME = "auth-token"
COOKIE_SECURE = os.environ.get(
    "COOKIE_SECURE", "true" if ENVIRONMENT == "production" else "false"
).lower() == "true"

# Storage
MONGODB_URL = os.environ.get("MONGODB_URL")
MONGODB_DATABASE = os.environ.get("MONGODB_DATABASE", "legalease")
REDIS_URL = os.environ.get("REDIS_URL")
ANALYTICS_CACHE_TTL = int(os.environ.get("ANALYTICS_CACHE_TTL", "300"))

# File Processing
MAX_FILE_SIZE = int(os.environ.get("MAX_FILE_SIZE", str(10 * 1024 * 1024)))  # 10MB
LEGAL_EXTENSIONS = {'.pdf', '.txt', '.docx', '.md', '.rtf'}
MIN_CONTENT_LENGTH = 50

# Risk bands shared by the analyzers and analytics
LOW_RISK_THRESHOLD = 40
HIGH_RISK_THRESHOLD = 70

# Analytics
RISK_TREND_DAYS = 7
RECENT_ACTIVITY_LIMIT = 5

# Browser extension
LEGAL_KEYWORDS = [
    "terms of service",
    "privacy policy",
    "user agreement",
    "license agreement",
    "terms and conditions",
    "end user license",
    "service agreement",
    "legal notice",
    "disclaimer",
    "liability",
    "indemnify",
    "warranty",
    "governing law",
]
MIN_LEGAL_SEGMENT_LENGTH = 50
MIN_SELECTION_LENGTH = 20

# Speech
DEFAULT_TTS_LANGUAGE = "en-US"


class FeatureFlags:
    AI_ENABLED = False
    PYMUPDF_AVAILABLE = False
    PDFPLUMBER_AVAILABLE = False
    DOCX_AVAILABLE = False
    GTTS_AVAILABLE = False
    GOOGLETRANS_AVAILABLE = False


def initialize_feature_flags():
    """Probe optional libraries and set feature flags"""
    try:
        import fitz  # PyMuPDF
        FeatureFlags.PYMUPDF_AVAILABLE = True
    except ImportError:
        FeatureFlags.PYMUPDF_AVAILABLE = False

    try:
        import pdfplumber
        FeatureFlags.PDFPLUMBER_AVAILABLE = True
    except ImportError:
        FeatureFlags.PDFPLUMBER_AVAILABLE = False

    try:
        import docx
        FeatureFlags.DOCX_AVAILABLE = True
    except ImportError:
        FeatureFlags.DOCX_AVAILABLE = False

    try:
        import gtts
        FeatureFlags.GTTS_AVAILABLE = True
    except ImportError:
        FeatureFlags.GTTS_AVAILABLE = False

    try:
        import googletrans
        FeatureFlags.GOOGLETRANS_AVAILABLE = True
    except ImportError:
        FeatureFlags.GOOGLETRANS_AVAILABLE = False

    FeatureFlags.AI_ENABLED = bool(OPENAI_API_KEY)
    return FeatureFlags


initialize_feature_flags()

TRANSLATION_PROVIDER = os.environ.get(
    "TRANSLATION_PROVIDER", "ai" if FeatureFlags.AI_ENABLED else "googletrans"
).lower()
