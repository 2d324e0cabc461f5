"""Main FastAPI application entry point"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import APP_TITLE, CORS_ORIGINS, MAX_REQUEST_SIZE, FeatureFlags
from .core.dependencies import initialize_services
from .core.exceptions import LegalEaseException
from .api.routers import auth, documents, analysis, analytics, export, language, extension, health

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect storage on startup and release it on shutdown"""
    logger.info(f"🚀 {APP_TITLE} API starting up...")
    initialize_services()

    from .storage.managers import get_document_store
    store = await get_document_store()
    nosql_status = {
        'mongodb': store.mongodb_available,
        'redis': bool(store.nosql_manager and store.nosql_manager.redis_available)
    }
    if nosql_status['mongodb']:
        logger.info("🎯 MongoDB connected, documents are persisted")
    else:
        logger.warning("⚠️ Using in-memory storage, documents are lost on restart")
    if nosql_status['redis']:
        logger.info("💾 Redis connected, analytics are cached")
    if not FeatureFlags.AI_ENABLED:
        logger.warning("⚠️ No AI API key configured, using rule-based clause analysis")
    app.state.nosql_status = nosql_status

    yield

    logger.info(f"👋 {APP_TITLE} API shutting down...")
    if store.nosql_manager:
        try:
            await store.nosql_manager.close_connections()
            logger.info("🔌 NoSQL connections closed")
        except Exception as e:
            logger.error(f"Error during NoSQL cleanup: {e}")

app = FastAPI(
    title=f"{APP_TITLE} API",
    description="Legal document upload, AI clause analysis, analytics and export",
    version="1.0.0",
    lifespan=lifespan
)

# Request size limit middleware
@app.middleware("http")
async def limit_request_size(request: Request, call_next):
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=r"chrome-extension://.*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(LegalEaseException)
async def legalease_exception_handler(request: Request, exc: LegalEaseException):
    logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})

# Include routers
app.include_router(health.router)
for router_module in (auth, documents, analysis, analytics, export, language, extension):
    app.include_router(router_module.router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("legalease.main:app", host="0.0.0.0", port=8000, reload=False)
