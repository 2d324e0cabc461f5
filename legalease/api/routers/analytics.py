"""Dashboard analytics endpoints"""
import logging

from fastapi import APIRouter, Depends, Query

from ...models import User, AnalyticsData, RiskTrendsResponse
from ...core.dependencies import get_store, get_cache, get_analytics_service
from ...core.security import get_current_user
from ...services.analytics_service import AnalyticsService
from ...storage.managers import DocumentStore, AnalyticsCache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsData)
async def get_analytics(
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
    cache: AnalyticsCache = Depends(get_cache),
    service: AnalyticsService = Depends(get_analytics_service)
):
    cached = await cache.get(current_user.id)
    if cached is not None:
        logger.debug(f"Analytics cache hit for {current_user.id}")
        return AnalyticsData.model_validate(cached)

    documents = await store.list_documents(current_user.id)
    analytics = service.build(documents)
    await cache.set(current_user.id, analytics.model_dump(mode='json', by_alias=True))
    return analytics


@router.get("/risk-trends", response_model=RiskTrendsResponse)
async def get_risk_trends(
    days: int = Query(30, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
    service: AnalyticsService = Depends(get_analytics_service)
):
    documents = await store.list_documents(current_user.id)
    return RiskTrendsResponse(trends=service.risk_trends(documents, days))
