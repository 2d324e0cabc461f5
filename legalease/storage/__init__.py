"""Storage package"""
from .managers import (
    DocumentStore,
    AnalyticsCache,
    get_document_store,
    get_analytics_cache
)

__all__ = [
    'DocumentStore',
    'AnalyticsCache',
    'get_document_store',
    'get_analytics_cache'
]
