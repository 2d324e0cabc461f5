"""API routers package"""
from . import auth, documents, analysis, analytics, export, language, extension, health

__all__ = ['auth', 'documents', 'analysis', 'analytics', 'export', 'language', 'extension', 'health']
