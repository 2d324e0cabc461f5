"""Background tasks package"""
from .analysis_tasks import run_document_analysis

__all__ = ['run_document_analysis']
