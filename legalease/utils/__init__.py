"""Utilities package"""
from .text_processing import TextProcessor, TextSpan
from .formatting import truncate_for_prompt, round_half_up, mean_rounded, content_disposition

__all__ = [
    'TextProcessor',
    'TextSpan',
    'truncate_for_prompt',
    'round_half_up',
    'mean_rounded',
    'content_disposition'
]
