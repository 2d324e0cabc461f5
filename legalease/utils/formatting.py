"""Formatting utilities"""
import math
from typing import Iterable


def truncate_for_prompt(text: str, max_length: int) -> str:
    """Cut document text to the prompt budget on a whitespace boundary"""
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    last_space = cut.rfind(' ')
    if last_space > max_length * 0.8:
        cut = cut[:last_space]
    return cut + "\n... [truncated]"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mean_rounded(values: Iterable[float]) -> int:
    values = list(values)
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def content_disposition(filename: str) -> str:
    safe_name = filename.replace('"', "'").replace("\n", " ").replace("\r", " ")
    return f'attachment; filename="{safe_name}"'
