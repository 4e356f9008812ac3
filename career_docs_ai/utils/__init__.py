"""Utility exports."""

from .helpers import deduplicate_names, iterate_async_in_sync
from .logger import get_logger

__all__ = [
    "get_logger",
    "deduplicate_names",
    "iterate_async_in_sync",
]
