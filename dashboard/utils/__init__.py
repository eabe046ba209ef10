"""Utility functions and helpers."""

from dashboard.utils.helpers import validate_page_id

__all__ = [
    "validate_page_id",
]
