"""
Helper Utility Module

This module provides various helper functions used throughout the blog client.
"""

from datetime import datetime
from typing import Optional, Dict, Any
from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is valid.

    Args:
        url: The URL to validate

    Returns:
        bool: True if the URL is valid, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except Exception:
        return False


def truncate_text(text: str, max_length: int = 100, add_ellipsis: bool = True) -> str:
    """
    Truncate text for a card preview.

    Text longer than ``max_length`` keeps its first ``max_length - 1``
    characters followed by an ellipsis.

    Args:
        text: The text to truncate
        max_length: Maximum length before truncation kicks in
        add_ellipsis: Whether to add an ellipsis if text is truncated

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length - 1]
    if add_ellipsis:
        truncated += "..."

    return truncated


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an AWSDateTime string (ISO-8601, usually with a trailing ``Z``).

    Args:
        value: The timestamp as returned by the API

    Returns:
        datetime or None if the value is missing or malformed
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None


def safe_get(data: Dict[str, Any], *keys, default: Any = None) -> Any:
    """
    Safely get a value from a nested dictionary.

    Args:
        data: The dictionary to search
        *keys: The keys to follow
        default: Default value if key doesn't exist

    Returns:
        The value at the specified keys or the default value
    """
    for key in keys:
        try:
            data = data[key]
        except (KeyError, TypeError, IndexError):
            return default
    return data
