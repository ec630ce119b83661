"""
Input Validators

Validation runs before the shortener core sees any input. The core
trusts that a URL handed to it is absolute, uses http(s) and parses.
"""

from typing import Optional
from urllib.parse import urlparse

ALLOWED_PREFIXES = ("http://", "https://")


def validate_url(url: Optional[str], max_length: int = 2048) -> Optional[str]:
    """
    Check a URL and describe the first problem found.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        None if the URL is acceptable, otherwise a human readable reason
    """
    if not url or not isinstance(url, str):
        return "URL is required"

    if len(url) > max_length:
        return f"URL exceeds maximum length of {max_length} characters"

    # Prefix check is case-sensitive, "HTTP://" is rejected.
    if not url.startswith(ALLOWED_PREFIXES):
        return "URL must be valid and start with http:// or https://"

    try:
        result = urlparse(url)
        # Accessing .port raises ValueError for out-of-range or non-numeric ports
        result.port
    except ValueError:
        return "URL must be valid and start with http:// or https://"

    if not result.hostname:
        return "URL must include a host"

    if any(ch.isspace() for ch in result.netloc):
        return "URL host must not contain whitespace"

    return None


def is_valid_url(url: Optional[str], max_length: int = 2048) -> bool:
    """Return True when ``url`` may be shortened."""
    return validate_url(url, max_length) is None
