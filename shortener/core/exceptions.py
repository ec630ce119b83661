"""
Custom Exceptions

This module defines the error taxonomy of the shortener core.
Each failure kind has its own type so the HTTP layer can map it
to a status code without inspecting messages.
"""


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails."""

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}" if url else reason)


class ExhaustedAttemptsError(URLShortenerException):
    """Raised when every generated candidate collided with an existing code."""

    def __init__(self, attempts: int, length: int):
        self.attempts = attempts
        self.length = length
        super().__init__(
            f"Failed to generate unique code of length {length} after {attempts} attempts"
        )


class ShortenFailedError(URLShortenerException):
    """Raised when a shorten request cannot be completed."""

    def __init__(self, url: str, reason: str = "Failed to shorten URL"):
        self.url = url
        self.reason = reason
        super().__init__(reason)


class ShortCodeNotFoundError(URLShortenerException):
    """Raised when a short code is not present in the store."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")
