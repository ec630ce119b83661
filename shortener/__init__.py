"""In-memory URL shortener service."""

__version__ = "1.0.0"
