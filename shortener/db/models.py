"""
Storage Models for URL Shortener Service

This module defines the in-memory record kept for every short code:
- UrlEntry: original URL, creation time and visit count

Design Decisions:
- original_url and created_at are fixed at creation
- visits is the only field mutated after creation (by resolve)
- Records are never deleted; there is no eviction
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UrlEntry:
    """
    Stored record for one short code.

    Fields:
    - original_url: The long URL that was shortened
    - created_at: Timestamp when the URL was shortened (UTC)
    - visits: Number of successful resolves, never decreases
    """
    original_url: str
    created_at: datetime = field(default_factory=utcnow)
    visits: int = 0

    def record_visit(self) -> int:
        """Count one visit and return the new total."""
        self.visits += 1
        return self.visits
