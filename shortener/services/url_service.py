"""
URL Shortening Service

This service handles the core business logic for URL shortening:
- Assigning unique short codes to URLs, reusing the code of a URL
  that was already shortened
- Resolving codes back to URLs and counting visits
- Reading entry statistics without counting a visit

Design Decisions:
- One service instance per process, shared by every request
- A single lock guards both the code store and the dedup index, so the
  shorten check-then-insert and the resolve read-increment are atomic
- Dedup is an exact string match; URLs are never normalized
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from shortener.core.exceptions import (
    ExhaustedAttemptsError,
    InvalidURLError,
    ShortCodeNotFoundError,
    ShortenFailedError,
)
from shortener.core.validators import validate_url
from shortener.db.models import UrlEntry
from shortener.db.stores import CodeStore, DedupIndex
from shortener.services.code_generator import CodeGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of a shorten call. ``created`` is False on a dedup hit."""
    code: str
    original_url: str
    created_at: datetime
    created: bool


@dataclass(frozen=True)
class StatsResult:
    """Snapshot of an entry taken while holding the service lock."""
    short_code: str
    original_url: str
    created_at: datetime
    visits: int


@dataclass(frozen=True)
class RedirectResult:
    """Directive for the caller to redirect to ``target``."""
    short_code: str
    target: str


ResolveResult = Union[RedirectResult, StatsResult]


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Owns the code store, the dedup index and the code generator.
    Separated from API layer for testability and maintainability.
    """

    def __init__(
        self,
        code_length: int = 6,
        max_attempts: int = 100,
        generator: Optional[CodeGenerator] = None,
        max_url_length: int = 2048,
        reserved_codes: Iterable[str] = (),
    ):
        """
        Initialize the URL shortening service.

        Args:
            code_length: Number of characters in every generated code
            max_attempts: Draws allowed per shorten before giving up
            generator: Code generator (default: 62-char alphanumeric alphabet)
            max_url_length: Longest URL accepted
            reserved_codes: Codes never issued because a fixed route owns the path
        """
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.max_url_length = max_url_length
        self.generator = generator or CodeGenerator()
        self.reserved_codes = frozenset(reserved_codes)

        self._codes = CodeStore()
        self._index = DedupIndex()
        self._lock = threading.Lock()

    def shorten(self, url: str) -> ShortenResult:
        """
        Return the short code for ``url``, assigning a new one if needed.

        Args:
            url: The long URL to shorten

        Returns:
            ShortenResult with the assigned code

        Raises:
            InvalidURLError: If URL format is invalid
            ShortenFailedError: If no free code could be generated
        """
        reason = validate_url(url, self.max_url_length)
        if reason:
            raise InvalidURLError(url or "", reason=reason)

        with self._lock:
            existing_code = self._index.get(url)
            if existing_code is not None:
                entry = self._codes.get(existing_code)
                logger.debug(f"Dedup hit for {url}: {existing_code}")
                return ShortenResult(
                    code=existing_code,
                    original_url=entry.original_url,
                    created_at=entry.created_at,
                    created=False,
                )

            try:
                code = self.generator.generate_unique(
                    self._codes,
                    self.code_length,
                    self.max_attempts,
                    reserved=self.reserved_codes,
                )
            except ExhaustedAttemptsError as e:
                raise ShortenFailedError(url, reason=str(e)) from e

            entry = UrlEntry(original_url=url)
            self._codes.insert(code, entry)
            self._index.insert(url, code)

        logger.info(f"Assigned short code {code} to {url}")
        return ShortenResult(
            code=code,
            original_url=url,
            created_at=entry.created_at,
            created=True,
        )

    def resolve(self, code: str, want_stats: bool = False) -> ResolveResult:
        """
        Look up ``code`` and count one visit.

        The visit is counted whether the caller redirects or reads stats.

        Args:
            code: The short code to resolve
            want_stats: Return a stats snapshot instead of a redirect

        Returns:
            StatsResult (post-increment) if want_stats, else RedirectResult

        Raises:
            ShortCodeNotFoundError: If the code was never issued
        """
        with self._lock:
            entry = self._lookup(code)
            entry.record_visit()
            if want_stats:
                return self._snapshot(code, entry)
            return RedirectResult(short_code=code, target=entry.original_url)

    def peek_stats(self, code: str) -> StatsResult:
        """
        Read statistics for ``code`` without counting a visit.

        Raises:
            ShortCodeNotFoundError: If the code was never issued
        """
        with self._lock:
            return self._snapshot(code, self._lookup(code))

    def get_stats(self) -> dict:
        """
        Get service-wide statistics for monitoring.

        Returns:
            Dictionary with total_urls and total_visits
        """
        with self._lock:
            return {
                "total_urls": len(self._codes),
                "total_visits": self._codes.total_visits(),
            }

    def _lookup(self, code: str) -> UrlEntry:
        entry = self._codes.get(code) if code else None
        if entry is None:
            raise ShortCodeNotFoundError(code)
        return entry

    @staticmethod
    def _snapshot(code: str, entry: UrlEntry) -> StatsResult:
        return StatsResult(
            short_code=code,
            original_url=entry.original_url,
            created_at=entry.created_at,
            visits=entry.visits,
        )
