"""
In-memory Stores

Two plain maps back the service:
- CodeStore: short code -> UrlEntry (source of truth for resolution)
- DedupIndex: original URL -> short code (enables idempotent shortening)

Neither class locks. The owning service writes both under a single
lock so the pair is always consistent to readers.
"""

from typing import Dict, Optional

from shortener.db.models import UrlEntry


class CodeStore:
    """Mapping from short code to its UrlEntry. Keys are never removed."""

    def __init__(self):
        self._entries: Dict[str, UrlEntry] = {}

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, code: str) -> Optional[UrlEntry]:
        return self._entries.get(code)

    def insert(self, code: str, entry: UrlEntry) -> None:
        """
        Store ``entry`` under ``code``.

        Raises:
            KeyError: If the code is already taken
        """
        if code in self._entries:
            raise KeyError(f"Short code '{code}' is already assigned")
        self._entries[code] = entry

    def total_visits(self) -> int:
        return sum(entry.visits for entry in self._entries.values())


class DedupIndex:
    """Mapping from exact original URL string to its short code."""

    def __init__(self):
        self._codes: Dict[str, str] = {}

    def get(self, url: str) -> Optional[str]:
        # Exact match: no trailing-slash, case or query-order normalization
        return self._codes.get(url)

    def insert(self, url: str, code: str) -> None:
        """
        Record that ``url`` was assigned ``code``.

        Raises:
            KeyError: If the URL already has a code
        """
        if url in self._codes:
            raise KeyError(f"URL already has short code '{self._codes[url]}'")
        self._codes[url] = code
