"""
In-memory storage for the shortener.

State lives for the lifetime of the process and is lost on restart.
"""

from shortener.db.models import UrlEntry
from shortener.db.stores import CodeStore, DedupIndex

__all__ = [
    "UrlEntry",
    "CodeStore",
    "DedupIndex",
]
