"""Corpus listing cache with explicit TTL and invalidation"""

import logging
import threading
import time
from typing import Callable

from flocore.models import CorpusDocument
from flocore.settings import settings

from .base import BaseDocumentCorpus

logger = logging.getLogger(__name__)


class CorpusListingCache:
    """Caches a corpus listing for `ttl_seconds`

    A TTL of 0 disables caching (every call reads the corpus).
    """

    def __init__(
        self,
        corpus: BaseDocumentCorpus,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.corpus = corpus
        self.ttl_seconds = settings.corpus_cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._listing: list[CorpusDocument] | None = None
        self._loaded_at = 0.0

    def get(self) -> list[CorpusDocument]:
        """Current listing, refreshed when expired"""
        with self._lock:
            now = self._clock()
            if (
                self._listing is not None
                and self.ttl_seconds > 0
                and now - self._loaded_at < self.ttl_seconds
            ):
                return list(self._listing)

            self._listing = list(self.corpus.list_documents())
            self._loaded_at = now
            logger.debug(f"Corpus listing refreshed: {len(self._listing)} documents")
            return list(self._listing)

    def invalidate(self) -> None:
        """Drop the cached listing (call after uploads or deletions)"""
        with self._lock:
            self._listing = None
            self._loaded_at = 0.0
