"""Document corpus collaborators"""

from .base import BaseDocumentCorpus
from .cache import CorpusListingCache
from .in_memory_corpus import InMemoryDocumentCorpus

__all__ = ["BaseDocumentCorpus", "CorpusListingCache", "InMemoryDocumentCorpus"]
