"""Document corpus base interface"""

from abc import ABC, abstractmethod

from flocore.models import CorpusDocument


class BaseDocumentCorpus(ABC):
    """Project document store consulted for retrieval context"""

    @abstractmethod
    def list_documents(self) -> list[CorpusDocument]:
        """Return the current corpus listing

        Returns:
            documents available for retrieval (may be empty)
        """
        pass
