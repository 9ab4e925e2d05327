"""RAG context injector

Two generation calls: select one corpus document for the query, then
synthesize a short excerpt from it. Fails open: any problem yields None.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flocore.models import RagContext
from flocore.prompts import (
    NO_RAG_CONTEXT_SUFFIX,
    RAG_NOT_FOUND,
    format_rag_block,
    format_selection_prompt,
    format_synthesis_prompt,
)
from flocore.services.corpus import BaseDocumentCorpus, CorpusListingCache
from flocore.services.llm.base import Message
from flocore.settings import settings

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService

logger = logging.getLogger(__name__)


class RagContextInjector:
    """Retrieval context lookup over the project document corpus"""

    def __init__(
        self,
        llm_service: "BaseLLMService",
        corpus: BaseDocumentCorpus | CorpusListingCache,
        model: str | None = None,
    ):
        """
        Args:
            llm_service: generation client
            corpus: document corpus, or an existing listing cache over one
            model: model for selection/synthesis (settings.model_classifier when None)
        """
        self.llm_service = llm_service
        self.listing = corpus if isinstance(corpus, CorpusListingCache) else CorpusListingCache(corpus)
        self.model = model or settings.model_classifier

    def _generate(self, prompt: str, temperature: float) -> str:
        response = self.llm_service.generate(
            [Message(role="user", content=prompt)],
            model=self.model,
            temperature=temperature,
        )
        return (response.content or "").strip()

    def lookup(self, query: str) -> RagContext | None:
        """Find a relevant excerpt for `query`

        Returns:
            RagContext whose source is a corpus document name, or None
        """
        try:
            names = [d.name for d in self.listing.get()]
            if not names:
                logger.info("RAG skipped: corpus is empty")
                return None

            selected = self._generate(format_selection_prompt(query, names), temperature=0)
            selected = selected.strip().strip("\"'`").strip()
            if not selected or selected.upper() == RAG_NOT_FOUND:
                logger.info("RAG: no relevant document")
                return None
            if selected not in names:
                logger.warning(f"RAG: selected document is not in the corpus: {selected!r}")
                return None

            context = self._generate(format_synthesis_prompt(query, selected), temperature=0.2)
            if not context:
                logger.warning(f"RAG: empty excerpt from '{selected}'")
                return None
        except Exception as e:
            logger.warning(f"RAG lookup failed: {e}")
            return None

        logger.info(f"RAG context from '{selected}'")
        return RagContext(context=context, source=selected)

    @staticmethod
    def build_instruction(rag_context: RagContext | None, priority_note: str = "") -> str:
        """System-instruction block for a retrieved excerpt

        The excerpt is embedded verbatim and the model is told to cite the
        source. Without context the model is told to use general knowledge.
        """
        if rag_context is None:
            return NO_RAG_CONTEXT_SUFFIX
        return format_rag_block(rag_context.context, rag_context.source, priority_note)
