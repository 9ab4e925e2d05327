"""RAG context injector and corpus cache tests"""

from unittest.mock import Mock

import pytest

from flocore.models import CorpusDocument, RagContext
from flocore.prompts import NO_RAG_CONTEXT_SUFFIX
from flocore.services.corpus import BaseDocumentCorpus, CorpusListingCache, InMemoryDocumentCorpus
from flocore.services.orchestration import RagContextInjector

EXCERPT = (
    "Per section S-2.1 of the structural drawings, the 28-day compressive strength (f'c) "
    "for the Level 5 slab-on-deck shall be 4,000 psi (27.5 MPa)."
)


class TestRagLookup:
    def test_selects_corpus_document(self, scripted_llm):
        corpus = InMemoryDocumentCorpus(["Structural_Drawings_Rev4.pdf"])
        llm = scripted_llm("Structural_Drawings_Rev4.pdf", EXCERPT)

        context = RagContextInjector(llm, corpus).lookup("slab strength on level 5")

        assert context == RagContext(context=EXCERPT, source="Structural_Drawings_Rev4.pdf")
        selection_prompt = llm.generate.call_args_list[0].args[0][0].content
        assert "- Structural_Drawings_Rev4.pdf" in selection_prompt
        assert llm.generate.call_args_list[0].kwargs["temperature"] == 0

    def test_quoted_name_accepted(self, scripted_llm, sample_corpus):
        llm = scripted_llm('"Site-Logistics-Plan.pdf"\n', "Crane zone is north.")

        context = RagContextInjector(llm, sample_corpus).lookup("where is the crane zone?")

        assert context.source == "Site-Logistics-Plan.pdf"

    @pytest.mark.parametrize("selection", ["N/A", "", "Made_Up_File.pdf"])
    def test_no_selection(self, scripted_llm, sample_corpus, selection):
        llm = scripted_llm(selection, EXCERPT)

        assert RagContextInjector(llm, sample_corpus).lookup("what's for lunch") is None

    def test_source_always_in_corpus(self, scripted_llm, sample_corpus):
        names = {d.name for d in sample_corpus.list_documents()}
        for selection in [*names, "Other.pdf", "N/A"]:
            llm = scripted_llm(selection, EXCERPT)
            context = RagContextInjector(llm, sample_corpus).lookup("q")
            assert context is None or context.source in names

    def test_empty_corpus_skips_generation(self, scripted_llm):
        llm = scripted_llm()

        assert RagContextInjector(llm, InMemoryDocumentCorpus([])).lookup("q") is None
        llm.generate.assert_not_called()

    def test_empty_synthesis(self, scripted_llm, sample_corpus):
        llm = scripted_llm("Site-Logistics-Plan.pdf", "  ")

        assert RagContextInjector(llm, sample_corpus).lookup("q") is None

    def test_errors_fail_open(self, scripted_llm):
        corpus = Mock(spec=BaseDocumentCorpus)
        corpus.list_documents.side_effect = OSError("storage offline")

        assert RagContextInjector(scripted_llm(), corpus).lookup("q") is None

    def test_transport_error_fails_open(self, scripted_llm, sample_corpus):
        llm = scripted_llm(ConnectionError("reset"))

        assert RagContextInjector(llm, sample_corpus).lookup("q") is None


class TestBuildInstruction:
    def test_embeds_context_and_source(self):
        context = RagContext(context=EXCERPT, source="Structural_Drawings_Rev4.pdf")

        block = RagContextInjector.build_instruction(context)

        assert EXCERPT in block
        assert 'According to Structural_Drawings_Rev4.pdf' in block
        assert "MUST prioritize" in block

    def test_without_context(self):
        assert RagContextInjector.build_instruction(None) == NO_RAG_CONTEXT_SUFFIX


class TestCorpusListingCache:
    def test_ttl(self):
        corpus = InMemoryDocumentCorpus(["a.pdf"])
        now = [0.0]
        cache = CorpusListingCache(corpus, ttl_seconds=60, clock=lambda: now[0])

        assert [d.name for d in cache.get()] == ["a.pdf"]
        corpus.add("b.pdf")
        now[0] = 30.0
        assert [d.name for d in cache.get()] == ["a.pdf"]
        now[0] = 61.0
        assert [d.name for d in cache.get()] == ["a.pdf", "b.pdf"]

    def test_invalidate(self):
        corpus = InMemoryDocumentCorpus(["a.pdf"])
        cache = CorpusListingCache(corpus, ttl_seconds=3600)
        cache.get()

        corpus.remove("a.pdf")
        cache.invalidate()

        assert cache.get() == []

    def test_zero_ttl_disables_caching(self):
        corpus = Mock(spec=BaseDocumentCorpus)
        corpus.list_documents.return_value = [CorpusDocument(name="a.pdf")]
        cache = CorpusListingCache(corpus, ttl_seconds=0)

        cache.get()
        cache.get()

        assert corpus.list_documents.call_count == 2

    def test_returns_copies(self):
        cache = CorpusListingCache(InMemoryDocumentCorpus(["a.pdf"]), ttl_seconds=60)

        cache.get().clear()

        assert len(cache.get()) == 1
