"""Supervisor tests: end-to-end turns with scripted generation clients"""

from unittest.mock import Mock

import pytest

from flocore.errors import CapabilityDenied, GenerationFailure, UnsupportedTask
from flocore.models import (
    CalculationPayload,
    DocumentPayload,
    DocumentType,
    EngineTier,
    ProjectContext,
    UserProfile,
)
from flocore.services.corpus import InMemoryDocumentCorpus
from flocore.services.llm.base import BaseLLMService
from flocore.services.llm.dummy_llm import sample_from_schema
from flocore.services.orchestration import (
    Capability,
    InsufficientInput,
    Intent,
    IntentType,
    StreamState,
    Supervisor,
    TurnState,
)
from flocore.services.specialists import geotechnical, hse, site_manager, structural


def specialist(module, key):
    return next(s for s in module.SPECIALISTS if s.key == key)


@pytest.fixture
def scripted_supervisor(scripted_llm):
    """Factory for a Supervisor over a scripted mock LLM; returns (supervisor, llm)"""

    def _make(*replies, stream=None, corpus=None):
        llm = scripted_llm(*replies, stream=stream)
        return Supervisor(llm, corpus=corpus), llm

    return _make


class TestScenarios:
    def test_beam_without_numbers_asks_for_inputs(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(
            {"intent": "structural", "sufficientData": False},
            {"task": "reinforced_concrete_beam_design"},
        )

        result = supervisor.handle_turn("design a beam", [], premium_profile)

        assert result.state is TurnState.COMPLETED
        assert result.payload == InsufficientInput(
            specialist="Reinforced Concrete Beam Design", missing=["span", "loads", "material"]
        )
        assert "- span\n- loads\n- material" in result.message

    def test_daily_report_on_compact(self, scripted_supervisor, compact_profile):
        report = specialist(site_manager, "daily_site_report")
        supervisor, llm = scripted_supervisor(
            {"intent": "document_generation", "role": "site_manager", "documentType": "daily_site_report"},
            sample_from_schema(report.schema),
        )
        project = ProjectContext(weather="Light rain, 24C")

        result = supervisor.handle_turn("create a daily report", [], compact_profile, project)

        assert isinstance(result.payload, DocumentPayload)
        assert result.payload.task == "Daily Site Report"
        assert result.payload.result.result_type is DocumentType.DAILY_SITE_REPORT
        assert "Light rain, 24C" in llm.generate.call_args.args[0][0].content

    def test_image_analysis_below_premium_denied(self, scripted_supervisor, image_part):
        supervisor, llm = scripted_supervisor()
        profile = UserProfile(engine_tier=EngineTier.ADVANCED)

        with pytest.raises(CapabilityDenied) as exc:
            supervisor.analyze_image(image_part, profile)

        assert exc.value.required is EngineTier.PREMIUM
        llm.generate.assert_not_called()

    def test_rag_source_from_corpus(self, scripted_supervisor):
        corpus = InMemoryDocumentCorpus(["Structural_Drawings_Rev4.pdf"])
        supervisor, _ = scripted_supervisor(
            "Structural_Drawings_Rev4.pdf", "f'c for the Level 5 slab is 27.5 MPa.", corpus=corpus
        )

        context = supervisor.lookup_context("slab strength on level 5", EngineTier.PREMIUM)

        assert context.source == "Structural_Drawings_Rev4.pdf"


class TestRouting:
    def test_structural_calculation(self, scripted_supervisor):
        wind = specialist(structural, "wind_load_analysis")
        supervisor, llm = scripted_supervisor({"task": wind.key}, sample_from_schema(wind.schema))

        payload = supervisor.route_structural_calculation("wind on a 30 m building", "Eurocode 2 (Europe)")

        assert isinstance(payload, CalculationPayload)
        assert payload.task == "Wind Load Analysis"
        assert "Eurocode 2 (Europe)" in llm.generate.call_args.args[0][0].content

    def test_geotechnical_calculation(self, scripted_supervisor):
        footing = specialist(geotechnical, "shallow_foundation")
        supervisor, _ = scripted_supervisor({"task": footing.key}, sample_from_schema(footing.schema))

        payload = supervisor.route_geotechnical_calculation("2 m square footing at 1.5 m, c=20 kPa", None)

        assert payload.domain == "geotechnical"
        assert payload.task == "Shallow Foundation Analysis"

    def test_calculation_denied_below_premium(self, scripted_supervisor):
        supervisor, llm = scripted_supervisor()

        with pytest.raises(CapabilityDenied):
            supervisor.route_geotechnical_calculation("footing", None, tier="compact")
        llm.generate.assert_not_called()

    def test_document_role_selects_agent(self, scripted_supervisor, compact_profile):
        plan = specialist(hse, "risk_assessment")
        supervisor, _ = scripted_supervisor(sample_from_schema(plan.schema))
        intent = Intent(IntentType.DOCUMENT_GENERATION, role="hse_officer", document_type="risk_assessment")

        payload = supervisor.route_document_generation("risk assessment", compact_profile, intent=intent)

        assert payload.result.result_type is DocumentType.RISK_ASSESSMENT

    def test_unregistered_document_type_uses_detector(self, scripted_supervisor, compact_profile):
        itp = specialist(site_manager, "site_inspection_checklist")
        supervisor, llm = scripted_supervisor({"task": itp.key}, sample_from_schema(itp.schema))
        intent = Intent(IntentType.DOCUMENT_GENERATION, role="site_manager", document_type="inspection")

        payload = supervisor.route_document_generation("inspection checklist", compact_profile, intent=intent)

        assert payload.task == "Site Inspection Checklist"
        assert llm.generate.call_count == 2

    def test_unknown_role_unsupported(self, scripted_supervisor, compact_profile):
        supervisor, _ = scripted_supervisor()
        intent = Intent(IntentType.DOCUMENT_GENERATION, role="architect")

        with pytest.raises(UnsupportedTask) as exc:
            supervisor.route_document_generation("draft a design brief", compact_profile, intent=intent)

        assert exc.value.domain == "architect"

    def test_generation_failure_is_distinct(self, scripted_supervisor, compact_profile):
        supervisor, _ = scripted_supervisor("not json at all")
        intent = Intent(IntentType.DOCUMENT_GENERATION, role="site_manager", document_type="daily_site_report")

        with pytest.raises(GenerationFailure) as exc:
            supervisor.route_document_generation("daily report", compact_profile, intent=intent)

        assert not isinstance(exc.value, UnsupportedTask)
        assert exc.value.raw_text == "not json at all"


class TestConversation:
    def test_conversation_turn_streams(self, scripted_supervisor, premium_profile, thread):
        supervisor, llm = scripted_supervisor({"intent": "conversation"}, stream=["50 mm ", "for slabs."])

        result = supervisor.handle_turn("And for slabs?", thread, premium_profile)

        assert result.state is TurnState.GENERATING
        assert result.states == [
            TurnState.IDLE,
            TurnState.CLASSIFYING_INTENT,
            TurnState.ROUTING,
            TurnState.GENERATING,
        ]
        assert result.stream.collect() == "50 mm for slabs."
        assert result.stream.state is StreamState.COMPLETED

        messages = llm.stream_generate.call_args.args[0]
        assert [m.role for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[-1].content == "And for slabs?"
        assert "Answer based on your general knowledge." in messages[0].content

    def test_premium_conversation_uses_rag(self, scripted_supervisor, premium_profile, sample_corpus):
        supervisor, llm = scripted_supervisor(
            {"intent": "conversation"},
            "Site-Logistics-Plan.pdf",
            "The tower crane is located at grid C-4.",
            stream=["Grid C-4."],
            corpus=sample_corpus,
        )

        result = supervisor.handle_turn("where is the crane?", [], premium_profile)

        assert TurnState.RAG_LOOKUP in result.states
        system = llm.stream_generate.call_args.args[0][0].content
        assert "The tower crane is located at grid C-4." in system
        assert '"Site-Logistics-Plan.pdf"' in system

    def test_compact_conversation_skips_rag(self, scripted_supervisor, compact_profile, sample_corpus, thread):
        supervisor, llm = scripted_supervisor({"intent": "conversation"}, stream=["ok"], corpus=sample_corpus)

        result = supervisor.handle_turn("And for slabs?", thread, compact_profile)

        assert TurnState.RAG_LOOKUP not in result.states
        assert llm.generate.call_count == 1
        messages = llm.stream_generate.call_args.args[0]
        assert [m.role for m in messages] == ["system", "user"]
        assert messages[1].content.startswith("user: What is the cover for footings?\n")

    def test_classification_failure_falls_back_to_conversation(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(RuntimeError("quota"), stream=["hello"])

        result = supervisor.handle_turn("hi", [], premium_profile)

        assert result.intent == Intent.conversation()
        assert result.stream is not None

    def test_cancelled_stream(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(stream=["one ", "two ", "three"])
        channel = supervisor.stream_conversation("tell me", [], premium_profile)
        seen = []

        for chunk in channel:
            seen.append(chunk)
            channel.cancel()

        assert seen == ["one "]
        assert channel.state is StreamState.CANCELLED


class TestTurnFailures:
    def test_capability_denied_turn(self, scripted_supervisor):
        supervisor, _ = scripted_supervisor({"intent": "structural", "sufficientData": True})
        profile = UserProfile(engine_tier=EngineTier.ADVANCED)

        result = supervisor.handle_turn("design a 6 m beam for 20 kN/m", [], profile)

        assert result.state is TurnState.FAILED
        assert isinstance(result.error, CapabilityDenied)
        assert "'Premium' engine" in result.message
        assert result.states == [
            TurnState.IDLE,
            TurnState.CLASSIFYING_INTENT,
            TurnState.ROUTING,
            TurnState.FAILED,
        ]

    def test_generation_failure_turn_hides_raw_text(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(
            {"intent": "geotechnical", "sufficientData": True},
            {"task": "slope_stability"},
            "SECRET RAW MODEL OUTPUT",
        )

        result = supervisor.handle_turn("slope 2H:1V, c=10 kPa, phi=30", [], premium_profile)

        assert result.state is TurnState.FAILED
        assert "Slope Stability Analysis" in result.message
        assert "SECRET" not in result.message

    def test_unsupported_task_turn(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(
            {"intent": "structural", "sufficientData": True}, {"task": "unsupported_task"}
        )

        result = supervisor.handle_turn("design a suspension bridge", [], premium_profile)

        assert isinstance(result.error, UnsupportedTask)
        assert "structural task is not yet supported" in result.message
        assert result.states == [
            TurnState.IDLE,
            TurnState.CLASSIFYING_INTENT,
            TurnState.ROUTING,
            TurnState.FAILED,
        ]

    def test_generation_failure_turn_fails_from_generating(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(
            {"intent": "structural", "sufficientData": True}, {"task": "wind_load_analysis"}, ""
        )

        result = supervisor.handle_turn("wind load on a 30 m tower", [], premium_profile)

        assert result.states[-2:] == [TurnState.GENERATING, TurnState.FAILED]

    def test_incomplete_unsupported_request_asks_for_inputs(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor(
            {"intent": "geotechnical", "sufficientData": False}, {"task": "unsupported_task"}
        )

        result = supervisor.handle_turn("check my ground", [], premium_profile)

        assert result.state is TurnState.COMPLETED
        assert isinstance(result.payload, InsufficientInput)
        assert "- soil parameters" in result.message


class TestDescribe:
    def test_capability_denied_indonesian(self, scripted_supervisor):
        supervisor, _ = scripted_supervisor()
        error = CapabilityDenied(Capability.VISUAL_ANALYSIS, EngineTier.PREMIUM, EngineTier.COMPACT)

        text = supervisor.describe_error(error, "id")

        assert text.startswith("Visual analysis memerlukan mesin 'Premium'")

    def test_unsupported_role(self, scripted_supervisor):
        supervisor, _ = scripted_supervisor()

        text = supervisor.describe_error(UnsupportedTask("project_manager"))

        assert text == "Document generation for the 'project manager' role is not supported yet."

    def test_insufficient_input_indonesian(self, scripted_supervisor):
        supervisor, _ = scripted_supervisor()

        text = supervisor.describe_outcome(InsufficientInput("Column Base Plate Design", ["load"]), "id")

        assert "Column Base Plate Design" in text
        assert text.endswith("- load")

    def test_generic(self, scripted_supervisor):
        supervisor, _ = scripted_supervisor()

        assert supervisor.describe_error(ValueError("x")) == "Sorry, I couldn't process that request."


class TestSupplementedAgents:
    def test_analyze_image(self, scripted_supervisor, premium_profile, image_part):
        analysis = {
            "analysis": "Two workers without helmets near the excavation.",
            "objects": [
                {"id": 1, "label": "Worker", "confidence": 0.92,
                 "bounds": {"left": 10, "top": 20, "width": 15, "height": 40}},
            ],
        }
        supervisor, llm = scripted_supervisor(analysis)

        result = supervisor.analyze_image(image_part, premium_profile)

        assert result.objects[0].label == "Worker"
        assert llm.generate.call_args.args[0][0].images == [image_part]

    def test_analyze_image_invalid(self, scripted_supervisor, premium_profile, image_part):
        supervisor, _ = scripted_supervisor({"analysis": "x"})

        with pytest.raises(GenerationFailure):
            supervisor.analyze_image(image_part, premium_profile)

    def test_follow_up_denied_below_premium(self, scripted_supervisor, image_part):
        supervisor, _ = scripted_supervisor()

        with pytest.raises(CapabilityDenied):
            supervisor.stream_follow_up("is that a W14?", image_part, "steel frame", UserProfile(engine_tier="advanced"))

    def test_follow_up(self, scripted_supervisor, premium_profile, image_part):
        supervisor, llm = scripted_supervisor(stream=["Yes."])

        channel = supervisor.stream_follow_up("is that a W14?", image_part, "W14x30 beam visible", premium_profile)

        assert channel.collect() == "Yes."
        system, user = llm.stream_generate.call_args.args[0]
        assert "W14x30 beam visible" in system.content
        assert user.images == [image_part]

    def test_copilot(self, scripted_supervisor, premium_profile, image_part):
        supervisor, llm = scripted_supervisor(stream=["Spacing matches the drawing."])

        channel = supervisor.stream_copilot("does this match?", premium_profile, image_part, image_part)

        assert channel.collect() == "Spacing matches the drawing."
        user = llm.stream_generate.call_args.args[0][1]
        assert len(user.images) == 2
        assert "Context B (Device Screen): the second attached image." in user.content

    def test_copilot_denied(self, scripted_supervisor, compact_profile):
        supervisor, _ = scripted_supervisor()

        with pytest.raises(CapabilityDenied):
            supervisor.stream_copilot("does this match?", compact_profile)

    def test_revise_text(self, scripted_supervisor, compact_profile):
        supervisor, _ = scripted_supervisor("  Concrete pour completed at 14:00.  ")

        revised = supervisor.revise_text("pour done 2pm", "make it formal", compact_profile)

        assert revised == "Concrete pour completed at 14:00."

    def test_revise_text_empty(self, scripted_supervisor, compact_profile):
        supervisor, _ = scripted_supervisor("")

        with pytest.raises(GenerationFailure):
            supervisor.revise_text("pour done 2pm", "make it formal", compact_profile)

    def test_report_suggestions(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor({"suggestions": ["a", " b ", "", "c", "d"]})

        assert supervisor.report_suggestions("missing PPE", premium_profile) == ["a", "b", "c"]

    def test_report_suggestions_below_premium(self, scripted_supervisor, compact_profile):
        supervisor, llm = scripted_supervisor()

        assert supervisor.report_suggestions("missing PPE", compact_profile) == []
        llm.generate.assert_not_called()

    def test_report_suggestions_failure(self, scripted_supervisor, premium_profile):
        supervisor, _ = scripted_supervisor("oops")

        assert supervisor.report_suggestions("missing PPE", premium_profile) == []


def test_domain_agents_wired():
    supervisor = Supervisor(Mock(spec=BaseLLMService))

    assert set(supervisor.document_agents) == {"site_manager", "hse_officer", "quality_control"}
    assert len(supervisor.structural_agent.registry) == 11
    assert supervisor.rag_injector is None
