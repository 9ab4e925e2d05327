"""Supervisor

Top-level orchestrator: intent classification, capability gating and level-1
routing to the domain agents. The only component that turns outcomes into
user-facing text.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Callable, Sequence

from flocore.errors import CapabilityDenied, GenerationFailure, OrchestrationError, UnsupportedTask
from flocore.models import (
    AnalysisResult,
    CalculationPayload,
    DocumentPayload,
    EngineTier,
    ProjectContext,
    RagContext,
    UserProfile,
)
from flocore.services.corpus import BaseDocumentCorpus, CorpusListingCache
from flocore.services.llm import get_llm_service
from flocore.services.specialists import geotechnical, structural
from flocore.settings import settings

from .analysis_agent import AnalysisAgent
from .capability_gate import CapabilityGate
from .constrained_classifier import ConstrainedClassifier
from .conversational_agent import ConversationalAgent
from .copilot_agent import CoPilotAgent
from .history_builder import HistoryBuilder, HistoryItem
from .intent_classifier import DOCUMENT_ROLES, IntentClassifier
from .models import Capability, InsufficientInput, Intent, IntentType, TurnResult, TurnState
from .rag_injector import RagContextInjector
from .registry import DomainAgent
from .streaming import StreamingChannel
from .utility_agent import UtilityAgent

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService, ImagePart

logger = logging.getLogger(__name__)


# =============================================================================
# User-facing messages
# =============================================================================

MESSAGES = {
    "en": {
        "capability_denied": "{feature} requires the '{required}' engine (current engine: '{actual}'). Please switch engines and try again.",
        "unsupported_task": "The requested {domain} task is not yet supported or could not be clearly identified.",
        "unsupported_role": "Document generation for the '{role}' role is not supported yet.",
        "generation_failure": "I couldn't complete that task: the {specialist} did not return a valid result. Please try rephrasing your request.",
        "insufficient_input": "I can help with that. To run the {specialist}, I need a bit more information. Please provide:\n{missing}",
        "generic": "Sorry, I couldn't process that request.",
    },
    "id": {
        "capability_denied": "{feature} memerlukan mesin '{required}' (mesin saat ini: '{actual}'). Silakan ganti mesin dan coba lagi.",
        "unsupported_task": "Tugas {domain} yang diminta belum didukung atau tidak dapat diidentifikasi dengan jelas.",
        "unsupported_role": "Pembuatan dokumen untuk peran '{role}' belum didukung.",
        "generation_failure": "Saya tidak dapat menyelesaikan tugas tersebut: {specialist} tidak menghasilkan hasil yang valid. Silakan ubah permintaan Anda.",
        "insufficient_input": "Saya dapat membantu. Untuk menjalankan {specialist}, saya memerlukan informasi tambahan. Mohon berikan:\n{missing}",
        "generic": "Maaf, saya tidak dapat memproses permintaan tersebut.",
    },
}

FEATURE_NAMES = {
    Capability.VISUAL_ANALYSIS: "Visual analysis",
    Capability.VISUAL_FOLLOW_UP: "Analyzing images in conversation",
    Capability.COPILOT: "Co-Pilot's screen analysis",
    Capability.STRUCTURAL_CALCULATION: "Structural calculation",
    Capability.GEOTECHNICAL_CALCULATION: "Geotechnical calculation",
    Capability.RAG_CONTEXT: "Project document search",
    Capability.REPORT_SUGGESTIONS: "Report suggestions",
    Capability.DOCUMENT_GENERATION: "Document generation",
    Capability.CONVERSATION: "Conversation",
    Capability.TEXT_REVISION: "Text revision",
}


def _messages(language: str | None) -> dict[str, str]:
    return MESSAGES.get(language or "en", MESSAGES["en"])


class Supervisor:
    """Multi-agent orchestrator

    Usage:
        supervisor = Supervisor(llm_service, corpus=InMemoryDocumentCorpus())
        result = supervisor.handle_turn(prompt, history, profile)
        if result.stream is not None:
            for chunk in result.stream:
                ...
    """

    def __init__(
        self,
        llm_service: "BaseLLMService | None" = None,
        corpus: BaseDocumentCorpus | CorpusListingCache | None = None,
        gate: CapabilityGate | None = None,
    ):
        """
        Args:
            llm_service: generation client (settings provider when None)
            corpus: project document corpus for retrieval (no retrieval when None)
            gate: capability gate (default capability table when None)
        """
        self.llm_service = llm_service or get_llm_service()
        self.gate = gate or CapabilityGate()
        self.classifier = ConstrainedClassifier(self.llm_service)
        self.intent_classifier = IntentClassifier(self.classifier)
        self.history_builder = HistoryBuilder()
        self.rag_injector = RagContextInjector(self.llm_service, corpus) if corpus is not None else None

        self.structural_agent = self._domain_agent(
            structural, Capability.STRUCTURAL_CALCULATION, EngineTier.PREMIUM
        )
        self.geotechnical_agent = self._domain_agent(
            geotechnical, Capability.GEOTECHNICAL_CALCULATION, EngineTier.PREMIUM
        )
        # Document role -> agent
        self.document_agents = {
            role: self._domain_agent(module, Capability.DOCUMENT_GENERATION, EngineTier.COMPACT)
            for role, module in DOCUMENT_ROLES.items()
        }

        self.conversational_agent = ConversationalAgent(
            self.llm_service, self.gate, self.history_builder, self.rag_injector
        )
        self.copilot_agent = CoPilotAgent(self.llm_service, self.gate)
        self.analysis_agent = AnalysisAgent(self.llm_service, self.gate)
        self.utility_agent = UtilityAgent(self.llm_service, self.gate)

    def _domain_agent(self, module, capability: Capability, minimum_tier: EngineTier) -> DomainAgent:
        return DomainAgent(
            domain=module.DOMAIN,
            domain_label=module.DOMAIN_LABEL,
            tasks=module.TASKS,
            specialists=module.SPECIALISTS,
            llm_service=self.llm_service,
            classifier=self.classifier,
            capability=capability,
            minimum_tier=minimum_tier,
            common_inputs=getattr(module, "COMMON_INPUTS", ()),
        )

    # =========================================================================
    # Orchestrator surface
    # =========================================================================

    def detect_intent(
        self, prompt: str, history: Sequence[HistoryItem] | None, profile: UserProfile
    ) -> Intent:
        return self.intent_classifier.classify(prompt, history, profile.language)

    def route_structural_calculation(
        self,
        prompt: str,
        standard: str | None = None,
        tier: EngineTier | str = EngineTier.PREMIUM,
        sufficient_data: bool = True,
        on_generate: Callable[[], None] | None = None,
    ) -> CalculationPayload | InsufficientInput:
        """Structural calculation

        Raises:
            CapabilityDenied, UnsupportedTask, GenerationFailure
        """
        self.gate.require(Capability.STRUCTURAL_CALCULATION, tier)
        return self.structural_agent.run(
            prompt,
            tier=tier,
            sufficient_data=sufficient_data,
            on_generate=on_generate,
            standard=standard or settings.calculation_standard,
        )

    def route_geotechnical_calculation(
        self,
        prompt: str,
        standard: str | None = None,
        tier: EngineTier | str = EngineTier.PREMIUM,
        sufficient_data: bool = True,
        on_generate: Callable[[], None] | None = None,
    ) -> CalculationPayload | InsufficientInput:
        """Geotechnical calculation

        Raises:
            CapabilityDenied, UnsupportedTask, GenerationFailure
        """
        self.gate.require(Capability.GEOTECHNICAL_CALCULATION, tier)
        return self.geotechnical_agent.run(
            prompt,
            tier=tier,
            sufficient_data=sufficient_data,
            on_generate=on_generate,
            standard=standard or settings.calculation_standard,
        )

    def route_document_generation(
        self,
        prompt: str,
        profile: UserProfile,
        project_context: ProjectContext | None = None,
        intent: Intent | None = None,
        on_generate: Callable[[], None] | None = None,
    ) -> DocumentPayload:
        """Document generation

        The intent's role selects the domain agent (site manager when no
        intent is given); its documentType is used directly when registered.

        Raises:
            UnsupportedTask: unknown role or document type
            GenerationFailure: the specialist failed
        """
        self.gate.require(Capability.DOCUMENT_GENERATION, profile.engine_tier)

        role = intent.role if intent is not None and intent.role else "site_manager"
        agent = self.document_agents.get(role)
        if agent is None:
            logger.info(f"No document agent for role '{role}'")
            raise UnsupportedTask(role)

        project_context = project_context or ProjectContext()
        return agent.run(
            prompt,
            tier=profile.engine_tier,
            task=intent.document_type if intent is not None else None,
            on_generate=on_generate,
            user_name=profile.name,
            project_context=project_context.to_prompt_block(),
        )

    def lookup_context(self, prompt: str, tier: EngineTier | str) -> RagContext | None:
        return self.conversational_agent.lookup_context(prompt, tier)

    def stream_conversation(
        self,
        prompt: str,
        history: Sequence[HistoryItem],
        profile: UserProfile,
        rag_context: RagContext | None = None,
    ) -> StreamingChannel:
        """Conversational stream; retrieval runs first at premium tier

        Args:
            rag_context: already retrieved context (looked up when None)
        """
        if rag_context is None:
            rag_context = self.lookup_context(prompt, profile.engine_tier)
        return self.conversational_agent.stream(prompt, history, profile, rag_context)

    def stream_follow_up(
        self, prompt: str, image: "ImagePart", analysis_summary: str, profile: UserProfile
    ) -> StreamingChannel:
        """Visual follow-up question (premium only)"""
        self.gate.require(Capability.VISUAL_FOLLOW_UP, profile.engine_tier)
        rag_context = self.lookup_context(prompt, profile.engine_tier)
        return self.conversational_agent.stream_follow_up(
            prompt, image, analysis_summary, profile, rag_context
        )

    def stream_copilot(
        self,
        prompt: str,
        profile: UserProfile,
        camera_frame: "ImagePart | None" = None,
        screenshot: "ImagePart | None" = None,
    ) -> StreamingChannel:
        return self.copilot_agent.stream(
            prompt, camera_frame, screenshot, profile.language, profile.engine_tier
        )

    def analyze_image(self, image: "ImagePart", profile: UserProfile) -> AnalysisResult:
        return self.analysis_agent.analyze(image, profile.language, profile.engine_tier)

    def revise_text(self, text: str, instruction: str, profile: UserProfile) -> str:
        return self.utility_agent.revise_text(text, instruction, profile.engine_tier, profile.language)

    def report_suggestions(self, analysis_text: str, profile: UserProfile) -> list[str]:
        return self.utility_agent.report_suggestions(analysis_text, profile.engine_tier, profile.language)

    # =========================================================================
    # Full turn
    # =========================================================================

    def handle_turn(
        self,
        prompt: str,
        history: Sequence[HistoryItem] | None,
        profile: UserProfile,
        project_context: ProjectContext | None = None,
    ) -> TurnResult:
        """Run one user turn through the pipeline

        Calculations and documents are generated before returning; the
        conversational path returns an unconsumed stream, so the turn stays
        in GENERATING until the caller drains or cancels it (see
        `stream.state`).

        Returns:
            TurnResult; errors are returned in `error` with their user-facing
            text in `message`, never raised
        """
        history = list(history or [])
        states = [TurnState.IDLE, TurnState.CLASSIFYING_INTENT]
        intent = self.detect_intent(prompt, history, profile)
        states.append(TurnState.ROUTING)
        generating = partial(states.append, TurnState.GENERATING)

        try:
            if intent.intent_type == IntentType.STRUCTURAL:
                payload = self.route_structural_calculation(
                    prompt, profile.calculation_standard, profile.engine_tier, intent.sufficient_data, generating
                )
            elif intent.intent_type == IntentType.GEOTECHNICAL:
                payload = self.route_geotechnical_calculation(
                    prompt, profile.calculation_standard, profile.engine_tier, intent.sufficient_data, generating
                )
            elif intent.intent_type == IntentType.DOCUMENT_GENERATION:
                payload = self.route_document_generation(prompt, profile, project_context, intent, generating)
            else:
                rag_context = None
                if self.rag_injector is not None and self.gate.allows(
                    Capability.RAG_CONTEXT, profile.engine_tier
                ):
                    states.append(TurnState.RAG_LOOKUP)
                    rag_context = self.lookup_context(prompt, profile.engine_tier)
                stream = self.conversational_agent.stream(prompt, history, profile, rag_context)
                states.append(TurnState.GENERATING)
                return TurnResult(state=TurnState.GENERATING, intent=intent, stream=stream, states=states)
        except OrchestrationError as e:
            states.append(TurnState.FAILED)
            logger.warning(f"Turn failed: {e}")
            return TurnResult(
                state=TurnState.FAILED,
                intent=intent,
                error=e,
                message=self.describe_error(e, profile.language),
                states=states,
            )

        states.append(TurnState.COMPLETED)
        message = self.describe_outcome(payload, profile.language) if isinstance(payload, InsufficientInput) else None
        return TurnResult(
            state=TurnState.COMPLETED, intent=intent, payload=payload, message=message, states=states
        )

    # =========================================================================
    # User-facing text
    # =========================================================================

    def describe_error(self, error: Exception, language: str | None = "en") -> str:
        """User-facing text for an orchestration error (raw model text is never included)"""
        texts = _messages(language)

        if isinstance(error, CapabilityDenied):
            capability = error.capability
            feature = FEATURE_NAMES.get(capability, getattr(capability, "value", str(capability)))
            return texts["capability_denied"].format(
                feature=feature,
                required=getattr(error.required, "value", error.required).capitalize(),
                actual=getattr(error.actual, "value", error.actual).capitalize(),
            )
        if isinstance(error, UnsupportedTask):
            if error.task is None and error.domain not in self._domains():
                return texts["unsupported_role"].format(role=error.domain.replace("_", " "))
            return texts["unsupported_task"].format(domain=error.domain.replace("_", " "))
        if isinstance(error, GenerationFailure):
            return texts["generation_failure"].format(specialist=error.specialist)
        return texts["generic"]

    def describe_outcome(self, outcome: InsufficientInput, language: str | None = "en") -> str:
        """Clarification request for an InsufficientInput outcome"""
        missing = "\n".join(f"- {item}" for item in outcome.missing)
        return _messages(language)["insufficient_input"].format(specialist=outcome.specialist, missing=missing)

    def _domains(self) -> set[str]:
        agents = [self.structural_agent, self.geotechnical_agent, *self.document_agents.values()]
        return {agent.domain for agent in agents}
