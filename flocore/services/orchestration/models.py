"""Orchestration data models"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from flocore.models import EngineTier

if TYPE_CHECKING:
    from flocore.errors import OrchestrationError
    from flocore.models import CalculationPayload, DocumentPayload

    from .streaming import StreamingChannel


class IntentType(Enum):
    """Purpose of one user turn"""

    STRUCTURAL = "structural"  # structural design / analysis
    GEOTECHNICAL = "geotechnical"  # soil, foundations, slopes
    DOCUMENT_GENERATION = "document_generation"  # create a site/HSE/quality document
    CONVERSATION = "conversation"  # questions, follow-ups, greetings


CALCULATION_INTENTS = (IntentType.STRUCTURAL, IntentType.GEOTECHNICAL)


@dataclass(frozen=True)
class Intent:
    """Intent classification result

    `sufficient_data` only carries information for calculation intents;
    every other intent type always has it set to True.
    """

    intent_type: IntentType
    role: str | None = None  # document_generation only
    document_type: str | None = None  # document_generation only
    sufficient_data: bool = True
    raw_response: str | None = None  # raw model output (debugging)

    def __post_init__(self):
        if self.intent_type not in CALCULATION_INTENTS and not self.sufficient_data:
            object.__setattr__(self, "sufficient_data", True)

    @classmethod
    def conversation(cls) -> "Intent":
        """Fallback intent"""
        return cls(intent_type=IntentType.CONVERSATION)

    @property
    def is_calculation(self) -> bool:
        return self.intent_type in CALCULATION_INTENTS


class Capability(str, Enum):
    """Gated features"""

    VISUAL_ANALYSIS = "visual_analysis"
    VISUAL_FOLLOW_UP = "visual_follow_up"
    COPILOT = "copilot"
    STRUCTURAL_CALCULATION = "structural_calculation"
    GEOTECHNICAL_CALCULATION = "geotechnical_calculation"
    RAG_CONTEXT = "rag_context"
    REPORT_SUGGESTIONS = "report_suggestions"
    DOCUMENT_GENERATION = "document_generation"
    CONVERSATION = "conversation"
    TEXT_REVISION = "text_revision"


@dataclass(frozen=True)
class AgentDescriptor:
    """Registry entry: sub-task key -> handler"""

    key: str
    minimum_tier: EngineTier
    handler: Callable[..., Any]


@dataclass(frozen=True)
class InsufficientInput:
    """Returned (not raised) when a calculation prompt lacks required data"""

    specialist: str
    missing: list[str] = field(default_factory=list)


@dataclass
class Classification:
    """Constrained classifier result"""

    label: str
    fields: dict = field(default_factory=dict)
    used_fallback: bool = False
    raw_response: str | None = None


class TurnState(Enum):
    """Per-turn pipeline state"""

    IDLE = "idle"
    CLASSIFYING_INTENT = "classifying_intent"
    ROUTING = "routing"
    RAG_LOOKUP = "rag_lookup"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class TurnResult:
    """Outcome of Supervisor.handle_turn

    Exactly one of `payload`, `stream` or `error` is set, except for
    InsufficientInput which is carried in `payload`. `message` is the
    user-facing text for errors and clarifications.
    """

    state: TurnState
    intent: Intent | None = None
    payload: "CalculationPayload | DocumentPayload | InsufficientInput | None" = None
    stream: "StreamingChannel | None" = None
    error: "OrchestrationError | None" = None
    message: str | None = None
    states: list[TurnState] = field(default_factory=list)  # visited states, in order
