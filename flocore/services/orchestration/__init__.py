"""Orchestration layer

Intent classification -> capability gate -> routing -> structured or
streamed generation.

Components:
- ConstrainedClassifier: enum-constrained classification with fallback
- IntentClassifier: classifies one user turn
- CapabilityGate: minimum engine tier per feature
- SubtaskDetector / DomainAgent / SpecialistRegistry: level-2 routing
- HistoryBuilder: thread -> serialized turns
- RagContextInjector: project-document retrieval context
- StreamingChannel: cancellable chunk stream
- Supervisor: level-1 routing and user-facing text
"""

from .analysis_agent import AnalysisAgent
from .capability_gate import CAPABILITY_TIERS, CapabilityGate
from .constrained_classifier import ConstrainedClassifier
from .conversational_agent import ConversationalAgent
from .copilot_agent import CoPilotAgent
from .history_builder import HistoryBuilder, summarize_content
from .intent_classifier import IntentClassifier
from .models import (
    AgentDescriptor,
    Capability,
    Classification,
    InsufficientInput,
    Intent,
    IntentType,
    TurnResult,
    TurnState,
)
from .rag_injector import RagContextInjector
from .registry import DomainAgent, SpecialistRegistry
from .streaming import StreamingChannel, StreamState
from .subtask_detector import UNSUPPORTED_TASK, SubtaskDetector
from .supervisor import Supervisor
from .utility_agent import UtilityAgent

__all__ = [
    "AgentDescriptor",
    "AnalysisAgent",
    "CAPABILITY_TIERS",
    "Capability",
    "CapabilityGate",
    "Classification",
    "CoPilotAgent",
    "ConstrainedClassifier",
    "ConversationalAgent",
    "DomainAgent",
    "HistoryBuilder",
    "InsufficientInput",
    "Intent",
    "IntentClassifier",
    "IntentType",
    "RagContextInjector",
    "SpecialistRegistry",
    "StreamState",
    "StreamingChannel",
    "SubtaskDetector",
    "Supervisor",
    "TurnResult",
    "TurnState",
    "UNSUPPORTED_TASK",
    "UtilityAgent",
    "summarize_content",
]
