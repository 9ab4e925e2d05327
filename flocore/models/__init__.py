"""Data models"""

from .conversation import ConversationMessage, HistoryTurn, MessageContent
from .payloads import (
    AnalysisContent,
    AnalysisResult,
    CalculationPayload,
    CalculationResult,
    DocumentPayload,
    DocumentResult,
    DocumentType,
    RagContext,
    TextContent,
)
from .profile import CorpusDocument, EngineTier, ProjectContext, UserProfile

__all__ = [
    "AnalysisContent",
    "AnalysisResult",
    "CalculationPayload",
    "CalculationResult",
    "ConversationMessage",
    "CorpusDocument",
    "DocumentPayload",
    "DocumentResult",
    "DocumentType",
    "EngineTier",
    "HistoryTurn",
    "MessageContent",
    "ProjectContext",
    "RagContext",
    "TextContent",
    "UserProfile",
]
